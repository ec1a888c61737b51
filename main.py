#!/usr/bin/env python3
"""
╔══════════════════════════════════════════════════════════════════╗
║            Red-Black Tree  —  Demo Entry Point                   ║
║                                                                  ║
║  License : MIT                                                   ║
║  Run     : python main.py  (or the rbtree-demo console script)   ║
║                                                                  ║
║  Description:                                                    ║
║    Inserts a list of keys, prints the tree, removes keys and     ║
║    prints it again.  Optionally exports the recorded steps:      ║
║      • --png   final tree as an image                            ║
║      • --pdf   step-by-step walkthrough                          ║
║      • --gif   animated walkthrough                              ║
║                                                                  ║
║  Architecture:                                                   ║
║    main.py  ──► rbtree.RBTree (record=True)                      ║
║                   └──► export.py (PNG / PDF / GIF)               ║
╚══════════════════════════════════════════════════════════════════╝
"""

# ══════════════════════════════════════════════════════════
#  IMPORTS
# ══════════════════════════════════════════════════════════
import argparse
import sys

from rbtree import RBTree
from settings import THEMES, Settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rbtree-demo",
        description="Insert keys into a red-black tree, remove some, "
                    "and print or export the result.")
    parser.add_argument("--keys", type=int, nargs="*",
                        default=list(range(10)),
                        help="keys to insert, in order (default: 0..9)")
    parser.add_argument("--remove", type=int, nargs="*", default=[7],
                        help="keys to remove afterwards (default: 7)")
    parser.add_argument("--no-color", action="store_true",
                        help="print (R)/(B) labels instead of ANSI colours")
    parser.add_argument("--png", metavar="PATH",
                        help="write the final tree as a PNG image")
    parser.add_argument("--pdf", metavar="PATH",
                        help="write a PDF walkthrough of every step")
    parser.add_argument("--gif", metavar="PATH",
                        help="write an animated walkthrough")
    parser.add_argument("--theme", choices=sorted(THEMES),
                        help="colour theme for exports (default: saved setting)")
    return parser


def run(args, out=None) -> int:
    """
    Execute the demo for parsed arguments.

    Flow:
      1. Insert every key, print the tree
      2. Remove the requested keys, print the tree again
      3. Write any requested exports
    """
    out = out if out is not None else sys.stdout
    exporting = bool(args.png or args.pdf or args.gif)
    tree = RBTree(record=exporting)
    color = not args.no_color

    for key in args.keys:
        tree.insert(key)
    tree.print_tree(out, color=color)
    out.write(f"in-order: {tree.in_order()}  height: {tree.height()}\n")

    for key in args.remove:
        if not tree.remove(key):
            out.write(f"{key} not in tree\n")
    out.write("\n")
    tree.print_tree(out, color=color)
    out.write(f"in-order: {tree.in_order()}  height: {tree.height()}\n")

    if not exporting:
        return 0

    # Imaging stack is only loaded when exporting
    from export import AnimationExporter, PDFExporter, export_png

    settings = Settings()
    if args.theme:
        settings.theme = args.theme
    if args.png:
        export_png(tree, args.png, settings, title=f"{len(tree)} keys")
        out.write(f"wrote {args.png}\n")
    if args.pdf:
        PDFExporter(settings).export(tree.steps, args.pdf)
        out.write(f"wrote {args.pdf}\n")
    if args.gif:
        AnimationExporter(settings).export(tree.steps, args.gif)
        out.write(f"wrote {args.gif}\n")
    return 0


# ══════════════════════════════════════════════════════════
#  MAIN: Application Entry Point
# ══════════════════════════════════════════════════════════

def main(argv=None) -> int:
    return run(build_parser().parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())
