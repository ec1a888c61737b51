"""
Debug exporters for recorded step traces.

  • export_png         — render the current tree to one PNG
  • PDFExporter        — multi-page walkthrough, one page per step
                         (reportlab + Pillow)
  • AnimationExporter  — animated GIF / MP4 of all steps
                         (imageio + numpy + Pillow)

Steps come from an RBTree built with record=True; see rbtree.py for
the step dict schema.
"""
import os
import tempfile
from datetime import datetime

import imageio.v3 as iio
import numpy as np
from reportlab.lib.pagesizes import A4, landscape
from reportlab.pdfgen import canvas as pdf_canvas

from rbtree import RBTreeError
from render import TreeImageRenderer
from settings import Settings
from treeutils import tree_stats


class ExportError(RBTreeError):
    """An export could not be produced."""


# ═════════════════════════════════════════════════════════════════
#  CASE DESCRIPTIONS
#
#  Human-readable explanations for every insert / delete case.
#  Keys match the "case" field in step dicts ("case0"…"case4").
# ═════════════════════════════════════════════════════════════════

# ── INSERT CASES (Case 0 through Case 3) ────────────────────────
INSERT_CASES = {
    "case0": {
        "name": "Root Node",
        "short": "Node is root → Color BLACK",
    },
    "case1": {
        "name": "Case 1: Uncle is RED",
        "short": "Uncle RED → Recolor parent, uncle, grandparent; move up",
    },
    "case2": {
        "name": "Case 2: Uncle BLACK, Inner",
        "short": "Uncle BLACK, z inner child → Rotate parent to make Case 3",
    },
    "case3": {
        "name": "Case 3: Uncle BLACK, Outer",
        "short": "Uncle BLACK, z outer child → Recolor & rotate grandparent",
    },
}

# ── DELETE CASES (Case 0 through Case 4) ────────────────────────
DELETE_CASES = {
    "case0": {
        "name": "Node is RED",
        "short": "Removed node RED → no fix-up",
    },
    "case1": {
        "name": "Case 1: Sibling RED",
        "short": "Sibling RED → Rotate parent, recolor, continue",
    },
    "case2": {
        "name": "Case 2: Both Nephews BLACK",
        "short": "Both nephews BLACK → Recolor sibling, move x up",
    },
    "case3": {
        "name": "Case 3: Near Nephew RED",
        "short": "Near nephew RED, far BLACK → Rotate sibling → Case 4",
    },
    "case4": {
        "name": "Case 4: Far Nephew RED",
        "short": "Far nephew RED → Final rotation, done",
    },
}


def _operations(steps):
    """Map op_id → "insert" / "delete" from each operation's start step."""
    ops = {}
    for st in steps:
        if st["action"] == "start":
            ops[st["op_id"]] = (st.get("extra") or {}).get("operation")
    return ops


def case_text(step, operation):
    """Short case explanation for a step ("" when it has no case)."""
    cs = step.get("case")
    if not cs:
        return ""
    table = DELETE_CASES if operation == "delete" else INSERT_CASES
    return table.get(cs, {}).get("short", "")


def summarize(steps):
    """
    Aggregate counts over a step list.

    The node / black / red totals describe the tree as of the last
    step.

    Returns:
        dict: steps, inserts, deletes, rotations, recolorings,
              nodes, black, red.
    """
    ops = _operations(steps).values()
    totals = {
        "steps":       len(steps),
        "inserts":     sum(1 for o in ops if o == "insert"),
        "deletes":     sum(1 for o in ops if o == "delete"),
        "rotations":   sum(1 for s in steps if s["action"] == "rotate"),
        "recolorings": sum(1 for s in steps if s["action"] == "recolor"),
    }
    totals.update(tree_stats(steps[-1].get("tree_state") if steps else None))
    return totals


# ═════════════════════════════════════════════════════════════════
#  PNG EXPORT
# ═════════════════════════════════════════════════════════════════
def export_png(tree, filename, settings=None, title=""):
    """
    Render the tree's current state to a PNG file.

    Args:
        tree     (RBTree)        : Tree to draw.
        filename (str)           : Output .png path.
        settings (Settings|None) : Colours.
        title    (str)           : Caption at the top.
    """
    img = TreeImageRenderer(settings, 800, 500).render(tree.snapshot(),
                                                       title=title)
    try:
        img.save(filename, format="PNG")
    except OSError as e:
        raise ExportError(f"cannot write {filename}: {e}") from e


# ═════════════════════════════════════════════════════════════════
#  PDF EXPORTER
#
#  Each page contains:
#    • Step number / total
#    • Rendered tree image (TreeImageRenderer → Pillow → PNG)
#    • Action description
#    • Case label + short explanation
#
#  Final page: summary statistics (inserts, deletes, rotations, etc.)
# ═════════════════════════════════════════════════════════════════
class PDFExporter:
    """
    Export a step history as a landscape-A4 PDF document.

    Attributes:
        settings (Settings)          : For colour/theme lookups.
        renderer (TreeImageRenderer) : Renders tree snapshots to images.
    """

    def __init__(self, settings=None):
        self.settings = settings if settings is not None else Settings(load=False)
        self.renderer = TreeImageRenderer(self.settings, 700, 400)

    def export(self, steps, filename):
        """
        Generate a PDF file from the step list.

        Workflow:
            1. Create title page
            2. For each step: render tree → save temp PNG → embed in PDF
            3. Append summary page with statistics

        Args:
            steps    (list) : Step dicts (from RBTree(record=True)).
            filename (str)  : Output PDF file path.

        Raises:
            ExportError: no steps, or the file cannot be written.
        """
        if not steps:
            raise ExportError("no recorded steps to export")

        ops = _operations(steps)
        pw, ph = landscape(A4)
        c = pdf_canvas.Canvas(filename, pagesize=landscape(A4))

        # ── Title page ──
        c.setFont("Helvetica-Bold", 28)
        c.drawCentredString(pw / 2, ph - 100, "Red-Black Tree Operations")
        c.setFont("Helvetica", 16)
        c.drawCentredString(pw / 2, ph - 140, "Step-by-Step Walkthrough")
        c.setFont("Helvetica", 12)
        c.drawCentredString(pw / 2, ph - 180,
            f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
        c.drawCentredString(pw / 2, ph - 200, f"Total Steps: {len(steps)}")
        c.showPage()

        with tempfile.TemporaryDirectory() as tmp:
            for i, st in enumerate(steps):
                cs = st.get("case")
                ct = case_text(st, ops.get(st["op_id"]))
                img = self.renderer.render(st.get("tree_state"),
                                           st.get("highlight", []),
                                           f"Step {i+1}: {st['action']}", ct)
                ip = os.path.join(tmp, f"s{i:04d}.png")
                img.save(ip)

                c.setFont("Helvetica-Bold", 14)
                c.drawString(30, ph - 30, f"Step {i+1} of {len(steps)}")
                c.drawImage(ip, 30, ph - 450, width=700, height=400,
                            preserveAspectRatio=True)
                c.setFont("Helvetica", 12)
                c.drawString(30, ph - 480, f"Action: {st['desc']}")
                if cs:
                    c.setFont("Helvetica-Bold", 11)
                    c.drawString(30, ph - 500, f"Case: {cs.upper()}")
                    if ct:
                        c.setFont("Helvetica", 10)
                        c.drawString(30, ph - 515, ct)
                c.showPage()

            # ── Summary page ──
            totals = summarize(steps)
            c.setFont("Helvetica-Bold", 20)
            c.drawCentredString(pw / 2, ph - 100, "Summary")
            c.setFont("Helvetica", 12)
            y = ph - 150
            for label, value in [("Total Steps", totals["steps"]),
                                 ("Inserts", totals["inserts"]),
                                 ("Deletes", totals["deletes"]),
                                 ("Rotations", totals["rotations"]),
                                 ("Recolorings", totals["recolorings"]),
                                 ("Final Nodes", totals["nodes"]),
                                 ("BLACK Nodes", totals["black"]),
                                 ("RED Nodes", totals["red"])]:
                c.drawString(100, y, f"{label}: {value}")
                y -= 22
            c.showPage()

            try:
                c.save()
            except OSError as e:
                raise ExportError(f"cannot write {filename}: {e}") from e


# ═════════════════════════════════════════════════════════════════
#  ANIMATION EXPORTER
#
#  Each step is rendered to a Pillow image, converted to a NumPy
#  array, and the stack is written with imageio.  ".gif" uses the
#  Pillow plugin (per-frame duration in ms); anything else goes to
#  the video plugin with an fps.
# ═════════════════════════════════════════════════════════════════
class AnimationExporter:
    """
    Export a step history as an animated GIF or a video.

    Attributes:
        settings (Settings)          : Colours and frame duration.
        renderer (TreeImageRenderer) : Renders each frame.
    """

    def __init__(self, settings=None, width=960, height=540):
        self.settings = settings if settings is not None else Settings(load=False)
        self.renderer = TreeImageRenderer(self.settings, width, height)

    def frames(self, steps):
        """Render every step; returns an (n, h, w, 3) uint8 array."""
        ops = _operations(steps)
        out = []
        for i, st in enumerate(steps):
            img = self.renderer.render(
                st.get("tree_state"), st.get("highlight", []),
                f"Step {i+1}: {st['desc'][:50]}",
                case_text(st, ops.get(st["op_id"])))
            out.append(np.asarray(img))
        return np.stack(out)

    def export(self, steps, filename, fps=None):
        """
        Write all steps as frames.

        Args:
            steps    (list)     : Step dicts to render.
            filename (str)      : Output path (.gif, .mp4, …).
            fps      (int|None) : Frames per second; when None each
                                  frame is held settings.frame_ms ms.

        Raises:
            ExportError: no steps, or the encoder failed.
        """
        if not steps:
            raise ExportError("no recorded steps to export")
        frames = self.frames(steps)
        if fps is None:
            duration = self.settings.frame_ms
            fps      = 1000 / duration
        else:
            duration = round(1000 / fps)
        try:
            if filename.lower().endswith(".gif"):
                iio.imwrite(filename, frames, extension=".gif",
                            duration=duration, loop=0)
            else:
                iio.imwrite(filename, frames, fps=fps)
        except (OSError, ValueError, RuntimeError) as e:
            raise ExportError(f"cannot write {filename}: {e}") from e
