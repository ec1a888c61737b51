"""
Tree utility functions.

Operate on the snapshot dict format ({"key", "color", "left",
"right"}, None for an empty subtree) produced by RBTree.snapshot()
rather than on live nodes.  Used for:
  • Validation of the red-black and BST properties
  • Statistics (height, node and colour totals)
  • Layout computation for image rendering
  • The indented text dump
"""

# ═════════════════════════════════════════════════════════════════
#  ANSI COLOURS for the text dump
# ═════════════════════════════════════════════════════════════════
ANSI_RED_TEXT   = "\033[31;1m"
ANSI_BLACK_TEXT = "\033[37;1m"
ANSI_RESET      = "\033[0m"


def tree_height(node):
    """
    Compute the height of a snapshot dict-tree in nodes.

    Args:
        node (dict|None): Snapshot root.

    Returns:
        int: Height (0 for None / empty, 1 for a single node).
    """
    if node is None:
        return 0
    return 1 + max(tree_height(node.get("left")),
                   tree_height(node.get("right")))


def layout_tree(node, depth, lo, hi, positions):
    """
    Compute normalised (0..1) x-positions for each node via
    midpoint splitting.

    Each node sits at the midpoint of its allocated horizontal
    range; its children split that range in half.

    Args:
        node      (dict|None) : Current snapshot node.
        depth     (int)       : Current depth (0 = root).
        lo, hi    (float)     : Horizontal range [lo, hi) in [0, 1].
        positions (dict)      : Output — key → {"x", "y", "color"}.
    """
    if node is None:
        return
    mid = (lo + hi) / 2.0
    positions[node["key"]] = {"x": mid, "y": depth, "color": node["color"]}
    layout_tree(node.get("left"),  depth + 1, lo, mid, positions)
    layout_tree(node.get("right"), depth + 1, mid, hi, positions)


def tree_stats(node):
    """
    Node and colour totals for a snapshot dict-tree.

    Returns:
        dict: {"nodes", "black", "red"}, all zero for an empty tree.
    """
    nodes = black = 0
    stack = [node] if node is not None else []
    while stack:
        n = stack.pop()
        nodes += 1
        if not n["color"]:
            black += 1
        stack.extend(c for c in (n.get("left"), n.get("right")) if c is not None)
    return {"nodes": nodes, "black": black, "red": nodes - black}


def validate_rb(node, parent_color=None):
    """
    Validate red-black colouring on a snapshot dict-tree.

    Checks:
        • No two consecutive RED nodes
        • Equal black-height on all paths

    Root colour is not checked here (a subtree may have a RED root).

    Args:
        node         (dict|None): Snapshot root.
        parent_color (bool|None): Parent's colour (for RED-RED check).

    Returns:
        tuple[bool, int, list[str]]: (is_valid, black_height, errors).
    """
    if node is None:
        return True, 1, []                   # None leaves count as BLACK

    errors = []
    c = node.get("color")
    if c and parent_color:
        errors.append(
            f"Red violation: node {node['key']!r} and its parent are both RED")

    _, bh_l, err_l = validate_rb(node.get("left"),  c)
    _, bh_r, err_r = validate_rb(node.get("right"), c)
    errors.extend(err_l)
    errors.extend(err_r)

    if bh_l != bh_r:
        errors.append(
            f"Black-height violation at node {node['key']!r}: "
            f"left={bh_l}, right={bh_r}")

    return not errors, bh_l + (0 if c else 1), errors


def validate_bst(node, low=None, high=None):
    """
    Validate BST ordering on a snapshot dict-tree.

    Each key must satisfy low < key < high (None = unbounded), so
    duplicates are reported as violations too.

    Returns:
        tuple[bool, list[str]]: (is_valid, errors).
    """
    if node is None:
        return True, []

    errors = []
    key = node["key"]
    if low is not None and not low < key:
        errors.append(f"BST violation: node {key!r} <= {low!r}")
    if high is not None and not key < high:
        errors.append(f"BST violation: node {key!r} >= {high!r}")

    errors.extend(validate_bst(node.get("left"), low, key)[1])
    errors.extend(validate_bst(node.get("right"), key, high)[1])
    return not errors, errors


def render_text(node, color=True):
    """
    Indented, colour-annotated dump of a snapshot dict-tree.

    Left children are drawn with ``|---`` and right children with
    ``\\---``; the left subtree is listed before the right one:

        \\---4
            |---2
            |   |---1
            |   \\---3
            \\---6

    Args:
        node  (dict|None): Snapshot root.
        color (bool)     : ANSI colours; otherwise keys are suffixed
                           with (R) / (B).

    Returns:
        str: The dump ("" for an empty tree).
    """
    lines = []

    def _label(n):
        if color:
            tint = ANSI_RED_TEXT if n["color"] else ANSI_BLACK_TEXT
            return f"{tint}{n['key']}{ANSI_RESET}"
        return f"{n['key']}({'R' if n['color'] else 'B'})"

    def _walk(n, prefix, is_left):
        if n is None:
            return
        lines.append(prefix + ("|---" if is_left else "\\---") + _label(n))
        child_prefix = prefix + ("|   " if is_left else "    ")
        _walk(n.get("left"),  child_prefix, True)
        _walk(n.get("right"), child_prefix, False)

    _walk(node, "", False)
    return "\n".join(lines)
