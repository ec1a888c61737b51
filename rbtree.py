#!/usr/bin/env python3
"""
╔══════════════════════════════════════════════════════════════════╗
║              Red-Black Tree  —  CORE ENGINE                      ║
║                                                                  ║
║  Ordered-key red-black tree with insert, remove, lookup and      ║
║  the three canonical traversals.  Every mutation restores the    ║
║  red-black properties through an iterative fix-up loop.          ║
║                                                                  ║
║  Architecture                                                    ║
║  ────────────                                                    ║
║  ┌─────────────┐  insert/remove  ┌──────────────┐                ║
║  │   RBTree    │ ──structural──► │ _insert_fix- │                ║
║  │             │     step        │ up / _remove │                ║
║  └──────┬──────┘                 │ _fixup       │                ║
║         │                        └──────┬───────┘                ║
║         │ optional step trace           │ rotations + recolours  ║
║         ▼                               ▼                        ║
║  steps[] (snapshot dicts)        _left_rotate / _right_rotate    ║
║                                                                  ║
║  Properties kept after every public operation                    ║
║  ────────────────────────────────────────────                    ║
║    1. BST order  (left < key < right)                            ║
║    2. Root is BLACK                                              ║
║    3. No RED node has a RED child                                ║
║    4. Equal black-height on every root → None path               ║
║    5. Absent children (None) count as BLACK                      ║
║                                                                  ║
║  Step Dict Schema (record=True)                                  ║
║  ──────────────────────────────                                  ║
║  { "action"    : str,   # category (rotate/recolor/compare/…)    ║
║    "desc"      : str,   # human-readable explanation             ║
║    "case"      : str?,  # case id (case0…case4) or None          ║
║    "highlight" : [key], # keys involved in this step             ║
║    "extra"     : dict?, # metadata (operation type, key value)   ║
║    "tree_state": dict?, # recursive snapshot of tree at moment   ║
║    "op_id"     : int }  # operation counter                      ║
║                                                                  ║
║  License: MIT                                                    ║
╚══════════════════════════════════════════════════════════════════╝
"""

# ═════════════════════════════════════════════════════════════════
#  IMPORTS
# ═════════════════════════════════════════════════════════════════
import sys

from treeutils import render_text, validate_bst, validate_rb


# ═════════════════════════════════════════════════════════════════
#  GLOBAL CONSTANTS
# ═════════════════════════════════════════════════════════════════
RED   = True          # RB-Tree color constant: RED   = True
BLACK = False         # RB-Tree color constant: BLACK = False


# ═════════════════════════════════════════════════════════════════
#  ERRORS
#
#  Lookups of absent keys are NOT errors (False / no-op).  These
#  exceptions signal internal-consistency failures only.
# ═════════════════════════════════════════════════════════════════
class RBTreeError(Exception):
    """Base class for every error raised by this package."""


class InvariantError(RBTreeError, AssertionError):
    """A red-black or BST property does not hold."""

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class RotationError(RBTreeError, RuntimeError):
    """A rotation was requested around a node lacking the pivot child."""


# ═════════════════════════════════════════════════════════════════
#  RB NODE
#
#  Minimal node for the Red-Black tree.  Uses __slots__ to reduce
#  memory overhead.  Each node stores only five fields:
#    key    : K         – the ordered key
#    color  : bool      – RED (True) or BLACK (False)
#    left   : RBNode?   – left child  (owned, None when absent)
#    right  : RBNode?   – right child (owned, None when absent)
#    parent : RBNode?   – back-reference (None for root)
# ═════════════════════════════════════════════════════════════════
class RBNode:
    """
    A single node in the Red-Black tree.

    Attributes:
        key    : Node key (any totally ordered value).
        color  (bool)        : RED (True) or BLACK (False).
        left   (RBNode|None) : Left child.
        right  (RBNode|None) : Right child.
        parent (RBNode|None) : Parent node (None for root).
    """
    __slots__ = ('key', 'color', 'left', 'right', 'parent')

    def __init__(self, key, color=RED, parent=None):
        self.key    = key
        self.color  = color
        self.left   = None
        self.right  = None
        self.parent = parent

    def __repr__(self):
        return f"<{'R' if self.color == RED else 'B'} {self.key!r}>"


def _color_of(node):
    """Effective colour of a possibly-absent node (None is BLACK)."""
    return BLACK if node is None else node.color


def _key_of(node):
    return "NIL" if node is None else node.key


# ═════════════════════════════════════════════════════════════════
#  RB TREE
#
#  Iterative red-black tree.  Absent children are plain None,
#  parents are non-owning back-references used only by the
#  upward fix-up walks.
#
#  When record=True every sub-step (comparison, rotation,
#  recolour, case identification) is appended to self.steps[].
# ═════════════════════════════════════════════════════════════════
class RBTree:
    """
    Red-Black tree over ordered keys.

    Duplicate keys are rejected: ``insert`` leaves the tree
    unchanged and returns False.

    Args:
        keys   (iterable|None): Keys inserted in order at construction.
        record (bool)         : Record a step trace for every operation.

    Attributes:
        root   (RBNode|None) : Root of the tree (None if empty).
        steps  (list)        : Recorded step dicts (when recording).
        record (bool)        : Whether steps are recorded.
    """

    def __init__(self, keys=None, record=False):
        self.root        = None
        self.record      = record
        self.steps       = []
        self._size       = 0
        self._op_counter = 0           # Unique operation ID counter
        if keys is not None:
            for key in keys:
                self.insert(key)

    # ─────────────────────────────────────────────────────────────
    #  CONTAINER PROTOCOL
    # ─────────────────────────────────────────────────────────────

    def __len__(self):
        return self._size

    def __bool__(self):
        return self.root is not None

    def __contains__(self, key):
        return self.contains(key)

    def __iter__(self):
        """Yield keys in ascending order (lazy in-order walk)."""
        stack = []
        node  = self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.key
            node = node.right

    def __repr__(self):
        return f"RBTree({self.in_order()!r})"

    def clear(self):
        """Drop every node."""
        self.root  = None
        self._size = 0

    # ─────────────────────────────────────────────────────────────
    #  SNAPSHOT & RECORDING
    # ─────────────────────────────────────────────────────────────

    def snapshot(self):
        """
        Serialise the current tree into a nested dict.

        Returns:
            dict|None: Recursive structure
                       {"key": K, "color": bool,
                        "left": dict|None, "right": dict|None}
                       or None for an empty tree.
        """
        def _snap(n):
            if n is None:
                return None
            return {"key": n.key, "color": n.color,
                    "left": _snap(n.left), "right": _snap(n.right)}
        return _snap(self.root)

    def to_tuple(self):
        """
        Convert the tree to a nested tuple for structural comparison.

        Format: (key, color, left_tuple, right_tuple); None for empty.
        Two trees are structurally identical iff their tuples match.
        """
        def _tup(n):
            if n is None:
                return None
            return (n.key, n.color, _tup(n.left), _tup(n.right))
        return _tup(self.root)

    def _record(self, action, desc, case=None, highlight=None, extra=None):
        """
        Append one step to self.steps[] (no-op unless recording).

        Args:
            action    (str)      : Category — "rotate", "recolor",
                                   "compare", "case", "start", "done", etc.
            desc      (str)      : Human-readable description.
            case      (str|None) : Case id, e.g. "case1", "case3".
            highlight (list|None): Keys involved in this step.
            extra     (dict|None): Metadata (operation type, key, etc.).
        """
        if not self.record:
            return
        self.steps.append({
            "action":     action,
            "desc":       desc,
            "case":       case,
            "highlight":  highlight or [],
            "extra":      extra,
            "tree_state": self.snapshot(),    # Frozen tree at this moment
            "op_id":      self._op_counter,
        })

    def clear_steps(self):
        """Reset the step buffer."""
        self.steps = []

    # ─────────────────────────────────────────────────────────────
    #  ROTATIONS
    #
    #  The only operations that change the tree's shape.  Fix-ups
    #  are sequences of these plus colour assignments.
    # ─────────────────────────────────────────────────────────────

    def _replace_child(self, old, new):
        """Hang `new` in the slot `old` occupies under old.parent."""
        parent = old.parent
        if parent is None:
            self.root = new
        elif old is parent.left:
            parent.left = new
        elif old is parent.right:
            parent.right = new
        else:
            raise InvariantError(
                f"node {old.key!r} is not a child of its parent {parent.key!r}")

    def _left_rotate(self, x):
        """
        Left-rotate subtree rooted at x.

        Before:       After:
            x           y
           / \\         / \\
          α   y       x   γ
             / \\     / \\
            β   γ   α   β

        Raises:
            RotationError: x has no right child.
        """
        y = x.right
        if y is None:
            raise RotationError(
                f"left rotation around {x.key!r} without a right child")
        self._record("rotate", f"LEFT-ROTATE({x.key})",
                     highlight=[x.key, y.key])

        x.right = y.left           # Turn y's left subtree into x's right
        if y.left is not None:
            y.left.parent = x

        self._replace_child(x, y)  # Link x's parent to y
        y.parent = x.parent

        y.left   = x               # Put x on y's left
        x.parent = y

    def _right_rotate(self, y):
        """
        Right-rotate subtree rooted at y  (mirror of left-rotate).

        Before:       After:
            y           x
           / \\         / \\
          x   γ       α   y
         / \\             / \\
        α   β           β   γ

        Raises:
            RotationError: y has no left child.
        """
        x = y.left
        if x is None:
            raise RotationError(
                f"right rotation around {y.key!r} without a left child")
        self._record("rotate", f"RIGHT-ROTATE({y.key})",
                     highlight=[y.key, x.key])

        y.left = x.right           # Turn x's right subtree into y's left
        if x.right is not None:
            x.right.parent = y

        self._replace_child(y, x)  # Link y's parent to x
        x.parent = y.parent

        x.right  = y               # Put y on x's right
        y.parent = x

    # ─────────────────────────────────────────────────────────────
    #  LOOKUP
    # ─────────────────────────────────────────────────────────────

    def _search(self, key):
        """
        Standard iterative BST search.

        Returns:
            RBNode|None: The node holding key, or None if not found.
        """
        node = self.root
        while node is not None:
            if key == node.key:
                return node
            node = node.left if key < node.key else node.right
        return None

    def _search_recorded(self, key):
        """Search with step recording."""
        node = self.root
        while node is not None:
            if key == node.key:
                self._record("compare", f"{key} == {node.key} → FOUND",
                             highlight=[node.key])
                return node
            elif key < node.key:
                self._record("compare", f"{key} < {node.key} → go LEFT",
                             highlight=[node.key])
                node = node.left
            else:
                self._record("compare", f"{key} > {node.key} → go RIGHT",
                             highlight=[node.key])
                node = node.right
        self._record("compare", f"{key} not found → reached NIL")
        return None

    def contains(self, key):
        """Return True if key is stored in the tree."""
        return self._search(key) is not None

    @staticmethod
    def _minimum(x):
        """Leftmost (minimum) node of the subtree rooted at x."""
        while x.left is not None:
            x = x.left
        return x

    @staticmethod
    def _maximum(x):
        """Rightmost (maximum) node of the subtree rooted at x."""
        while x.right is not None:
            x = x.right
        return x

    def minimum(self):
        """Smallest key; ValueError on an empty tree."""
        if self.root is None:
            raise ValueError("Tree is empty")
        return self._minimum(self.root).key

    def maximum(self):
        """Largest key; ValueError on an empty tree."""
        if self.root is None:
            raise ValueError("Tree is empty")
        return self._maximum(self.root).key

    def successor(self, key):
        """
        Smallest key greater than `key`.

        Raises:
            KeyError: key is absent, or it is the maximum.
        """
        node = self._search(key)
        if node is None:
            raise KeyError(key)
        if node.right is not None:
            return self._minimum(node.right).key
        parent = node.parent
        while parent is not None and node is parent.right:
            node, parent = parent, parent.parent
        if parent is None:
            raise KeyError(f"No successor for {key!r}")
        return parent.key

    def predecessor(self, key):
        """
        Greatest key smaller than `key`.

        Raises:
            KeyError: key is absent, or it is the minimum.
        """
        node = self._search(key)
        if node is None:
            raise KeyError(key)
        if node.left is not None:
            return self._maximum(node.left).key
        parent = node.parent
        while parent is not None and node is parent.left:
            node, parent = parent, parent.parent
        if parent is None:
            raise KeyError(f"No predecessor for {key!r}")
        return parent.key

    # ─────────────────────────────────────────────────────────────
    #  INSERT
    #
    #  1. BST walk down to the absent slot, attach as leaf
    #  2. Colour new node RED (root is forced BLACK)
    #  3. Call _insert_fixup() to restore RB properties
    # ─────────────────────────────────────────────────────────────

    def insert(self, key):
        """
        Insert a key.

        Args:
            key: The value to insert.

        Returns:
            bool: True if inserted, False if the key already existed.
        """
        self._op_counter += 1
        self._record("start", f"═══ INSERT {key} ═══",
                     extra={"operation": "insert", "key": key})

        # ── Phase 1: BST walk to find insertion point ──
        parent = None
        node   = self.root
        while node is not None:
            parent = node
            if key == node.key:
                self._record("duplicate",
                             f"Key {key} already exists — INSERT aborted",
                             highlight=[node.key],
                             extra={"operation": "insert_duplicate", "key": key})
                return False
            if key < node.key:
                self._record("compare", f"{key} < {node.key} → go LEFT",
                             highlight=[node.key])
                node = node.left
            else:
                self._record("compare", f"{key} > {node.key} → go RIGHT",
                             highlight=[node.key])
                node = node.right

        # ── Phase 2: Attach new node to parent ──
        z = RBNode(key, RED, parent)
        self._size += 1
        if parent is None:
            z.color   = BLACK
            self.root = z
            self._record("place", f"Tree empty → {key} becomes BLACK ROOT",
                         case="case0", highlight=[key])
            self._record("done", f"INSERT {key} COMPLETE",
                         extra={"operation": "insert_done", "key": key})
            return True
        if key < parent.key:
            parent.left = z
            side = "LEFT"
        else:
            parent.right = z
            side = "RIGHT"
        self._record("place", f"Place {key} as {side} child of {parent.key}",
                     highlight=[key, parent.key])
        self._record("color", f"Color {key} RED (new-node default)",
                     highlight=[key])

        # ── Phase 3: Fix-up to restore RB properties ──
        self._record("fixup_start", f"Call INSERT-FIXUP({key})",
                     highlight=[key])
        self._insert_fixup(z)

        self._record("done", f"INSERT {key} COMPLETE",
                     extra={"operation": "insert_done", "key": key})
        return True

    # ─────────────────────────────────────────────────────────────
    #  INSERT FIXUP
    #
    #  Iteratively fixes RED-RED violations (or their mirror when
    #  the parent is a right child).
    #
    #  Case 1: Uncle RED              → recolour P, U, GP; move z up
    #  Case 2: Uncle BLACK, z inner   → rotate P to straighten (→ 3)
    #  Case 3: Uncle BLACK, z outer   → recolour + rotate GP (terminal)
    # ─────────────────────────────────────────────────────────────

    def _insert_fixup(self, z):
        """
        Restore RB properties after inserting the RED node z.

        Iterates while z's parent is RED.  A RED parent is never the
        root, so the grandparent always exists inside the loop.
        """
        iteration = 0
        while z.parent is not None and z.parent.color == RED:
            iteration += 1
            parent = z.parent
            grand  = parent.parent
            if grand is None:
                raise InvariantError(
                    f"RED node {parent.key!r} has no parent (RED root)")
            self._record("check",
                f"Fixup #{iteration}: Parent({parent.key}) RED → violation",
                highlight=[z.key, parent.key])

            parent_is_left = parent is grand.left
            uncle = grand.right if parent_is_left else grand.left
            mirror = "" if parent_is_left else " (mirror)"

            if _color_of(uncle) == RED:
                # ═══════════════════════════════════
                #  CASE 1: Uncle is RED
                # ═══════════════════════════════════
                self._record("case",
                    f"INSERT CASE 1{mirror}: Uncle({uncle.key}) RED",
                    case="case1",
                    highlight=[z.key, parent.key, uncle.key, grand.key])
                parent.color = BLACK
                uncle.color  = BLACK
                grand.color  = RED
                self._record("recolor",
                    f"Recolor: Parent({parent.key})→B, Uncle({uncle.key})→B, "
                    f"Grandparent({grand.key})→R",
                    highlight=[parent.key, uncle.key, grand.key])
                z = grand                               # Move z up two levels
                self._record("move", f"z ← {z.key} (move up)",
                             highlight=[z.key])
                continue

            # Uncle is BLACK: Cases 2 and/or 3
            z_is_inner = (z is parent.right) if parent_is_left else (z is parent.left)
            if z_is_inner:
                # ═══════════════════════════════
                #  CASE 2: z is inner child
                # ═══════════════════════════════
                self._record("case",
                    f"INSERT CASE 2{mirror}: Uncle({_key_of(uncle)}) BLACK, "
                    f"z={z.key} inner",
                    case="case2", highlight=[z.key, parent.key])
                z = parent
                if parent_is_left:
                    self._left_rotate(z)
                else:
                    self._right_rotate(z)
                parent = z.parent

            # ═══════════════════════════════════
            #  CASE 3: z is outer child (terminal)
            # ═══════════════════════════════════
            self._record("case",
                f"INSERT CASE 3{mirror}: Uncle({_key_of(uncle)}) BLACK, "
                f"z={z.key} outer",
                case="case3", highlight=[z.key, parent.key, grand.key])
            parent.color = BLACK
            grand.color  = RED
            self._record("recolor",
                f"Recolor: Parent({parent.key})→B, Grandparent({grand.key})→R",
                highlight=[parent.key, grand.key])
            if parent_is_left:
                self._right_rotate(grand)
            else:
                self._left_rotate(grand)

        # ── Ensure root is always BLACK (Case 0) ──
        if self.root.color == RED:
            self._record("root", f"Root({self.root.key}) RED → BLACK",
                         case="case0", highlight=[self.root.key])
            self.root.color = BLACK

    # ─────────────────────────────────────────────────────────────
    #  REMOVE
    #
    #  Two children → copy in-order successor's key into z and
    #  splice the successor instead.  The spliced node has at most
    #  one child x, which takes its place.  If the spliced node was
    #  BLACK, call _remove_fixup() at x's position.
    # ─────────────────────────────────────────────────────────────

    def remove(self, key):
        """
        Remove a key.

        Args:
            key: The value to remove.

        Returns:
            bool: True if removed, False if the key was absent.
        """
        self._op_counter += 1
        self._record("start", f"═══ DELETE {key} ═══",
                     extra={"operation": "delete", "key": key})

        z = self._search_recorded(key) if self.record else self._search(key)
        if z is None:
            self._record("not_found", f"Key {key} NOT FOUND in tree",
                         extra={"operation": "delete_fail", "key": key})
            return False
        self._record("found", f"Node {key} found — begin deletion",
                     highlight=[key])

        # ── Target the successor when z has two children ──
        if z.left is not None and z.right is not None:
            y = self._minimum(z.right)
            self._record("successor",
                         f"Two children → copy successor {y.key} into {z.key}",
                         highlight=[z.key, y.key])
            z.key = y.key
        else:
            y = z

        # ── Splice y out, linking its only child x to y's parent ──
        x = y.left if y.left is not None else y.right
        x_parent = y.parent
        self._replace_child(y, x)
        if x is not None:
            x.parent = x_parent
        self._size -= 1
        self._record("splice",
                     f"Splice out {y.key} → replaced by {_key_of(x)}",
                     highlight=[n.key for n in (x_parent, x) if n is not None])

        if y.color == BLACK:
            self._record("fixup_start",
                         "Removed BLACK node → DELETE-FIXUP needed")
            self._remove_fixup(x, x_parent)
        else:
            self._record("skip", "Removed RED node → no fix-up",
                         case="case0")

        y.left = y.right = y.parent = None     # Detach after fix-up
        self._record("done", f"DELETE {key} COMPLETE",
                     extra={"operation": "delete_done", "key": key})
        return True

    # ─────────────────────────────────────────────────────────────
    #  REMOVE FIXUP
    #
    #  Resolves the "double-black" position x (possibly None, so
    #  its parent is carried alongside) through four cases:
    #
    #  Case 1: Sibling w is RED
    #          → Recolour w BLACK, parent RED; rotate parent
    #  Case 2: w BLACK, both nephews BLACK
    #          → Recolour w RED; move x up
    #  Case 3: w BLACK, near nephew RED, far nephew BLACK
    #          → Recolour near→B, w→R; rotate w away (→ Case 4)
    #  Case 4: w BLACK, far nephew RED  (TERMINAL)
    #          → w takes parent's colour, parent→B, far→B;
    #            rotate parent toward x
    # ─────────────────────────────────────────────────────────────

    def _remove_fixup(self, x, parent):
        """
        Restore RB properties after removing a BLACK node.

        Args:
            x      (RBNode|None): Node now occupying the removed slot.
            parent (RBNode|None): Parent of that slot.
        """
        iteration = 0
        while x is not self.root and _color_of(x) == BLACK:
            iteration += 1
            self._record("check",
                         f"Del-Fix #{iteration}: x={_key_of(x)} double-black",
                         highlight=[parent.key])

            x_is_left = x is parent.left
            mirror    = "" if x_is_left else " (mirror)"
            w = parent.right if x_is_left else parent.left
            if w is None:
                raise InvariantError(
                    f"double-black below {parent.key!r} has no sibling")

            # ═══════════════════════════════════
            #  CASE 1: Sibling w is RED
            # ═══════════════════════════════════
            if w.color == RED:
                self._record("case",
                    f"DELETE CASE 1{mirror}: Sibling({w.key}) RED",
                    case="case1", highlight=[w.key, parent.key])
                w.color      = BLACK
                parent.color = RED
                if x_is_left:
                    self._left_rotate(parent)
                    w = parent.right
                else:
                    self._right_rotate(parent)
                    w = parent.left

            near = w.left if x_is_left else w.right
            far  = w.right if x_is_left else w.left

            if _color_of(near) == BLACK and _color_of(far) == BLACK:
                # ═══════════════════════════════
                #  CASE 2: Both nephews BLACK
                # ═══════════════════════════════
                self._record("case",
                    f"DELETE CASE 2{mirror}: Both nephews of {w.key} BLACK",
                    case="case2", highlight=[w.key])
                w.color = RED
                x, parent = parent, parent.parent     # Move double-black up
                continue

            if _color_of(far) == BLACK:
                # ═══════════════════════════════
                #  CASE 3: Near nephew RED, far BLACK
                # ═══════════════════════════════
                self._record("case",
                    f"DELETE CASE 3{mirror}: Near nephew({near.key}) RED",
                    case="case3", highlight=[w.key, near.key])
                near.color = BLACK
                w.color    = RED
                if x_is_left:
                    self._right_rotate(w)
                    w = parent.right
                else:
                    self._left_rotate(w)
                    w = parent.left
                far = w.right if x_is_left else w.left

            # ═══════════════════════════════════
            #  CASE 4: Far nephew RED (TERMINAL)
            # ═══════════════════════════════════
            self._record("case",
                f"DELETE CASE 4{mirror}: Far nephew({far.key}) RED → TERMINAL",
                case="case4", highlight=[w.key, far.key, parent.key])
            w.color      = parent.color
            parent.color = BLACK
            far.color    = BLACK
            if x_is_left:
                self._left_rotate(parent)
            else:
                self._right_rotate(parent)
            x, parent = self.root, None

        # ── Final: ensure x is BLACK ──
        if x is not None and x.color == RED:
            self._record("recolor", f"x={x.key} → BLACK", highlight=[x.key])
            x.color = BLACK

    # ─────────────────────────────────────────────────────────────
    #  TRAVERSALS
    #
    #  Iterative walks; each call builds a fresh list.
    # ─────────────────────────────────────────────────────────────

    def in_order(self):
        """Keys in ascending order (left, node, right)."""
        return list(self)

    def get_all_keys(self):
        """Alias of in_order()."""
        return self.in_order()

    def pre_order(self):
        """Keys in pre-order (node, left, right)."""
        keys  = []
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            keys.append(node.key)
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return keys

    def post_order(self):
        """Keys in post-order (left, right, node)."""
        keys  = []
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            keys.append(node.key)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        keys.reverse()                 # node-right-left, reversed
        return keys

    # ─────────────────────────────────────────────────────────────
    #  MEASUREMENTS & VALIDATION
    # ─────────────────────────────────────────────────────────────

    def height(self):
        """
        Edges on the longest root-to-leaf path (0 for empty or a
        single node).
        """
        if self.root is None:
            return 0
        best  = 0
        stack = [(self.root, 0)]
        while stack:
            node, depth = stack.pop()
            best = max(best, depth)
            for child in (node.left, node.right):
                if child is not None:
                    stack.append((child, depth + 1))
        return best

    def black_height(self):
        """BLACK nodes on the leftmost root → None path."""
        bh   = 0
        node = self.root
        while node is not None:
            if node.color == BLACK:
                bh += 1
            node = node.left
        return bh

    def validate(self):
        """
        Verify every red-black and BST property, plus parent links.

        Raises:
            InvariantError: listing each violation found.
        """
        errors = []
        state  = self.snapshot()
        if self.root is not None:
            if self.root.parent is not None:
                errors.append(f"Root {self.root.key!r} has a parent")
            if self.root.color != BLACK:
                errors.append(f"Root {self.root.key!r} is RED")
        errors.extend(validate_rb(state)[2])
        errors.extend(validate_bst(state)[1])

        count = 0
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            count += 1
            for child in (node.left, node.right):
                if child is not None:
                    if child.parent is not node:
                        errors.append(
                            f"Parent link of {child.key!r} does not point "
                            f"to {node.key!r}")
                    stack.append(child)
        if count != self._size:
            errors.append(f"Size {self._size} but {count} nodes reachable")

        if errors:
            raise InvariantError(errors)

    # ─────────────────────────────────────────────────────────────
    #  DEBUG OUTPUT
    # ─────────────────────────────────────────────────────────────

    def print_tree(self, file=None, color=True):
        """Write the indented colour-annotated dump to file (stdout)."""
        out = file if file is not None else sys.stdout
        text = render_text(self.snapshot(), color=color)
        out.write(text + "\n" if text else "(empty)\n")
