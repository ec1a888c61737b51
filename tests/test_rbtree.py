#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
test_rbtree.py
--------------

Exercises the RBTree engine:

* insertion / lookup / removal, duplicate rejection
* the three traversals on known shapes
* every insert and delete fix-up case (and mirror), observed through
  the recorded step trace
* rotations around left and right children
* randomised insert/remove sequences checked against a Python set,
  with full invariant validation after every operation
* height bound
"""

import io
import math
import random
import unittest

from rbtree import (BLACK, RED, InvariantError, RBTree, RBTreeError,
                    RotationError)


def fixup_cases(tree):
    """(case id, mirrored?) for each case step recorded so far."""
    return [(s["case"], "(mirror)" in s["desc"])
            for s in tree.steps if s["action"] == "case"]


class TestBasics(unittest.TestCase):
    # ------------------------------------------------------------------
    #  Empty tree
    # ------------------------------------------------------------------
    def test_empty_tree(self):
        tree = RBTree()
        self.assertEqual(len(tree), 0)
        self.assertFalse(tree)
        self.assertFalse(tree.contains(1))
        self.assertNotIn(1, tree)
        self.assertFalse(tree.remove(1))
        self.assertEqual(tree.in_order(), [])
        self.assertEqual(tree.pre_order(), [])
        self.assertEqual(tree.post_order(), [])
        self.assertEqual(tree.height(), 0)
        self.assertEqual(tree.black_height(), 0)
        self.assertIsNone(tree.snapshot())
        self.assertIsNone(tree.to_tuple())
        tree.validate()

    def test_min_max_on_empty_tree_raise(self):
        tree = RBTree()
        with self.assertRaises(ValueError):
            tree.minimum()
        with self.assertRaises(ValueError):
            tree.maximum()

    def test_first_insert_becomes_black_root(self):
        tree = RBTree()
        self.assertTrue(tree.insert(42))
        self.assertEqual(tree.root.key, 42)
        self.assertEqual(tree.root.color, BLACK)
        self.assertIsNone(tree.root.parent)
        self.assertEqual(len(tree), 1)
        self.assertTrue(tree)

    def test_duplicate_insert_is_rejected(self):
        tree = RBTree([5, 3, 8])
        before = tree.to_tuple()
        self.assertFalse(tree.insert(3))
        self.assertEqual(len(tree), 3)
        self.assertEqual(tree.to_tuple(), before)

    def test_constructor_keys_and_iteration(self):
        tree = RBTree([7, 3, 9, 1])
        self.assertEqual(list(tree), [1, 3, 7, 9])
        self.assertEqual(tree.get_all_keys(), [1, 3, 7, 9])
        self.assertEqual(repr(tree), "RBTree([1, 3, 7, 9])")

    def test_clear(self):
        tree = RBTree(range(20))
        tree.clear()
        self.assertEqual(len(tree), 0)
        self.assertIsNone(tree.root)
        tree.validate()

    def test_string_keys(self):
        tree = RBTree(["pear", "apple", "fig", "kiwi"])
        self.assertEqual(tree.in_order(), ["apple", "fig", "kiwi", "pear"])
        self.assertTrue(tree.remove("fig"))
        self.assertEqual(tree.in_order(), ["apple", "kiwi", "pear"])
        tree.validate()

    # ------------------------------------------------------------------
    #  Min / max / successor / predecessor
    # ------------------------------------------------------------------
    def test_min_max(self):
        tree = RBTree([15, 2, 40, 7, 30])
        self.assertEqual(tree.minimum(), 2)
        self.assertEqual(tree.maximum(), 40)

    def test_successor_predecessor(self):
        tree = RBTree([10, 20, 30, 40, 50])
        self.assertEqual(tree.successor(20), 30)
        self.assertEqual(tree.predecessor(20), 10)
        self.assertEqual(tree.successor(30), 40)
        self.assertEqual(tree.predecessor(40), 30)

        with self.assertRaises(KeyError):
            tree.successor(50)
        with self.assertRaises(KeyError):
            tree.predecessor(10)
        with self.assertRaises(KeyError):
            tree.successor(999)
        with self.assertRaises(KeyError):
            tree.predecessor(999)


class TestTraversals(unittest.TestCase):
    def setUp(self):
        # Shape after inserting 5, 6, 4, 3, 1, 8, 9:
        #            5B
        #         /      \
        #       3B        8B
        #      /  \      /  \
        #    1R    4R  6R    9R
        self.tree = RBTree([5, 6, 4, 3, 1, 8, 9])

    def test_in_order_is_sorted(self):
        self.assertEqual(self.tree.in_order(), [1, 3, 4, 5, 6, 8, 9])

    def test_pre_order(self):
        self.assertEqual(self.tree.pre_order(), [5, 3, 1, 4, 8, 6, 9])

    def test_post_order(self):
        self.assertEqual(self.tree.post_order(), [1, 4, 3, 6, 9, 8, 5])

    def test_shape_and_colors(self):
        self.assertEqual(
            self.tree.to_tuple(),
            (5, BLACK,
             (3, BLACK, (1, RED, None, None), (4, RED, None, None)),
             (8, BLACK, (6, RED, None, None), (9, RED, None, None))))

    def test_traversals_are_fresh_lists(self):
        first = self.tree.in_order()
        first.append(100)
        self.assertEqual(self.tree.in_order(), [1, 3, 4, 5, 6, 8, 9])

    def test_removing_absent_key_changes_nothing(self):
        before = (self.tree.pre_order(), self.tree.in_order(),
                  self.tree.post_order(), self.tree.to_tuple())
        self.assertFalse(self.tree.remove(7))
        after = (self.tree.pre_order(), self.tree.in_order(),
                 self.tree.post_order(), self.tree.to_tuple())
        self.assertEqual(before, after)
        self.assertEqual(len(self.tree), 7)


class TestInsertFixup(unittest.TestCase):
    def _cases(self, keys):
        tree = RBTree(keys, record=True)
        tree.validate()
        return tree, fixup_cases(tree)

    def test_uncle_red_recolors(self):
        tree, cases = self._cases([2, 1, 3, 4])
        self.assertIn(("case1", True), cases)
        self.assertEqual(tree.to_tuple(),
                         (2, BLACK, (1, BLACK, None, None),
                          (3, BLACK, None, (4, RED, None, None))))

    def test_uncle_red_recolors_mirror_side(self):
        tree, cases = self._cases([3, 2, 4, 1])
        self.assertIn(("case1", False), cases)
        self.assertEqual(tree.pre_order(), [3, 2, 1, 4])

    def test_outer_child_single_rotation(self):
        tree, cases = self._cases([3, 2, 1])
        self.assertEqual(cases, [("case3", False)])
        self.assertEqual(tree.pre_order(), [2, 1, 3])

    def test_outer_child_single_rotation_mirror(self):
        tree, cases = self._cases([1, 2, 3])
        self.assertEqual(cases, [("case3", True)])
        self.assertEqual(tree.pre_order(), [2, 1, 3])

    def test_inner_child_double_rotation(self):
        tree, cases = self._cases([3, 1, 2])
        self.assertEqual(cases, [("case2", False), ("case3", False)])
        self.assertEqual(tree.pre_order(), [2, 1, 3])

    def test_inner_child_double_rotation_mirror(self):
        tree, cases = self._cases([1, 3, 2])
        self.assertEqual(cases, [("case2", True), ("case3", True)])
        self.assertEqual(tree.pre_order(), [2, 1, 3])

    def test_ascending_one_to_ten(self):
        tree = RBTree(range(1, 11))
        tree.validate()
        self.assertEqual(tree.root.color, BLACK)
        self.assertEqual(tree.pre_order(), [4, 2, 1, 3, 6, 5, 8, 7, 9, 10])
        self.assertEqual(tree.post_order(), [1, 3, 2, 5, 7, 10, 9, 8, 6, 4])
        self.assertEqual(tree.height(), 4)
        self.assertLessEqual(tree.height() + 1, 2 * math.log2(len(tree) + 1))


class TestRemove(unittest.TestCase):
    def _remove(self, keys, key):
        tree = RBTree(keys, record=True)
        tree.clear_steps()
        self.assertTrue(tree.remove(key))
        tree.validate()
        self.assertNotIn(key, tree)
        return tree, fixup_cases(tree)

    def test_scenario_one_to_ten_remove_seven(self):
        tree, cases = self._remove(range(1, 11), 7)
        self.assertEqual(tree.in_order(), [1, 2, 3, 4, 5, 6, 8, 9, 10])
        self.assertEqual(tree.pre_order(), [4, 2, 1, 3, 6, 5, 9, 8, 10])
        self.assertEqual(cases, [("case4", False)])
        self.assertEqual(tree.root.color, BLACK)

    def test_red_leaf_needs_no_fixup(self):
        tree, cases = self._remove([5, 6, 4, 3, 1, 8, 9], 1)
        self.assertEqual(cases, [])
        self.assertIn("skip", [s["action"] for s in tree.steps])
        self.assertEqual(tree.pre_order(), [5, 3, 4, 8, 6, 9])

    def test_black_node_with_one_red_child(self):
        tree, cases = self._remove(range(1, 11), 9)
        self.assertEqual(cases, [])
        self.assertEqual(tree.pre_order(), [4, 2, 1, 3, 6, 5, 8, 7, 10])
        self.assertEqual(tree._search(10).color, BLACK)

    def test_two_children_copies_successor_key(self):
        tree = RBTree([5, 6, 4, 3, 1, 8, 9])
        root = tree.root
        self.assertTrue(tree.remove(5))
        tree.validate()
        self.assertIs(tree.root, root)
        self.assertEqual(tree.root.key, 6)
        self.assertEqual(tree.pre_order(), [6, 3, 1, 4, 8, 9])

    def test_sibling_red(self):
        tree, cases = self._remove([10, 5, 20, 15, 25, 30], 5)
        self.assertEqual(cases, [("case1", False), ("case2", False)])
        self.assertEqual(tree.pre_order(), [20, 10, 15, 25, 30])

    def test_sibling_red_mirror(self):
        tree, cases = self._remove([30, 35, 20, 25, 15, 10], 35)
        self.assertEqual(cases, [("case1", True), ("case2", True)])
        self.assertEqual(tree.pre_order(), [20, 15, 10, 30, 25])

    def test_both_nephews_black_moves_up(self):
        tree, cases = self._remove(range(1, 11), 1)
        self.assertEqual(cases, [("case2", False), ("case4", False)])
        self.assertEqual(tree.pre_order(), [6, 4, 2, 3, 5, 8, 7, 9, 10])

    def test_near_nephew_red(self):
        tree, cases = self._remove([10, 5, 20, 15], 5)
        self.assertEqual(cases, [("case3", False), ("case4", False)])
        self.assertEqual(tree.to_tuple(),
                         (15, BLACK, (10, BLACK, None, None),
                          (20, BLACK, None, None)))

    def test_near_nephew_red_mirror(self):
        tree, cases = self._remove([10, 15, 5, 8], 15)
        self.assertEqual(cases, [("case3", True), ("case4", True)])
        self.assertEqual(tree.pre_order(), [8, 5, 10])

    def test_far_nephew_red(self):
        tree, cases = self._remove([10, 5, 20, 25], 5)
        self.assertEqual(cases, [("case4", False)])
        self.assertEqual(tree.pre_order(), [20, 10, 25])

    def test_remove_last_key_empties_tree(self):
        tree = RBTree([1])
        self.assertTrue(tree.remove(1))
        self.assertIsNone(tree.root)
        self.assertEqual(len(tree), 0)

    def test_removed_node_is_detached(self):
        tree = RBTree([2, 1, 3])
        leaf = tree._search(3)
        tree.remove(3)
        self.assertIsNone(leaf.parent)
        self.assertIsNone(tree.root.right)


class TestRotations(unittest.TestCase):
    def test_left_rotate_root(self):
        tree = RBTree([2, 1, 3])
        tree._left_rotate(tree.root)
        self.assertEqual(tree.root.key, 3)
        self.assertIsNone(tree.root.parent)
        self.assertEqual(tree.pre_order(), [3, 2, 1])
        self.assertIs(tree.root.left.parent, tree.root)

    def test_rotating_right_child_keeps_left_sibling(self):
        tree = RBTree([4, 2, 6, 5, 7])
        left = tree.root.left
        tree._left_rotate(tree._search(6))
        self.assertIs(tree.root.left, left)
        self.assertEqual(tree.root.right.key, 7)
        self.assertIs(tree.root.right.parent, tree.root)
        self.assertEqual(tree.in_order(), [2, 4, 5, 6, 7])

    def test_rotating_left_child_keeps_right_sibling(self):
        tree = RBTree([4, 2, 6, 1, 3])
        right = tree.root.right
        tree._right_rotate(tree._search(2))
        self.assertIs(tree.root.right, right)
        self.assertEqual(tree.root.left.key, 1)
        self.assertIs(tree.root.left.parent, tree.root)
        self.assertEqual(tree.pre_order(), [4, 1, 2, 3, 6])

    def test_rotation_without_pivot_child_raises(self):
        tree = RBTree([1])
        with self.assertRaises(RotationError):
            tree._left_rotate(tree.root)
        with self.assertRaises(RotationError):
            tree._right_rotate(tree.root)
        self.assertTrue(issubclass(RotationError, RBTreeError))


class TestValidate(unittest.TestCase):
    def setUp(self):
        self.tree = RBTree([10, 5, 15, 2, 7, 12, 20])
        self.tree.validate()

    def test_red_root_detected(self):
        self.tree.root.color = RED
        with self.assertRaises(InvariantError):
            self.tree.validate()

    def test_black_height_mismatch_detected(self):
        # 5 keeps a RED left child but gains a BLACK right child
        self.tree._search(7).color = BLACK
        with self.assertRaises(AssertionError) as ctx:
            self.tree.validate()
        self.assertTrue(ctx.exception.errors)

    def test_broken_parent_link_detected(self):
        self.tree._search(2).parent = self.tree.root
        with self.assertRaises(InvariantError) as ctx:
            self.tree.validate()
        self.assertIn("Parent link", str(ctx.exception))

    def test_bst_order_violation_detected(self):
        self.tree._search(2).key = 11
        with self.assertRaises(InvariantError):
            self.tree.validate()


class TestRecording(unittest.TestCase):
    def test_no_steps_without_recording(self):
        tree = RBTree(range(10))
        tree.remove(3)
        self.assertEqual(tree.steps, [])

    def test_step_schema(self):
        tree = RBTree(record=True)
        tree.insert(1)
        actions = [s["action"] for s in tree.steps]
        self.assertEqual(actions, ["start", "place", "done"])
        for step in tree.steps:
            self.assertEqual(set(step), {"action", "desc", "case", "highlight",
                                         "extra", "tree_state", "op_id"})
            self.assertEqual(step["op_id"], 1)
        self.assertEqual(tree.steps[-1]["tree_state"],
                         {"key": 1, "color": BLACK, "left": None, "right": None})

    def test_duplicate_and_missing_keys_are_recorded(self):
        tree = RBTree([1], record=True)
        tree.clear_steps()
        tree.insert(1)
        tree.remove(2)
        actions = [s["action"] for s in tree.steps]
        self.assertIn("duplicate", actions)
        self.assertIn("not_found", actions)

    def test_rotation_steps_recorded(self):
        tree = RBTree([1, 2, 3], record=True)
        rotations = [s["desc"] for s in tree.steps if s["action"] == "rotate"]
        self.assertEqual(rotations, ["LEFT-ROTATE(1)"])


class TestPrintTree(unittest.TestCase):
    def test_plain_dump(self):
        buf = io.StringIO()
        RBTree([2, 1, 3]).print_tree(buf, color=False)
        self.assertEqual(buf.getvalue(),
                         "\\---2(B)\n    |---1(R)\n    \\---3(R)\n")

    def test_empty_dump(self):
        buf = io.StringIO()
        RBTree().print_tree(buf)
        self.assertEqual(buf.getvalue(), "(empty)\n")


class TestRandomized(unittest.TestCase):
    def test_insert_then_remove_random_permutation(self):
        rng = random.Random(12345)
        keys = list(range(200))
        rng.shuffle(keys)

        tree = RBTree()
        for n, key in enumerate(keys, start=1):
            tree.insert(key)
            tree.validate()
            self.assertLessEqual(tree.height() + 1, 2 * math.log2(n + 1))
        self.assertEqual(tree.in_order(), sorted(keys))

        remaining = set(keys)
        rng.shuffle(keys)
        for key in keys:
            self.assertTrue(tree.remove(key))
            remaining.discard(key)
            tree.validate()
            self.assertNotIn(key, tree)
            self.assertEqual(tree.in_order(), sorted(remaining))
            if remaining:
                self.assertLessEqual(tree.height() + 1,
                                     2 * math.log2(len(remaining) + 1))
        self.assertEqual(len(tree), 0)

    def test_interleaved_operations_against_set(self):
        rng = random.Random(2024)
        tree = RBTree()
        reference = set()

        for _ in range(4000):
            key = rng.randrange(300)
            if rng.random() < 0.55:
                self.assertEqual(tree.insert(key), key not in reference)
                reference.add(key)
            else:
                self.assertEqual(tree.remove(key), key in reference)
                reference.discard(key)
            tree.validate()
            self.assertEqual(len(tree), len(reference))

        for key in range(300):
            self.assertEqual(key in tree, key in reference)
        self.assertEqual(list(tree), sorted(reference))

    def test_recorded_and_plain_trees_agree(self):
        rng = random.Random(7)
        plain, traced = RBTree(), RBTree(record=True)
        for _ in range(300):
            key = rng.randrange(60)
            if rng.random() < 0.6:
                plain.insert(key)
                traced.insert(key)
            else:
                plain.remove(key)
                traced.remove(key)
        self.assertEqual(plain.to_tuple(), traced.to_tuple())


if __name__ == "__main__":
    unittest.main(verbosity=2)
