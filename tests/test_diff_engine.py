import itertools
import threading
import unittest

from diffy.core.diff_engine import (
    DiffCancelled, DiffEngine, DiffFlags, compute_diff, compute_edit_script, diff_stats,
)
from diffy.core.hunks import HunkKind, changed_unit_count, split_lines


def reference_distance(a, b):
    """Insert + delete count from a plain LCS table."""
    prev = [0] * (len(b) + 1)
    for x in a:
        cur = [0]
        for j, y in enumerate(b):
            cur.append(prev[j] + 1 if x == y else max(prev[j + 1], cur[j]))
        prev = cur
    return len(a) + len(b) - 2 * prev[-1]


ALL_FLAGS = [DiffFlags(*bits) for bits in itertools.product((False, True), repeat=3)]

TEXTS = [
    "",
    "a",
    "a\nb\nc",
    "a\nb\nc\n",
    "a\n\nb",
    "x\ny\nz\nx",
    "Hello,  world.\n\nSecond para\ncontinues here.\n",
    "café \U0001F600\nline",
]


class TestScenarios(unittest.TestCase):
    def test_identical(self):
        self.assertEqual(compute_diff("a\nb\nc", "a\nb\nc", DiffFlags()), [])

    def test_one_modified_line(self):
        hunks = compute_diff("a\nb\nc", "a\nx\nc", DiffFlags())
        self.assertEqual(len(hunks), 1)
        h = hunks[0]
        self.assertEqual(h.kind, HunkKind.MODIFIED)
        self.assertEqual(h.left_range, (2, 3))
        self.assertEqual(h.right_range, (2, 3))

    def test_one_added_line(self):
        hunks = compute_diff("a\nb", "a\nb\nc", DiffFlags())
        self.assertEqual(len(hunks), 1)
        self.assertEqual(hunks[0].kind, HunkKind.ADDED)
        self.assertEqual(hunks[0].right_range, (4, 5))
        self.assertEqual(hunks[0].left_start, hunks[0].left_end)

    def test_one_deleted_line(self):
        hunks = compute_diff("a\nb\nc", "a\nc", DiffFlags())
        self.assertEqual(len(hunks), 1)
        self.assertEqual(hunks[0].kind, HunkKind.DELETED)
        self.assertEqual(hunks[0].left_range, (2, 3))
        self.assertEqual(hunks[0].right_start, hunks[0].right_end)

    def test_whitespace_flag(self):
        self.assertEqual(compute_diff("a   b", "a b", DiffFlags(ignore_whitespace=True)), [])
        hunks = compute_diff("a   b", "a b", DiffFlags())
        self.assertEqual(len(hunks), 1)
        self.assertEqual(hunks[0].kind, HunkKind.MODIFIED)
        self.assertEqual(hunks[0].left_range, (0, 5))
        self.assertEqual(hunks[0].right_range, (0, 3))

    def test_none_flags_and_empty_strings(self):
        self.assertEqual(compute_diff("", ""), [])
        hunks = compute_diff("", "abc")
        self.assertEqual([(h.kind, h.right_range) for h in hunks], [(HunkKind.ADDED, (0, 3))])


class TestProperties(unittest.TestCase):
    def _check_tiling(self, hunks, left, right):
        lpos = rpos = 0
        for h in hunks:
            self.assertLessEqual(h.left_start, h.left_end)
            self.assertLessEqual(h.right_start, h.right_end)
            self.assertGreaterEqual(h.left_start, lpos)
            self.assertGreaterEqual(h.right_start, rpos)
            lpos, rpos = h.left_end, h.right_end
        self.assertLessEqual(lpos, len(left))
        self.assertLessEqual(rpos, len(right))

    def test_identity_under_all_flags(self):
        for flags in ALL_FLAGS:
            for t in TEXTS:
                self.assertEqual(compute_diff(t, t, flags), [], f"{t!r} {flags}")

    def test_ordering_and_bounds(self):
        for flags in ALL_FLAGS:
            for left, right in itertools.product(TEXTS, TEXTS):
                hunks = compute_diff(left, right, flags)
                self._check_tiling(hunks, left, right)

    def test_gaps_are_equal_lines(self):
        # outside the hunks both texts hold the same lines in the same order
        left = "keep\nold one\nkeep two\nold\nend"
        right = "keep\nnew one\nkeep two\nend\nextra"
        hunks = compute_diff(left, right)

        def gaps(text, ranges):
            out, pos = [], 0
            for s, e in ranges:
                out.append(text[pos:s])
                pos = e
            out.append(text[pos:])
            return "".join(out)

        lg = gaps(left, [h.left_range for h in hunks])
        rg = gaps(right, [h.right_range for h in hunks])
        self.assertEqual([l for l in lg.split("\n") if l], [l for l in rg.split("\n") if l])

    def test_minimality(self):
        for left, right in itertools.product(TEXTS, TEXTS):
            hunks = compute_diff(left, right)
            expected = reference_distance(split_lines(left), split_lines(right))
            self.assertEqual(changed_unit_count(hunks), expected, f"{left!r} -> {right!r}")

    def test_symmetry_when_alignment_is_unique(self):
        cases = [
            ("a\nb\nc", "a\nc"),
            ("a\nb\nc", "a\nx\nc"),
            ("one\ntwo", "zero\none\ntwo\nthree"),
        ]
        swap = {HunkKind.ADDED: HunkKind.DELETED, HunkKind.DELETED: HunkKind.ADDED,
                HunkKind.MODIFIED: HunkKind.MODIFIED}
        for left, right in cases:
            fwd = compute_diff(left, right)
            back = compute_diff(right, left)
            self.assertEqual(len(fwd), len(back))
            for f, b in zip(fwd, back):
                self.assertEqual(swap[f.kind], b.kind)
                self.assertEqual(f.left_range, b.right_range)
                self.assertEqual(f.right_range, b.left_range)

    def test_offsets_index_original_text(self):
        left = "alpha,  beta\nsame\n"
        right = "alpha beta\nsame\nnew!"
        hunks = compute_diff(left, right, DiffFlags(ignore_whitespace=True, ignore_punctuation=True))
        self.assertEqual(len(hunks), 1)
        h = hunks[0]
        self.assertEqual(h.kind, HunkKind.MODIFIED)
        self.assertEqual(left[h.left_start:h.left_end], "")
        self.assertEqual(right[h.right_start:h.right_end], "new!")


class TestFlags(unittest.TestCase):
    def test_punctuation_flag(self):
        self.assertEqual(compute_diff("Hello, world!", "Hello world", DiffFlags(ignore_punctuation=True)), [])
        self.assertEqual(len(compute_diff("Hello, world!", "Hello world", DiffFlags())), 1)

    def test_punctuation_needs_whitespace_flag_for_spacing(self):
        flags = DiffFlags(ignore_punctuation=True)
        self.assertEqual(len(compute_diff("a , b", "a b", flags)), 1)
        flags = DiffFlags(ignore_whitespace=True, ignore_punctuation=True)
        self.assertEqual(compute_diff("a ,b", "a b", flags), [])

    def test_reflow_flag(self):
        left = "The quick brown\nfox jumps.\n\nSecond paragraph."
        right = "The quick\nbrown fox jumps.\n\nSecond paragraph."
        self.assertEqual(compute_diff(left, right, DiffFlags(ignore_reflow=True)), [])
        self.assertTrue(compute_diff(left, right, DiffFlags()))

    def test_reflow_reports_paragraph_spans(self):
        left = "one\ntwo\n\nthree\nfour"
        right = "one two\n\nthree\nFIVE"
        hunks = compute_diff(left, right, DiffFlags(ignore_reflow=True))
        self.assertEqual(len(hunks), 1)
        h = hunks[0]
        self.assertEqual(h.kind, HunkKind.MODIFIED)
        self.assertEqual(left[h.left_start:h.left_end], "three\nfour")
        self.assertEqual(right[h.right_start:h.right_end], "three\nFIVE")

    def test_compute_edit_script_units(self):
        left, right, script = compute_edit_script("a  b\nc", "a b\nc", DiffFlags(ignore_whitespace=True))
        self.assertEqual(left.units, ["a  b", "c"])
        self.assertEqual(left.keys, ["a b", "c"])
        self.assertEqual(right.spans, [(0, 3), (4, 5)])
        self.assertEqual(len(script), 2)

    def test_from_mapping(self):
        flags = DiffFlags.from_mapping({"ignore_reflow": 1, "unknown": True})
        self.assertEqual(flags, DiffFlags(ignore_reflow=True))
        self.assertEqual(DiffFlags.from_mapping(None), DiffFlags())


class TestDiffEngine(unittest.TestCase):
    def test_toggles(self):
        eng = DiffEngine()
        self.assertEqual(len(eng.compute("a   b", "a b")), 1)
        eng.set_ignore_whitespace(True)
        self.assertEqual(eng.compute("a   b", "a b"), [])
        eng.set_ignore_punctuation(True)
        eng.set_ignore_reflow(True)
        self.assertEqual(eng.flags, DiffFlags(True, True, True))
        eng.set_ignore_whitespace(False)
        self.assertFalse(eng.flags.ignore_whitespace)

    def test_cancel(self):
        ev = threading.Event()
        ev.set()
        with self.assertRaises(DiffCancelled):
            DiffEngine().compute("a\nb", "c\nd", cancel_event=ev)

    def test_inputs_untouched(self):
        left = "x  y\n"
        right = "x y\n"
        compute_diff(left, right, DiffFlags(True, True, True))
        self.assertEqual((left, right), ("x  y\n", "x y\n"))

    def test_diff_stats(self):
        hunks = compute_diff("a\nb\nc\nd", "a\nB\nc\nd\ne")
        stats = diff_stats(hunks)
        self.assertEqual(stats, {"unchanged": 0, "added": 1, "deleted": 0, "modified": 1})


if __name__ == "__main__":
    unittest.main()
