import io
import json
import shutil
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from diffy.cli import format_hunks_text, main
from diffy.core.diff_engine import compute_diff


class TestCli(unittest.TestCase):
    def setUp(self):
        self.base = Path("tests/_tmp_cli")
        if self.base.exists():
            shutil.rmtree(self.base)
        self.base.mkdir(parents=True, exist_ok=True)
        self.a = self.base / "a.txt"
        self.b = self.base / "b.txt"
        self.a.write_text("one\ntwo  words\nthree", encoding="utf-8")
        self.b.write_text("one\ntwo words\nthree\nfour", encoding="utf-8")

    def tearDown(self):
        if self.base.exists():
            shutil.rmtree(self.base)

    def _run(self, *argv):
        out = io.StringIO()
        err = io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            rc = main(list(argv))
        return rc, out.getvalue(), err.getvalue()

    def test_text_output(self):
        rc, out, _ = self._run(str(self.a), str(self.b))
        self.assertEqual(rc, 1)
        self.assertIn("@@ -2,1 +2,1 @@ modified", out)
        self.assertIn("-two  words", out)
        self.assertIn("+two words", out)
        self.assertIn("@@ -4,0 +4,1 @@ added", out)
        self.assertIn("+four", out)

    def test_ignore_whitespace_leaves_only_the_addition(self):
        rc, out, _ = self._run(str(self.a), str(self.b), "-w", "--format", "json")
        self.assertEqual(rc, 1)
        data = json.loads(out)
        self.assertTrue(data["flags"]["ignore_whitespace"])
        self.assertEqual([h["kind"] for h in data["hunks"]], ["added"])
        self.assertEqual(data["stats"]["added"], 1)

    def test_identical_files_exit_zero(self):
        rc, out, _ = self._run(str(self.a), str(self.a))
        self.assertEqual(rc, 0)
        self.assertEqual(out, "")

    def test_missing_file_exit_two(self):
        rc, _, err = self._run(str(self.a), str(self.base / "nope.txt"))
        self.assertEqual(rc, 2)
        self.assertIn("nope.txt", err)

    def test_folders(self):
        left = self.base / "L"
        right = self.base / "R"
        left.mkdir()
        right.mkdir()
        (left / "x.txt").write_text("1", encoding="utf-8")
        (right / "x.txt").write_text("1", encoding="utf-8")
        rc, out, _ = self._run(str(left), str(right))
        self.assertEqual(rc, 0)
        self.assertIn("x.txt  [Identical]", out)

        (right / "y.txt").write_text("2", encoding="utf-8")
        rc, out, _ = self._run(str(left), str(right), "-f", "json")
        self.assertEqual(rc, 1)
        self.assertIn({"path": "y.txt", "status": "Added", "depth": 0}, json.loads(out))

    def test_format_hunks_text(self):
        left = "a\nb\nc"
        right = "a\nc"
        text = format_hunks_text(compute_diff(left, right), left, right)
        self.assertEqual(text, "@@ -2,1 +2,0 @@ deleted\n-b")


if __name__ == "__main__":
    unittest.main()
