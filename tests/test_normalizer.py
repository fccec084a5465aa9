import unittest

from diffy.core.normalizer import (
    normalize_reflow, normalize_whitespace, reflow_paragraphs, remove_punctuation,
)

SAMPLES = [
    "",
    "plain",
    "  leading\tand trailing \t\n\tnext   line  ",
    "para one\nstill one\n\n\n  para two \n\n",
    "Hello, world! Isn't it \"nice\"?; yes: it is.",
    "\n\n  \n",
    "a\r\nb",
]


class TestNormalizer(unittest.TestCase):
    def test_idempotence(self):
        for fn in (normalize_whitespace, remove_punctuation, normalize_reflow):
            for s in SAMPLES:
                once = fn(s)
                self.assertEqual(fn(once), once, f"{fn.__name__}({s!r})")

    def test_normalize_whitespace(self):
        self.assertEqual(normalize_whitespace("a   b"), "a b")
        self.assertEqual(normalize_whitespace("\t a \t b \t"), "a b")
        # newlines untouched, each line trimmed
        self.assertEqual(normalize_whitespace("  x  \n\n  y\t"), "x\n\ny")
        self.assertEqual(normalize_whitespace("a\n\n\nb").count("\n"), 3)

    def test_remove_punctuation(self):
        self.assertEqual(remove_punctuation("Hi, there! Isn't \"it\"?"), "Hi there Isnt it")
        self.assertEqual(remove_punctuation("a.b;c:d"), "abcd")
        # hyphens and brackets are not in the set
        self.assertEqual(remove_punctuation("(x-y)"), "(x-y)")

    def test_normalize_reflow(self):
        text = "The quick\nbrown fox\n\n  jumps over\n   the dog  \n\n\n"
        self.assertEqual(normalize_reflow(text), "The quick brown fox\n\njumps over the dog")
        self.assertEqual(normalize_reflow("one line"), "one line")
        self.assertEqual(normalize_reflow("\n \n"), "")

    def test_reflow_paragraph_spans_point_into_source(self):
        text = "  first\nline\n\nsecond  \n"
        paras = reflow_paragraphs(text)
        self.assertEqual([p.text for p in paras], ["first line", "second"])
        self.assertEqual(text[paras[0].start:paras[0].end], "first\nline")
        self.assertEqual(text[paras[1].start:paras[1].end], "second")

    def test_reflow_spans_are_ordered(self):
        text = "a\n\nb\n\n\n\nc"
        spans = [(p.start, p.end) for p in reflow_paragraphs(text)]
        self.assertEqual(spans, [(0, 1), (3, 4), (8, 9)])


if __name__ == "__main__":
    unittest.main()
