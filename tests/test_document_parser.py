import unittest
import shutil
from pathlib import Path

from docx import Document
from pypdf import PdfWriter

from diffy.core.document_parser import (
    DocumentElement, DocumentStructure, ElementKind, extract_text, format_structure, parse_docx,
)
from diffy.utils.encoding_detector import detect_file_encoding


class TestDocumentParser(unittest.TestCase):
    def setUp(self):
        self.base = Path("tests/_tmp_docs")
        if self.base.exists():
            shutil.rmtree(self.base)
        self.base.mkdir(parents=True, exist_ok=True)

    def tearDown(self):
        if self.base.exists():
            shutil.rmtree(self.base)

    def test_text_file_newlines_are_universal(self):
        p = self.base / "notes.md"
        p.write_bytes("# Notes\r\ncafé  ünïcode\nlast line".encode("utf-8"))
        self.assertEqual(detect_file_encoding(str(p)), "utf-8")
        self.assertEqual(extract_text(str(p)), "# Notes\ncafé  ünïcode\nlast line")

    def test_truncated_utf8_sample_still_utf8(self):
        p = self.base / "long.txt"
        # 9999 ASCII bytes, then a two-byte character split by the 10KB sample
        p.write_bytes(b"x" * 9999 + "é".encode("utf-8"))
        self.assertEqual(detect_file_encoding(str(p)), "utf-8")

    def test_unknown_extension_read_as_text(self):
        p = self.base / "data.csv"
        p.write_text("a,b\n1,2\n", encoding="utf-8")
        self.assertEqual(extract_text(str(p)), "a,b\n1,2\n")

    def test_missing_file_gives_placeholder(self):
        text = extract_text(str(self.base / "missing.txt"))
        self.assertEqual(text, "[File not readable: missing.txt]")

    def test_docx_structure(self):
        p = self.base / "report.docx"
        doc = Document()
        doc.add_heading("Report", 0)
        doc.add_heading("Findings", 2)
        doc.add_paragraph("Body text")
        doc.add_paragraph("   ")
        doc.add_paragraph("first", style="List Bullet")
        doc.add_paragraph("nested", style="List Bullet 2")
        table = doc.add_table(rows=2, cols=2)
        table.cell(0, 0).text = "a"
        table.cell(0, 1).text = "b"
        table.cell(1, 0).text = "c"
        table.cell(1, 1).text = "d"
        doc.save(str(p))

        structure = parse_docx(str(p))
        kinds = [el.kind for el in structure.elements]
        self.assertEqual(kinds[:5], [ElementKind.HEADING, ElementKind.HEADING, ElementKind.PARAGRAPH,
                                     ElementKind.LIST_ITEM, ElementKind.LIST_ITEM])
        self.assertEqual(
            extract_text(str(p)),
            "# Report\n\n## Findings\n\nBody text\n\n* first\n  * nested\n| a | b |\n| c | d |\n",
        )

    def test_corrupt_docx_gives_placeholder(self):
        p = self.base / "broken.docx"
        p.write_bytes(b"not a zip file")
        self.assertEqual(extract_text(str(p)), "[Failed to parse DOCX: broken.docx]\n\n")

    def test_pdf_pages(self):
        p = self.base / "blank.pdf"
        writer = PdfWriter()
        writer.add_blank_page(width=200, height=200)
        writer.add_blank_page(width=200, height=200)
        with open(p, "wb") as f:
            writer.write(f)
        text = extract_text(str(p))
        self.assertTrue(text.startswith("--- Page 1 ---\n"))
        self.assertIn("--- Page 2 ---\n", text)

    def test_corrupt_pdf_gives_placeholder(self):
        p = self.base / "broken.pdf"
        p.write_bytes(b"")
        self.assertEqual(extract_text(str(p)), "[Failed to load PDF: broken.pdf]")

    def test_format_structure(self):
        s = DocumentStructure([
            DocumentElement(ElementKind.HEADING, 3, "Deep"),
            DocumentElement(ElementKind.LIST_ITEM, 2, "item"),
            DocumentElement(ElementKind.TABLE_CELL, 0, "x", row_end=True),
            DocumentElement(ElementKind.TEXT, 0, "tail"),
        ])
        self.assertEqual(format_structure(s), "### Deep\n\n    * item\n| x |\ntail\n\n")


if __name__ == "__main__":
    unittest.main()
