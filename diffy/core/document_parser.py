# diffy/core/document_parser.py
"""
Turns PDF / DOCX / plain-text files into the plain text the diff engine
compares. Nothing here raises into the caller: unreadable input becomes a
one-line bracketed placeholder and the failure is logged.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from docx import Document
from pypdf import PdfReader

from diffy.config import DOCX_EXTENSIONS, PDF_EXTENSIONS, TEXT_MAX_BYTES
from diffy.utils.encoding_detector import read_text
from diffy.utils.logger import get_logger

logger = get_logger("documents")


class ElementKind(str, Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST_ITEM = "list_item"
    TABLE_CELL = "table_cell"
    TEXT = "text"


@dataclass
class DocumentElement:
    kind: ElementKind = ElementKind.TEXT
    level: int = 0          # heading level or list depth
    content: str = ""
    row_end: bool = False   # last cell of a table row


@dataclass
class DocumentStructure:
    elements: List[DocumentElement] = field(default_factory=list)


def _placeholder(reason: str, file_path: str) -> str:
    return f"[{reason}: {os.path.basename(file_path)}]"


def extract_text(file_path: str) -> str:
    """Plain text for any supported file; a placeholder line when that fails."""
    _, ext = os.path.splitext(file_path)
    ext = ext.lower()
    try:
        size = os.path.getsize(file_path)
    except OSError as e:
        logger.error(f"Cannot stat {file_path}: {e}")
        return _placeholder("File not readable", file_path)
    if size > TEXT_MAX_BYTES:
        mb = TEXT_MAX_BYTES / (1024 * 1024)
        logger.info(f"Skipping {file_path}: {size} bytes exceeds limit")
        return _placeholder(f"Skipped: file exceeds size limit ({mb:.1f} MB)", file_path)

    if ext in PDF_EXTENSIONS:
        return parse_pdf(file_path)
    if ext in DOCX_EXTENSIONS:
        return format_structure(parse_docx(file_path))
    return read_text_file(file_path)


def read_text_file(file_path: str) -> str:
    try:
        return read_text(file_path)
    except (OSError, LookupError) as e:
        logger.error(f"Error reading text file {file_path}: {str(e)}")
        return _placeholder(f"Error reading file ({e})", file_path)


def parse_pdf(file_path: str) -> str:
    """Text of every page, each introduced by a '--- Page N ---' line."""
    try:
        reader = PdfReader(file_path)
        if reader.is_encrypted:
            logger.warning(f"PDF is encrypted: {file_path}")
            return _placeholder("PDF is locked", file_path)
        parts: List[str] = []
        for i, page in enumerate(reader.pages, 1):
            parts.append(f"--- Page {i} ---\n")
            parts.append(page.extract_text() or "")
            parts.append("\n\n")
        return "".join(parts)
    except Exception as e:
        logger.error(f"Failed to load PDF {file_path}: {e}")
        return _placeholder("Failed to load PDF", file_path)


def _heading_level(style_name: str) -> int:
    # "Heading 2" -> 2, "Title" -> 1
    name = style_name.strip().lower()
    if name == "title":
        return 1
    if name.startswith("heading"):
        digits = "".join(ch for ch in name[7:] if ch.isdigit())
        return int(digits) if digits else 1
    return 0


def parse_docx(file_path: str) -> DocumentStructure:
    """Headings, list items, paragraphs, then table cells of a .docx file."""
    structure = DocumentStructure()
    try:
        doc = Document(file_path)
    except Exception as e:
        logger.error(f"Failed to parse DOCX {file_path}: {e}")
        structure.elements.append(
            DocumentElement(ElementKind.TEXT, 0, _placeholder("Failed to parse DOCX", file_path))
        )
        return structure

    for paragraph in doc.paragraphs:
        text = paragraph.text
        if not text.strip():
            continue
        style_name = ""
        if paragraph.style is not None and paragraph.style.name:
            style_name = paragraph.style.name
        level = _heading_level(style_name)
        if level:
            structure.elements.append(DocumentElement(ElementKind.HEADING, level, text))
        elif "list" in style_name.lower():
            # "List Bullet 2" -> depth 1
            digits = "".join(ch for ch in style_name if ch.isdigit())
            depth = int(digits) - 1 if digits else 0
            structure.elements.append(DocumentElement(ElementKind.LIST_ITEM, max(0, depth), text))
        else:
            structure.elements.append(DocumentElement(ElementKind.PARAGRAPH, 0, text))

    for table in doc.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells]
            for idx, cell in enumerate(cells):
                structure.elements.append(
                    DocumentElement(ElementKind.TABLE_CELL, 0, cell, row_end=idx == len(cells) - 1)
                )
    return structure


def format_structure(structure: DocumentStructure) -> str:
    """Render a parsed document as Markdown-ish text suitable for diffing."""
    parts: List[str] = []
    for el in structure.elements:
        if el.kind is ElementKind.HEADING:
            parts.append("#" * el.level + " " + el.content + "\n\n")
        elif el.kind is ElementKind.LIST_ITEM:
            parts.append("  " * el.level + "* " + el.content + "\n")
        elif el.kind is ElementKind.TABLE_CELL:
            parts.append("| " + el.content + " ")
            if el.row_end:
                parts.append("|\n")
        else:
            parts.append(el.content + "\n\n")
    return "".join(parts)
