# diffy/utils/encoding_detector.py

import chardet
from diffy.utils.logger import get_logger

logger = get_logger("encoding")

_SAMPLE_BYTES = 10000


def _utf8_prefix(raw: bytes) -> bool:
    """True if ``raw`` is UTF-8, allowing one sequence cut off at the end of the sample."""
    try:
        raw.decode("utf-8")
        return True
    except UnicodeDecodeError as e:
        return e.start >= len(raw) - 3 and e.reason == "unexpected end of data"


def detect_file_encoding(file_path: str) -> str:
    """
    Detect the encoding of a file from its first 10KB.

    Args:
        file_path (str): Path to the file

    Returns:
        str: Detected encoding or 'utf-8' as fallback
    """
    try:
        with open(file_path, "rb") as f:
            raw = f.read(_SAMPLE_BYTES)
    except OSError as e:
        logger.error(f"Failed to detect encoding for {file_path}: {str(e)}")
        return "utf-8"

    if raw.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"
    # Fast path: UTF-8 is common; if it decodes, use it without chardet
    if _utf8_prefix(raw):
        return "utf-8"
    result = chardet.detect(raw)
    enc = result.get("encoding") or "utf-8"
    logger.debug(f"chardet picked {enc} ({result.get('confidence')}) for {file_path}")
    return enc


def read_text(file_path: str) -> str:
    """
    Whole file as text in its detected encoding, universal newlines.

    Undecodable bytes become U+FFFD rather than failing the comparison.
    """
    encoding = detect_file_encoding(file_path)
    with open(file_path, "r", encoding=encoding, errors="replace") as f:
        return f.read()
