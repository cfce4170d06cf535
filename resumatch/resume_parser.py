"""Validate uploaded résumés / job descriptions and extract their text.

Supports PDF (via pypdf), DOCX (via stdlib zipfile), and plain text.
"""
from __future__ import annotations

import io
import re
import zipfile
from pathlib import PurePath
from xml.etree import ElementTree

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from resumatch.errors import InvalidRequest
from resumatch.log import get_logger

log = get_logger(__name__)

MAX_UPLOAD_BYTES = 5 * 1024 * 1024  # 5 MB

ALLOWED_TYPES: dict[str, str] = {
    ".pdf": "application/pdf",
    ".txt": "text/plain",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def validate_upload(filename: str, size: int, content_type: str | None = None) -> str | None:
    """Return an error message for an unacceptable upload, ``None`` if it is fine."""
    suffix = PurePath(filename or "").suffix.lower()
    allowed = ALLOWED_TYPES.get(suffix)
    if allowed is None or (content_type and content_type not in ALLOWED_TYPES.values()):
        return "Invalid file type. Allowed types: " + ", ".join(ALLOWED_TYPES.values())
    if size > MAX_UPLOAD_BYTES:
        return "File size exceeds the 5MB limit"
    return None


def _fix_spacing(text: str) -> str:
    """Re-insert spaces when PDF extraction merges words together."""
    if not text or len(text) < 50:
        return text
    space_ratio = text.count(" ") / len(text)
    if space_ratio > 0.08:
        return text

    log.debug("Low space ratio (%.2f%%) — applying spacing fix", space_ratio * 100)
    fixed = re.sub(r"([a-z])([A-Z])", r"\1 \2", text)
    fixed = re.sub(r"([.!?,;:])([A-Za-z])", r"\1 \2", fixed)
    return fixed


def _extract_pdf(data: bytes) -> str:
    try:
        reader = PdfReader(io.BytesIO(data))
        return "\n".join(_fix_spacing(page.extract_text() or "") for page in reader.pages)
    except PdfReadError as exc:
        raise InvalidRequest(f"Could not read PDF: {exc}") from exc


def _extract_docx(data: bytes) -> str:
    ns = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"
    texts: list[str] = []
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            with zf.open("word/document.xml") as f:
                tree = ElementTree.parse(f)
    except (zipfile.BadZipFile, KeyError, ElementTree.ParseError) as exc:
        raise InvalidRequest(f"Could not read DOCX: {exc}") from exc
    for para in tree.iter(f"{ns}p"):
        parts = [node.text for node in para.iter(f"{ns}t") if node.text]
        if parts:
            texts.append("".join(parts))
    return "\n".join(texts)


def extract_text(filename: str, data: bytes) -> str:
    """Return plain text from an uploaded PDF, DOCX, or TXT file."""
    error = validate_upload(filename, len(data))
    if error:
        raise InvalidRequest(error)

    suffix = PurePath(filename).suffix.lower()
    if suffix == ".pdf":
        text = _extract_pdf(data)
    elif suffix == ".docx":
        text = _extract_docx(data)
    else:
        text = data.decode("utf-8", errors="ignore")

    if not text.strip():
        raise InvalidRequest(f"Could not extract any text from {filename}")
    log.info("Extracted %d chars from %s", len(text), filename)
    return text
