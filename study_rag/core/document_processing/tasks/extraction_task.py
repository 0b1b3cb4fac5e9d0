"""
Text extraction task.

Converts a raw file blob and its declared content type into cleaned
plain text. Format handling is a best-effort heuristic per format,
selected from an ordered rule table (first match wins).

Dependencies: re, zipfile (stdlib)
System role: First processing stage of document ingestion
"""

import enum
import io
import logging
import re
import zipfile
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Callable
from xml.sax.saxutils import unescape

from study_rag.core.exceptions import NoReadableContentError

logger = logging.getLogger(__name__)

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

_NON_PRINTABLE = re.compile(r"[^\x20-\x7E\n]")
_NON_PRINTABLE_LINE = re.compile(r"[^\x20-\x7E\n\r]")
_WHITESPACE_RUN = re.compile(r"\s+")
_NEWLINE_RUN = re.compile(r"\n{3,}")
_SPACE_RUN = re.compile(r" {2,}")
_DOCX_TEXT_RUN = re.compile(r"<w:t[^>]*>([^<]+)</w:t>")


class DocumentFormat(str, enum.Enum):
    """Formats the extractor distinguishes."""

    TEXT = "text"
    PDF = "pdf"
    DOCX = "docx"
    RAW = "raw"


def _decode(blob: bytes) -> str:
    return blob.decode("utf-8", errors="replace")


def _extract_text(blob: bytes) -> str:
    return _decode(blob)


def _extract_pdf(blob: bytes) -> str:
    """Keep decoded lines that still have more than 3 readable characters."""
    survivors = []
    for line in _decode(blob).split("\n"):
        readable = _NON_PRINTABLE_LINE.sub(" ", line)
        readable = _WHITESPACE_RUN.sub(" ", readable).strip()
        if len(readable) > 3:
            survivors.append(readable)
    return "\n".join(survivors)


def _docx_xml(blob: bytes) -> str:
    if zipfile.is_zipfile(io.BytesIO(blob)):
        try:
            with zipfile.ZipFile(io.BytesIO(blob)) as archive:
                return _decode(archive.read("word/document.xml"))
        except (KeyError, zipfile.BadZipFile):
            logger.warning(f"{__name__}:_docx_xml - No readable word/document.xml, scanning raw bytes")
    return _decode(blob)


def _extract_docx(blob: bytes) -> str:
    xml = _docx_xml(blob)
    runs = _DOCX_TEXT_RUN.findall(xml)
    if runs:
        return " ".join(unescape(run) for run in runs)
    return _NON_PRINTABLE.sub(" ", xml).strip()


@dataclass(frozen=True)
class _FormatRule:
    format: DocumentFormat
    content_types: frozenset[str]
    suffixes: frozenset[str]
    handler: Callable[[bytes], str]

    def matches(self, content_type: str, suffix: str) -> bool:
        return content_type in self.content_types or suffix in self.suffixes


_FORMAT_RULES: tuple[_FormatRule, ...] = (
    _FormatRule(DocumentFormat.TEXT, frozenset({"text/plain"}), frozenset({".txt"}), _extract_text),
    _FormatRule(DocumentFormat.PDF, frozenset({"application/pdf"}), frozenset({".pdf"}), _extract_pdf),
    _FormatRule(DocumentFormat.DOCX, frozenset({DOCX_MIME_TYPE}), frozenset({".docx"}), _extract_docx),
)

_RAW_RULE = _FormatRule(DocumentFormat.RAW, frozenset(), frozenset(), _decode)


def _normalize_content_type(content_type: str | None) -> str:
    if not content_type:
        return ""
    return content_type.split(";")[0].strip().lower()


def resolve_format(content_type: str | None, filename: str | None) -> DocumentFormat:
    """
    Pick the extraction format for a declared type and filename.

    Args:
        content_type: Declared MIME type (parameters ignored)
        filename: Source filename (extension compared case-insensitively)

    Returns:
        DocumentFormat: First matching format, RAW when nothing matches
    """
    return _resolve_rule(content_type, filename).format


def _resolve_rule(content_type: str | None, filename: str | None) -> _FormatRule:
    normalized = _normalize_content_type(content_type)
    suffix = PurePosixPath(filename or "").suffix.lower()
    for rule in _FORMAT_RULES:
        if rule.matches(normalized, suffix):
            return rule
    return _RAW_RULE


def clean_text(text: str) -> str:
    """
    Normalize extracted text.

    Line endings become \\n, tabs become spaces, newline runs of 3+ collapse to two, space runs collapse to one,
    characters outside printable ASCII (except newline) are dropped, and
    the result is trimmed. Stripping runs after the collapsing passes, so
    removed characters can leave adjacent spaces or newlines behind.

    Args:
        text: Raw extracted text

    Returns:
        str: Cleaned text
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\t", " ")
    text = _NEWLINE_RUN.sub("\n\n", text)
    text = _SPACE_RUN.sub(" ", text)
    text = _NON_PRINTABLE.sub("", text)
    return text.strip()


class TextExtractor:
    """Extract and clean text from uploaded study documents."""

    def __init__(self, min_content_length: int = 10) -> None:
        """
        Initialize extractor.

        Args:
            min_content_length: Cleaned text shorter than this is rejected
        """
        self._min_content_length = min_content_length

    def extract(
        self,
        blob: bytes,
        content_type: str | None,
        filename: str | None = None,
        document_id: str | None = None,
    ) -> str:
        """
        Extract cleaned text from a file blob.

        Args:
            blob: Raw file bytes
            content_type: Declared MIME type
            filename: Source filename used for extension dispatch
            document_id: Document being extracted (error context only)

        Returns:
            str: Cleaned text of at least min_content_length characters

        Raises:
            NoReadableContentError: Cleaned text is empty or too short
        """
        rule = _resolve_rule(content_type, filename)
        cleaned = clean_text(rule.handler(blob))

        logger.info(
            f"{__name__}:extract - Extracted text",
            extra={
                "document_id": document_id,
                "format": rule.format.value,
                "bytes": len(blob),
                "text_length": len(cleaned),
            },
        )

        if len(cleaned) < self._min_content_length:
            raise NoReadableContentError(
                document_id=document_id,
                content_length=len(cleaned),
                min_length=self._min_content_length,
                details={"format": rule.format.value},
            )
        return cleaned
