"""
Resume Text Extraction Service

Turns uploaded resume bytes (PDF, DOCX or TXT) into plain text.
"""

from io import BytesIO
from pathlib import Path
from typing import Optional

from PyPDF2 import PdfReader
from docx import Document

from jobtracker.utils.logger import get_logger
from jobtracker.utils.exceptions import (
    CorruptDocument,
    NoExtractableText,
    UnsupportedFileType,
)

logger = get_logger(__name__)

SUPPORTED_KINDS = ("pdf", "docx", "txt")


def infer_kind(filename: Optional[str]) -> str:
    """Map an uploaded filename to pdf / docx / txt / unsupported."""
    if not filename:
        return "unsupported"
    ext = Path(filename).suffix.lower().lstrip(".")
    return ext if ext in SUPPORTED_KINDS else "unsupported"


class TextExtractor:
    """Extracts plain text from resume files"""

    def extract(self, file_content: bytes, extension: str) -> str:
        """
        Extract text from a resume file.

        Args:
            file_content: File content as bytes
            extension: Lower-cased filename suffix, with or without the dot

        Returns:
            Trimmed, non-empty text

        Raises:
            UnsupportedFileType: extension is not pdf/docx/txt
            CorruptDocument: the underlying parser could not read the file
            NoExtractableText: the file parsed but holds no text
        """
        kind = (extension or "").lower().lstrip(".")
        if kind not in SUPPORTED_KINDS:
            raise UnsupportedFileType(
                f"Unsupported file type: '.{kind}'. Please upload a PDF, DOCX or TXT file."
                if kind else None
            )

        if kind == "pdf":
            text = self._extract_pdf_text(file_content)
        elif kind == "docx":
            text = self._extract_docx_text(file_content)
        else:
            text = self._extract_txt_text(file_content)

        text = text.strip()
        if not text:
            logger.warning(f"[TextExtractor] No text content found in {kind} file")
            raise NoExtractableText()

        logger.info(f"[TextExtractor] ✅ {kind.upper()} extraction complete: {len(text)} characters")
        if len(text) < 50:
            logger.warning(f"[TextExtractor] ⚠️ Extracted text is very short ({len(text)} chars)")
        return text

    def _extract_pdf_text(self, file_content: bytes) -> str:
        """Extract text from PDF file, one line per page in page order"""
        try:
            reader = PdfReader(BytesIO(file_content))
            if reader.is_encrypted and not reader.decrypt(""):
                raise CorruptDocument(details="PDF is password protected")

            page_texts = []
            for page in reader.pages:
                # Collapse the page's text items into single-space separated words
                page_texts.append(" ".join((page.extract_text() or "").split()))

            logger.debug(f"[TextExtractor] Read {len(page_texts)} PDF page(s)")
            return "\n".join(page_texts)
        except CorruptDocument:
            raise
        except Exception as e:
            logger.error(f"[TextExtractor] PDF extraction error: {str(e)}", exc_info=True)
            raise CorruptDocument(details=f"PDF extraction error: {str(e)}")

    def _extract_docx_text(self, file_content: bytes) -> str:
        """Extract raw paragraph text from DOCX file"""
        try:
            doc = Document(BytesIO(file_content))
            return "\n".join(paragraph.text for paragraph in doc.paragraphs)
        except Exception as e:
            logger.error(f"[TextExtractor] DOCX extraction error: {str(e)}", exc_info=True)
            raise CorruptDocument(details=f"DOCX extraction error: {str(e)}")

    def _extract_txt_text(self, file_content: bytes) -> str:
        try:
            return file_content.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"[TextExtractor] TXT decode error: {str(e)}")
            raise CorruptDocument(details="Text file is not valid UTF-8")
