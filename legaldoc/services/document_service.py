"""
Document Service - Input validation and text extraction
"""
import io
import os
import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import PyPDF2

from legaldoc.core.config import settings
from legaldoc.core.errors import ValidationError, ExtractionError

logger = logging.getLogger(__name__)


class DocumentService:

    @staticmethod
    def validate_text(text: Optional[str]) -> str:
        """Check literal text input, return it unchanged"""
        if not text or not text.strip():
            raise ValidationError("Text content is required")

        if len(text) > settings.MAX_TEXT_LENGTH:
            raise ValidationError("Text must be less than 10,000 characters")

        return text

    @staticmethod
    def validate_upload(filename: Optional[str], content_type: Optional[str], size: int) -> None:
        """Check an uploaded file's presence, declared type and size"""
        if not filename:
            raise ValidationError("No file uploaded")

        if content_type not in settings.ALLOWED_UPLOAD_TYPES:
            raise ValidationError("Only PDF and text files are allowed")

        if size > settings.MAX_UPLOAD_BYTES:
            raise ValidationError("File size too large. Maximum size is 10MB.")

    @staticmethod
    @contextmanager
    def temporary_upload(content: bytes, filename: str) -> Iterator[Path]:
        """
        Write upload bytes to a temporary file and yield its path.

        The file is removed when the block exits, whatever the outcome.
        """
        upload_dir = Path(settings.UPLOAD_DIR)
        upload_dir.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=upload_dir, suffix=Path(filename).suffix)
        path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            yield path
        finally:
            path.unlink(missing_ok=True)
            logger.debug("Removed temporary upload %s", path)

    @staticmethod
    def extract_text(path: Path, content_type: str) -> str:
        """
        Extract plain text from a stored upload.

        Args:
            path: Temporary file holding the upload
            content_type: Declared media type

        Returns:
            Extracted text, truncated to the analysis limit
        """
        data = path.read_bytes()

        if content_type == "application/pdf":
            text = DocumentService._extract_pdf_text(data)
        elif content_type == "text/plain":
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ExtractionError("Text file is not valid UTF-8") from e
        else:
            raise ValidationError("Only PDF and text files are allowed")

        if not text.strip():
            raise ExtractionError("Could not extract text from the uploaded file")

        return DocumentService.truncate(text)

    @staticmethod
    def _extract_pdf_text(data: bytes) -> str:
        try:
            pdf_reader = PyPDF2.PdfReader(io.BytesIO(data))

            if pdf_reader.is_encrypted:
                raise ExtractionError("PDF is password protected")

            pages = []
            for page in pdf_reader.pages:
                page_text = page.extract_text()
                if page_text:
                    pages.append(page_text)
            return "\n".join(pages)

        except ExtractionError:
            raise
        except Exception as e:
            # PyPDF2 raises a wide range of errors on damaged input
            raise ExtractionError(f"Invalid PDF: {e}") from e

    @staticmethod
    def truncate(text: str) -> str:
        """Cut text to the analysis limit and mark the cut"""
        if len(text) > settings.MAX_TEXT_LENGTH:
            logger.info("Truncating extracted text from %d characters", len(text))
            return text[:settings.MAX_TEXT_LENGTH] + settings.TRUNCATION_MARKER
        return text

# Singleton instance
document_service = DocumentService()
