"""
Turn uploaded files into contract text or page images.

Accepts file paths, raw bytes and file-like objects. PDF and DOCX support
needs the optional ``pdfplumber`` / ``python-docx`` extras.
"""

import io
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from ..providers.base import ImageInput

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = {".txt", ".md"}
IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}
SUPPORTED_EXTENSIONS = TEXT_EXTENSIONS | IMAGE_EXTENSIONS | {".pdf", ".docx"}

DocumentSource = Union[str, Path, bytes, BinaryIO]


@dataclass
class SourceDocument:
    """A loaded contract: extracted text, or page images for scans."""

    filename: str
    text: str = ""
    images: List[ImageInput] = field(default_factory=list)
    file_path: Optional[str] = None
    size_bytes: int = 0

    @property
    def document_id(self) -> str:
        return Path(self.filename).stem

    @property
    def is_image(self) -> bool:
        return bool(self.images)


def media_type_for(extension: str) -> str:
    """MIME type for an image extension like '.jpg'."""
    extension = extension.lower().lstrip(".")
    if extension == "jpg":
        return "image/jpeg"
    return f"image/{extension}"


def extract_text(file_bytes: bytes, file_extension: str) -> str:
    """Extract text from bytes based on file type."""
    if file_extension in TEXT_EXTENSIONS:
        return file_bytes.decode("utf-8")

    elif file_extension == ".pdf":
        try:
            import pdfplumber
        except ImportError:
            raise ValueError(
                "pdfplumber not installed. Install with: pip install contractguard[pdf]"
            )

        text_parts = []
        try:
            with pdfplumber.open(io.BytesIO(file_bytes)) as pdf:
                for page in pdf.pages:
                    page_text = page.extract_text()
                    if page_text:
                        text_parts.append(page_text)
        except Exception as e:
            raise ValueError(f"Could not read PDF: {e}") from e

        if not text_parts:
            raise ValueError("No text found in PDF (might need OCR)")

        return "\n\n".join(text_parts)

    elif file_extension == ".docx":
        try:
            import docx
        except ImportError:
            raise ValueError(
                "python-docx not installed. Install with: pip install contractguard[docx]"
            )

        try:
            document = docx.Document(io.BytesIO(file_bytes))
        except Exception as e:
            raise ValueError(f"Could not read DOCX: {e}") from e

        paragraphs = [p.text for p in document.paragraphs if p.text.strip()]

        if not paragraphs:
            raise ValueError("No text found in DOCX")

        return "\n".join(paragraphs)

    else:
        raise ValueError(
            f"Unsupported file type: {file_extension}. "
            f"Supported: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
        )


def load_document(
    source: DocumentSource, filename: Optional[str] = None
) -> SourceDocument:
    """
    Load a contract from a path, bytes, or file-like object.

    Args:
        source: File path, raw bytes, or object with ``read()``
        filename: Original filename, needed to detect the type of bytes input

    Returns:
        SourceDocument holding text, or images for scanned pages

    Raises:
        FileNotFoundError: If a path does not exist
        ValueError: If the type is unsupported or no text can be extracted
    """
    file_path: Optional[str] = None

    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        file_path = str(path)
        filename = filename or path.name
        file_bytes = path.read_bytes()

    elif isinstance(source, bytes):
        file_bytes = source

    elif hasattr(source, "read"):
        file_bytes = source.read()
        if not filename and hasattr(source, "name"):
            filename = Path(source.name).name

    else:
        raise ValueError(
            f"Unsupported source type: {type(source)}. "
            "Use str, Path, bytes, or file-like object."
        )

    # Untyped bytes are treated as plain text
    filename = filename or f"doc_{datetime.now().strftime('%Y%m%d_%H%M%S')}.txt"
    extension = Path(filename).suffix.lower()

    document = SourceDocument(
        filename=filename, file_path=file_path, size_bytes=len(file_bytes)
    )

    if extension in IMAGE_EXTENSIONS:
        document.images.append((file_bytes, media_type_for(extension)))
    else:
        document.text = extract_text(file_bytes, extension)

    logger.debug(
        "Loaded %s (%d bytes, %s)",
        filename,
        document.size_bytes,
        "image" if document.is_image else f"{len(document.text)} chars",
    )
    return document
