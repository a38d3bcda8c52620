import io
import logging

import docx
import fitz

logger = logging.getLogger(__name__)

PDF_TYPE = "application/pdf"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class DocumentDecodeError(ValueError):
    def __init__(self, filename: str, reason: str):
        super().__init__(f"Could not read {filename or 'document'}: {reason}")
        self.filename = filename


def _pdf_text(data: bytes) -> str:
    doc = fitz.open(stream=data, filetype="pdf")
    try:
        return "\n".join(page.get_text() for page in doc)
    finally:
        doc.close()


def _docx_text(data: bytes) -> str:
    document = docx.Document(io.BytesIO(data))
    lines = [p.text for p in document.paragraphs]
    # Course outlines keep most of their dates in tables.
    for table in document.tables:
        for row in table.rows:
            lines.append("\t".join(cell.text for cell in row.cells))
    return "\n".join(lines)


def extract_text(data: bytes, content_type: str = "", filename: str = "") -> str:
    """
    Decode an uploaded document to plain text.

    PDFs go through PyMuPDF and .docx files through python-docx; anything
    else is read as UTF-8 text.
    """
    content_type = (content_type or "").lower()
    name = (filename or "").lower()
    try:
        if content_type == PDF_TYPE or name.endswith(".pdf"):
            text = _pdf_text(data)
        elif content_type == DOCX_TYPE or name.endswith(".docx"):
            text = _docx_text(data)
        else:
            text = data.decode("utf-8", errors="replace")
    except Exception as e:
        raise DocumentDecodeError(filename, str(e)) from e

    logger.debug("Decoded %s (%s): %d chars", filename, content_type, len(text))
    return text
