from __future__ import annotations

from pathlib import Path
from typing import Mapping, Protocol

from docx import Document
from pypdf import PdfReader


class DocumentParseError(RuntimeError):
    """Raised by a parser when the underlying library cannot read the file."""


class DocumentParser(Protocol):
    def extract_text(self, file_path: Path) -> str:
        """Return the raw text of the document at ``file_path``."""


class PdfTextParser:
    label = "pypdf"

    def extract_text(self, file_path: Path) -> str:
        try:
            reader = PdfReader(str(file_path))
            # Owner-password-only files open with an empty user password.
            if reader.is_encrypted and not reader.decrypt(""):
                raise DocumentParseError(f"{self.label}: pdf is encrypted and requires a password")
            page_chunks: list[str] = []
            for page in reader.pages:
                page_text = page.extract_text() or ""
                if page_text.strip():
                    page_chunks.append(page_text)
            return "\n".join(page_chunks)
        except DocumentParseError:
            raise
        except Exception as exc:
            raise DocumentParseError(f"{self.label}: pdf parsing failed: {exc}") from exc


class WordTextParser:
    label = "python-docx"

    def extract_text(self, file_path: Path) -> str:
        try:
            document = Document(str(file_path))
            chunks = [p.text for p in document.paragraphs if p.text and p.text.strip()]
            for table in document.tables:
                for row in table.rows:
                    cells = [cell.text.strip() for cell in row.cells if cell.text and cell.text.strip()]
                    if cells:
                        chunks.append(" ".join(cells))
            return "\n".join(chunks)
        except Exception as exc:
            raise DocumentParseError(f"{self.label}: word document parsing failed: {exc}") from exc


class PlainTextParser:
    label = "utf-8"

    def extract_text(self, file_path: Path) -> str:
        return file_path.read_text(encoding="utf-8", errors="replace")


def default_parsers() -> Mapping[str, DocumentParser]:
    word = WordTextParser()
    return {
        ".pdf": PdfTextParser(),
        ".doc": word,
        ".docx": word,
        ".txt": PlainTextParser(),
    }
