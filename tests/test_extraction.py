import itertools
import sys
import tempfile
import unittest
from io import BytesIO
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from docx import Document  # noqa: E402

from resume_match.core.config import ExtractorConfig  # noqa: E402
from resume_match.extraction import (  # noqa: E402
    DocumentParseError,
    EmptyFileError,
    ExtractionFailure,
    InsufficientTextError,
    InvalidUploadError,
    NoFileError,
    ParseFailureKind,
    SizeLimitError,
    StorageMissingError,
    TextExtractor,
    UnsupportedFormatError,
    UnsupportedTypeError,
    UploadedDocument,
    classify_parse_error,
    normalize_text,
)
from resume_match.extraction.storage import discard  # noqa: E402


def minimal_pdf(text: str) -> bytes:
    content = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        (
            b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
            b"/Resources << /Font << /F1 5 0 R >> >> >>"
        ),
        b"<< /Length %d >>\nstream\n" % len(content) + content + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_at)
    return bytes(out)


def minimal_docx(paragraphs: list[str]) -> bytes:
    document = Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Skills"
    table.rows[0].cells[1].text = "Python, SQL"
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


class RecordingParser:
    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls: list[Path] = []

    def extract_text(self, file_path: Path) -> str:
        self.calls.append(file_path)
        if self.error is not None:
            raise self.error
        return self.text


class ExtractionTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_dir = Path(self._tmp.name)
        self._names = itertools.count()

    def tearDown(self):
        self._tmp.cleanup()

    def stage(self, filename: str, content: bytes) -> UploadedDocument:
        path = self.tmp_dir / f"upload-{next(self._names)}{Path(filename).suffix}"
        path.write_bytes(content)
        return UploadedDocument(
            storage_path=path,
            file_name=filename,
            extension=Path(filename).suffix.lower(),
            size_bytes=len(content),
        )

    def assert_normalized(self, text: str) -> None:
        self.assertNotIn("  ", text)
        self.assertNotIn("\n\n", text)
        self.assertEqual(text, text.strip())


class RealParserTests(ExtractionTestCase):
    def test_txt_is_decoded_and_normalized(self):
        document = self.stage("resume.txt", b"  Senior   Python\tengineer\n\n\n\nData   pipelines  \n")
        result = TextExtractor().extract(document)

        self.assertEqual(result.text, "Senior Python engineer Data pipelines")
        self.assertEqual(result.file_type, ".txt")
        self.assertEqual(result.file_name, "resume.txt")
        self.assertEqual(result.text_length, len(result.text))
        self.assert_normalized(result.text)
        self.assertFalse(document.storage_path.exists())

    def test_pdf_pages_are_extracted(self):
        document = self.stage("resume.pdf", minimal_pdf("Senior  Python   engineer with data skills"))
        result = TextExtractor().extract(document)

        self.assertIn("Python", result.text)
        self.assertIn("engineer", result.text)
        self.assertEqual(result.file_type, ".pdf")
        self.assert_normalized(result.text)
        self.assertFalse(document.storage_path.exists())

    def test_docx_paragraphs_and_tables_are_extracted(self):
        content = minimal_docx(["  Senior   Backend Engineer ", "", "Built   APIs\n\nfor payments"])
        document = self.stage("Resume.DOCX", content)
        result = TextExtractor().extract(document)

        self.assertIn("Senior Backend Engineer", result.text)
        self.assertIn("Built APIs for payments", result.text)
        self.assertIn("Skills Python, SQL", result.text)
        self.assertEqual(result.file_type, ".docx")
        self.assert_normalized(result.text)

    def test_doc_is_routed_to_word_parser(self):
        content = minimal_docx(["Senior   Python engineer", "", "with data    skills"])
        document = self.stage("resume.doc", content)
        result = TextExtractor().extract(document)

        self.assertIn("Senior Python engineer", result.text)
        self.assertIn("with data skills", result.text)
        self.assertEqual(result.file_type, ".doc")
        self.assertEqual(result.file_name, "resume.doc")
        self.assert_normalized(result.text)
        self.assertFalse(document.storage_path.exists())

    def test_legacy_binary_doc_is_classified_as_word_failure(self):
        ole_header = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
        document = self.stage("resume.doc", ole_header + b"\x00" * 504)
        with self.assertRaises(ExtractionFailure) as ctx:
            TextExtractor().extract(document)

        self.assertEqual(ctx.exception.kind, ParseFailureKind.WORD_FORMAT)
        self.assertTrue(ctx.exception.message.startswith("Failed to process Word document."))
        self.assertFalse(document.storage_path.exists())

    def test_unreadable_word_file_is_classified_as_word_failure(self):
        document = self.stage("resume.docx", b"this is not a zip archive at all")
        with self.assertRaises(ExtractionFailure) as ctx:
            TextExtractor().extract(document)

        self.assertEqual(ctx.exception.kind, ParseFailureKind.WORD_FORMAT)
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertTrue(ctx.exception.details)
        self.assertFalse(document.storage_path.exists())


class ValidationGateTests(ExtractionTestCase):
    def setUp(self):
        super().setUp()
        self.parser = RecordingParser(text="Plenty of readable resume text")
        self.extractor = TextExtractor(
            parsers={".pdf": self.parser, ".doc": self.parser, ".docx": self.parser, ".txt": self.parser}
        )

    def test_missing_document(self):
        with self.assertRaises(NoFileError):
            self.extractor.extract(None)

    def test_document_without_name_is_invalid_and_storage_released(self):
        document = self.stage("resume.txt", b"content")
        document = UploadedDocument(document.storage_path, None, ".txt", document.size_bytes)
        with self.assertRaises(InvalidUploadError):
            self.extractor.extract(document)
        self.assertFalse(document.storage_path.exists())

    def test_document_without_storage_is_invalid(self):
        with self.assertRaises(InvalidUploadError):
            self.extractor.extract(UploadedDocument(None, "resume.txt", ".txt", 10))

    def test_missing_storage(self):
        document = UploadedDocument(self.tmp_dir / "gone.txt", "resume.txt", ".txt", 10)
        with self.assertRaises(StorageMissingError):
            self.extractor.extract(document)

    def test_zero_byte_upload_never_reaches_a_parser(self):
        for filename in ("resume.pdf", "resume.docx", "resume.txt", "resume.rtf"):
            document = self.stage(filename, b"")
            with self.assertRaises(EmptyFileError):
                self.extractor.extract(document)
            self.assertFalse(document.storage_path.exists())
        self.assertEqual(self.parser.calls, [])

    def test_unsupported_extension_never_reaches_a_parser(self):
        document = self.stage("resume.rtf", b"{\\rtf1 hello world}")
        with self.assertRaises(UnsupportedFormatError) as ctx:
            self.extractor.extract(document)
        self.assertIn(".rtf", ctx.exception.message)
        self.assertEqual(self.parser.calls, [])
        self.assertFalse(document.storage_path.exists())

    def test_configured_extensions_limit_dispatch(self):
        extractor = TextExtractor(
            config=ExtractorConfig(allowed_extensions=frozenset({".txt"})),
            parsers={".pdf": self.parser, ".txt": self.parser},
        )
        with self.assertRaises(UnsupportedFormatError) as ctx:
            extractor.extract(self.stage("resume.pdf", b"%PDF-1.4"))
        self.assertEqual(ctx.exception.message, "Unsupported file type: .pdf. Please upload TXT files.")
        self.assertEqual(self.parser.calls, [])

    def test_unsupported_message_lists_configured_extensions(self):
        cases = {
            frozenset({".pdf", ".doc", ".docx", ".txt"}): "PDF, DOC, DOCX, or TXT",
            frozenset({".txt", ".pdf"}): "PDF or TXT",
            frozenset({".docx", ".pdf", ".md"}): "PDF, DOCX, or MD",
        }
        for allowed, listed in cases.items():
            with self.subTest(listed=listed):
                extractor = TextExtractor(config=ExtractorConfig(allowed_extensions=allowed), parsers={})
                with self.assertRaises(UnsupportedTypeError) as ctx:
                    extractor.extract(self.stage("resume.rtf", b"{\\rtf1}"))
                self.assertEqual(
                    ctx.exception.message,
                    f"Unsupported file type: .rtf. Please upload {listed} files.",
                )

    def test_short_text_is_insufficient_for_every_format(self):
        short = RecordingParser(text="  tiny \n\n  text ")
        extractor = TextExtractor(parsers={".pdf": short, ".doc": short, ".docx": short, ".txt": short})
        for filename in ("a.pdf", "a.doc", "a.docx", "a.txt"):
            document = self.stage(filename, b"payload")
            with self.assertRaises(InsufficientTextError):
                extractor.extract(document)
            self.assertFalse(document.storage_path.exists())
        self.assertEqual(len(short.calls), 4)

    def test_ten_characters_is_enough(self):
        extractor = TextExtractor(parsers={".txt": RecordingParser(text="  0123456789  ")})
        result = extractor.extract(self.stage("a.txt", b"x"))
        self.assertEqual(result.text, "0123456789")

    def test_parse_exception_is_classified_and_storage_released(self):
        failing = RecordingParser(error=DocumentParseError("pypdf: pdf is encrypted and requires a password"))
        extractor = TextExtractor(parsers={".pdf": failing})
        document = self.stage("locked.pdf", b"%PDF-1.7")
        with self.assertRaises(ExtractionFailure) as ctx:
            extractor.extract(document)

        payload = ctx.exception.to_payload()
        self.assertEqual(ctx.exception.kind, ParseFailureKind.PASSWORD_PROTECTED)
        self.assertIn("password-protected", payload["error"])
        self.assertEqual(payload["details"], "pypdf: pdf is encrypted and requires a password")
        self.assertFalse(document.storage_path.exists())


class HelperTests(unittest.TestCase):
    def test_normalize_text(self):
        self.assertEqual(normalize_text("\n\n  a  b\t\tc \n\n\n d  "), "a b c d")
        self.assertEqual(normalize_text(""), "")

    def test_classification_is_ordered_substring_matching(self):
        cases = {
            "File has not been decrypted": ParseFailureKind.PASSWORD_PROTECTED,
            "Incorrect password supplied": ParseFailureKind.PASSWORD_PROTECTED,
            "stream looks corrupted": ParseFailureKind.CORRUPTED,
            "python-docx: word document parsing failed: bad zip": ParseFailureKind.WORD_FORMAT,
            "pypdf: pdf parsing failed: EOF marker not found": ParseFailureKind.PDF_FORMAT,
            "something else entirely": ParseFailureKind.GENERIC,
            "": ParseFailureKind.GENERIC,
        }
        for message, expected in cases.items():
            with self.subTest(message=message):
                self.assertEqual(classify_parse_error(message), expected)

    def test_size_limit_message_uses_readable_units(self):
        cases = {
            10 * 1024 * 1024: "10MB",
            1536 * 1024: "1.5MB",
            512 * 1024: "512KB",
            32: "32 bytes",
        }
        for max_bytes, shown in cases.items():
            with self.subTest(max_bytes=max_bytes):
                error = SizeLimitError(max_bytes)
                self.assertEqual(error.status_code, 413)
                self.assertEqual(error.message, f"File size exceeds the {shown} limit. Please upload a smaller file.")

    def test_discard_tolerates_missing_files(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "upload.txt"
            path.write_text("x", encoding="utf-8")
            discard(path)
            discard(path)
            discard(None)
            self.assertFalse(path.exists())


if __name__ == "__main__":
    unittest.main()
