import sys
import unittest
from io import BytesIO
from pathlib import Path
from zipfile import ZipFile

from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumatch.errors import InvalidRequest  # noqa: E402
from resumatch.resume_parser import MAX_UPLOAD_BYTES, extract_text, validate_upload  # noqa: E402


def _docx(paragraphs: list[str]) -> bytes:
    ns = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
    body = "".join(f"<w:p><w:r><w:t>{p}</w:t></w:r></w:p>" for p in paragraphs)
    xml = f'<?xml version="1.0"?><w:document xmlns:w="{ns}"><w:body>{body}</w:body></w:document>'
    buf = BytesIO()
    with ZipFile(buf, "w") as zf:
        zf.writestr("word/document.xml", xml)
    return buf.getvalue()


class ValidateUploadTests(unittest.TestCase):
    def test_accepts_pdf_and_text(self):
        self.assertIsNone(validate_upload("resume.pdf", 1024, "application/pdf"))
        self.assertIsNone(validate_upload("resume.TXT", 10))

    def test_rejects_other_types(self):
        self.assertIn("Invalid file type", validate_upload("resume.png", 10, "image/png"))
        self.assertIn("Invalid file type", validate_upload("resume", 10))

    def test_rejects_files_over_five_megabytes(self):
        self.assertEqual(validate_upload("resume.pdf", MAX_UPLOAD_BYTES + 1), "File size exceeds the 5MB limit")


class ExtractTextTests(unittest.TestCase):
    def test_plain_text(self):
        self.assertEqual(extract_text("cv.txt", "Jane Doe\nPython".encode("utf-8")), "Jane Doe\nPython")

    def test_docx_paragraphs(self):
        text = extract_text("cv.docx", _docx(["Jane Doe", "Senior Data Engineer"]))
        self.assertEqual(text, "Jane Doe\nSenior Data Engineer")

    def test_corrupt_docx_is_invalid(self):
        with self.assertRaises(InvalidRequest):
            extract_text("cv.docx", b"not a zip file")

    def test_pdf_without_text_is_invalid(self):
        writer = PdfWriter()
        writer.add_blank_page(width=72, height=72)
        buf = BytesIO()
        writer.write(buf)
        with self.assertRaises(InvalidRequest) as ctx:
            extract_text("blank.pdf", buf.getvalue())
        self.assertIn("Could not extract any text", ctx.exception.message)

    def test_blank_text_file_is_invalid(self):
        with self.assertRaises(InvalidRequest):
            extract_text("cv.txt", b"   \n ")

    def test_disallowed_type_is_invalid(self):
        with self.assertRaises(InvalidRequest):
            extract_text("cv.exe", b"MZ")


if __name__ == "__main__":
    unittest.main()
