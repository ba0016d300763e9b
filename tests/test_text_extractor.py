import pytest

from jobtracker.services.text_extractor import TextExtractor, infer_kind
from jobtracker.utils.exceptions import CorruptDocument, NoExtractableText, UnsupportedFileType
from tests.helpers import make_docx, make_pdf

extractor = TextExtractor()


def test_pdf_pages_are_concatenated_in_order():
    content = make_pdf(["Alpha experience", "Bravo skills", "Charlie projects"])

    text = extractor.extract(content, "pdf")

    assert text.index("Alpha") < text.index("Bravo") < text.index("Charlie")
    assert text.split("\n") == ["Alpha experience", "Bravo skills", "Charlie projects"]


def test_pdf_without_text_is_no_extractable_text():
    with pytest.raises(NoExtractableText):
        extractor.extract(make_pdf([""]), "pdf")


def test_garbage_pdf_is_corrupt_document():
    with pytest.raises(CorruptDocument):
        extractor.extract(b"this is not a pdf", ".pdf")


def test_docx_paragraphs():
    content = make_docx(["Jane Doe", "Python developer", "", "Skills: SQL, Docker"])

    text = extractor.extract(content, "docx")

    assert text.startswith("Jane Doe\nPython developer")
    assert text.endswith("Skills: SQL, Docker")


def test_empty_docx_is_no_extractable_text():
    with pytest.raises(NoExtractableText):
        extractor.extract(make_docx(["   ", ""]), "docx")


def test_broken_docx_is_corrupt_document():
    with pytest.raises(CorruptDocument):
        extractor.extract(b"PK\x03\x04 not really a zip", "docx")


def test_txt_is_decoded_and_trimmed():
    assert extractor.extract("  Résumé: Go, Rust \n\n".encode("utf-8"), "txt") == "Résumé: Go, Rust"


@pytest.mark.parametrize("content", [b"", b"   \n\t  "])
def test_blank_txt_is_no_extractable_text(content):
    with pytest.raises(NoExtractableText):
        extractor.extract(content, "txt")


def test_invalid_utf8_txt_is_corrupt_document():
    with pytest.raises(CorruptDocument):
        extractor.extract(b"\xff\xfe\xfa", "txt")


@pytest.mark.parametrize("extension", ["png", ".exe", "doc", ""])
def test_unsupported_extension_fails_before_reading(extension):
    class Unreadable(bytes):
        def decode(self, *args, **kwargs):
            raise AssertionError("content must not be read")

    with pytest.raises(UnsupportedFileType):
        extractor.extract(Unreadable(b"data"), extension)


@pytest.mark.parametrize(
    "filename,kind",
    [
        ("resume.PDF", "pdf"),
        ("cv.final.docx", "docx"),
        ("notes.txt", "txt"),
        ("photo.png", "unsupported"),
        ("README", "unsupported"),
        (None, "unsupported"),
    ],
)
def test_infer_kind(filename, kind):
    assert infer_kind(filename) == kind
