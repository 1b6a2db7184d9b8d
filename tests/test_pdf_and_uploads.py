"""
Resume PDF rendering and upload text extraction tests.

Tests:
1. Every template renders the sample resume
2. User text with markup characters renders safely
3. PDF / DOCX / TXT extraction round trip through the upload helpers
"""
import io

import pytest
from docx import Document
from fastapi import HTTPException

from career_portal.services.pdf_service import (
    SAMPLE_RESUME, TEMPLATES, get_template, render_resume_pdf
)
from career_portal.utils.file_upload import (
    extract_from_docx, extract_from_pdf, extract_from_txt, get_file_extension
)


@pytest.mark.parametrize("template", TEMPLATES, ids=lambda t: t["name"])
def test_each_template_renders_sample(template):
    pdf = render_resume_pdf(SAMPLE_RESUME, template["id"])
    assert pdf.startswith(b"%PDF")


def test_six_templates_with_unique_ids():
    assert [t["id"] for t in TEMPLATES] == [1, 2, 3, 4, 5, 6]
    assert get_template(None)["name"] == "Modern Clean"
    with pytest.raises(KeyError):
        get_template(42)


def test_markup_in_user_text_is_escaped():
    content = {
        "personal_info": {"full_name": "Ada <Lovelace> & Co"},
        "summary": "Loves <b>bold</b> claims & unclosed <tags",
        "experience": [{"title": "R&D", "company": "A<B>", "description": "- one\n- two & three"}],
    }
    assert render_resume_pdf(content, 6).startswith(b"%PDF")


def test_empty_resume_still_renders():
    assert render_resume_pdf({}).startswith(b"%PDF")


def test_pdf_text_extraction():
    pdf = render_resume_pdf(SAMPLE_RESUME, 1)
    text = extract_from_pdf(pdf)
    assert "Prashant Singh" in text


def test_docx_text_extraction():
    document = Document()
    document.add_paragraph("Python developer")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Skills"
    table.rows[0].cells[1].text = "FastAPI"
    buffer = io.BytesIO()
    document.save(buffer)

    text = extract_from_docx(buffer.getvalue())
    assert "Python developer" in text
    assert "Skills | FastAPI" in text


def test_bad_docx_is_client_error():
    with pytest.raises(HTTPException) as exc_info:
        extract_from_docx(b"not a zip file")
    assert exc_info.value.status_code == 400


def test_txt_extraction_and_extensions():
    assert extract_from_txt("café".encode("utf-8")) == "café"
    assert extract_from_txt(b"\xff\xfeplain") != ""
    assert get_file_extension("CV.PDF") == ".pdf"
    assert get_file_extension("resume") == ""
