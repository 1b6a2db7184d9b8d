"""PDF generation service for the resume builder using ReportLab."""

import logging
from io import BytesIO
from typing import Any, Dict, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor, gray
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer
from reportlab.platypus.flowables import HRFlowable

logger = logging.getLogger(__name__)


class PDFGenerationError(Exception):
    """Raised when a resume cannot be rendered."""
    pass


# Section keys in ResumeContent, rendered in the template's order.
DEFAULT_ORDER = [
    "summary", "experience", "education", "projects", "skills", "software",
    "certifications", "achievements", "publications", "extracurriculars",
    "volunteer_work", "languages",
]

TEMPLATES = [
    {
        "id": 1, "name": "Modern Clean", "type": "General", "accent": "#1e293b",
        "align": "left", "borders": True, "order": DEFAULT_ORDER,
    },
    {
        "id": 2, "name": "Academic Focus", "type": "Fresher", "accent": "#2563eb",
        "align": "center", "borders": True,
        "order": ["summary", "education", "projects", "skills", "achievements",
                  "experience", "certifications", "extracurriculars", "software",
                  "publications", "volunteer_work", "languages"],
    },
    {
        "id": 3, "name": "Corporate Pro", "type": "Experienced", "accent": "#059669",
        "align": "left", "borders": True,
        "order": ["summary", "experience", "skills", "education", "certifications",
                  "projects", "achievements", "software", "publications",
                  "volunteer_work", "extracurriculars", "languages"],
    },
    {
        "id": 4, "name": "Tech Specialist", "type": "Developer", "accent": "#4f46e5",
        "align": "left", "borders": True,
        "order": ["summary", "skills", "software", "projects", "experience",
                  "education", "certifications", "achievements", "publications",
                  "extracurriculars", "volunteer_work", "languages"],
    },
    {
        "id": 5, "name": "Research CV", "type": "Research", "accent": "#4b5563",
        "align": "center", "borders": True,
        "order": ["summary", "education", "publications", "experience", "projects",
                  "achievements", "certifications", "skills", "software",
                  "extracurriculars", "volunteer_work", "languages"],
    },
    {
        "id": 6, "name": "Minimalist Star", "type": "FAANG", "accent": "#000000",
        "align": "left", "borders": False,
        "order": ["summary", "experience", "projects", "education", "skills",
                  "certifications", "achievements", "software", "publications",
                  "extracurriculars", "volunteer_work", "languages"],
    },
]

TEMPLATES_BY_ID = {t["id"]: t for t in TEMPLATES}

DEFAULT_TEMPLATE_ID = 1

SAMPLE_RESUME = {
    "personal_info": {
        "full_name": "Prashant Singh",
        "email": "prashant@example.com",
        "phone": "+91-9876543210",
        "address": "Nagpur, Maharashtra",
        "city": "Nagpur",
        "postal_code": "440013",
        "country": "India",
        "linkedin": "linkedin.com/in/prashant",
        "github": "github.com/prashant",
        "portfolio": "prashant.dev"
    },
    "summary": "Motivated B.Tech Graduate with expertise in Cyber Security and Web Development.",
    "education": [
        {"degree": "B.Tech in Computer Science", "school": "Shri Ramdeobaba College",
         "year": "2020 - 2024", "description": "CGPA: 8.5"}
    ],
    "experience": [
        {"title": "AWS Cloud Intern", "company": "AICTE-Eduskills", "start_date": "May 2023",
         "end_date": "July 2023",
         "description": "Deployed scalable AWS solutions. Managed EC2, S3, RDS instances."}
    ],
    "projects": [
        {"title": "Facial Authentication", "technologies": "Python, React, Bootstrap", "link": "",
         "description": "Liveness detection system using Chrome Extension."},
        {"title": "Realtime Chat App", "technologies": "React, Firebase", "link": "",
         "description": "Real-time messaging using Cloud Firestore."}
    ],
    "skills": [
        {"name": "C++", "level": "Expert"},
        {"name": "Python", "level": "Advanced"},
        {"name": "ReactJS", "level": "Intermediate"}
    ],
    "achievements": [{"title": "Cyber Week Volunteer", "description": "Managed 300+ attendees."}],
    "publications": [],
    "extracurriculars": [
        {"title": "Robotics Club Member", "description": "Participated in state level competitions."}
    ],
    "languages": [{"name": "English"}, {"name": "Hindi"}],
    "software": [{"name": "VS Code", "level": "Excellent"}],
    "certifications": [
        {"name": "AWS Certified Developer", "issuer": "Amazon Web Services", "date": "2023"},
        {"name": "CompTIA Security+", "issuer": "CompTIA", "date": "2024"}
    ],
    "volunteer_work": [
        {"role": "Code Mentor", "organization": "Local NGO",
         "description": "Teaching basic coding to underprivileged kids."}
    ]
}


def get_template(template_id: Optional[int]) -> dict:
    """Template by id; None falls back to the default. Unknown ids raise KeyError."""
    if template_id is None:
        template_id = DEFAULT_TEMPLATE_ID
    return TEMPLATES_BY_ID[template_id]


def _esc(value: Any) -> str:
    return escape(str(value)) if value else ""


def _join(*parts) -> str:
    return " | ".join(_esc(p) for p in parts if p)


class ResumeTemplate:
    """One resume layout: accent colour, header alignment, borders and section order."""

    SECTION_TITLES = {
        "summary": "PROFESSIONAL SUMMARY",
        "experience": "EXPERIENCE",
        "education": "EDUCATION",
        "projects": "PROJECTS",
        "skills": "SKILLS",
        "software": "SOFTWARE",
        "languages": "LANGUAGES",
        "achievements": "ACHIEVEMENTS",
        "publications": "PUBLICATIONS",
        "extracurriculars": "EXTRACURRICULAR ACTIVITIES",
        "certifications": "CERTIFICATIONS",
        "volunteer_work": "VOLUNTEER WORK",
    }

    def __init__(self, template: dict, page_size=A4):
        self.template = template
        self.page_size = page_size
        self.accent = HexColor(template["accent"])
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self) -> None:
        alignment = TA_CENTER if self.template["align"] == "center" else TA_LEFT

        self.styles.add(ParagraphStyle(
            name='ResumeHeader',
            parent=self.styles['Heading1'],
            fontSize=20,
            spaceAfter=6,
            alignment=alignment,
            textColor=self.accent,
            fontName='Helvetica-Bold'
        ))

        self.styles.add(ParagraphStyle(
            name='ContactInfo',
            parent=self.styles['Normal'],
            fontSize=9,
            alignment=alignment,
            spaceAfter=10
        ))

        self.styles.add(ParagraphStyle(
            name='SectionHeader',
            parent=self.styles['Heading2'],
            fontSize=12,
            spaceBefore=10,
            spaceAfter=4,
            textColor=self.accent,
            fontName='Helvetica-Bold'
        ))

        self.styles.add(ParagraphStyle(
            name='ItemTitle',
            parent=self.styles['Normal'],
            fontSize=11,
            spaceBefore=4,
            spaceAfter=1,
            fontName='Helvetica-Bold'
        ))

        self.styles.add(ParagraphStyle(
            name='ItemMeta',
            parent=self.styles['Normal'],
            fontSize=9,
            spaceAfter=2,
            textColor=gray,
            fontName='Helvetica-Oblique'
        ))

        self.styles.add(ParagraphStyle(
            name='BulletPoint',
            parent=self.styles['Normal'],
            fontSize=10,
            leftIndent=14,
            spaceAfter=1
        ))

    def render(self, content: Dict[str, Any]) -> bytes:
        """
        Render resume content to PDF bytes.

        Raises:
            PDFGenerationError: if ReportLab fails to build the document
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=self.page_size,
            rightMargin=0.6*inch,
            leftMargin=0.6*inch,
            topMargin=0.6*inch,
            bottomMargin=0.6*inch,
            title=(content.get("personal_info") or {}).get("full_name") or "Resume"
        )

        story = []
        self._add_header(story, content.get("personal_info") or {})
        for section in self.template["order"]:
            value = content.get(section)
            if value:
                self._add_section(story, section, value)

        try:
            doc.build(story)
        except Exception as e:
            logger.warning("Resume PDF build failed (template %s): %s", self.template["id"], e)
            raise PDFGenerationError(f"PDF generation failed: {e}") from e
        return buffer.getvalue()

    def _add_header(self, story: List, info: Dict[str, Any]) -> None:
        story.append(Paragraph(_esc(info.get("full_name")) or "Your Name", self.styles['ResumeHeader']))

        location = ", ".join(p for p in (info.get("city"), info.get("country")) if p) or info.get("address")
        contact = _join(info.get("email"), info.get("phone"), location)
        links = _join(info.get("linkedin"), info.get("github"), info.get("portfolio"))
        for line in (contact, links):
            if line:
                story.append(Paragraph(line, self.styles['ContactInfo']))

        if self.template["borders"]:
            story.append(HRFlowable(width="100%", thickness=1.5, color=self.accent))
        story.append(Spacer(1, 6))

    def _add_section(self, story: List, section: str, value: Any) -> None:
        story.append(Paragraph(self.SECTION_TITLES[section], self.styles['SectionHeader']))
        if self.template["borders"]:
            story.append(HRFlowable(width="100%", thickness=0.5, color=self.accent, spaceAfter=4))

        if section == "summary":
            story.append(Paragraph(_esc(value), self.styles['Normal']))
        elif section == "experience":
            for job in value:
                self._add_item(story, job.get("title"),
                               _join(job.get("company"), " - ".join(
                                   d for d in (job.get("start_date"), job.get("end_date")) if d)),
                               job.get("description"))
        elif section == "education":
            for edu in value:
                self._add_item(story, edu.get("degree"), _join(edu.get("school"), edu.get("year")),
                               edu.get("description"))
        elif section == "projects":
            for project in value:
                self._add_item(story, project.get("title"),
                               _join(project.get("technologies"), project.get("link")),
                               project.get("description"))
        elif section in ("skills", "software"):
            names = [
                f"{s['name']} ({s['level']})" if s.get("level") else s.get("name")
                for s in value if s.get("name")
            ]
            story.append(Paragraph(_esc(", ".join(names)), self.styles['Normal']))
        elif section == "languages":
            story.append(Paragraph(_esc(", ".join(lang["name"] for lang in value if lang.get("name"))),
                                   self.styles['Normal']))
        elif section in ("achievements", "extracurriculars"):
            for item in value:
                self._add_item(story, item.get("title"), "", item.get("description"))
        elif section == "publications":
            for pub in value:
                self._add_item(story, pub.get("title"), _join(pub.get("publisher"), pub.get("date"), pub.get("link")), "")
        elif section == "certifications":
            for cert in value:
                line = _join(cert.get("name"), cert.get("issuer"), cert.get("date"))
                if line:
                    story.append(Paragraph(f"• {line}", self.styles['BulletPoint']))
        elif section == "volunteer_work":
            for item in value:
                self._add_item(story, item.get("role"), _esc(item.get("organization")), item.get("description"))

        story.append(Spacer(1, 4))

    def _add_item(self, story: List, title: str, meta: str, description: str) -> None:
        """Title line, grey meta line (already escaped), then description lines as bullets."""
        if title:
            story.append(Paragraph(_esc(title), self.styles['ItemTitle']))
        if meta:
            story.append(Paragraph(meta, self.styles['ItemMeta']))
        lines = [line.strip().lstrip("•-").strip() for line in (description or "").split("\n")]
        lines = [line for line in lines if line]
        if len(lines) > 1:
            for line in lines:
                story.append(Paragraph(f"• {_esc(line)}", self.styles['BulletPoint']))
        elif lines:
            story.append(Paragraph(_esc(lines[0]), self.styles['Normal']))


def render_resume_pdf(content: Dict[str, Any], template_id: Optional[int] = None) -> bytes:
    """Render resume content with the given template (default: Modern Clean)."""
    return ResumeTemplate(get_template(template_id)).render(content)
