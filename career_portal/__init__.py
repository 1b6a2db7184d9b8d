"""
Student Career Portal
Jobs, internships, events and courses for students, with a resume builder,
AI career tools and an admin console.

Architecture:
- MongoDB: every portal collection (catalog, events, users, interactions, resumes)
- SQL (PostgreSQL): auth credential store only
- OpenAI-compatible API: career tools only (resume writing, skill gap, cover letter, ATS)
"""

__version__ = "1.0.0"
