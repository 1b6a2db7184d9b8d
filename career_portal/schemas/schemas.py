"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Stored documents are loose field bags; these models describe the API contract.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional, List, Dict
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    user = "user"
    admin = "admin"


class OfficeType(str, Enum):
    in_office = "in-office"
    remote = "remote"
    hybrid = "hybrid"


class EventStatus(str, Enum):
    pending = "pending"
    approved = "approved"


class EventTimeStatus(str, Enum):
    upcoming = "upcoming"
    ongoing = "ongoing"
    past = "past"


class EventMode(str, Enum):
    online = "Online"
    offline = "Offline"
    hybrid = "Hybrid"


class RegistrationType(str, Enum):
    free = "Free"
    paid = "Paid"


class CertificateKind(str, Enum):
    physical = "Physical"
    digital = "Digital"
    none = "No"


class InteractionType(str, Enum):
    job = "job"
    internship = "internship"
    event = "event"
    course_waitlist = "course_waitlist"


class InteractionTab(str, Enum):
    all = "all"
    job = "job"
    internship = "internship"
    event = "event"
    course = "course"


class ResumeContentType(str, Enum):
    summary = "summary"
    experience = "experience"
    project = "project"
    skills = "skills"


class CoverLetterTone(str, Enum):
    professional = "Professional"
    passionate = "Passionate"
    analytical = "Analytical"
    bold = "Bold"


EVENT_CATEGORIES = [
    "Technical", "Cultural", "Management", "Entrepreneurship", "Arts & Design",
    "Science", "Literature", "Social", "Environment", "Innovation"
]

EVENT_TYPES = [
    "Hackathon", "Workshop", "Conference", "Competition", "Seminar",
    "Webinar", "Tech Fest", "Cultural Fest", "Ideathon", "Paper Presentation"
]


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    display_name: Optional[str] = Field(None, max_length=100)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class GoogleSignInRequest(BaseModel):
    id_token: str = Field(..., min_length=10)

class PasswordResetRequest(BaseModel):
    email: EmailStr

class PasswordResetConfirm(BaseModel):
    token: str
    new_password: str = Field(..., min_length=6)

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    role: str


# ============================================================
# USER SCHEMAS
# ============================================================

class UserResponse(BaseModel):
    id: str
    email: str
    display_name: Optional[str] = None
    role: str = UserRole.user.value
    is_blocked: bool = False
    created_at: Optional[datetime] = None
    last_sign_in_at: Optional[datetime] = None

class UserListResponse(BaseModel):
    users: List[UserResponse]
    total: int
    page: int
    page_size: int
    total_pages: int

class DisplayNameUpdate(BaseModel):
    display_name: str = Field(..., min_length=1, max_length=100)

class UserRoleUpdate(BaseModel):
    role: UserRole

class UserBlockUpdate(BaseModel):
    is_blocked: bool


# ============================================================
# CATALOG SCHEMAS (jobs, internships, courses)
# ============================================================

def _not_null(value):
    """Partial updates may omit a field but not null out one the document needs."""
    if value is None:
        raise ValueError("must not be null")
    return value


class ListingCreate(BaseModel):
    title: str = Field(..., min_length=2, max_length=200)
    company: Optional[str] = None
    company_logo: Optional[str] = None
    company_url: Optional[str] = None
    location: Optional[str] = None
    office_type: Optional[OfficeType] = None
    salary: Optional[str] = None
    experience: Optional[str] = None
    duration: Optional[str] = None
    start_date: Optional[str] = None
    deadline: Optional[str] = None
    openings: Optional[int] = Field(None, ge=1)
    description: Optional[str] = None
    category: Optional[str] = None
    skills: List[str] = []
    tags: List[str] = []
    is_verified: bool = False
    is_featured: bool = False

class ListingUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=2, max_length=200)
    company: Optional[str] = None
    company_logo: Optional[str] = None
    company_url: Optional[str] = None
    location: Optional[str] = None
    office_type: Optional[OfficeType] = None
    salary: Optional[str] = None
    experience: Optional[str] = None
    duration: Optional[str] = None
    start_date: Optional[str] = None
    deadline: Optional[str] = None
    openings: Optional[int] = Field(None, ge=1)
    description: Optional[str] = None
    category: Optional[str] = None
    skills: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    is_verified: Optional[bool] = None
    is_featured: Optional[bool] = None

    @field_validator("title", "skills", "tags", "is_verified", "is_featured")
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)

class ListingResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    title: str
    company: Optional[str] = None
    location: Optional[str] = None
    office_type: Optional[str] = None
    salary: Optional[str] = None
    skills: List[str] = []
    is_featured: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============================================================
# EVENT SCHEMAS
# ============================================================

class FAQ(BaseModel):
    question: str = ""
    answer: str = ""

class EventSubmission(BaseModel):
    """Everything the five-step submission wizard collects."""

    # Step 1: Organizer
    organizer_name: str = ""
    organizer_phone: str = ""
    organizer_email: str = ""
    organizer_designation: str = ""

    # Step 2: Core details and schedule
    title: str = ""
    description: str = ""
    category: str = "Technical"
    type: str = "Hackathon"
    mode: EventMode = EventMode.offline
    country: str = "India"
    detailed_location: str = ""
    google_maps_link: str = ""
    start_date: str = ""
    end_date: str = ""
    register_by_date: str = ""
    poster_link: str = ""
    faqs: List[FAQ] = [FAQ()]

    # Step 3: Connections
    registration_link: str = ""
    website_link: str = ""
    brochure_link: str = ""
    linkedin: str = ""
    instagram: str = ""
    x: str = ""
    discord: str = ""
    whatsapp: str = ""

    # Step 4: Check out
    registration_type: RegistrationType = RegistrationType.free
    entry_fee: str = ""
    pricing_details: str = ""
    certificate_winners: CertificateKind = CertificateKind.digital
    certificate_participants: CertificateKind = CertificateKind.digital
    has_winner_rewards: bool = False
    winner_prizes: str = ""
    winner_trophy: str = ""
    winner_goodies: str = ""

    # Additional materials
    perks: str = ""
    prizes: str = ""
    team_size: str = ""
    contact_info: str = ""

    # Ignored on submission: every new event starts pending
    status: Optional[str] = None

class EventCreate(BaseModel):
    """Admin console event form."""
    title: str = Field(..., min_length=2, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = None
    type: Optional[str] = None
    mode: Optional[EventMode] = None
    location: Optional[str] = None
    detailed_location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    register_by_date: Optional[str] = None
    date_range: Optional[str] = None
    poster_link: Optional[str] = None
    registration_link: Optional[str] = None
    registration_type: Optional[RegistrationType] = None
    entry_fee: Optional[str] = None
    tags: List[str] = []
    faqs: List[FAQ] = []

class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=2, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = None
    type: Optional[str] = None
    mode: Optional[EventMode] = None
    location: Optional[str] = None
    detailed_location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    register_by_date: Optional[str] = None
    date_range: Optional[str] = None
    poster_link: Optional[str] = None
    registration_link: Optional[str] = None
    registration_type: Optional[RegistrationType] = None
    entry_fee: Optional[str] = None
    tags: Optional[List[str]] = None
    faqs: Optional[List[FAQ]] = None

    @field_validator("title", "tags", "faqs")
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)

class EventResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    type: Optional[str] = None
    mode: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    status: str
    time_status: Optional[EventTimeStatus] = None
    tags: List[str] = []
    faqs: List[FAQ] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class StepValidationResponse(BaseModel):
    step: int
    valid: bool
    error: Optional[str] = None
    next_step: int


# ============================================================
# PAGINATED LISTS
# ============================================================

class ListingPage(BaseModel):
    items: List[ListingResponse]
    total: int
    page: int
    page_size: int
    total_pages: int

class EventPage(BaseModel):
    items: List[EventResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


# ============================================================
# INTERACTION SCHEMAS
# ============================================================

class InteractionCreate(BaseModel):
    type: InteractionType
    item_id: Optional[str] = None

class InteractionResponse(BaseModel):
    id: str
    user_id: str
    user_email: Optional[str] = None
    type: str
    item_id: Optional[str] = None
    item_title: Optional[str] = None
    item_company: Optional[str] = None
    item_location: Optional[str] = None
    item_logo: Optional[str] = None
    timestamp: Optional[datetime] = None

class InteractionRecorded(BaseModel):
    interaction: InteractionResponse
    redirect_url: Optional[str] = None
    message: str

class InteractionPage(BaseModel):
    items: List[InteractionResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


# ============================================================
# RESUME SCHEMAS
# ============================================================

class PersonalInfo(BaseModel):
    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""
    country: str = ""
    linkedin: str = ""
    github: str = ""
    portfolio: str = ""

class ExperienceItem(BaseModel):
    title: str = ""
    company: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""

class EducationItem(BaseModel):
    degree: str = ""
    school: str = ""
    year: str = ""
    description: str = ""

class ProjectItem(BaseModel):
    title: str = ""
    technologies: str = ""
    link: str = ""
    description: str = ""

class SkillItem(BaseModel):
    name: str = ""
    level: str = ""

class LanguageItem(BaseModel):
    name: str = ""

class TitledItem(BaseModel):
    title: str = ""
    description: str = ""

class PublicationItem(BaseModel):
    title: str = ""
    publisher: str = ""
    date: str = ""
    link: str = ""

class CertificationItem(BaseModel):
    name: str = ""
    issuer: str = ""
    date: str = ""

class VolunteerItem(BaseModel):
    role: str = ""
    organization: str = ""
    description: str = ""

class ResumeContent(BaseModel):
    personal_info: PersonalInfo = PersonalInfo()
    summary: str = ""
    experience: List[ExperienceItem] = []
    education: List[EducationItem] = []
    projects: List[ProjectItem] = []
    skills: List[SkillItem] = []
    software: List[SkillItem] = []
    languages: List[LanguageItem] = []
    achievements: List[TitledItem] = []
    publications: List[PublicationItem] = []
    extracurriculars: List[TitledItem] = []
    certifications: List[CertificationItem] = []
    volunteer_work: List[VolunteerItem] = []

class ResumeSave(BaseModel):
    content: ResumeContent
    template_id: Optional[int] = None

class ResumeResponse(BaseModel):
    id: str
    user_id: str
    content: ResumeContent
    template_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class ResumeTemplateResponse(BaseModel):
    id: int
    name: str
    type: str
    accent: str


# ============================================================
# AI TOOL SCHEMAS
# ============================================================

class ResumeContentRequest(BaseModel):
    type: ResumeContentType
    title: Optional[str] = None
    level: Optional[str] = None
    skills: Optional[str] = None
    role: Optional[str] = None
    company: Optional[str] = None
    keywords: Optional[str] = None
    tech: Optional[str] = None

class ResumeContentResponse(BaseModel):
    type: str
    content: str

class SkillGapRequest(BaseModel):
    current_skills: str = Field(..., min_length=1)
    target_role: str = Field(..., min_length=2)

class CoverLetterRequest(BaseModel):
    name: str
    company: str
    role: str
    experience: str = ""
    jd: str = ""
    tone: CoverLetterTone = CoverLetterTone.professional

class ATSRequest(BaseModel):
    resume_text: str = Field(..., min_length=1)
    jd_text: str = ""

class KeywordATSRequest(BaseModel):
    resume_text: str = Field(..., min_length=1)
    jd_text: str = Field(..., min_length=1)

class KeywordATSResponse(BaseModel):
    score: int
    matched: List[str]
    missing: List[str]

class AIToolResponse(BaseModel):
    tool_id: str
    name: str
    price: int
    unlocked: bool

class PurchaseResponse(BaseModel):
    tool_id: str
    name: str
    price: int
    transaction_id: str
    purchased_at: datetime


# ============================================================
# ANALYTICS SCHEMAS
# ============================================================

class GrowthPoint(BaseModel):
    label: str
    users: int

class AnalyticsResponse(BaseModel):
    totals: Dict[str, int]
    pending_events: int
    interactions_by_type: Dict[str, int]
    growth: List[GrowthPoint]


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    detail: str
