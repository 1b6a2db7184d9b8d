"""
Event moderation and submission wizard tests.

Tests:
1. Status machine transitions
2. EventService.moderate against the document store
3. Step validation messages and next-step gating
4. Form-to-record mapping
"""
import pytest

from career_portal.schemas.schemas import EventSubmission, FAQ, RegistrationType
from career_portal.services.document_service import EventService
from career_portal.services.event_moderation import (
    InvalidTransition, ModerationAction, is_publicly_visible, next_status
)
from career_portal.services.event_submission import (
    LAST_STEP, build_event_record, next_step, validate_step, validate_submission
)


def complete_form(**overrides) -> EventSubmission:
    data = dict(
        organizer_name="Riya", organizer_phone="9999999999",
        organizer_email="riya@example.com", organizer_designation="Lead",
        title="CodeFest", description="24h hackathon", start_date="2030-03-01",
        register_by_date="2030-02-20", poster_link="https://img.example.com/p.png",
        registration_link="https://forms.example.com/codefest",
    )
    data.update(overrides)
    return EventSubmission(**data)


# ============================================================
# STATUS MACHINE
# ============================================================

def test_transitions_from_pending():
    assert next_status("pending", ModerationAction.approve) == "approved"
    assert next_status("pending", ModerationAction.reject) == "removed"


def test_approved_is_terminal():
    with pytest.raises(InvalidTransition):
        next_status("approved", ModerationAction.approve)
    with pytest.raises(InvalidTransition):
        next_status("approved", ModerationAction.reject)


def test_visibility_requires_approved():
    assert is_publicly_visible({"status": "approved"})
    assert not is_publicly_visible({"status": "pending"})
    assert not is_publicly_visible({})


def test_moderate_approve_and_reject():
    service = EventService()
    first = service.submit({"title": "One"})
    second = service.submit({"title": "Two"})
    assert service.get_public(first["id"]) is None

    approved = service.moderate(first["id"], ModerationAction.approve)
    assert approved["status"] == "approved"
    assert service.get_public(first["id"])["title"] == "One"

    rejected = service.moderate(second["id"], ModerationAction.reject)
    assert rejected["title"] == "Two"
    assert service.get_by_id(second["id"]) is None

    with pytest.raises(InvalidTransition):
        service.moderate(first["id"], ModerationAction.approve)
    assert service.moderate("000000000000000000000000", ModerationAction.approve) is None


def test_submit_forces_pending():
    event = EventService().submit({"title": "Sneaky", "status": "approved"})
    assert event["status"] == "pending"
    assert EventService().list_approved() == []


# ============================================================
# WIZARD
# ============================================================

def test_step_one_requires_all_organizer_fields():
    form = complete_form(organizer_designation="  ")
    assert validate_step(1, form) == "All organizer fields are required."
    assert next_step(1, form) == (1, "All organizer fields are required.")


def test_step_two_and_three_messages():
    assert validate_step(2, complete_form(poster_link="")) == \
        "Please fill all required event details and schedule fields."
    assert validate_step(3, complete_form(registration_link="")) == \
        "Registration link is required for Step 3."


def test_paid_events_need_entry_fee():
    form = complete_form(registration_type=RegistrationType.paid)
    assert validate_step(4, form) == "Entry fee is required for paid events."
    assert validate_step(4, complete_form(registration_type=RegistrationType.paid, entry_fee="199")) is None


def test_next_step_stops_at_last():
    form = complete_form()
    assert next_step(1, form) == (2, None)
    assert next_step(LAST_STEP, form) == (LAST_STEP, None)


def test_unknown_step():
    with pytest.raises(ValueError):
        validate_step(9, complete_form())


def test_validate_submission_collects_every_step():
    assert validate_submission(complete_form()) == []
    errors = validate_submission(EventSubmission())
    assert len(errors) == 3


def test_build_event_record():
    form = complete_form(
        category="Innovation", perks="Swag, , Certificates ,Food",
        faqs=[FAQ(question="Team size?", answer="Up to 4"), FAQ()],
        status="approved",
    )
    record = build_event_record(form)

    assert "status" not in record
    assert record["tags"] == ["Innovation"]
    assert record["perks"] == ["Swag", "Certificates", "Food"]
    assert record["faqs"] == [{"question": "Team size?", "answer": "Up to 4"}]
    assert record["mode"] == "Offline"
