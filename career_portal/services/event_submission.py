"""
Event submission wizard.

Steps:
1. Organizer     - who is hosting
2. Core Details  - what, when, poster
3. Connections   - registration and social links
4. Check Out     - pricing, certificates, rewards
5. Finish        - review and submit

Each step is validated on its own so a client can gate "next"; submission
re-validates every step before building the stored record.
"""

from typing import List, Optional, Tuple

from career_portal.schemas.schemas import EventSubmission, RegistrationType


STEPS = [
    {"id": 1, "title": "Organizer"},
    {"id": 2, "title": "Core Details"},
    {"id": 3, "title": "Connections"},
    {"id": 4, "title": "Check Out"},
    {"id": 5, "title": "Finish"},
]

LAST_STEP = len(STEPS)


def _blank(value) -> bool:
    return value is None or not str(value).strip()


def validate_step(step: int, form: EventSubmission) -> Optional[str]:
    """Return the error message for a step, or None when it is complete."""
    if step == 1:
        if any(_blank(v) for v in (
            form.organizer_name, form.organizer_email,
            form.organizer_phone, form.organizer_designation
        )):
            return "All organizer fields are required."
    elif step == 2:
        if any(_blank(v) for v in (
            form.title, form.description, form.start_date,
            form.register_by_date, form.poster_link
        )):
            return "Please fill all required event details and schedule fields."
    elif step == 3:
        if _blank(form.registration_link):
            return "Registration link is required for Step 3."
    elif step == 4:
        if form.registration_type == RegistrationType.paid and _blank(form.entry_fee):
            return "Entry fee is required for paid events."
    elif step != LAST_STEP:
        raise ValueError(f"Unknown step: {step}")
    return None


def next_step(step: int, form: EventSubmission) -> Tuple[int, Optional[str]]:
    """Advance one step if the current one is valid; never past the last."""
    error = validate_step(step, form)
    if error:
        return step, error
    return min(step + 1, LAST_STEP), None


def validate_submission(form: EventSubmission) -> List[str]:
    errors = []
    for step in STEPS:
        error = validate_step(step["id"], form)
        if error:
            errors.append(error)
    return errors


def split_csv(value: str) -> List[str]:
    return [part.strip() for part in (value or "").split(",") if part.strip()]


def build_event_record(form: EventSubmission) -> dict:
    """
    Map the wizard form to the stored event document.

    The client-supplied status is dropped; EventService.submit sets pending.
    """
    record = form.model_dump(mode="json", exclude={"status"})
    record["faqs"] = [
        faq for faq in record["faqs"]
        if faq["question"].strip() or faq["answer"].strip()
    ]
    record["perks"] = split_csv(form.perks)
    record["tags"] = [form.category] if form.category else []
    return record
