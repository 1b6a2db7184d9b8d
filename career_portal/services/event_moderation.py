"""
Event moderation status machine.

    pending --approve--> approved   (terminal)
    pending --reject---> removed    (document deleted, terminal)

Both transitions are admin-only. There is no expiry and no other state.
"""

from enum import Enum

from career_portal.schemas.schemas import EventStatus


REMOVED = "removed"


class ModerationAction(str, Enum):
    approve = "approve"
    reject = "reject"


class InvalidTransition(Exception):
    """Raised when an action is applied to an event that is not pending."""

    def __init__(self, current: str, action: ModerationAction):
        self.current = current
        self.action = action
        super().__init__(f"Cannot {action.value} an event with status '{current}'")


TRANSITIONS = {
    (EventStatus.pending.value, ModerationAction.approve): EventStatus.approved.value,
    (EventStatus.pending.value, ModerationAction.reject): REMOVED,
}


def next_status(current: str, action: ModerationAction) -> str:
    """Return the status an action leads to, or raise InvalidTransition."""
    try:
        return TRANSITIONS[(current, ModerationAction(action))]
    except KeyError:
        raise InvalidTransition(current, ModerationAction(action)) from None


def is_publicly_visible(event: dict) -> bool:
    return event.get("status") == EventStatus.approved.value
