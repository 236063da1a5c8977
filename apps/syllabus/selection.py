"""
Syllabus selection - which syllabus a viewer gets to see
CSM - Course Syllabus Manager

=== Rules (first match wins) ===
1. The private syllabus, if it exists and the viewer may see private content
2. The public syllabus, if it exists and the viewer may see its access level
3. Nothing; the reason is "requires login" when a public syllabus exists,
   "requires enrollment" when only a private one exists, else "none uploaded"

Selection is pure: it reads the records and the viewer's capabilities and
returns a DisplayChoice. Rendering, logging and auditing happen in the view.
"""

import enum
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from .models import AccessType, Syllabus, SyllabusType
from .permissions import can_manage_syllabus


class NotViewableReason(enum.Enum):
    REQUIRES_LOGIN = 'cannot_view_public_syllabus'
    REQUIRES_ENROLLMENT = 'cannot_view_private_syllabus'
    NONE_UPLOADED = 'no_syllabus_uploaded'

    @property
    def message_key(self) -> str:
        return self.value


@dataclass(frozen=True)
class ViewerCapabilities:
    """The visibility checks the current requester satisfies."""
    is_authenticated: bool = False
    is_participant: bool = False
    can_manage: bool = False

    def can_view(self, access_type) -> bool:
        if access_type == AccessType.PUBLIC:
            return True
        if access_type == AccessType.LOGGEDIN:
            return self.is_authenticated
        if access_type == AccessType.PRIVATE:
            return self.is_participant or self.can_manage
        return False

    @classmethod
    def for_user(cls, user, course) -> 'ViewerCapabilities':
        if user is None or not user.is_authenticated:
            return cls()
        return cls(
            is_authenticated=True,
            is_participant=course.is_participant(user),
            can_manage=can_manage_syllabus(user, course),
        )


@dataclass(frozen=True)
class DisplayChoice:
    syllabus: Optional[Syllabus] = None
    reason: Optional[NotViewableReason] = None

    @property
    def is_visible(self) -> bool:
        return self.syllabus is not None


Syllabi = Mapping[str, Syllabus]


def _private_if_entitled(syllabi: Syllabi, viewer: ViewerCapabilities) -> Optional[Syllabus]:
    syllabus = syllabi.get(SyllabusType.PRIVATE)
    if syllabus is not None and viewer.can_view(AccessType.PRIVATE):
        return syllabus
    return None


def _public_if_entitled(syllabi: Syllabi, viewer: ViewerCapabilities) -> Optional[Syllabus]:
    syllabus = syllabi.get(SyllabusType.PUBLIC)
    if syllabus is not None and viewer.can_view(syllabus.access_type):
        return syllabus
    return None


# Order matters: restricted content wins when the viewer is entitled to it
DISPLAY_RULES: tuple[Callable[[Syllabi, ViewerCapabilities], Optional[Syllabus]], ...] = (
    _private_if_entitled,
    _public_if_entitled,
)

# Why nothing was shown, checked in order against the records that exist
NOT_VIEWABLE_RULES = (
    (SyllabusType.PUBLIC, NotViewableReason.REQUIRES_LOGIN),
    (SyllabusType.PRIVATE, NotViewableReason.REQUIRES_ENROLLMENT),
)


def select_for_display(syllabi: Syllabi, viewer: ViewerCapabilities) -> DisplayChoice:
    """
    Pick the single syllabus to render for this viewer.

    Args:
        syllabi: mapping of syllabus type ('public' / 'private') to record;
            missing or None entries mean the slot is empty
        viewer: what the requester is allowed to see

    Returns:
        DisplayChoice with either the syllabus or the reason nothing is shown
    """
    for rule in DISPLAY_RULES:
        syllabus = rule(syllabi, viewer)
        if syllabus is not None:
            return DisplayChoice(syllabus=syllabus)

    for syllabus_type, reason in NOT_VIEWABLE_RULES:
        if syllabi.get(syllabus_type) is not None:
            return DisplayChoice(reason=reason)
    return DisplayChoice(reason=NotViewableReason.NONE_UPLOADED)
