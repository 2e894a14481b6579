"""
Status classification for the verification page.
"""

from certverify.modules.students.models import GraduationStatus
from certverify.modules.verification.schemas import StatusPresentation, StatusTone

REVOKED_WARNING = (
    "WARNING: This certificate has been revoked and is no longer valid. "
    "Please contact the school for more information."
)

STATUS_PRESENTATIONS: dict[GraduationStatus, StatusPresentation] = {
    GraduationStatus.GRADUATED: StatusPresentation(
        label="Graduated",
        tone=StatusTone.SUCCESS,
        description="This certificate is valid and verified.",
    ),
    GraduationStatus.REVOKED: StatusPresentation(
        label="Revoked",
        tone=StatusTone.DANGER,
        description="This certificate has been revoked and is no longer valid.",
        message=REVOKED_WARNING,
    ),
    GraduationStatus.PENDING: StatusPresentation(
        label="Pending",
        tone=StatusTone.WARNING,
        description="This student has not yet graduated.",
    ),
}

UNKNOWN_PRESENTATION = StatusPresentation(
    label="Unknown",
    tone=StatusTone.NEUTRAL,
    description="Status unknown.",
)

# Statuses that display the configurable verification message
SHOWS_VERIFICATION_MESSAGE = frozenset({GraduationStatus.GRADUATED})


def parse_status(status: GraduationStatus | str | None) -> GraduationStatus | None:
    """Return the matching GraduationStatus, or None for values we do not know."""
    if isinstance(status, GraduationStatus):
        return status
    try:
        return GraduationStatus(status)
    except ValueError:
        return None


def status_value(status: GraduationStatus | str | None) -> str:
    """Plain string form of a status, as stored."""
    if isinstance(status, GraduationStatus):
        return status.value
    return "" if status is None else str(status)


def classify_status(
    status: GraduationStatus | str | None,
    verification_message: str,
) -> StatusPresentation:
    """
    Map a graduation status to its presentation.

    Only the status decides the outcome. Unknown values fall back to a
    neutral "Unknown" presentation with no message.
    """
    known = parse_status(status)
    if known is None:
        return UNKNOWN_PRESENTATION

    presentation = STATUS_PRESENTATIONS[known]
    if known in SHOWS_VERIFICATION_MESSAGE:
        return presentation.model_copy(update={"message": verification_message})
    return presentation
