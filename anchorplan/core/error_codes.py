# anchorplan/core/error_codes.py
"""
Structured error codes for anchor distribution failures.
Use these keys in return values; map to user-facing messages in the UI.
"""

from __future__ import annotations

# Precondition failures: engine refuses to run, result is empty
INVALID_PROJECT_AREA = "invalid_project_area"
INVALID_DIAMETER = "invalid_diameter"
NO_ZONES = "no_zones"
INVALID_IMAGE_SIZE = "invalid_image_size"
INVALID_CONTAINER_SIZE = "invalid_container_size"
INVALID_ADDITIONAL_ANCHORS = "invalid_additional_anchors"
UNKNOWN_STRATEGY = "unknown_strategy"

# Degraded but valid: fewer anchors than requested
CAPACITY_EXHAUSTED = "capacity_exhausted"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    INVALID_PROJECT_AREA: "Project area must be a positive number of square meters.",
    INVALID_DIAMETER: "Anchor diameter must be a positive number of meters.",
    NO_ZONES: "Draw at least one distribution zone before distributing anchors.",
    INVALID_IMAGE_SIZE: "Blueprint image has no size. Upload the image again.",
    INVALID_CONTAINER_SIZE: "Viewer has no size. Resize the window and try again.",
    INVALID_ADDITIONAL_ANCHORS: "Additional anchors cannot be negative.",
    UNKNOWN_STRATEGY: "Unknown placement strategy.",
    CAPACITY_EXHAUSTED: "Not all anchors fit with the required spacing. Try larger or more zones.",
}


class PreconditionError(ValueError):
    """Raised when inputs cannot produce valid anchor coordinates. Carries an error key."""

    def __init__(self, error_key: str, detail: str = "") -> None:
        self.error_key = error_key
        super().__init__(detail or USER_MESSAGES.get(error_key, error_key))


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)
