"""
Failure classification for API responses.

Every explainable failure raised by the service is a KnownError carrying a
FailureKind. The application installs a single exception handler that
renders any KnownError as a FailureDetail body with the error's HTTP status,
so route handlers raise and never build error responses by hand.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Resource failures
    NOT_FOUND = "not_found"

    # Service failures
    UPLOAD_FAILED = "upload_failed"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail body."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class CardNotFoundError(KnownError):
    """Raised when a card does not exist for the requesting owner."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message="Card not found.",
            detail=f"No card with id {card_id!r} in this collection",
            suggestion="Return to your collection and pick another card.",
            status_code=404,
        )


class ImageUploadError(KnownError):
    """Raised when an uploaded image cannot be stored."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.UPLOAD_FAILED,
            message=message,
            detail=detail,
            suggestion="Check the file and try uploading again.",
            status_code=400,
        )


class RecordFetchError(Exception):
    """Raised when the record store cannot return an owner's cards."""

    pass
