"""Tests for failure classification."""

from cardbinder.models.failure import (
    CardNotFoundError,
    FailureKind,
    ImageUploadError,
    KnownError,
)


class TestFailureKind:
    def test_kinds(self) -> None:
        """Only kinds the service actually raises are declared."""
        assert {kind.value for kind in FailureKind} == {
            "invalid_input",
            "not_found",
            "upload_failed",
        }


class TestKnownError:
    def test_to_detail(self) -> None:
        error = KnownError(
            kind=FailureKind.INVALID_INPUT,
            message="Unknown filter 'color'.",
            detail="Filterable keys: year",
        )

        detail = error.to_detail().model_dump(mode="json")

        assert detail == {
            "kind": "invalid_input",
            "message": "Unknown filter 'color'.",
            "detail": "Filterable keys: year",
            "suggestion": None,
        }
        assert error.status_code == 400

    def test_card_not_found(self) -> None:
        error = CardNotFoundError("abc")

        assert error.kind == FailureKind.NOT_FOUND
        assert error.status_code == 404
        assert "abc" in (error.detail or "")

    def test_image_upload_error(self) -> None:
        error = ImageUploadError("Uploaded image is empty.")

        assert error.kind == FailureKind.UPLOAD_FAILED
        assert error.status_code == 400
        assert error.suggestion
