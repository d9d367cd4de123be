from cardbinder.models.card import (
    CONDITIONS,
    GRADING_COMPANIES,
    Card,
    CardFields,
    next_image_index,
    prev_image_index,
    resolve_badge,
    resolve_images,
    resolve_subtitle,
    resolve_title,
)
from cardbinder.models.failure import (
    CardNotFoundError,
    FailureDetail,
    FailureKind,
    ImageUploadError,
    KnownError,
    RecordFetchError,
)

__all__ = [
    "CONDITIONS",
    "Card",
    "CardFields",
    "CardNotFoundError",
    "FailureDetail",
    "FailureKind",
    "GRADING_COMPANIES",
    "ImageUploadError",
    "KnownError",
    "RecordFetchError",
    "next_image_index",
    "prev_image_index",
    "resolve_badge",
    "resolve_images",
    "resolve_subtitle",
    "resolve_title",
]
