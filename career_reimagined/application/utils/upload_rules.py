from career_reimagined.application.exceptions import UploadRejectedError
from career_reimagined.domain.entities.photo import UploadedPhoto

ACCEPTED_MIME_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})
DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


def validate_upload(photo: UploadedPhoto, max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES) -> None:
    if (photo.mime_type or "").lower() not in ACCEPTED_MIME_TYPES:
        raise UploadRejectedError("Please upload a valid image (JPEG, PNG, WEBP).")
    if photo.size > max_bytes:
        raise UploadRejectedError("File size too large. Please upload an image under 5MB.")
