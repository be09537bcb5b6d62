"""
Image payload validation.

Decodes base64 image payloads and enforces the media type whitelist and
size limit. Runs before any external call so invalid input never reaches
Gemini or the store.

Dependencies: base64 (stdlib)
System role: Input gate for analyze and document registration
"""

import base64
import binascii

from visual_rag.core.exceptions import ValidationError

SUPPORTED_MEDIA_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})
MAX_IMAGE_BYTES = 10 * 1024 * 1024


def normalize_media_type(mime_type: str | None) -> str:
    """Lowercase and strip parameters (image/png; charset=... -> image/png)."""
    if not mime_type:
        return ""
    return mime_type.split(";", 1)[0].strip().lower()


def validate_media_type(mime_type: str | None) -> str:
    """
    Check a media type against the whitelist.

    Args:
        mime_type: Declared media type

    Returns:
        str: Normalized media type

    Raises:
        ValidationError: Missing or unsupported media type
    """
    normalized = normalize_media_type(mime_type)
    if not normalized:
        raise ValidationError("mimeType is required", field="mimeType")
    if normalized not in SUPPORTED_MEDIA_TYPES:
        raise ValidationError(
            f"Unsupported image type: {normalized}. Supported formats: JPG, PNG, WebP",
            field="mimeType",
            details={"supported": sorted(SUPPORTED_MEDIA_TYPES)},
        )
    return normalized


def strip_data_url(payload: str) -> str:
    """Drop a data:image/...;base64, prefix if the client sent a data URL."""
    if payload.startswith("data:") and "," in payload:
        return payload.split(",", 1)[1]
    return payload


def decode_image(image_base64: str | None, mime_type: str | None, field: str = "imageBase64") -> tuple[bytes, str]:
    """
    Decode and validate a base64 image payload.

    Args:
        image_base64: Base64 text (optionally a data URL)
        mime_type: Declared media type
        field: Field name reported in validation errors

    Returns:
        tuple[bytes, str]: Raw image bytes and normalized media type

    Raises:
        ValidationError: Empty payload, invalid base64, unsupported type or > 10 MB
    """
    if not image_base64 or not image_base64.strip():
        raise ValidationError("Image data is required", field=field)

    normalized = validate_media_type(mime_type)

    try:
        data = base64.b64decode(strip_data_url(image_base64.strip()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("Image data is not valid base64", field=field) from e

    validate_image_bytes(data, field=field)
    return data, normalized


def validate_image_bytes(data: bytes, field: str = "image") -> None:
    """Reject empty and oversized images."""
    if not data:
        raise ValidationError("Image data is empty", field=field)
    if len(data) > MAX_IMAGE_BYTES:
        raise ValidationError(
            "Image file size must be less than 10MB",
            field=field,
            details={"size_bytes": len(data)},
        )
