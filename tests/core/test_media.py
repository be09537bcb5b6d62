"""Tests for image payload validation."""

import base64

import pytest

from visual_rag.core.exceptions import ValidationError
from visual_rag.core.media import MAX_IMAGE_BYTES, decode_image, normalize_media_type


class TestDecodeImage:
    """Test suite for decode_image()."""

    def test_decodes_plain_and_data_url_payloads(self, png_base64: str, png_bytes: bytes) -> None:
        assert decode_image(png_base64, "image/png") == (png_bytes, "image/png")
        assert decode_image(f"data:image/png;base64,{png_base64}", "image/png")[0] == png_bytes

    def test_normalizes_media_type(self, png_base64: str) -> None:
        assert decode_image(png_base64, "Image/JPG; charset=binary")[1] == "image/jpg"

    @pytest.mark.parametrize("payload", ["", "   ", None])
    def test_empty_payload(self, payload) -> None:
        with pytest.raises(ValidationError, match="required"):
            decode_image(payload, "image/png")

    def test_unsupported_type(self, png_base64: str) -> None:
        with pytest.raises(ValidationError, match="Unsupported image type"):
            decode_image(png_base64, "image/gif")

    def test_invalid_base64(self) -> None:
        with pytest.raises(ValidationError, match="base64"):
            decode_image("not base64!!", "image/png")

    def test_oversized_image(self) -> None:
        payload = base64.b64encode(b"\x00" * (MAX_IMAGE_BYTES + 1)).decode()

        with pytest.raises(ValidationError, match="10MB"):
            decode_image(payload, "image/png")


def test_normalize_media_type_handles_none() -> None:
    assert normalize_media_type(None) == ""
