"""
Upload validation for images.

Pure checks on in-memory bytes; no file-system access.
"""
import io
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError


class FileValidator:
    """
    Validates uploaded image content before it becomes an image handle.
    """

    MAX_FILE_SIZE = 10 * 1024 * 1024
    MAX_DIMENSION = 10000

    @staticmethod
    def validate_media_type(media_type: Optional[str]) -> Tuple[bool, Optional[str]]:
        """
        Check the declared media type is an image type.

        :param media_type: Declared MIME type, e.g. "image/png"
        :return: Tuple of (is_valid, error_message)
        """
        if not media_type or not media_type.lower().startswith("image/"):
            return False, f"File type '{media_type or 'unknown'}' is not an image"
        return True, None

    @staticmethod
    def validate_image_bytes(
        data: bytes,
        media_type: Optional[str],
        max_size: int = MAX_FILE_SIZE,
    ) -> Tuple[bool, Optional[str]]:
        """
        Validate image content.

        :param data: Raw file content
        :param media_type: Declared MIME type
        :param max_size: Maximum accepted size in bytes
        :return: Tuple of (is_valid, error_message)
        """
        is_valid, error = FileValidator.validate_media_type(media_type)
        if not is_valid:
            return False, error

        if not data:
            return False, "File is empty"

        if len(data) > max_size:
            return False, f"File size {len(data)} bytes exceeds maximum {max_size} bytes"

        try:
            with Image.open(io.BytesIO(data)) as img:
                img.verify()

            with Image.open(io.BytesIO(data)) as img:
                if img.width > FileValidator.MAX_DIMENSION or img.height > FileValidator.MAX_DIMENSION:
                    return False, f"Image dimensions too large (max {FileValidator.MAX_DIMENSION}x{FileValidator.MAX_DIMENSION})"

                if img.width == 0 or img.height == 0:
                    return False, "Image has invalid dimensions"

        except UnidentifiedImageError:
            return False, "File is not a valid image"
        except Image.DecompressionBombError as e:
            return False, f"Image dimensions too large: {str(e)}"
        except (OSError, SyntaxError, ValueError) as e:
            return False, f"Image validation failed: {str(e)}"

        return True, None
