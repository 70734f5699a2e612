"""
Image ingestion: uploaded file -> renderable in-memory image handle.

The handle is a base64 data URL, which the rendering layer can use directly
as an image source.
"""
import asyncio
import base64
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from ..exceptions import UnreadableFileError
from .file_validator import FileValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageFile:
    """A user-supplied file: name, declared media type and content."""
    filename: str
    media_type: Optional[str]
    data: bytes

    @classmethod
    def from_path(cls, path: str) -> "ImageFile":
        """
        Read a file from disk, guessing its media type from the extension.

        :raises: UnreadableFileError if the file cannot be read
        """
        file_path = Path(path)
        try:
            data = file_path.read_bytes()
        except OSError as e:
            raise UnreadableFileError(f"Cannot read file '{path}': {e}") from e
        media_type, _ = mimetypes.guess_type(file_path.name)
        return cls(filename=file_path.name, media_type=media_type, data=data)


class ImageIngestAdapter:
    """
    Converts uploaded files into image handles.

    Both the picker and the drop path consider only the first file and apply
    the same image media-type check.
    """

    def __init__(self, max_image_bytes: int = FileValidator.MAX_FILE_SIZE):
        self.max_image_bytes = max_image_bytes

    def ingest(self, image_file: ImageFile) -> str:
        """
        Validate a file and produce its data URL.

        :param image_file: File to ingest
        :return: data:<media_type>;base64,<content>
        :raises: UnreadableFileError if the file is not a usable image
        """
        is_valid, error = FileValidator.validate_image_bytes(
            image_file.data,
            image_file.media_type,
            max_size=self.max_image_bytes,
        )
        if not is_valid:
            logger.warning(f"Rejected upload '{image_file.filename}': {error}")
            raise UnreadableFileError(error)

        encoded = base64.b64encode(image_file.data).decode("ascii")
        logger.info(f"Ingested '{image_file.filename}' ({len(image_file.data)} bytes, {image_file.media_type})")
        return f"data:{image_file.media_type};base64,{encoded}"

    def ingest_selection(self, files: Sequence[ImageFile]) -> Optional[str]:
        """Picker path. Returns None for an empty selection."""
        first = _first_file(files)
        return self.ingest(first) if first is not None else None

    def ingest_drop(self, files: Sequence[ImageFile]) -> Optional[str]:
        """Drop path. Same policy as the picker."""
        first = _first_file(files)
        return self.ingest(first) if first is not None else None

    async def aingest(self, image_file: ImageFile) -> str:
        """Run ingest() off the event loop."""
        return await asyncio.to_thread(self.ingest, image_file)

    async def aingest_selection(self, files: Sequence[ImageFile]) -> Optional[str]:
        first = _first_file(files)
        return await self.aingest(first) if first is not None else None

    async def aingest_drop(self, files: Sequence[ImageFile]) -> Optional[str]:
        first = _first_file(files)
        return await self.aingest(first) if first is not None else None


def _first_file(files: Sequence[ImageFile]) -> Optional[ImageFile]:
    if not files:
        return None
    if len(files) > 1:
        logger.debug(f"{len(files)} files supplied, using only '{files[0].filename}'")
    return files[0]
