"""
Ingestion of user-supplied image files.
"""
from .file_validator import FileValidator
from .image_ingest import ImageFile, ImageIngestAdapter

__all__ = ["FileValidator", "ImageFile", "ImageIngestAdapter"]
