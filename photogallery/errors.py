"""
Exception hierarchy for gallery generation.
"""

from typing import List, Optional


class GalleryError(Exception):
    """Base class for all gallery generation errors."""


class InputError(GalleryError):
    """Invalid selection or configuration, detected before any file I/O."""


class ImageError(GalleryError):
    """
    Failure scoped to a single source image.
    
    Attributes:
        path: Source image the failure belongs to
    """
    
    def __init__(self, path: str, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path
        self.reason = message


class UnsupportedFormat(ImageError):
    """Source could not be decoded."""


class InvalidDimensions(ImageError):
    """Decoded image has zero size or could not be measured."""


class WriteFailure(ImageError):
    """A rendition could not be written."""


class BatchFailure(GalleryError):
    """The batch as a whole cannot continue (or produced nothing)."""


class RenderFailure(GalleryError):
    """
    An output file of the gallery could not be written.
    
    Attributes:
        filename: Name of the file that failed
    """
    
    def __init__(self, filename: str, message: str):
        super().__init__(f"Could not write {filename}: {message}")
        self.filename = filename


class GenerationCancelled(GalleryError):
    """
    Raised when a cancellation request stops the batch.
    
    Attributes:
        processed: ProcessedImage records completed before the stop
        attempted: Number of items attempted before the stop
    """
    
    def __init__(self, processed: Optional[List] = None, attempted: int = 0):
        super().__init__(f"Cancelled after {attempted} item(s)")
        self.processed = processed or []
        self.attempted = attempted
