"""
ProcessedImage - Record for a successfully optimized source image.
"""

from dataclasses import dataclass, asdict
from typing import Optional

from .asset_descriptor import AssetDescriptor


@dataclass(frozen=True)
class Rendition:
    """
    One derived raster file.

    Attributes:
        relative_path: Path relative to the gallery root, '/'-separated
        width: Pixel width after rotation and resizing
        height: Pixel height after rotation and resizing
        size_bytes: File size on disk
    """
    relative_path: str
    width: int
    height: int
    size_bytes: int = 0

    @property
    def long_edge(self) -> int:
        return max(self.width, self.height)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ProcessedImage:
    """
    Result of optimizing one AssetDescriptor.

    Attributes:
        source: The descriptor this image was produced from
        full: Full display rendition
        thumbnail: Thumbnail rendition
        index: Position in the gallery (equal to input order)
    """
    source: AssetDescriptor
    full: Rendition
    thumbnail: Rendition
    index: int

    @property
    def title(self) -> str:
        return self.source.title

    @property
    def description(self) -> str:
        return self.source.description

    @property
    def bytes_written(self) -> int:
        return self.full.size_bytes + self.thumbnail.size_bytes

    def to_dict(self) -> dict:
        """Convert to the dictionary embedded in the gallery page."""
        return {
            'index': self.index,
            'title': self.title,
            'description': self.description,
            'full': self.full.relative_path,
            'full_width': self.full.width,
            'full_height': self.full.height,
            'thumb': self.thumbnail.relative_path,
            'thumb_width': self.thumbnail.width,
            'thumb_height': self.thumbnail.height,
        }

    def format_status(self) -> str:
        """
        Format a human-readable status line.

        Returns:
            Status string like "IMG_001.jpg -> 1600x1067, thumb 300x200 (245.1 KB)"
        """
        return (
            f"{self.source.filename} -> {self.full.width}x{self.full.height}, "
            f"thumb {self.thumbnail.width}x{self.thumbnail.height} "
            f"({format_bytes(self.bytes_written)})"
        )


def format_bytes(bytes_val: Optional[float]) -> str:
    """Format bytes as human-readable string."""
    if bytes_val is None:
        return "unknown"
    for unit in ['B', 'KB', 'MB', 'GB']:
        if bytes_val < 1024:
            return f"{bytes_val:.1f} {unit}"
        bytes_val /= 1024
    return f"{bytes_val:.1f} TB"
