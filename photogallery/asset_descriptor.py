"""
AssetDescriptor - Immutable record for one source image and its metadata.
"""

import os
from dataclasses import dataclass
from typing import Iterable, List, Optional

SUPPORTED_EXTENSIONS = (
    '.jpg', '.jpeg', '.png', '.gif', '.bmp', '.tiff', '.tif', '.psd', '.pdf',
)

VALID_ROTATIONS = (0, 90, 180, 270)


def is_supported_image(path: str) -> bool:
    """Check whether a path has an extension in the supported allow-list."""
    ext = os.path.splitext(path)[1].lower()
    return ext in SUPPORTED_EXTENSIONS


@dataclass(frozen=True)
class AssetDescriptor:
    """
    One source image plus the metadata resolved for it.
    
    Attributes:
        path: Absolute path of the source image
        title: Title from metadata (may be empty)
        description: Description from metadata (may be empty)
        rotation_degrees: Clockwise rotation to apply (0, 90, 180 or 270)
    """
    path: str
    title: str = ''
    description: str = ''
    rotation_degrees: int = 0
    
    def __post_init__(self):
        if self.rotation_degrees not in VALID_ROTATIONS:
            raise ValueError(
                f"rotation_degrees must be one of {VALID_ROTATIONS}, "
                f"got {self.rotation_degrees!r}"
            )
        object.__setattr__(self, 'path', os.path.abspath(self.path))
    
    @property
    def filename(self) -> str:
        """Base filename of the source."""
        return os.path.basename(self.path)
    
    @property
    def extension(self) -> str:
        """Lower-cased extension including the dot."""
        return os.path.splitext(self.path)[1].lower()
    
    @property
    def is_supported(self) -> bool:
        return is_supported_image(self.path)
    
    @classmethod
    def from_path(cls, path: str, metadata=None) -> 'AssetDescriptor':
        """Create from a path and an optional ResolvedMetadata."""
        if metadata is None:
            return cls(path=path)
        return cls(
            path=path,
            title=metadata.title,
            description=metadata.description,
            rotation_degrees=metadata.rotation_degrees,
        )


def filter_supported(descriptors: Iterable[AssetDescriptor]) -> List[AssetDescriptor]:
    """Keep descriptors with a supported extension that exist on disk, in order."""
    return [
        d for d in descriptors
        if d.is_supported and os.path.isfile(d.path)
    ]


def normalize_rotation(value: Optional[object]) -> int:
    """
    Coerce a rotation value to one of 0/90/180/270.
    
    Negative and >= 360 values wrap; values that are not right angles
    round to the nearest one.
    """
    if value is None or value == '':
        return 0
    degrees = int(round(float(value) / 90.0)) * 90
    return degrees % 360
