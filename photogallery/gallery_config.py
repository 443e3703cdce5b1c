"""
GalleryConfig - Output location and layout/quality options for a gallery.
"""

import os
from dataclasses import dataclass, asdict, replace
from typing import List

THEMES = ('light', 'dark')
INDEX_FILENAMES = ('index.html', 'index.htm')

# (minimum, maximum) for each numeric option
BOUNDS = {
    'columns': (1, 12),
    'thumbnail_size': (16, 2000),
    'full_size': (100, 10000),
    'quality': (1, 100),
}


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class GalleryConfig:
    """
    Gallery configuration.

    Attributes:
        output_path: Destination directory (created if absent)
        title: Gallery title shown in the page header
        columns: Thumbnails per grid row
        thumbnail_size: Maximum thumbnail dimension in pixels
        full_size: Maximum full-view dimension in pixels
        quality: JPEG quality (1-100)
        theme: 'light' or 'dark'
        lightbox: Open full images in an overlay instead of linking to them
        lazy_load: Let the browser defer offscreen thumbnails
        index_filename: 'index.html' or 'index.htm'
    """
    output_path: str = ''
    title: str = 'Photo Gallery'
    columns: int = 4
    thumbnail_size: int = 300
    full_size: int = 1600
    quality: int = 85
    theme: str = 'dark'
    lightbox: bool = True
    lazy_load: bool = True
    index_filename: str = 'index.html'

    @classmethod
    def from_env(cls) -> 'GalleryConfig':
        """Create configuration from GALLERY_* environment variables."""
        config = cls()
        env = os.environ

        if env.get('GALLERY_OUTPUT_PATH'):
            config.output_path = env['GALLERY_OUTPUT_PATH']
        if env.get('GALLERY_TITLE'):
            config.title = env['GALLERY_TITLE']
        if env.get('GALLERY_THEME'):
            config.theme = env['GALLERY_THEME'].lower()
        if env.get('GALLERY_INDEX_FILENAME'):
            config.index_filename = env['GALLERY_INDEX_FILENAME']
        if env.get('GALLERY_LIGHTBOX'):
            config.lightbox = _env_bool(env['GALLERY_LIGHTBOX'])
        if env.get('GALLERY_LAZY_LOAD'):
            config.lazy_load = _env_bool(env['GALLERY_LAZY_LOAD'])

        for name in BOUNDS:
            value = env.get(f'GALLERY_{name.upper()}')
            if value:
                setattr(config, name, int(value))

        return config

    def validate(self) -> List[str]:
        """Validate configuration, returning a list of errors."""
        errors = []

        if not self.output_path or not str(self.output_path).strip():
            errors.append("Output path is required")

        for name, (low, high) in BOUNDS.items():
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                errors.append(f"{name} must be an integer, got {value!r}")
            elif not low <= value <= high:
                errors.append(f"{name} must be between {low} and {high}, got {value}")

        if self.theme not in THEMES:
            errors.append(f"theme must be one of {', '.join(THEMES)}, got {self.theme!r}")
        if self.index_filename not in INDEX_FILENAMES:
            errors.append(
                f"index_filename must be one of {', '.join(INDEX_FILENAMES)}, "
                f"got {self.index_filename!r}"
            )

        return errors

    def clamped(self) -> 'GalleryConfig':
        """Return a copy with numeric options clamped into their bounds."""
        changes = {}
        for name, (low, high) in BOUNDS.items():
            changes[name] = max(low, min(high, int(getattr(self, name))))
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return asdict(self)
