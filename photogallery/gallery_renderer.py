"""
GalleryRenderer - Writes the static page, stylesheet, script and readme.
"""

import json
import logging
import os
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from bottle import SimpleTemplate

from . import __version__
from .gallery_config import GalleryConfig
from .errors import RenderFailure
from .processed_image import ProcessedImage
from .templates import INDEX_TEMPLATE, README_TEMPLATE, SCRIPT_TEMPLATE, STYLE_TEMPLATE

STYLE_FILENAME = 'style.css'
SCRIPT_FILENAME = 'script.js'
README_FILENAME = 'README.txt'

THEME_COLORS = {
    'dark': {
        'background': '#161616',
        'surface': '#222222',
        'text': '#eeeeee',
        'muted': '#9a9a9a',
        'accent': '#6cb4ff',
        'overlay': 'rgba(0, 0, 0, 0.92)',
    },
    'light': {
        'background': '#fafafa',
        'surface': '#ffffff',
        'text': '#222222',
        'muted': '#6b6b6b',
        'accent': '#0a66c2',
        'overlay': 'rgba(10, 10, 10, 0.9)',
    },
}


def output_filenames(config: GalleryConfig) -> List[str]:
    """Names of the top-level files a gallery consists of."""
    return [config.index_filename, STYLE_FILENAME, SCRIPT_FILENAME, README_FILENAME]


def embed_json(data) -> str:
    """Serialize data for a <script> block, escaping markup characters."""
    text = json.dumps(data, indent=1, ensure_ascii=False)
    return (
        text.replace('&', '\\u0026')
        .replace('<', '\\u003c')
        .replace('>', '\\u003e')
    )


class GalleryRenderer:
    """
    Generates the gallery's static files from processed images.

    Output depends only on the images and the configuration, except for
    the Generated: line in README.txt.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._index = SimpleTemplate(INDEX_TEMPLATE)
        self._style = SimpleTemplate(STYLE_TEMPLATE, noescape=True)
        self._script = SimpleTemplate(SCRIPT_TEMPLATE, noescape=True)
        self._readme = SimpleTemplate(README_TEMPLATE, noescape=True)

    def render(
        self,
        output_dir: str,
        images: Sequence[ProcessedImage],
        config: GalleryConfig,
        skipped: Sequence[Tuple[str, str]] = (),
        generated_at: Optional[str] = None
    ) -> List[str]:
        """
        Write all gallery files into output_dir.

        Args:
            output_dir: Gallery root directory
            images: Processed images in display order
            config: Gallery configuration
            skipped: (source path, reason) for images left out
            generated_at: Timestamp for the readme (defaults to now)

        Returns:
            Names of the files written

        Raises:
            RenderFailure: A file could not be written
        """
        contents = self.build(images, config, skipped, generated_at)

        written = []
        for filename, text in contents.items():
            self._write(output_dir, filename, text)
            written.append(filename)

        self.logger.info(f"Rendered {len(images)} images into {', '.join(written)}")
        return written

    def build(
        self,
        images: Sequence[ProcessedImage],
        config: GalleryConfig,
        skipped: Sequence[Tuple[str, str]] = (),
        generated_at: Optional[str] = None
    ) -> Dict[str, str]:
        """Render every file to a string, keyed by filename."""
        generated_at = generated_at or datetime.now().isoformat(timespec='seconds')
        common = {
            'version': __version__,
            'title': config.title,
            'images': list(images),
        }

        try:
            index = self._index.render(
                theme=config.theme,
                lightbox=config.lightbox,
                lazy_load=config.lazy_load,
                data_json=embed_json([image.to_dict() for image in images]),
                **common
            )
            style = self._style.render(
                colors=THEME_COLORS[config.theme],
                columns=config.columns,
                thumbnail_size=config.thumbnail_size,
                **common
            )
            script = self._script.render(lightbox=config.lightbox, **common)
            readme = self._readme.render(
                index_filename=config.index_filename,
                skipped=[(os.path.basename(path), reason) for path, reason in skipped],
                generated_at=generated_at,
                config_items=self._config_items(config),
                **common
            )
        except (KeyError, TypeError, ValueError) as e:
            raise RenderFailure(config.index_filename, f"template error ({e})") from e

        return {
            config.index_filename: index,
            STYLE_FILENAME: style,
            SCRIPT_FILENAME: script,
            README_FILENAME: readme,
        }

    @staticmethod
    def _config_items(config: GalleryConfig) -> List[Tuple[str, object]]:
        return [
            (key, value) for key, value in config.to_dict().items()
            if key != 'output_path'
        ]

    def _write(self, output_dir: str, filename: str, text: str) -> None:
        """Write a file via a temporary sibling so reruns replace it whole."""
        path = os.path.join(output_dir, filename)
        tmp_path = path + '.tmp'
        try:
            with open(tmp_path, 'w', encoding='utf-8', newline='\n') as f:
                f.write(text)
            os.replace(tmp_path, path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise RenderFailure(filename, str(e)) from e
        self.logger.debug(f"Wrote {path} ({len(text)} chars)")
