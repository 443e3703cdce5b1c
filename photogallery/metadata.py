"""
Metadata resolvers - title, description and rotation for source images.

The pipeline only depends on MetadataResolver.resolve(); the resolvers
here read embedded XMP/EXIF with Pillow, or a JSON sidecar next to the
image.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Iterable, List, Optional

from PIL import Image

from .asset_descriptor import AssetDescriptor, is_supported_image, normalize_rotation

EXIF_IMAGE_DESCRIPTION = 0x010E
EXIF_XP_TITLE = 0x9C9B
EXIF_XP_COMMENT = 0x9C9C


@dataclass(frozen=True)
class ResolvedMetadata:
    title: str = ''
    description: str = ''
    rotation_degrees: int = 0


class MetadataResolver:
    """Base resolver: no metadata."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def resolve(self, path: str) -> ResolvedMetadata:
        return ResolvedMetadata()


def _xmp_text(value) -> str:
    """Pull the first text out of an XMP value (plain, rdf:Alt, rdf:Seq or rdf:Bag)."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list):
        for item in value:
            text = _xmp_text(item)
            if text:
                return text
        return ''
    if isinstance(value, dict):
        if 'text' in value:
            return _xmp_text(value['text'])
        for key in ('Alt', 'Seq', 'Bag', 'li'):
            if key in value:
                return _xmp_text(value[key])
    return ''


def _xp_text(value) -> str:
    """Decode a Windows XP* EXIF tag (UTF-16LE bytes)."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (bytes, tuple, list)):
        return bytes(value).decode('utf-16-le', errors='ignore').rstrip('\x00').strip()
    return ''


class EmbeddedMetadataResolver(MetadataResolver):
    """
    Reads dc:title / dc:description from embedded XMP, falling back to
    EXIF ImageDescription and the Windows XPTitle/XPComment tags.

    Rotation is always 0 here: EXIF orientation is applied to the pixels
    by the optimizer.
    """

    def resolve(self, path: str) -> ResolvedMetadata:
        try:
            with Image.open(path) as img:
                title, description = self._from_xmp(img)
                if not title or not description:
                    exif_title, exif_description = self._from_exif(img)
                    title = title or exif_title
                    description = description or exif_description
        except (OSError, SyntaxError, ValueError) as e:
            self.logger.debug(f"No embedded metadata for {path}: {e}")
            return ResolvedMetadata()

        return ResolvedMetadata(title=title, description=description)

    def _from_xmp(self, img: Image.Image):
        getxmp = getattr(img, 'getxmp', None)
        if getxmp is None:
            return '', ''
        xmp = getxmp() or {}

        rdf = xmp.get('xmpmeta', {}).get('RDF', {})
        descriptions = rdf.get('Description', []) if isinstance(rdf, dict) else []
        if isinstance(descriptions, dict):
            descriptions = [descriptions]

        title = description = ''
        for entry in descriptions:
            if not isinstance(entry, dict):
                continue
            title = title or _xmp_text(entry.get('title', ''))
            description = description or _xmp_text(entry.get('description', ''))
        return title, description

    def _from_exif(self, img: Image.Image):
        exif = img.getexif()
        title = _xp_text(exif.get(EXIF_XP_TITLE, ''))
        description = exif.get(EXIF_IMAGE_DESCRIPTION, '')
        if isinstance(description, bytes):
            description = description.decode('utf-8', errors='ignore')
        description = description.strip() or _xp_text(exif.get(EXIF_XP_COMMENT, ''))
        return title, description


class SidecarMetadataResolver(MetadataResolver):
    """
    Reads metadata from a JSON sidecar next to the image.

    Sidecar example (IMG_0001.json next to IMG_0001.jpg):
    {
      "title": "Harbour at dawn",
      "description": "Taken from the north pier.",
      "rotation": 90
    }

    Fields the sidecar doesn't supply come from the fallback resolver.
    """

    def __init__(
        self,
        fallback: Optional[MetadataResolver] = None,
        logger: Optional[logging.Logger] = None
    ):
        super().__init__(logger)
        self.fallback = fallback or MetadataResolver(logger)

    @staticmethod
    def sidecar_path(path: str) -> str:
        return os.path.splitext(path)[0] + '.json'

    def resolve(self, path: str) -> ResolvedMetadata:
        base = self.fallback.resolve(path)
        sidecar = self._load(self.sidecar_path(path))
        if not sidecar:
            return base

        rotation = base.rotation_degrees
        if 'rotation' in sidecar:
            try:
                rotation = normalize_rotation(sidecar['rotation'])
            except (TypeError, ValueError):
                self.logger.warning(f"Ignoring invalid rotation {sidecar['rotation']!r} for {path}")

        return ResolvedMetadata(
            title=str(sidecar.get('title', base.title) or ''),
            description=str(sidecar.get('description', base.description) or ''),
            rotation_degrees=rotation,
        )

    def _load(self, sidecar: str) -> dict:
        if not os.path.isfile(sidecar):
            return {}
        try:
            with open(sidecar, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            self.logger.warning(f"Ignoring unreadable sidecar {sidecar}: {e}")
            return {}
        if not isinstance(data, dict):
            self.logger.warning(f"Ignoring sidecar {sidecar}: expected a JSON object")
            return {}
        return data


def build_descriptors(
    paths: Iterable[str],
    resolver: Optional[MetadataResolver] = None,
    logger: Optional[logging.Logger] = None
) -> List[AssetDescriptor]:
    """
    Turn an ordered selection of paths into AssetDescriptors.

    Unsupported extensions and missing files are dropped with a warning;
    the order of the rest is kept.
    """
    logger = logger or logging.getLogger(__name__)
    resolver = resolver or MetadataResolver(logger)

    descriptors = []
    for path in paths:
        path = os.path.abspath(path)
        if not is_supported_image(path):
            logger.warning(f"Skipping unsupported file: {path}")
            continue
        if not os.path.isfile(path):
            logger.warning(f"Skipping missing file: {path}")
            continue

        metadata = resolver.resolve(path)
        descriptors.append(AssetDescriptor.from_path(path, metadata))

    return descriptors
