"""
ImageOptimizer - Produces the full and thumbnail renditions of one image.
"""

import logging
import os
import re
import tempfile
import unicodedata
from typing import Optional, Set, Tuple

import sh
from PIL import Image, ImageOps

from .asset_descriptor import AssetDescriptor
from .errors import InvalidDimensions, UnsupportedFormat, WriteFailure
from .gallery_config import GalleryConfig
from .processed_image import ProcessedImage, Rendition

IMAGES_DIRNAME = 'images'

# Clockwise degrees -> Pillow transpose (Pillow rotates counter-clockwise)
ROTATIONS = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}

DECODE_ERRORS = (OSError, SyntaxError, ValueError, Image.DecompressionBombError)


def sanitize_name(filename: str) -> str:
    """
    Derive a filesystem- and URL-safe base name from a source filename.

    'My Photo (1).JPG' -> 'my-photo-1'
    """
    stem = os.path.splitext(os.path.basename(filename))[0]
    stem = unicodedata.normalize('NFKD', stem).encode('ascii', 'ignore').decode('ascii')
    stem = re.sub(r'[^a-z0-9_-]+', '-', stem.lower()).strip('-_')
    return stem or 'image'


class RenditionNamer:
    """
    Assigns unique rendition base names within one batch.

    Names are handed out in call order, so the same ordered input always
    yields the same names.
    """

    def __init__(self):
        self._used: Set[str] = set()

    def assign(self, path: str) -> str:
        base = sanitize_name(path)
        name = base
        suffix = 1
        while name in self._used:
            suffix += 1
            name = f"{base}-{suffix}"
        self._used.add(name)
        return name


class ImageOptimizer:
    """
    Generates gallery renditions from source images using Pillow.

    PDF sources are rasterized (first page) with ImageMagick before
    being handed to Pillow.
    """

    def __init__(
        self,
        convert_command: str = 'convert',
        pdf_density: int = 150,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize optimizer.

        Args:
            convert_command: ImageMagick executable used for PDF sources
            pdf_density: DPI used when rasterizing PDF pages
            logger: Optional logger instance
        """
        self.convert_command = convert_command
        self.pdf_density = pdf_density
        self.logger = logger or logging.getLogger(__name__)

    def optimize(
        self,
        descriptor: AssetDescriptor,
        output_dir: str,
        config: GalleryConfig,
        base_name: Optional[str] = None,
        index: int = 0
    ) -> ProcessedImage:
        """
        Write the full and thumbnail renditions for one source image.

        Args:
            descriptor: Source image and its metadata
            output_dir: Gallery root; renditions go to its images/ folder
            config: Gallery configuration (sizes and quality)
            base_name: Unique base name for the renditions (derived from
                the source filename when omitted)
            index: Position of this image in the gallery

        Returns:
            ProcessedImage describing both renditions

        Raises:
            UnsupportedFormat: The source cannot be decoded
            InvalidDimensions: The decoded image has no measurable size
            WriteFailure: A rendition cannot be written
        """
        base_name = base_name or sanitize_name(descriptor.path)
        images_dir = os.path.join(output_dir, IMAGES_DIRNAME)

        img = self._load(descriptor)
        width, height = self._measure(img, descriptor)
        self.logger.debug(f"Loaded {descriptor.filename} ({width}x{height}, {img.mode})")

        transpose = ROTATIONS.get(descriptor.rotation_degrees)
        if transpose is not None:
            img = img.transpose(transpose)

        img = self._convert_color_mode(img)
        output_format, ext = self._get_output_format(descriptor.extension)

        full = self._write_rendition(
            img, config.full_size, config.quality, output_format,
            images_dir, f"{base_name}_full{ext}", descriptor
        )
        try:
            thumbnail = self._write_rendition(
                img, config.thumbnail_size, config.quality, output_format,
                images_dir, f"{base_name}_thumb{ext}", descriptor
            )
        except WriteFailure:
            # A skipped image leaves no renditions behind
            self._discard(os.path.join(output_dir, full.relative_path))
            raise

        return ProcessedImage(source=descriptor, full=full, thumbnail=thumbnail, index=index)

    def _load(self, descriptor: AssetDescriptor) -> Image.Image:
        """Decode the source, with EXIF orientation applied to the pixels."""
        if descriptor.extension == '.pdf':
            return self._rasterize_pdf(descriptor.path)

        try:
            with Image.open(descriptor.path) as src:
                src.load()
                try:
                    return ImageOps.exif_transpose(src)
                except DECODE_ERRORS as e:
                    self.logger.debug(f"Ignoring unreadable orientation in {descriptor.filename}: {e}")
                    return src.copy()
        except DECODE_ERRORS as e:
            raise UnsupportedFormat(descriptor.path, f"Cannot decode image ({e})") from e

    def _rasterize_pdf(self, path: str) -> Image.Image:
        """Render the first page of a PDF to an image via ImageMagick."""
        try:
            convert = sh.Command(self.convert_command)
        except sh.CommandNotFound as e:
            raise UnsupportedFormat(
                path, f"PDF support requires ImageMagick ('{self.convert_command}' not found)"
            ) from e

        tmp_out = tempfile.NamedTemporaryFile(delete=False, suffix='.png').name
        try:
            convert(
                '-density', str(self.pdf_density), f"{path}[0]",
                '-background', 'white', '-flatten', tmp_out
            )
            with Image.open(tmp_out) as src:
                src.load()
                return src.copy()
        except sh.ErrorReturnCode as e:
            raise UnsupportedFormat(path, f"Cannot rasterize PDF (exit code {e.exit_code})") from e
        except DECODE_ERRORS as e:
            raise UnsupportedFormat(path, f"Cannot decode rasterized PDF ({e})") from e
        finally:
            if os.path.exists(tmp_out):
                os.remove(tmp_out)

    @staticmethod
    def _measure(img: Image.Image, descriptor: AssetDescriptor) -> Tuple[int, int]:
        try:
            width, height = img.size
        except (TypeError, ValueError) as e:
            raise InvalidDimensions(descriptor.path, "Cannot measure image") from e
        if width <= 0 or height <= 0:
            raise InvalidDimensions(descriptor.path, f"Image has no pixels ({width}x{height})")
        return width, height

    def _write_rendition(
        self,
        img: Image.Image,
        max_size: int,
        quality: int,
        output_format: str,
        images_dir: str,
        filename: str,
        descriptor: AssetDescriptor
    ) -> Rendition:
        """Downscale a copy of img to fit max_size and save it."""
        rendition = img.copy()
        # thumbnail() keeps the aspect ratio and never enlarges
        rendition.thumbnail((max_size, max_size), Image.Resampling.LANCZOS)

        path = os.path.join(images_dir, filename)
        try:
            if output_format == 'JPEG':
                rendition.save(path, format='JPEG', quality=quality, optimize=True)
            elif output_format == 'PNG':
                rendition.save(path, format='PNG', optimize=True)
            else:
                rendition.save(path, format=output_format)
            size_bytes = os.path.getsize(path)
        except OSError as e:
            self._discard(path)
            raise WriteFailure(descriptor.path, f"Cannot write {filename} ({e})") from e

        width, height = rendition.size
        return Rendition(
            relative_path=f"{IMAGES_DIRNAME}/{filename}",
            width=width,
            height=height,
            size_bytes=size_bytes,
        )

    def _discard(self, path: str) -> None:
        """Remove a partially written rendition."""
        try:
            if os.path.exists(path):
                os.remove(path)
        except OSError as e:
            self.logger.debug(f"Could not remove partial file {path}: {e}")

    def _convert_color_mode(self, img: Image.Image) -> Image.Image:
        """Convert image to appropriate color mode for output."""
        if img.mode in ('RGBA', 'LA'):
            background = Image.new('RGB', img.size, (255, 255, 255))
            if img.mode == 'LA':
                img = img.convert('RGBA')
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode == 'P':
            img = img.convert('RGBA')
            background = Image.new('RGB', img.size, (255, 255, 255))
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode != 'RGB':
            return img.convert('RGB')
        return img

    def _get_output_format(self, extension: str) -> Tuple[str, str]:
        """Determine output format and file extension from the source extension."""
        ext_lower = extension.lower()

        if ext_lower == '.png':
            return 'PNG', '.png'
        elif ext_lower == '.gif':
            return 'GIF', '.gif'
        else:
            return 'JPEG', '.jpg'
