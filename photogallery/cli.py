"""
Command Line Interface for photo gallery generation.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .batch_processor import BatchProcessor
from .batch_progress import BatchProgress
from .gallery_config import GalleryConfig, INDEX_FILENAMES, THEMES
from .image_optimizer import ImageOptimizer
from .metadata import EmbeddedMetadataResolver, SidecarMetadataResolver, build_descriptors
from .orchestrator import GalleryOrchestrator, NO_FILES_MESSAGE
from .reporter import Reporter
from .settings_store import SettingsStore


def setup_logging(verbose: bool) -> logging.Logger:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logging.getLogger('PIL').setLevel(logging.WARNING)
    logging.getLogger('sh').setLevel(logging.WARNING)

    return logging.getLogger('photogallery')


def get_gallery_config(args: argparse.Namespace) -> GalleryConfig:
    """Get gallery configuration from environment and CLI overrides."""
    config = GalleryConfig.from_env()

    if args.output:
        config.output_path = args.output
    if args.title:
        config.title = args.title
    if args.columns is not None:
        config.columns = args.columns
    if args.thumbnail_size is not None:
        config.thumbnail_size = args.thumbnail_size
    if args.full_size is not None:
        config.full_size = args.full_size
    if args.quality is not None:
        config.quality = args.quality
    if args.theme:
        config.theme = args.theme
    if args.index_filename:
        config.index_filename = args.index_filename
    if args.no_lightbox:
        config.lightbox = False
    if args.no_lazy_load:
        config.lazy_load = False

    if args.clamp:
        config = config.clamped()

    return config


def show_welcome_once(store: SettingsStore, reporter: Reporter, logger: logging.Logger) -> None:
    """Print the welcome message on the very first run."""
    try:
        if store.is_initialized():
            return
        store.set_initialized()
    except OSError as e:
        logger.debug(f"Settings store unavailable ({e}), skipping welcome message")
        return
    reporter.report_welcome()


def cmd_generate(args: argparse.Namespace) -> int:
    """Execute generate command."""
    logger = setup_logging(args.verbose)
    reporter = Reporter()

    if not args.quiet:
        show_welcome_once(SettingsStore(), reporter, logger)

    if not args.files:
        logger.error(NO_FILES_MESSAGE)
        return 1

    try:
        config = get_gallery_config(args)
    except ValueError as e:
        logger.error(f"Invalid GALLERY_* environment setting: {e}")
        return 1

    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return 1

    resolver = EmbeddedMetadataResolver(logger)
    if not args.no_sidecar:
        resolver = SidecarMetadataResolver(fallback=resolver, logger=logger)

    descriptors = build_descriptors(args.files, resolver, logger)
    if not descriptors:
        logger.error(NO_FILES_MESSAGE)
        return 1

    logger.info(f"Output: {config.output_path}")
    logger.info(f"Images: {len(descriptors)} selected")
    logger.info(f"Full size: {config.full_size}px, thumbnails: {config.thumbnail_size}px, quality: {config.quality}")

    progress = None
    if not args.quiet:
        progress = BatchProgress(show_files=args.show_files, logger=logger)

    processor = BatchProcessor(
        optimizer=ImageOptimizer(logger=logger),
        max_workers=args.workers,
        progress=progress,
        logger=logger
    )
    orchestrator = GalleryOrchestrator(processor=processor, logger=logger)

    try:
        outcome = orchestrator.generate(descriptors, config, on_progress=progress)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    if not args.quiet:
        print()
        reporter.report_outcome(outcome)

    if outcome.cancelled:
        return 130
    return 0 if outcome.success else 1


def cmd_welcome(args: argparse.Namespace) -> int:
    """Print the welcome message and remember that it was shown."""
    logger = setup_logging(args.verbose)
    reporter = Reporter()
    reporter.report_welcome()
    try:
        SettingsStore().set_initialized()
    except OSError as e:
        logger.warning(f"Could not save settings: {e}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='photogallery',
        description='Generate a self-contained static photo gallery from image files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
  python -m photogallery generate photos/*.jpg --output /tmp/gallery1 --title "Summer"

Supported formats: .jpg .jpeg .png .gif .bmp .tiff .tif .psd .pdf
(PDF requires ImageMagick's 'convert'.)

Metadata:
  Titles and descriptions come from embedded XMP/EXIF, or from a JSON
  sidecar next to each image (IMG_0001.json) with title/description/rotation.
"""
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # Generate command
    gen_parser = subparsers.add_parser('generate', help='Generate a gallery from image files')
    gen_parser.add_argument('files', nargs='*', metavar='FILE', help='Image files, in gallery order')
    gen_parser.add_argument('-o', '--output', help='Output folder (or GALLERY_OUTPUT_PATH)')
    gen_parser.add_argument('-t', '--title', help='Gallery title')
    gen_parser.add_argument('--columns', type=int, help='Thumbnails per row (default: 4)')
    gen_parser.add_argument('--thumbnail-size', type=int, help='Thumbnail size in pixels (default: 300)')
    gen_parser.add_argument('--full-size', type=int, help='Full image size in pixels (default: 1600)')
    gen_parser.add_argument('--quality', type=int, help='JPEG quality 1-100 (default: 85)')
    gen_parser.add_argument('--theme', choices=THEMES, help='Color theme (default: dark)')
    gen_parser.add_argument('--index-filename', choices=INDEX_FILENAMES, help='Name of the gallery page')
    gen_parser.add_argument('--no-lightbox', action='store_true',
                            help='Link thumbnails straight to the full image')
    gen_parser.add_argument('--no-lazy-load', action='store_true', help='Load all thumbnails immediately')
    gen_parser.add_argument('--clamp', action='store_true',
                            help='Clamp out-of-range numeric options instead of rejecting them')
    gen_parser.add_argument('--no-sidecar', action='store_true', help='Ignore JSON sidecar metadata')
    gen_parser.add_argument('-w', '--workers', type=int, default=1,
                            help='Images to process in parallel (default: 1)')
    gen_parser.add_argument('-q', '--quiet', action='store_true', help='Suppress progress output')
    gen_parser.add_argument('--show-files', action='store_true',
                            help='Print each file as processed with result')
    gen_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    # Welcome command
    welcome_parser = subparsers.add_parser('welcome', help='Show usage instructions')
    welcome_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'generate':
        return cmd_generate(parsed_args)
    elif parsed_args.command == 'welcome':
        return cmd_welcome(parsed_args)

    return 1
