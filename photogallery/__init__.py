"""
Photo Gallery Generator

Turns a selection of image files into a self-contained static gallery:
    1. Optimize: write a full-size and a thumbnail rendition of every image
    2. Render: write index.html, style.css, script.js and README.txt

The output folder works offline in any web browser.
"""

__version__ = "1.0.0"

from .errors import (
    GalleryError,
    InputError,
    ImageError,
    UnsupportedFormat,
    InvalidDimensions,
    WriteFailure,
    BatchFailure,
    RenderFailure,
    GenerationCancelled,
)
from .asset_descriptor import AssetDescriptor, SUPPORTED_EXTENSIONS, filter_supported
from .gallery_config import GalleryConfig
from .processed_image import ProcessedImage, Rendition
from .metadata import (
    MetadataResolver,
    EmbeddedMetadataResolver,
    SidecarMetadataResolver,
    ResolvedMetadata,
    build_descriptors,
)
from .image_optimizer import ImageOptimizer, RenditionNamer
from .batch_stats import BatchStats
from .batch_progress import BatchProgress
from .batch_processor import BatchProcessor, CancellationToken
from .gallery_renderer import GalleryRenderer
from .orchestrator import GalleryOrchestrator, GenerationOutcome
from .reporter import Reporter
from .settings_store import SettingsStore

__all__ = [
    "GalleryError",
    "InputError",
    "ImageError",
    "UnsupportedFormat",
    "InvalidDimensions",
    "WriteFailure",
    "BatchFailure",
    "RenderFailure",
    "GenerationCancelled",
    "AssetDescriptor",
    "SUPPORTED_EXTENSIONS",
    "filter_supported",
    "GalleryConfig",
    "ProcessedImage",
    "Rendition",
    "MetadataResolver",
    "EmbeddedMetadataResolver",
    "SidecarMetadataResolver",
    "ResolvedMetadata",
    "build_descriptors",
    "ImageOptimizer",
    "RenditionNamer",
    "BatchStats",
    "BatchProgress",
    "BatchProcessor",
    "CancellationToken",
    "GalleryRenderer",
    "GalleryOrchestrator",
    "GenerationOutcome",
    "Reporter",
    "SettingsStore",
]
