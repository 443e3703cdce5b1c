"""
GalleryOrchestrator - Runs a complete gallery generation.
"""

import logging
import os
import threading
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .asset_descriptor import AssetDescriptor
from .batch_processor import BatchProcessor, CancellationToken, ProgressCallback
from .errors import GalleryError, GenerationCancelled, InputError
from .gallery_config import GalleryConfig
from .gallery_renderer import GalleryRenderer, output_filenames
from .image_optimizer import IMAGES_DIRNAME

SUCCESS_MESSAGE = "Successfully completed Photo Gallery generation"
FAILURE_MESSAGE = "Failed Photo Gallery generation"
CANCELLED_MESSAGE = "Photo Gallery generation cancelled"
NO_FILES_MESSAGE = "No files selected"

_run_locks: Dict[str, threading.Lock] = {}
_run_locks_guard = threading.Lock()


def _lock_for(output_path: str) -> threading.Lock:
    """One lock per resolved output directory."""
    key = os.path.realpath(output_path)
    with _run_locks_guard:
        if key not in _run_locks:
            _run_locks[key] = threading.Lock()
        return _run_locks[key]


@dataclass
class GenerationOutcome:
    """
    Result of one generate() call.

    Truthy when a usable gallery was produced.

    Attributes:
        success: A usable gallery was produced
        message: Single user-facing message
        output_path: Gallery root
        total: Number of descriptors given
        processed: Number of images in the gallery
        skipped: (source path, reason) per image left out
        files_created: Top-level gallery files found after rendering
        missing_files: Expected files that were not found
        cancelled: The run was stopped by a cancellation request
        elapsed_seconds: Wall time of the run
    """
    success: bool
    message: str
    output_path: str = ''
    total: int = 0
    processed: int = 0
    skipped: List[Tuple[str, str]] = field(default_factory=list)
    files_created: List[str] = field(default_factory=list)
    missing_files: List[str] = field(default_factory=list)
    cancelled: bool = False
    elapsed_seconds: float = 0.0

    def __bool__(self) -> bool:
        return self.success

    def summary(self) -> str:
        """Human-readable completion message."""
        if not self.success:
            return self.message

        lines = [
            "Photo gallery created successfully!",
            "",
            f"Location: {self.output_path}",
            f"Images: {self.processed}",
        ]
        if self.skipped:
            lines.append(f"Skipped: {len(self.skipped)} (see README.txt)")
        index = self.files_created[0] if self.files_created else 'index.html'
        lines.append("")
        lines.append(f"Open {index} in your web browser to view the gallery.")
        return "\n".join(lines)


class GalleryOrchestrator:
    """
    Top-level coordinator: validate, optimize, render, verify.

    generate() never raises for pipeline errors; every failure is
    returned as an unsuccessful GenerationOutcome.
    """

    def __init__(
        self,
        processor: Optional[BatchProcessor] = None,
        renderer: Optional[GalleryRenderer] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.processor = processor or BatchProcessor(logger=self.logger)
        self.renderer = renderer or GalleryRenderer(logger=self.logger)

    def generate(
        self,
        descriptors: Sequence[AssetDescriptor],
        config: GalleryConfig,
        on_progress: Optional[ProgressCallback] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> GenerationOutcome:
        """
        Produce a gallery from the given images.

        Args:
            descriptors: Source images in display order
            config: Gallery configuration
            on_progress: Called as (current, total, message): once per
                attempted image with current rising 1..total, then once more
                with (total, total, "Generating HTML files...") before the
                page is rendered
            cancel_token: Optional cooperative cancellation flag

        Returns:
            GenerationOutcome (truthy on success)
        """
        start = time.time()
        descriptors = list(descriptors)
        outcome = GenerationOutcome(
            success=False,
            message=FAILURE_MESSAGE,
            output_path=config.output_path,
            total=len(descriptors),
        )

        try:
            self._validate(descriptors, config)
        except InputError as e:
            self.logger.error(f"Invalid input: {e}")
            outcome.message = str(e)
            return outcome

        output_path = os.path.abspath(config.output_path)
        outcome.output_path = output_path

        with _lock_for(output_path):
            try:
                self._run(descriptors, config, output_path, outcome, on_progress, cancel_token)
            except GenerationCancelled as e:
                outcome.cancelled = True
                outcome.processed = len(e.processed)
                outcome.skipped = list(self.processor.stats.skipped)
                outcome.message = f"{CANCELLED_MESSAGE} after {e.attempted} of {len(descriptors)} images"
                self.logger.warning(outcome.message)
            except GalleryError as e:
                outcome.message = f"Gallery generation failed: {e}"
                self.logger.error(outcome.message)
            except Exception as e:
                outcome.message = f"Gallery generation failed: {e}"
                self.logger.exception(outcome.message)

        outcome.elapsed_seconds = time.time() - start
        return outcome

    def _validate(self, descriptors: List[AssetDescriptor], config: GalleryConfig) -> None:
        """Check inputs before anything touches the filesystem."""
        if not descriptors:
            raise InputError(NO_FILES_MESSAGE)

        errors = config.validate()
        if errors:
            raise InputError("Invalid configuration: " + "; ".join(errors))

        output_path = os.path.abspath(config.output_path)
        if os.path.exists(output_path):
            if not os.path.isdir(output_path):
                raise InputError(f"Output path is not a folder: {output_path}")
            if not os.access(output_path, os.W_OK):
                raise InputError(f"Output folder is not writable: {output_path}")
        else:
            parent = self._existing_parent(output_path)
            if not os.access(parent, os.W_OK):
                raise InputError(f"Cannot create output folder under {parent}")

    @staticmethod
    def _existing_parent(path: str) -> str:
        parent = os.path.dirname(path)
        while parent and not os.path.exists(parent):
            next_parent = os.path.dirname(parent)
            if next_parent == parent:
                break
            parent = next_parent
        return parent

    def _run(
        self,
        descriptors: List[AssetDescriptor],
        config: GalleryConfig,
        output_path: str,
        outcome: GenerationOutcome,
        on_progress: Optional[ProgressCallback],
        cancel_token: Optional[CancellationToken]
    ) -> None:
        images_path = os.path.join(output_path, IMAGES_DIRNAME)
        try:
            os.makedirs(images_path, exist_ok=True)
        except OSError as e:
            raise GalleryError(f"Cannot create output folder {output_path}: {e}") from e

        self.logger.info(f"Starting image processing for {len(descriptors)} files")
        processed = self.processor.run(
            descriptors, output_path, config,
            on_progress=on_progress, cancel_token=cancel_token
        )
        outcome.processed = len(processed)
        outcome.skipped = list(self.processor.stats.skipped)
        self.logger.info(f"Image processing completed. Processed {len(processed)} images")

        if on_progress:
            on_progress(len(descriptors), len(descriptors), "Generating HTML files...")
        self.renderer.render(output_path, processed, config, skipped=outcome.skipped)

        outcome.files_created, outcome.missing_files = self.verify(output_path, config)
        self.logger.info(f"Files created: {', '.join(outcome.files_created)}")

        if outcome.missing_files:
            raise GalleryError(
                f"Expected files missing after rendering: {', '.join(outcome.missing_files)}"
            )

        outcome.success = True
        outcome.message = SUCCESS_MESSAGE
        if outcome.skipped:
            self.logger.warning(f"{len(outcome.skipped)} of {len(descriptors)} images were skipped")

    def verify(self, output_path: str, config: GalleryConfig) -> Tuple[List[str], List[str]]:
        """Return (present, missing) expected top-level files."""
        created, missing = [], []
        for filename in output_filenames(config):
            if os.path.isfile(os.path.join(output_path, filename)):
                created.append(filename)
            else:
                missing.append(filename)
        return created, missing
