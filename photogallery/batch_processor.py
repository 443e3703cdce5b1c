"""
BatchProcessor - Runs the ImageOptimizer over an ordered batch of images.
"""

import logging
import os
import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .asset_descriptor import AssetDescriptor
from .batch_progress import BatchProgress
from .batch_stats import BatchStats
from .errors import BatchFailure, GenerationCancelled, ImageError
from .gallery_config import GalleryConfig
from .image_optimizer import IMAGES_DIRNAME, ImageOptimizer, RenditionNamer
from .processed_image import ProcessedImage

ProgressCallback = Callable[[int, int, str], None]

# (index, descriptor, base name)
Job = Tuple[int, AssetDescriptor, str]


class CancellationToken:
    """Cooperative cancellation flag, safe to set from another thread."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class BatchProcessor:
    """
    Optimizes an ordered list of descriptors, skipping the ones that fail.

    Items are processed sequentially unless max_workers > 1, in which case
    a bounded thread pool is used. Either way, results keep input order and
    the progress callback is invoked from the calling thread once per
    attempted item.
    """

    def __init__(
        self,
        optimizer: Optional[ImageOptimizer] = None,
        max_workers: int = 1,
        progress: Optional[BatchProgress] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize batch processor.

        Args:
            optimizer: Image optimizer instance
            max_workers: Number of worker threads (1 = sequential)
            progress: Optional progress display
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.optimizer = optimizer or ImageOptimizer(logger=self.logger)
        self.max_workers = max(1, max_workers)
        self.progress = progress
        self.stats = BatchStats()
        self._stop_requested = False

    def stop(self) -> None:
        """Request the processor to stop after the current image."""
        self._stop_requested = True

    def _should_stop(self, cancel_token: Optional[CancellationToken]) -> bool:
        return self._stop_requested or (cancel_token is not None and cancel_token.cancelled)

    def run(
        self,
        descriptors: Iterable[AssetDescriptor],
        output_dir: str,
        config: GalleryConfig,
        on_progress: Optional[ProgressCallback] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> List[ProcessedImage]:
        """
        Optimize every descriptor, in order.

        Args:
            descriptors: Ordered source descriptors (display order)
            output_dir: Gallery root directory
            config: Gallery configuration
            on_progress: Called as (current, total, message) once per item
            cancel_token: Checked between items

        Returns:
            ProcessedImage list in input order, without the failed items

        Raises:
            BatchFailure: images/ cannot be written, or nothing succeeded
            GenerationCancelled: A stop was requested mid-batch
        """
        descriptors = list(descriptors)
        self.stats = BatchStats(total_to_process=len(descriptors))

        self._prepare_output(output_dir)

        namer = RenditionNamer()
        jobs: List[Job] = [
            (index, descriptor, namer.assign(descriptor.path))
            for index, descriptor in enumerate(descriptors)
        ]

        mode_str = f" ({self.max_workers} workers)" if self.max_workers > 1 else ""
        self.logger.info(f"Starting batch: {len(jobs)} images{mode_str}")

        if self.max_workers > 1 and len(jobs) > 1:
            processed = self._run_parallel(jobs, output_dir, config, on_progress, cancel_token)
        else:
            processed = self._run_sequential(jobs, output_dir, config, on_progress, cancel_token)

        self.logger.info(
            f"Batch complete: {self.stats.processed} processed, "
            f"{self.stats.errors} skipped ({self.stats.elapsed_seconds:.1f}s)"
        )

        if not processed:
            raise BatchFailure(
                f"None of the {len(jobs)} selected images could be processed"
            )
        return processed

    def _prepare_output(self, output_dir: str) -> None:
        images_dir = os.path.join(output_dir, IMAGES_DIRNAME)
        try:
            os.makedirs(images_dir, exist_ok=True)
        except OSError as e:
            raise BatchFailure(f"Cannot create images folder {images_dir}: {e}") from e
        if not os.access(images_dir, os.W_OK):
            raise BatchFailure(f"Images folder is not writable: {images_dir}")

    def _run_sequential(
        self,
        jobs: List[Job],
        output_dir: str,
        config: GalleryConfig,
        on_progress: Optional[ProgressCallback],
        cancel_token: Optional[CancellationToken]
    ) -> List[ProcessedImage]:
        processed = []
        for attempted, job in enumerate(jobs):
            if self._should_stop(cancel_token):
                self.logger.info(f"Stop requested, halting batch after {attempted} images")
                raise GenerationCancelled(processed, attempted)

            try:
                image = self._optimize(job, output_dir, config)
            except Exception as e:
                self._record_failure(job, e, on_progress)
                continue

            self._record_success(job, image, on_progress)
            processed.append(image)

        return processed

    def _run_parallel(
        self,
        jobs: List[Job],
        output_dir: str,
        config: GalleryConfig,
        on_progress: Optional[ProgressCallback],
        cancel_token: Optional[CancellationToken]
    ) -> List[ProcessedImage]:
        if self._should_stop(cancel_token):
            self.logger.info("Stop requested, halting batch before it started")
            raise GenerationCancelled([], 0)

        results: List[Optional[ProcessedImage]] = [None] * len(jobs)
        pending = iter(jobs)
        in_flight: Dict[Future, Job] = {}
        cancelled = False

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            def submit_next() -> None:
                job = next(pending, None)
                if job is not None:
                    in_flight[executor.submit(self._optimize, job, output_dir, config)] = job

            for _ in range(self.max_workers):
                submit_next()

            while in_flight:
                done, _ = wait(list(in_flight), return_when=FIRST_COMPLETED)
                for future in sorted(done, key=lambda f: in_flight[f][0]):
                    job = in_flight.pop(future)
                    try:
                        image = future.result()
                    except Exception as e:
                        self._record_failure(job, e, on_progress)
                        continue
                    self._record_success(job, image, on_progress)
                    results[job[0]] = image

                if not cancelled and self._should_stop(cancel_token):
                    cancelled = True
                    self.logger.info("Stop requested, finishing images already in progress")
                if not cancelled:
                    for _ in done:
                        submit_next()

        processed = [image for image in results if image is not None]
        if cancelled:
            raise GenerationCancelled(processed, self.stats.completed_count)
        return processed

    def _optimize(self, job: Job, output_dir: str, config: GalleryConfig) -> ProcessedImage:
        index, descriptor, base_name = job
        self.logger.debug(f"Optimizing: {descriptor.path} -> {base_name}")
        return self.optimizer.optimize(
            descriptor, output_dir, config, base_name=base_name, index=index
        )

    def _record_success(
        self,
        job: Job,
        image: ProcessedImage,
        on_progress: Optional[ProgressCallback]
    ) -> None:
        descriptor = job[1]
        self.stats.processed += 1
        self.stats.bytes_generated += image.bytes_written

        if self.progress:
            self.progress.on_file_processed(descriptor, success=True, image=image)
        else:
            self.logger.info(
                f"Processed: {descriptor.filename} "
                f"[{self.stats.completed_count}/{self.stats.total_to_process}]"
            )
        self._report(f"Processed {descriptor.filename}", on_progress)

    def _record_failure(
        self,
        job: Job,
        error: Exception,
        on_progress: Optional[ProgressCallback]
    ) -> None:
        descriptor = job[1]
        reason = error.reason if isinstance(error, ImageError) else str(error)
        self.logger.error(f"Error processing {descriptor.path}: {reason}")
        self.stats.record_error(descriptor.path, reason)

        if self.progress:
            self.progress.on_file_processed(descriptor, success=False, error=reason)
        self._report(f"Skipped {descriptor.filename}: {reason}", on_progress)

    def _report(self, message: str, on_progress: Optional[ProgressCallback]) -> None:
        if self.progress:
            self.progress.on_progress_update(self.stats)
        if on_progress:
            on_progress(self.stats.completed_count, self.stats.total_to_process, message)
