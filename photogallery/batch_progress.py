"""
BatchProgress - Tracks and displays batch progress.
"""

import logging
from typing import Optional

from .asset_descriptor import AssetDescriptor
from .batch_stats import BatchStats
from .processed_image import ProcessedImage


class BatchProgress:
    """
    Tracks and displays batch progress with optional per-file output.
    
    Instances are also usable as the (current, total, message) progress
    callback expected by BatchProcessor and GalleryOrchestrator.
    """
    
    def __init__(
        self,
        show_files: bool = False,
        log_interval: int = 25,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize progress tracker.
        
        Args:
            show_files: If True, print each file as it's processed
            log_interval: Log summary progress every N images (when not show_files)
            logger: Optional logger instance
        """
        self.show_files = show_files
        self.log_interval = log_interval
        self.logger = logger or logging.getLogger(__name__)
        self.last_logged = 0
    
    def on_file_processed(
        self,
        descriptor: AssetDescriptor,
        success: bool,
        image: Optional[ProcessedImage] = None,
        error: Optional[str] = None
    ) -> None:
        """
        Called when a file is processed.
        
        Args:
            descriptor: The source descriptor
            success: Whether optimization succeeded
            image: The processed image (if success)
            error: Error message (if failed)
        """
        if self.show_files:
            if success and image is not None:
                print(f"  [OK] {image.format_status()}")
            elif success:
                print(f"  [OK] {descriptor.filename}")
            else:
                print(f"  [ERROR] {descriptor.filename} -> {error or 'failed'}")
    
    def on_progress_update(self, stats: BatchStats) -> None:
        """
        Called after each item to report overall progress.
        
        Args:
            stats: Current batch statistics
        """
        total_done = stats.completed_count
        
        if not self.show_files and total_done - self.last_logged >= self.log_interval:
            self.last_logged = total_done
            eta_minutes = stats.estimated_remaining_seconds / 60
            
            self.logger.info(
                f"Progress: {stats.processed} optimized, {stats.errors} errors "
                f"({stats.rate_per_minute:.1f}/min, "
                f"~{eta_minutes:.0f}m remaining, {stats.remaining_count} left)"
            )
    
    def __call__(self, current: int, total: int, message: str) -> None:
        """Allow use as the (current, total, message) progress callback."""
        self.logger.debug(f"Progress: {current}/{total} - {message}")
