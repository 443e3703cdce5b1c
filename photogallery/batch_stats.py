"""
BatchStats - Statistics for a batch run.
"""

import time
from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class BatchStats:
    """
    Statistics for a batch run.
    
    Attributes:
        total_to_process: Number of descriptors in the batch
        processed: Successfully optimized
        errors: Failed and skipped
        bytes_generated: Total bytes of renditions written
        start_time: Start timestamp
        skipped: (source path, reason) for each failed item, in input order
    """
    total_to_process: int = 0
    processed: int = 0
    errors: int = 0
    bytes_generated: int = 0
    start_time: float = field(default_factory=time.time)
    skipped: List[Tuple[str, str]] = field(default_factory=list)
    
    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        return time.time() - self.start_time
    
    @property
    def rate_per_second(self) -> float:
        """Processing rate in images per second."""
        if self.elapsed_seconds > 0:
            return self.processed / self.elapsed_seconds
        return 0.0
    
    @property
    def rate_per_minute(self) -> float:
        """Processing rate in images per minute."""
        return self.rate_per_second * 60
    
    @property
    def estimated_remaining_seconds(self) -> float:
        """Estimated time remaining in seconds."""
        if self.rate_per_second > 0:
            return self.remaining_count / self.rate_per_second
        return 0.0
    
    @property
    def completed_count(self) -> int:
        """Total attempted (processed + errors)."""
        return self.processed + self.errors
    
    @property
    def remaining_count(self) -> int:
        """Remaining to process."""
        return self.total_to_process - self.completed_count
    
    def record_error(self, path: str, reason: str) -> None:
        """Record a failed item."""
        self.errors += 1
        self.skipped.append((path, reason))
