"""
Reporter - Human-readable summaries of a generation run.
"""

import logging
import os
import sys
from typing import Optional, TextIO

from .orchestrator import GenerationOutcome

WELCOME_MESSAGE = """\
Photo Gallery Generator is ready!

To use it:
  1. Pick the image files for your gallery
  2. Run: photogallery generate FILE... --output FOLDER
  3. Adjust the gallery with --title, --columns, --theme and friends
  4. Open FOLDER/index.html in a web browser
"""


class Reporter:
    """
    Prints completion reports for gallery runs.
    """
    
    def __init__(
        self,
        output: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize reporter.
        
        Args:
            output: Output stream (default: stdout)
            logger: Optional logger instance
        """
        self.output = output or sys.stdout
        self.logger = logger or logging.getLogger(__name__)
    
    def _print(self, text: str = "") -> None:
        """Print to output stream."""
        print(text, file=self.output)
    
    def _format_duration(self, seconds: float) -> str:
        """Format duration as human-readable string."""
        if seconds < 60:
            return f"{seconds:.1f} seconds"
        elif seconds < 3600:
            return f"{seconds / 60:.1f} minutes"
        else:
            return f"{seconds / 3600:.1f} hours"
    
    def report_welcome(self) -> None:
        self._print(WELCOME_MESSAGE)
    
    def report_outcome(self, outcome: GenerationOutcome) -> None:
        """Print the completion summary of a run."""
        self._print("=" * 60)
        if outcome.success:
            self._print("PHOTO GALLERY CREATED")
        elif outcome.cancelled:
            self._print("PHOTO GALLERY CANCELLED")
        else:
            self._print("PHOTO GALLERY FAILED")
        self._print("=" * 60)
        self._print()
        
        if not outcome.success:
            self._print(f"  {outcome.message}")
            self._print()
        
        self._print(f"  Location:    {outcome.output_path}")
        self._print(f"  Selected:    {outcome.total:>6,}")
        self._print(f"  In gallery:  {outcome.processed:>6,}")
        self._print(f"  Skipped:     {len(outcome.skipped):>6,}")
        self._print(f"  Time:        {self._format_duration(outcome.elapsed_seconds)}")
        self._print()
        
        if outcome.skipped:
            self._print("  Skipped files:")
            for path, reason in outcome.skipped:
                self._print(f"    - {os.path.basename(path)}: {reason}")
            self._print()
        
        if outcome.files_created:
            self._print(f"  Files: {', '.join(outcome.files_created)}")
            self._print()
        
        if outcome.success:
            index = outcome.files_created[0] if outcome.files_created else 'index.html'
            self._print(f"  Open {os.path.join(outcome.output_path, index)} in your web browser.")
            self._print()
