"""
Reporter - Generates human-readable reports from manifest data.
"""

import logging
import sys
from typing import Optional, TextIO

from .build_stats import BuildStats
from .manifest import Manifest


class Reporter:
    """
    Generates human-readable reports from manifest data.
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

    def _format_bytes(self, bytes_val: float) -> str:
        """Format bytes as human-readable string."""
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if bytes_val < 1024:
                return f"{bytes_val:.1f} {unit}"
            bytes_val /= 1024
        return f"{bytes_val:.1f} PB"

    def _format_duration(self, seconds: float) -> str:
        """Format duration as human-readable string."""
        if seconds < 60:
            return f"{seconds:.1f} seconds"
        elif seconds < 3600:
            return f"{seconds / 60:.1f} minutes"
        else:
            return f"{seconds / 3600:.1f} hours"

    def report_summary(self, manifest: Manifest, stats: Optional[BuildStats] = None) -> None:
        """Generate a summary report, including run statistics when given."""
        self._print("=" * 70)
        self._print("GALLERY SUMMARY")
        self._print("=" * 70)
        self._print()

        self._print("Gallery Information:")
        self._print(f"  Title:       {manifest.title}")
        self._print(f"  Date:        {manifest.date}")
        self._print(f"  Cover:       {manifest.cover}")
        self._print(f"  Thumbnails:  {manifest.thumb_width}x{manifest.thumb_height}")
        self._print()

        self._print("Overall Statistics:")
        self._print(f"  Total Images:         {manifest.total_images:,}")
        self._print(f"  With Thumbnails:      {manifest.total_with_thumbnails:,}")
        self._print(f"  With Copyright:       {manifest.total_with_copyright:,}")
        self._print()

        if stats is not None:
            self._print("Build Statistics:")
            self._print(f"  Skipped Paths:        {stats.skipped:,}")
            self._print(f"  Errors:               {stats.errors:,}")
            self._print(f"  Small Written:        {stats.smalls_written:,}")
            self._print(f"  Thumbnails Written:   {stats.thumbnails_written:,}")
            self._print(f"  Bytes Written:        {self._format_bytes(stats.bytes_written)}")
            self._print(f"  Time:                 {self._format_duration(stats.elapsed_seconds)}")
            self._print()

            if stats.error_details:
                self._print("Errors:")
                for detail in stats.error_details:
                    self._print(f"  {detail}")
                self._print()

    def report_detailed(self, manifest: Manifest) -> None:
        """Generate a summary followed by one line per entry."""
        self.report_summary(manifest)

        self._print("Entries:")
        self._print("-" * 70)
        for i, entry in enumerate(manifest.entries, 1):
            self._print(f"{i:>5}. {entry.format_status()}")
        self._print("-" * 70)

        missing = list(manifest.get_entries_missing_thumbnails())
        if missing:
            self._print()
            self._print(f"Entries without thumbnails ({len(missing)}):")
            for entry in missing:
                self._print(f"  {entry.filename}")
        self._print()
