"""
BuildProgress - Tracks and displays build progress.
"""

import logging
from typing import Optional

from .build_stats import BuildStats
from .derivative_builder import BuildResult


class BuildProgress:
    """
    Tracks and displays build progress with optional per-file output.
    """

    def __init__(
        self,
        show_files: bool = False,
        log_interval: int = 100,
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
        path: str,
        success: bool,
        result: Optional[BuildResult] = None,
        error: Optional[str] = None
    ) -> None:
        """
        Called when a candidate has been built (or failed).

        Args:
            path: Source path
            success: Whether the build succeeded
            result: Build result (if success)
            error: Error message (if failed)
        """
        if not self.show_files:
            return

        if success and result is not None:
            written = [
                name for name, flag in (
                    ('small', result.small_written),
                    ('thumbnail', result.thumbnail_written),
                ) if flag
            ]
            action = f"wrote {', '.join(written)}" if written else "up to date"
            print(f"  [OK] {path} -> {action}")
        else:
            print(f"  [ERROR] {path} -> {error or 'failed'}")

    def on_file_skipped(self, path: str, reason: str) -> None:
        """Called when a path is not a gallery source."""
        if self.show_files:
            print(f"  [SKIP] {path} -> {reason}")

    def on_progress_update(self, stats: BuildStats) -> None:
        """
        Called after each candidate to report overall progress.

        Args:
            stats: Current build statistics
        """
        total_done = stats.processed + stats.errors

        if not self.show_files and total_done - self.last_logged >= self.log_interval:
            self.last_logged = total_done
            self.logger.info(
                f"Progress: {stats.processed} built, {stats.errors} errors "
                f"({stats.rate_per_minute:.1f}/min, {stats.remaining_count} left)"
            )
