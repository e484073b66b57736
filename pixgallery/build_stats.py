"""
BuildStats - Counters for a gallery build run.
"""

import time
from dataclasses import dataclass, field
from typing import List


@dataclass
class BuildStats:
    """
    Counters for one Pipeline.run.

    Skipped paths never become candidates, so they are not part of
    total_to_process.
    """
    total_to_process: int = 0
    processed: int = 0
    skipped: int = 0
    errors: int = 0
    smalls_written: int = 0
    thumbnails_written: int = 0
    bytes_written: int = 0
    start_time: float = field(default_factory=time.time)
    error_details: List[str] = field(default_factory=list)

    @property
    def elapsed_seconds(self) -> float:
        return time.time() - self.start_time

    @property
    def rate_per_minute(self) -> float:
        """Images built per minute."""
        elapsed = self.elapsed_seconds
        return self.processed * 60 / elapsed if elapsed > 0 else 0.0

    @property
    def remaining_count(self) -> int:
        """Candidates neither built nor failed yet."""
        return self.total_to_process - self.processed - self.errors

    def record_error(self, message: str) -> None:
        self.errors += 1
        self.error_details.append(message)
