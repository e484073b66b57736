"""
FreshnessOracle - Decides whether a derivative must be regenerated.
"""

import logging
import os
from typing import Optional


class FreshnessOracle:
    """
    Compares derivative and source modification times.

    A derivative is stale when it is missing or strictly older than its
    source. Equal timestamps count as fresh so that re-runs over an
    unchanged tree rewrite nothing.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def needs_regeneration(self, derivative_path: str, source_modified: float) -> bool:
        """
        Check whether a derivative is missing or out of date.

        Args:
            derivative_path: Path of the derivative file
            source_modified: Source modification time (epoch seconds)
        """
        try:
            derivative_modified = os.stat(derivative_path).st_mtime
        except FileNotFoundError:
            self.logger.debug(f"Missing derivative: {derivative_path}")
            return True

        if derivative_modified < source_modified:
            self.logger.debug(f"Stale derivative: {derivative_path}")
            return True
        return False
