"""
Scanner - Walks the source directory and yields candidate files.
"""

import logging
import os
import stat
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional


@dataclass(frozen=True)
class SourceFile:
    """
    A regular file found by the scanner.

    Attributes:
        path: Path relative to (or under) the scanned root
        modified: Modification time in epoch seconds
        size: Size in bytes
    """
    path: str
    modified: float
    size: int


class Scanner:
    """
    Walks a directory tree in lexical order and yields regular files.

    Excluded directories (typically the gallery output directory when it is
    nested inside the source tree) are pruned from the walk.
    """

    def __init__(
        self,
        root: str = '.',
        exclude: Optional[Iterable[str]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize scanner.

        Args:
            root: Directory to walk
            exclude: Directories to prune (the root itself is never pruned)
            logger: Optional logger instance
        """
        self.root = root
        self.exclude = {os.path.realpath(p) for p in (exclude or [])}
        self.logger = logger or logging.getLogger(__name__)

    def scan(self, limit: Optional[int] = None) -> Iterator[SourceFile]:
        """
        Yield source files in traversal order.

        Args:
            limit: Optional limit on number of files (for testing)
        """
        count = 0
        for dirpath, dirnames, filenames in os.walk(self.root, onerror=self._on_error):
            dirnames[:] = sorted(
                d for d in dirnames
                if os.path.realpath(os.path.join(dirpath, d)) not in self.exclude
            )

            for filename in sorted(filenames):
                if limit and count >= limit:
                    self.logger.info(f"Stopping at limit ({limit})")
                    return

                path = os.path.join(dirpath, filename)
                try:
                    st = os.stat(path)
                except OSError as e:
                    self.logger.warning(f"Cannot stat {path}: {e}")
                    continue
                if not stat.S_ISREG(st.st_mode):
                    continue

                count += 1
                yield SourceFile(path=path, modified=st.st_mtime, size=st.st_size)

    def _on_error(self, error: OSError) -> None:
        self.logger.warning(f"Walk error: {error}")
