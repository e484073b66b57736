"""
ArtifactNamer - Classifies source paths and derives derivative filenames.
"""

import os
from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class DerivativeSpec:
    """
    Target geometry and naming for one derivative role.

    Attributes:
        role: 'small' or 'thumbnail'
        width: Max width (small) or exact width (thumbnail)
        height: Max height (small) or exact height (thumbnail)
        suffix: Token inserted before the extension
    """
    role: str
    width: int
    height: int
    suffix: str

    def filename_for(self, base_name: str, extension: str) -> str:
        """Build the derivative filename for a base name."""
        return f"{base_name}{self.suffix}{extension}"


@dataclass(frozen=True)
class Skip:
    """A path that is not a gallery source."""
    path: str
    reason: str


@dataclass(frozen=True)
class Candidate:
    """
    A path that should be processed into gallery artifacts.

    Attributes:
        path: Source path as yielded by the scanner
        base_name: Filename without extension
        extension: Extension including the dot, original case preserved
    """
    path: str
    base_name: str
    extension: str

    @property
    def filename(self) -> str:
        return f"{self.base_name}{self.extension}"

    def derivative_name(self, spec: DerivativeSpec) -> str:
        """Filename of the derivative described by spec."""
        return spec.filename_for(self.base_name, self.extension)


class ArtifactNamer:
    """
    Decides which paths are gallery sources and how their outputs are named.

    Files that already carry a derivative marker are skipped so that an
    output directory overlapping the source tree is never re-processed.
    """

    EXTENSIONS: Tuple[str, ...] = ('.jpg', '.jpeg', '.png')
    SMALL_SUFFIX = '_small'
    THUMBNAIL_SUFFIX = '_thm'

    def __init__(self, extensions: Tuple[str, ...] = EXTENSIONS):
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.markers = tuple(
            f"{suffix}." for suffix in (self.SMALL_SUFFIX, self.THUMBNAIL_SUFFIX)
        )

    @classmethod
    def small_spec(cls, width: int, height: int) -> DerivativeSpec:
        """Bounding-box spec for the small derivative."""
        return DerivativeSpec('small', width, height, cls.SMALL_SUFFIX)

    @classmethod
    def thumbnail_spec(cls, width: int, height: int) -> DerivativeSpec:
        """Exact-size spec for the thumbnail derivative."""
        return DerivativeSpec('thumbnail', width, height, cls.THUMBNAIL_SUFFIX)

    def classify(self, path: str) -> Union[Skip, Candidate]:
        """
        Classify a path as a Skip or a Candidate.

        Args:
            path: Path of a regular file

        Returns:
            Skip with a reason, or Candidate carrying base name and extension
        """
        filename = os.path.basename(path)

        if any(marker in filename for marker in self.markers):
            return Skip(path, 'derivative')

        base_name, extension = os.path.splitext(filename)
        if not extension or not base_name:
            return Skip(path, 'no extension')
        if extension.lower() not in self.extensions:
            return Skip(path, 'wrong extension')

        return Candidate(path=path, base_name=base_name, extension=extension)
