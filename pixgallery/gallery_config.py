"""
GalleryConfig - Configuration values for a gallery build.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from PIL import Image

from .artifact_namer import ArtifactNamer, DerivativeSpec
from .crop_selector import CropSettings


@dataclass
class GalleryConfig:
    """
    Configuration for a gallery build.

    Attributes:
        output_dir: Directory receiving copies, derivatives and the index
        source_dir: Directory walked for source images
        title: Gallery title
        thumb_width: Exact thumbnail width
        thumb_height: Exact thumbnail height
        small_width: Max small derivative width
        small_height: Max small derivative height
        verbosity: 0 = info, 1 = debug, 2 = debug including Pillow
        cpu_profile: Optional path for a cProfile dump of the run
        workers: Number of worker threads
        jpeg_quality: JPEG encoder quality
        resample: Pillow resampling filter name
        index_name: Filename of the rendered index inside output_dir
        crop: Crop selection weights and steps
    """
    output_dir: str
    source_dir: str = '.'
    title: str = ''
    thumb_width: int = 256
    thumb_height: int = 256
    small_width: int = 800
    small_height: int = 800
    verbosity: int = 0
    cpu_profile: Optional[str] = None
    workers: int = field(default_factory=lambda: os.cpu_count() or 1)
    jpeg_quality: int = 85
    resample: str = 'LANCZOS'
    index_name: str = 'index.md'
    crop: CropSettings = field(default_factory=CropSettings)

    @property
    def small_spec(self) -> DerivativeSpec:
        return ArtifactNamer.small_spec(self.small_width, self.small_height)

    @property
    def thumbnail_spec(self) -> DerivativeSpec:
        return ArtifactNamer.thumbnail_spec(self.thumb_width, self.thumb_height)

    @property
    def index_path(self) -> str:
        return os.path.join(self.output_dir, self.index_name)

    def validate(self) -> List[str]:
        """Return a list of configuration errors (empty when valid)."""
        errors = []

        if not self.output_dir:
            errors.append("must specify an output directory using -o")
        if not os.path.isdir(self.source_dir):
            errors.append(f"Source directory not found: {self.source_dir}")

        for name in ('thumb_width', 'thumb_height', 'small_width', 'small_height', 'workers'):
            value = getattr(self, name)
            if value < 1:
                errors.append(f"{name} must be at least 1 (got {value})")

        if not 1 <= self.jpeg_quality <= 100:
            errors.append(f"JPEG quality must be between 1 and 100 (got {self.jpeg_quality})")

        if self.resample.upper() not in Image.Resampling.__members__:
            errors.append(f"Unknown resampling filter: {self.resample}")

        errors.extend(self.crop.validate())
        return errors
