"""
Photo gallery builder.

For every image under a source directory, publishes a full-size copy, a
bounded "small" derivative and a content-aware cropped thumbnail, then
renders a Hugo index page describing them. Re-runs only regenerate
derivatives older than their source.
"""

__version__ = "1.0.0"

from .errors import (
    GalleryError,
    DecodeError,
    EncodeError,
    CropUnsupportedError,
    EmptyGalleryError,
    OutputDirectoryError,
)
from .artifact_namer import ArtifactNamer, Candidate, DerivativeSpec, Skip
from .freshness import FreshnessOracle
from .crop_selector import CropBox, CropSelector, CropSettings
from .image_codec import DecodedImage, ImageCodec
from .gallery_entry import ManifestEntry
from .manifest import Manifest
from .gallery_config import GalleryConfig
from .derivative_builder import BuildResult, DerivativeBuilder
from .gallery_assembler import GalleryAssembler
from .scanner import Scanner, SourceFile
from .build_stats import BuildStats
from .build_progress import BuildProgress
from .pipeline import Pipeline
from .index_writer import IndexWriter
from .reporter import Reporter

__all__ = [
    "GalleryError",
    "DecodeError",
    "EncodeError",
    "CropUnsupportedError",
    "EmptyGalleryError",
    "OutputDirectoryError",
    "ArtifactNamer",
    "Candidate",
    "DerivativeSpec",
    "Skip",
    "FreshnessOracle",
    "CropBox",
    "CropSelector",
    "CropSettings",
    "DecodedImage",
    "ImageCodec",
    "ManifestEntry",
    "Manifest",
    "GalleryConfig",
    "BuildResult",
    "DerivativeBuilder",
    "GalleryAssembler",
    "Scanner",
    "SourceFile",
    "BuildStats",
    "BuildProgress",
    "Pipeline",
    "IndexWriter",
    "Reporter",
]
