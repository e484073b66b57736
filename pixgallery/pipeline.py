"""
Pipeline - Drives source files through naming, building and assembly.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple

from .artifact_namer import ArtifactNamer, Candidate, Skip
from .build_progress import BuildProgress
from .build_stats import BuildStats
from .crop_selector import CropSelector
from .derivative_builder import BuildResult, DerivativeBuilder
from .errors import GalleryError, OutputDirectoryError
from .gallery_assembler import GalleryAssembler
from .gallery_config import GalleryConfig
from .image_codec import ImageCodec
from .manifest import Manifest
from .scanner import SourceFile

# (result, error message) for one candidate
Outcome = Tuple[Optional[BuildResult], Optional[str]]


class Pipeline:
    """
    Builds a gallery from a stream of source files.

    Per-image failures are logged and excluded from the manifest. Only a
    failure to create the output directory or an empty result is fatal.
    """

    def __init__(
        self,
        config: GalleryConfig,
        namer: Optional[ArtifactNamer] = None,
        builder: Optional[DerivativeBuilder] = None,
        assembler: Optional[GalleryAssembler] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize pipeline.

        Args:
            config: Gallery configuration
            namer: Path classifier (default: ArtifactNamer())
            builder: Per-image builder (default: built from config)
            assembler: Manifest assembler (default: built from config)
            logger: Optional logger instance
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.namer = namer or ArtifactNamer()
        self.builder = builder or DerivativeBuilder(
            output_dir=config.output_dir,
            small_spec=config.small_spec,
            thumbnail_spec=config.thumbnail_spec,
            codec=ImageCodec(config.jpeg_quality, config.resample, logger=self.logger),
            crop_selector=CropSelector(config.crop, logger=self.logger),
            logger=self.logger,
        )
        self.assembler = assembler or GalleryAssembler(
            config.thumb_width, config.thumb_height, logger=self.logger
        )
        self.stats = BuildStats()

    def run(
        self,
        sources: Iterable[SourceFile],
        progress: Optional[BuildProgress] = None
    ) -> Manifest:
        """
        Build every candidate and assemble the manifest.

        Args:
            sources: Source files in traversal order
            progress: Optional progress tracker

        Returns:
            Manifest with entries in traversal order

        Raises:
            OutputDirectoryError: If the output directory cannot be created
            EmptyGalleryError: If no image was built
        """
        self.stats = BuildStats()
        self._ensure_output_dir()

        candidates = self._collect_candidates(sources, progress)
        self.stats.total_to_process = len(candidates)
        self.logger.info(
            f"Starting build: {len(candidates)} images "
            f"({self.stats.skipped} skipped, {self.config.workers} workers)"
        )

        entries = []
        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            outcomes = executor.map(self._build_one, candidates)
            for (candidate, _), (result, error) in zip(candidates, outcomes):
                if result is not None:
                    entries.append(result.entry)
                    self._record_success(result)
                else:
                    self.stats.record_error(error)

                if progress:
                    progress.on_file_processed(candidate.path, result is not None, result, error)
                    progress.on_progress_update(self.stats)

        self.logger.info(
            f"Build complete: {self.stats.processed} images, "
            f"{self.stats.smalls_written} small and {self.stats.thumbnails_written} "
            f"thumbnails written, {self.stats.errors} errors "
            f"({self.stats.elapsed_seconds:.1f}s)"
        )

        return self.assembler.assemble(entries, self.config.title)

    def _ensure_output_dir(self) -> None:
        try:
            os.makedirs(self.config.output_dir, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(
                f"could not create output dir {self.config.output_dir}: {e}"
            ) from e

    def _collect_candidates(
        self,
        sources: Iterable[SourceFile],
        progress: Optional[BuildProgress]
    ) -> List[Tuple[Candidate, SourceFile]]:
        """Classify sources, keeping the first candidate for each output name."""
        candidates = []
        claimed = {}

        for source in sources:
            classified = self.namer.classify(source.path)
            if isinstance(classified, Skip):
                self._skip(source.path, classified.reason, progress)
                continue

            owner = claimed.get(classified.filename)
            if owner is not None:
                self.logger.warning(
                    f"Duplicate output name {classified.filename}: "
                    f"{source.path} ignored, already built from {owner}"
                )
                self._skip(source.path, 'duplicate name', progress)
                continue

            claimed[classified.filename] = source.path
            candidates.append((classified, source))

        return candidates

    def _skip(self, path: str, reason: str, progress: Optional[BuildProgress]) -> None:
        self.logger.debug(f"Skipping {path}: {reason}")
        self.stats.skipped += 1
        if progress:
            progress.on_file_skipped(path, reason)

    def _build_one(self, item: Tuple[Candidate, SourceFile]) -> Outcome:
        """Build one candidate, converting per-image errors into an outcome."""
        candidate, source = item
        try:
            return self.builder.build(candidate, source.modified), None
        except (GalleryError, OSError, ValueError) as e:
            error_msg = f"Error processing {candidate.path}: {e}"
            self.logger.error(error_msg)
            return None, error_msg

    def _record_success(self, result: BuildResult) -> None:
        self.stats.processed += 1
        self.stats.bytes_written += result.bytes_written
        if result.small_written:
            self.stats.smalls_written += 1
        if result.thumbnail_written:
            self.stats.thumbnails_written += 1
