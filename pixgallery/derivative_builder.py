"""
DerivativeBuilder - Produces the gallery artifacts for one source image.
"""

import logging
import os
import shutil
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from .artifact_namer import Candidate, DerivativeSpec
from .crop_selector import CropSelector
from .errors import CropUnsupportedError
from .freshness import FreshnessOracle
from .gallery_entry import ManifestEntry
from .image_codec import DecodedImage, ImageCodec


@dataclass
class BuildResult:
    """
    Outcome of building one source image.

    Attributes:
        entry: Manifest entry for the image
        small_written: True if the small derivative was (re)written
        thumbnail_written: True if the thumbnail was (re)written
        bytes_written: Encoded bytes written for derivatives
    """
    entry: ManifestEntry
    small_written: bool = False
    thumbnail_written: bool = False
    bytes_written: int = 0


class DerivativeBuilder:
    """
    Publishes the full-size copy and builds the small and thumbnail derivatives.

    The small derivative is always computed because its dimensions go into
    the manifest; it is only written when stale. The thumbnail is computed
    and written only when stale.
    """

    def __init__(
        self,
        output_dir: str,
        small_spec: DerivativeSpec,
        thumbnail_spec: DerivativeSpec,
        codec: Optional[ImageCodec] = None,
        crop_selector: Optional[CropSelector] = None,
        oracle: Optional[FreshnessOracle] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize builder.

        Args:
            output_dir: Flat output directory
            small_spec: Bounding box for the small derivative
            thumbnail_spec: Exact thumbnail size
            codec: Image codec (default: ImageCodec())
            crop_selector: Crop selector (default: CropSelector())
            oracle: Freshness oracle (default: FreshnessOracle())
            logger: Optional logger instance
        """
        self.output_dir = output_dir
        self.small_spec = small_spec
        self.thumbnail_spec = thumbnail_spec
        self.logger = logger or logging.getLogger(__name__)
        self.codec = codec or ImageCodec(logger=self.logger)
        self.crop_selector = crop_selector or CropSelector(logger=self.logger)
        self.oracle = oracle or FreshnessOracle(logger=self.logger)

    def build(self, candidate: Candidate, source_modified: float) -> BuildResult:
        """
        Build all artifacts for one source.

        Args:
            candidate: Classified source path
            source_modified: Source modification time (epoch seconds)

        Returns:
            BuildResult with the manifest entry

        Raises:
            DecodeError: Source bytes are not a readable image
            EncodeError: Source format cannot be re-encoded
            OSError: Reading, linking or writing failed
        """
        with open(candidate.path, 'rb') as f:
            image_data = f.read()

        decoded = self.codec.decode(image_data)

        small_name = candidate.derivative_name(self.small_spec)
        thumbnail_name = candidate.derivative_name(self.thumbnail_spec)
        small_path = self._output_path(small_name)
        thumbnail_path = self._output_path(thumbnail_name)

        small_img = self.codec.resize_within(
            decoded.image, self.small_spec.width, self.small_spec.height
        )
        result = BuildResult(entry=ManifestEntry(
            filename=candidate.filename,
            small=small_name,
            thumbnail=thumbnail_name,
            width=decoded.width,
            height=decoded.height,
            small_width=small_img.size[0],
            small_height=small_img.size[1],
            copyright=decoded.copyright,
        ))

        # Encode everything before touching the output directory
        pending = []
        if self.oracle.needs_regeneration(small_path, source_modified):
            self.logger.debug(f"Generating small {small_name} for {decoded.format} {candidate.path}")
            pending.append((small_path, self.codec.encode(small_img, decoded.format)))
            result.small_written = True

        if not self.oracle.needs_regeneration(thumbnail_path, source_modified):
            self.logger.debug(f"Thumbnail more recent than original: {candidate.path}")
        else:
            try:
                pending.append((thumbnail_path, self._render_thumbnail(decoded)))
                result.thumbnail_written = True
                self.logger.debug(f"Generating thumbnail {thumbnail_name} for {candidate.path}")
            except CropUnsupportedError as e:
                self.logger.warning(f"Cannot crop {candidate.path}: {e}")
                result.entry = replace(result.entry, thumbnail=None)

        result.bytes_written = self._publish(candidate, pending)
        return result

    def _publish(self, candidate: Candidate, pending: List[Tuple[str, bytes]]) -> int:
        """Write encoded derivatives, then the full-size copy; undo on failure."""
        original_path = self._output_path(candidate.filename)
        written = []
        total = 0
        try:
            for path, data in pending:
                written.append(path)
                total += self._write(path, data)
            if not self._is_same_file(candidate.path, original_path):
                written.append(original_path)
            self.publish_original(candidate.path, original_path)
        except OSError:
            for path in written:
                self._discard(path)
            raise
        return total

    def _render_thumbnail(self, decoded: DecodedImage) -> bytes:
        size = (self.thumbnail_spec.width, self.thumbnail_spec.height)
        crop = self.crop_selector.select_crop(decoded.image, *size)
        self.logger.debug(f"The best crop is {crop}")
        thumbnail = self.codec.resize_exact(decoded.image, size, box=crop.as_box())
        return self.codec.encode(thumbnail, decoded.format)

    def publish_original(self, source_path: str, dest_path: str) -> None:
        """
        Place the full-size copy in the output directory.

        An existing file at the destination is replaced by a hard link to
        the source, or by a byte copy when linking fails. Nothing is done
        when the destination already is the source file.
        """
        if self._is_same_file(source_path, dest_path):
            return

        try:
            os.remove(dest_path)
        except FileNotFoundError:
            pass

        try:
            os.link(source_path, dest_path)
        except OSError as e:
            self.logger.debug(f"Hard link failed for {source_path} ({e}), copying")
            shutil.copyfile(source_path, dest_path)

    @staticmethod
    def _is_same_file(source_path: str, dest_path: str) -> bool:
        return os.path.exists(dest_path) and os.path.samefile(source_path, dest_path)

    def _discard(self, path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            self.logger.warning(f"Could not remove partial output {path}: {e}")

    def _output_path(self, filename: str) -> str:
        return os.path.join(self.output_dir, filename)

    @staticmethod
    def _write(path: str, data: bytes) -> int:
        with open(path, 'wb') as f:
            f.write(data)
        return len(data)
