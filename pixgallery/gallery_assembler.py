"""
GalleryAssembler - Builds the manifest from per-image entries.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from .errors import EmptyGalleryError
from .gallery_entry import ManifestEntry
from .manifest import Manifest


class GalleryAssembler:
    """Collects entries in traversal order into a Manifest."""

    def __init__(
        self,
        thumb_width: int,
        thumb_height: int,
        logger: Optional[logging.Logger] = None
    ):
        self.thumb_width = thumb_width
        self.thumb_height = thumb_height
        self.logger = logger or logging.getLogger(__name__)

    def assemble(
        self,
        entries: Iterable[ManifestEntry],
        title: str,
        now: Optional[datetime] = None
    ) -> Manifest:
        """
        Assemble a manifest without reordering entries.

        Raises:
            EmptyGalleryError: If there are no entries
        """
        manifest = Manifest.create_new(title, self.thumb_width, self.thumb_height, now=now)
        manifest.entries.extend(entries)

        if not manifest.entries:
            raise EmptyGalleryError("did not find any photos")

        self.logger.debug(f"Assembled {manifest.total_images} entries, cover {manifest.cover}")
        return manifest
