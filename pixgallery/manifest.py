"""
Manifest - Ordered description of a generated gallery.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional

from .gallery_entry import ManifestEntry

logger = logging.getLogger(__name__)


@dataclass
class Manifest:
    """
    Ordered description of all processed images.

    Attributes:
        title: Gallery title
        date: Generation date (YYYY-MM-DD)
        thumb_width: Thumbnail width shared by every entry
        thumb_height: Thumbnail height shared by every entry
        entries: Entries in traversal order; the first one is the cover
        categories: Category tags for the rendering layer
    """
    title: str
    date: str
    thumb_width: int
    thumb_height: int
    entries: List[ManifestEntry] = field(default_factory=list)
    categories: List[str] = field(default_factory=lambda: [Manifest.CATEGORY])

    CATEGORY = 'photos'
    DATE_FORMAT = '%Y-%m-%d'

    @property
    def cover(self) -> Optional[str]:
        """Filename of the cover image (the first entry)."""
        if self.entries:
            return self.entries[0].filename
        return None

    @property
    def total_images(self) -> int:
        return len(self.entries)

    @property
    def total_with_thumbnails(self) -> int:
        return sum(1 for e in self.entries if e.has_thumbnail)

    @property
    def total_with_copyright(self) -> int:
        return sum(1 for e in self.entries if e.copyright)

    def get_entries_missing_thumbnails(self) -> Iterator[ManifestEntry]:
        """Yield entries without a thumbnail."""
        for entry in self.entries:
            if not entry.has_thumbnail:
                yield entry

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'title': self.title,
            'date': self.date,
            'categories': list(self.categories),
            'cover': self.cover,
            'thumb_width': self.thumb_width,
            'thumb_height': self.thumb_height,
            'entries': [e.to_dict() for e in self.entries],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Manifest':
        """Create from dictionary."""
        return cls(
            title=data.get('title', ''),
            date=data['date'],
            thumb_width=data['thumb_width'],
            thumb_height=data['thumb_height'],
            entries=[ManifestEntry.from_dict(e) for e in data.get('entries', [])],
            categories=data.get('categories', [cls.CATEGORY]),
        )

    def save(self, filepath: str) -> None:
        """Save manifest to JSON file."""
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
            f.write('\n')

        logger.info(f"Manifest saved: {filepath} ({self.total_images} images)")

    @classmethod
    def load(cls, filepath: str) -> 'Manifest':
        """Load manifest from JSON file."""
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def create_new(
        cls,
        title: str,
        thumb_width: int,
        thumb_height: int,
        now: Optional[datetime] = None
    ) -> 'Manifest':
        """Create a new empty manifest dated now."""
        now = now or datetime.now()
        return cls(
            title=title,
            date=now.strftime(cls.DATE_FORMAT),
            thumb_width=thumb_width,
            thumb_height=thumb_height,
        )
