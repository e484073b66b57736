"""
ManifestEntry - Record for a single processed image and its derivatives.
"""

from dataclasses import dataclass, asdict
from typing import Optional


@dataclass(frozen=True)
class ManifestEntry:
    """
    Record for a single processed image.

    Attributes:
        filename: Full-size copy filename (also the source base filename)
        small: Small derivative filename
        thumbnail: Thumbnail filename, None when no thumbnail could be made
        width: Source width in pixels
        height: Source height in pixels
        small_width: Small derivative width
        small_height: Small derivative height
        copyright: Copyright string, empty when absent
    """
    filename: str
    small: str
    thumbnail: Optional[str]
    width: int
    height: int
    small_width: int
    small_height: int
    copyright: str = ''

    @property
    def has_thumbnail(self) -> bool:
        return self.thumbnail is not None

    @property
    def thumbnail_url(self) -> str:
        """Thumbnail filename, falling back to the small derivative."""
        return self.thumbnail or self.small

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'ManifestEntry':
        """Create from dictionary."""
        return cls(
            filename=data['filename'],
            small=data['small'],
            thumbnail=data.get('thumbnail'),
            width=data['width'],
            height=data['height'],
            small_width=data['small_width'],
            small_height=data['small_height'],
            copyright=data.get('copyright', ''),
        )

    def format_status(self) -> str:
        """
        Format a human-readable status line.

        Returns:
            Status string like "a.jpg 1000x800 -> a_small.jpg 800x640, a_thm.jpg"
        """
        thumb = self.thumbnail or 'NO thumbnail'
        status = (
            f"{self.filename} {self.width}x{self.height} -> "
            f"{self.small} {self.small_width}x{self.small_height}, {thumb}"
        )
        if self.copyright:
            status += f" (c) {self.copyright}"
        return status
