"""
IndexWriter - Renders a manifest as a Hugo gallery page.
"""

import logging
from pathlib import Path
from typing import List, Optional

from .manifest import Manifest


class IndexWriter:
    """
    Renders the Hugo front matter and one photo shortcode per entry.
    """

    PHOTO_TEMPLATE = (
        '{{{{< photo\n'
        '    href="{href}" largeDim="{width}x{height}"\n'
        '    smallUrl="{small}" smallDim="{small_width}x{small_height}"\n'
        '    thumbSize="{thumb_width}x{thumb_height}" thumbUrl="{thumb}"\n'
        '    title=""\n'
        '    caption=""\n'
        '    alt=""\n'
        '    copyright="{copyright}" >}}}}\n'
    )

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def escape(value: str) -> str:
        """Escape a value for a double-quoted TOML or shortcode string."""
        return value.replace('\\', '\\\\').replace('"', '\\"')

    def render(self, manifest: Manifest) -> str:
        """Render the complete index page."""
        esc = self.escape
        categories = ', '.join(f'"""{c}"""' for c in manifest.categories)
        cover = esc(manifest.cover or '')
        lines: List[str] = [
            '+++\n',
            f'title = "{esc(manifest.title)}"\n',
            f'date = "{manifest.date}"\n',
            f'categories = [{categories}]\n',
            f'cover = "{cover}"\n',
            '+++\n',
            '\n',
            '{{< wrap >}}\n',
        ]

        for entry in manifest.entries:
            lines.append(self.PHOTO_TEMPLATE.format(
                href=esc(entry.filename),
                width=entry.width,
                height=entry.height,
                small=esc(entry.small),
                small_width=entry.small_width,
                small_height=entry.small_height,
                thumb_width=manifest.thumb_width,
                thumb_height=manifest.thumb_height,
                thumb=esc(entry.thumbnail_url),
                copyright=esc(entry.copyright),
            ))

        lines.append('{{< /wrap >}}\n')
        return ''.join(lines)

    def write(self, manifest: Manifest, filepath: str) -> None:
        """Write the rendered page as UTF-8."""
        path = Path(filepath)
        with open(path, 'w', encoding='utf-8', newline='\n') as f:
            f.write(self.render(manifest))
        self.logger.info(f"Index written: {filepath}")
