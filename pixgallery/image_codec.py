"""
ImageCodec - Decoding, resizing, encoding and metadata extraction.
"""

import io
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image, ImageOps, JpegImagePlugin, UnidentifiedImageError

from .errors import DecodeError, EncodeError


# EXIF Copyright (0x8298)
COPYRIGHT_TAG = 0x8298


@dataclass
class DecodedImage:
    """
    A decoded source image.

    Attributes:
        image: Pixel data with EXIF orientation applied
        format: Pillow format name of the source ('JPEG', 'PNG', ...)
        copyright: Copyright string from EXIF, empty when absent
    """
    image: Image.Image
    format: str
    copyright: str = ''

    @property
    def width(self) -> int:
        return self.image.size[0]

    @property
    def height(self) -> int:
        return self.image.size[1]


class ImageCodec:
    """
    Decodes and encodes gallery images using Pillow.
    """

    FORMATS = ('JPEG', 'PNG')

    def __init__(
        self,
        quality: int = 85,
        resample: str = 'LANCZOS',
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize codec.

        Args:
            quality: JPEG quality for output (default: 85)
            resample: Name of a Pillow resampling filter (default: LANCZOS)
            logger: Optional logger instance
        """
        self.quality = quality
        self.resample = Image.Resampling[resample.upper()]
        self.logger = logger or logging.getLogger(__name__)

    def decode(self, image_data: bytes) -> DecodedImage:
        """
        Decode image bytes.

        Raises:
            DecodeError: If the bytes are not a readable image
        """
        try:
            img = Image.open(io.BytesIO(image_data))
            img.load()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError,
                Image.DecompressionBombError) as e:
            raise DecodeError(str(e)) from e

        # MPO (camera multi-picture JPEG) decodes as its first frame
        if isinstance(img, JpegImagePlugin.JpegImageFile):
            source_format = 'JPEG'
        else:
            source_format = img.format
        copyright = self.extract_copyright(img)
        try:
            img = ImageOps.exif_transpose(img)
        except (OSError, SyntaxError, ValueError, KeyError, TypeError) as e:
            self.logger.debug(f"Ignoring EXIF orientation: {e}")

        if img.mode in ('P', '1'):
            img = img.convert('RGBA' if 'transparency' in img.info else 'RGB')

        return DecodedImage(image=img, format=source_format or '', copyright=copyright)

    def extract_copyright(self, img: Image.Image) -> str:
        """Read the EXIF copyright, returning an empty string when unavailable."""
        try:
            value = img.getexif().get(COPYRIGHT_TAG)
        except (OSError, SyntaxError, ValueError, KeyError) as e:
            self.logger.debug(f"Unreadable EXIF: {e}")
            return ''

        if value is None:
            return ''
        if isinstance(value, bytes):
            value = value.decode('utf-8', errors='replace')
        return str(value).replace('\x00', '').strip().strip('"').strip()

    def resize_within(self, img: Image.Image, max_width: int, max_height: int) -> Image.Image:
        """Scale down to fit a bounding box, preserving aspect ratio. Never upscales."""
        width, height = img.size
        scale = min(max_width / width, max_height / height, 1.0)
        if scale >= 1.0:
            return img.copy()
        size = (max(1, round(width * scale)), max(1, round(height * scale)))
        return img.resize(size, self.resample)

    def resize_exact(
        self,
        img: Image.Image,
        size: Tuple[int, int],
        box: Optional[Tuple[int, int, int, int]] = None
    ) -> Image.Image:
        """Resize a region of the image (whole image when box is None) to an exact size."""
        return img.resize(size, self.resample, box=box)

    def encode(self, img: Image.Image, output_format: str) -> bytes:
        """
        Encode an image in the given format.

        Raises:
            EncodeError: If the format is not JPEG or PNG
        """
        output = io.BytesIO()
        if output_format == 'JPEG':
            img = self._convert_color_mode(img)
            img.save(output, format='JPEG', quality=self.quality, optimize=True)
        elif output_format == 'PNG':
            img.save(output, format='PNG', optimize=True)
        else:
            raise EncodeError(f"unexpected format: {output_format or 'unknown'}")
        return output.getvalue()

    def _convert_color_mode(self, img: Image.Image) -> Image.Image:
        """Convert image to a color mode JPEG can store."""
        if img.mode in ('RGBA', 'LA', 'PA'):
            background = Image.new('RGB', img.size, (255, 255, 255))
            if img.mode != 'RGBA':
                img = img.convert('RGBA')
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode not in ('RGB', 'L', 'CMYK'):
            return img.convert('RGB')
        return img
