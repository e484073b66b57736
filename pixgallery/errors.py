"""
Exception types raised while building a gallery.
"""


class GalleryError(Exception):
    """Base class for gallery build errors."""


class DecodeError(GalleryError):
    """Source bytes could not be decoded as an image."""


class EncodeError(GalleryError):
    """A derivative could not be encoded in the source format."""


class CropUnsupportedError(GalleryError):
    """The decoded image cannot be analysed or cropped for a thumbnail."""


class EmptyGalleryError(GalleryError):
    """No image was processed successfully."""


class OutputDirectoryError(GalleryError):
    """The output directory could not be created."""
