"""
Pytest fixtures for pixgallery tests.
"""

import io
import os
import time
from datetime import datetime

import pytest


def write_image(path, size, color=(128, 128, 128), fmt='JPEG', mode='RGB'):
    """Write a solid image to path and return the path as a string."""
    from PIL import Image

    img = Image.new(mode, size, color=color)
    img.save(str(path), format=fmt)
    return str(path)


def set_mtime(path, mtime):
    """Set both atime and mtime of path."""
    os.utime(str(path), (mtime, mtime))


@pytest.fixture
def make_image():
    """Fixture providing the write_image helper."""
    return write_image


@pytest.fixture
def touch():
    """Fixture providing the set_mtime helper."""
    return set_mtime


@pytest.fixture
def past_time():
    """A modification time safely before anything written during the test."""
    return int(time.time()) - 3600


@pytest.fixture
def source_dir(tmp_path, past_time):
    """
    Fixture providing a source directory with a.jpg, b.jpg and c.png.

    Sources are dated an hour ago so derivatives written now are fresh.
    """
    src = tmp_path / "src"
    src.mkdir()
    write_image(src / "a.jpg", (1000, 800), color=(200, 120, 90))
    write_image(src / "b.jpg", (2000, 1500), color=(40, 90, 160))
    write_image(src / "c.png", (500, 500), color=(10, 200, 30), fmt='PNG')
    for name in ('a.jpg', 'b.jpg', 'c.png'):
        set_mtime(src / name, past_time)
    return src


@pytest.fixture
def output_dir(tmp_path):
    """Fixture providing a (not yet created) output directory path."""
    return tmp_path / "out"


@pytest.fixture
def gallery_config(source_dir, output_dir):
    """Fixture providing a single-worker gallery configuration."""
    from pixgallery.gallery_config import GalleryConfig

    return GalleryConfig(
        output_dir=str(output_dir),
        source_dir=str(source_dir),
        title='Test Gallery',
        workers=1,
    )


@pytest.fixture
def sample_image_bytes():
    """Fixture providing sample JPEG image bytes."""
    from PIL import Image

    img = Image.new('RGB', (100, 100), color='red')
    buffer = io.BytesIO()
    img.save(buffer, format='JPEG')
    return buffer.getvalue()


@pytest.fixture
def sample_png_bytes():
    """Fixture providing sample PNG image bytes with transparency."""
    from PIL import Image

    img = Image.new('RGBA', (100, 100), color=(255, 0, 0, 128))
    buffer = io.BytesIO()
    img.save(buffer, format='PNG')
    return buffer.getvalue()


@pytest.fixture
def copyright_jpeg_bytes():
    """Fixture providing JPEG bytes carrying an EXIF copyright."""
    from PIL import Image

    img = Image.new('RGB', (64, 48), color='green')
    exif = Image.Exif()
    exif[0x8298] = '"Jane Doe 2024"'
    buffer = io.BytesIO()
    img.save(buffer, format='JPEG', exif=exif.tobytes())
    return buffer.getvalue()


@pytest.fixture
def mpo_bytes():
    """Fixture providing a two-frame multi-picture JPEG, as written by cameras."""
    from PIL import Image

    frames = [Image.new('RGB', (120, 90), color='blue'), Image.new('RGB', (120, 90), color='red')]
    buffer = io.BytesIO()
    frames[0].save(buffer, format='MPO', save_all=True, append_images=frames[1:])
    return buffer.getvalue()


@pytest.fixture
def sample_entries():
    """Fixture providing three manifest entries in traversal order."""
    from pixgallery.gallery_entry import ManifestEntry

    return [
        ManifestEntry('a.jpg', 'a_small.jpg', 'a_thm.jpg', 1000, 800, 800, 640),
        ManifestEntry('b.jpg', 'b_small.jpg', 'b_thm.jpg', 2000, 1500, 800, 600,
                      copyright='Jane Doe'),
        ManifestEntry('c.png', 'c_small.png', None, 500, 500, 500, 500),
    ]


@pytest.fixture
def sample_manifest(sample_entries):
    """Fixture providing a sample manifest."""
    from pixgallery.manifest import Manifest

    manifest = Manifest.create_new('Holiday', 256, 256, now=datetime(2024, 5, 17, 12, 30))
    manifest.entries.extend(sample_entries)
    return manifest


@pytest.fixture
def temp_manifest_file(sample_manifest, tmp_path):
    """Fixture providing a temporary manifest file."""
    filepath = tmp_path / "test_manifest.json"
    sample_manifest.save(str(filepath))
    return str(filepath)


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    import logging
    return logging.getLogger('test')
