"""Tests for CropSelector class."""

import numpy as np
import pytest
from PIL import Image

from pixgallery.crop_selector import CropBox, CropSelector, CropSettings
from pixgallery.errors import CropUnsupportedError


def noise(size, seed=0):
    """Random RGB image with high local detail."""
    rng = np.random.default_rng(seed)
    data = rng.integers(60, 200, size=(size[1], size[0], 3), dtype=np.uint8)
    return Image.fromarray(data)


class TestCropBox:
    """Tests for CropBox class."""

    def test_as_box(self):
        """Test conversion to a Pillow box tuple."""
        assert CropBox(10, 20, 30, 40).as_box() == (10, 20, 40, 60)

    def test_center(self):
        """Test window center."""
        assert CropBox(0, 0, 100, 50).center == (50.0, 25.0)


class TestCropSettings:
    """Tests for CropSettings validation."""

    def test_defaults_valid(self):
        """Test default settings validate cleanly."""
        assert CropSettings().validate() == []

    def test_invalid_values(self):
        """Test out-of-range values are reported."""
        settings = CropSettings(min_scale=0, scale_step=-1, position_step=2, analysis_size=1)

        assert len(settings.validate()) == 4


class TestCropSelector:
    """Tests for CropSelector class."""

    def test_uniform_image_is_centered(self):
        """Test a featureless image yields the centered largest window."""
        img = Image.new('RGB', (400, 200), color=(128, 128, 128))

        crop = CropSelector().select_crop(img, 100, 100)

        assert crop == CropBox(100, 0, 200, 200)

    def test_prefers_detail(self):
        """Test the window moves toward the detailed half."""
        img = Image.new('RGB', (400, 200), color=(128, 128, 128))
        img.paste(noise((200, 200)), (200, 0))

        crop = CropSelector().select_crop(img, 100, 100)

        assert crop.center[0] > 200

    def test_prefers_skin(self):
        """Test skin tones outweigh a flat non-skin area."""
        img = Image.new('RGB', (400, 200), color=(70, 90, 200))
        img.paste(Image.new('RGB', (200, 200), color=(224, 172, 140)), (0, 0))

        crop = CropSelector().select_crop(img, 100, 100)

        assert crop.center[0] < 200

    def test_avoids_blown_out_regions(self):
        """Test near-white areas are penalized."""
        img = Image.new('RGB', (400, 200), color=(120, 130, 110))
        img.paste(Image.new('RGB', (200, 200), color=(255, 255, 255)), (200, 0))

        crop = CropSelector().select_crop(img, 100, 100)

        assert crop.center[0] < 200

    @pytest.mark.parametrize('size,target', [
        ((1000, 800), (256, 256)),
        ((2000, 1500), (300, 200)),
        ((500, 500), (256, 256)),
        ((640, 1280), (160, 90)),
        ((123, 457), (64, 48)),
        ((50, 40), (256, 256)),
    ])
    def test_crop_containment_and_aspect(self, size, target):
        """Test the crop stays inside the image with the target aspect."""
        img = noise(size, seed=size[0])
        target_w, target_h = target

        crop = CropSelector().select_crop(img, target_w, target_h)

        assert crop.x >= 0 and crop.y >= 0
        assert crop.x + crop.width <= size[0]
        assert crop.y + crop.height <= size[1]
        assert abs(crop.width - crop.height * target_w / target_h) <= 1 + target_w / target_h

    def test_candidate_windows_cover_edges(self):
        """Test the search always includes the far edge position."""
        windows = list(CropSelector().candidate_windows(105, 50, 1.0))

        assert any(w.x + w.width == 105 for w in windows)
        assert all(w.x + w.width <= 105 and w.y + w.height <= 50 for w in windows)

    def test_largest_window(self):
        """Test the largest fitting window for wide and tall images."""
        assert CropSelector.largest_window(400, 200, 1.0) == (200, 200)
        assert CropSelector.largest_window(200, 400, 2.0) == (200, 100)

    def test_grayscale_supported(self):
        """Test single-channel images are analysed."""
        img = Image.new('L', (300, 100), color=100)

        crop = CropSelector().select_crop(img, 50, 50)

        assert crop.width == crop.height == 100

    def test_unsupported_mode(self):
        """Test high-bit-depth modes signal crop unsupported."""
        img = Image.new('I', (100, 100))

        with pytest.raises(CropUnsupportedError):
            CropSelector().select_crop(img, 50, 50)

    def test_invalid_target(self):
        """Test zero-sized targets are rejected."""
        with pytest.raises(ValueError):
            CropSelector().select_crop(Image.new('RGB', (10, 10)), 0, 10)

    def test_custom_weights(self):
        """Test weights are configurable."""
        img = Image.new('RGB', (400, 200), color=(70, 90, 200))
        img.paste(Image.new('RGB', (200, 200), color=(224, 172, 140)), (0, 0))
        settings = CropSettings(skin_weight=0.0)

        crop = CropSelector(settings).select_crop(img, 100, 100)

        assert crop.x > 0
