"""
CropSelector - Content-aware crop window selection for thumbnails.
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Iterator, List, Optional, Tuple

import numpy as np
from PIL import Image

from .errors import CropUnsupportedError


@dataclass
class CropSettings:
    """
    Saliency weights and search steps for crop selection.

    Attributes:
        detail_weight: Weight of normalized edge energy
        skin_weight: Weight of the skin-tone mask
        extreme_weight: Penalty for near-black or near-white pixels
        center_weight: Bonus for windows near the image center
        min_scale: Smallest window as a fraction of the largest fitting one
        scale_step: Scale decrement between window sizes
        position_step: Window offset step as a fraction of window size
        analysis_size: Long edge of the downscaled analysis copy
        dark_threshold: Luminance below which a pixel counts as extreme
        bright_threshold: Luminance above which a pixel counts as extreme
    """
    detail_weight: float = 1.0
    skin_weight: float = 0.6
    extreme_weight: float = 0.5
    center_weight: float = 0.05
    min_scale: float = 0.9
    scale_step: float = 0.05
    position_step: float = 0.1
    analysis_size: int = 256
    dark_threshold: float = 0.08
    bright_threshold: float = 0.92

    def to_dict(self) -> dict:
        return asdict(self)

    def validate(self) -> List[str]:
        """Return a list of configuration errors."""
        errors = []
        if not 0 < self.min_scale <= 1:
            errors.append(f"Crop min_scale must be in (0, 1]: {self.min_scale}")
        if self.scale_step <= 0:
            errors.append(f"Crop scale_step must be positive: {self.scale_step}")
        if not 0 < self.position_step <= 1:
            errors.append(f"Crop position_step must be in (0, 1]: {self.position_step}")
        if self.analysis_size < 8:
            errors.append(f"Crop analysis_size too small: {self.analysis_size}")
        return errors


@dataclass(frozen=True)
class CropBox:
    """A crop rectangle in source pixel coordinates."""
    x: int
    y: int
    width: int
    height: int

    def as_box(self) -> Tuple[int, int, int, int]:
        """Pillow (left, upper, right, lower) tuple."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


class CropSelector:
    """
    Picks the most salient window of a target aspect ratio.

    Candidate windows slide over the image at a few scales. Each is scored
    by the mean of a per-pixel saliency map plus a small centrality bonus.
    """

    # Modes that convert cleanly to 8-bit RGB for analysis
    SUPPORTED_MODES = frozenset(
        ('1', 'L', 'LA', 'P', 'PA', 'RGB', 'RGBA', 'RGBX', 'CMYK', 'YCbCr')
    )

    # ITU-R BT.601 luma
    LUMA = np.array([0.299, 0.587, 0.114], dtype=np.float32)

    # Skin ranges on Pillow's 0..1 scaled HSV
    SKIN_HUE_MAX = 50 / 360
    SKIN_HUE_WRAP = 340 / 360
    SKIN_SAT = (0.2, 0.68)
    SKIN_VALUE_MIN = 0.35

    def __init__(
        self,
        settings: Optional[CropSettings] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.settings = settings or CropSettings()
        self.logger = logger or logging.getLogger(__name__)

    def select_crop(self, image: Image.Image, target_width: int, target_height: int) -> CropBox:
        """
        Select the crop rectangle for a thumbnail.

        Args:
            image: Decoded source image
            target_width: Thumbnail width
            target_height: Thumbnail height

        Returns:
            CropBox with the target aspect ratio inside the image bounds

        Raises:
            CropUnsupportedError: If the image mode cannot be analysed
        """
        if image.mode not in self.SUPPORTED_MODES:
            raise CropUnsupportedError(f"cannot crop image mode {image.mode}")
        if target_width <= 0 or target_height <= 0:
            raise ValueError(f"invalid crop target {target_width}x{target_height}")

        width, height = image.size
        saliency = self.saliency_map(image)
        integral = self._integral(saliency)
        scale_x = saliency.shape[1] / width
        scale_y = saliency.shape[0] / height

        center_x, center_y = width / 2, height / 2
        max_distance = math.hypot(center_x, center_y) or 1.0

        best: Optional[CropBox] = None
        best_key = None
        for box in self.candidate_windows(width, height, target_width / target_height):
            box_x, box_y = box.center
            distance = math.hypot(box_x - center_x, box_y - center_y)
            score = self._window_mean(integral, box, scale_x, scale_y)
            score += self.settings.center_weight * (1 - distance / max_distance)
            key = (round(score, 9), -distance, box.width * box.height)
            if best_key is None or key > best_key:
                best, best_key = box, key

        self.logger.debug(f"Best crop {best} (score {best_key[0]:.4f})")
        return best

    def candidate_windows(self, width: int, height: int, aspect: float) -> Iterator[CropBox]:
        """Yield every window of the search, largest scale first."""
        base_width, base_height = self.largest_window(width, height, aspect)
        seen = set()
        steps = int(round((1 - self.settings.min_scale) / self.settings.scale_step))
        for i in range(steps + 1):
            scale = 1 - i * self.settings.scale_step
            if i == 0:
                win_w, win_h = base_width, base_height
            else:
                win_w = max(1, round(base_width * scale))
                win_h = min(height, max(1, round(win_w / aspect)))
            if (win_w, win_h) in seen:
                continue
            seen.add((win_w, win_h))

            for y in self._offsets(height, win_h):
                for x in self._offsets(width, win_w):
                    yield CropBox(x, y, win_w, win_h)

    @staticmethod
    def largest_window(width: int, height: int, aspect: float) -> Tuple[int, int]:
        """Largest (width, height) with the given aspect that fits the image."""
        if width / height >= aspect:
            win_h = height
            win_w = min(width, max(1, round(height * aspect)))
        else:
            win_w = width
            win_h = min(height, max(1, round(width / aspect)))
        return win_w, win_h

    def _offsets(self, extent: int, size: int) -> List[int]:
        step = max(1, int(size * self.settings.position_step))
        last = extent - size
        offsets = list(range(0, last + 1, step))
        if offsets[-1] != last:
            offsets.append(last)
        return offsets

    def saliency_map(self, image: Image.Image) -> np.ndarray:
        """
        Per-pixel saliency of a downscaled RGB copy of the image.

        Returns:
            2-D float array, shape (analysis_height, analysis_width)
        """
        analysis = image.convert('RGB')
        width, height = analysis.size
        factor = self.settings.analysis_size / max(width, height)
        if factor < 1:
            analysis = analysis.resize(
                (max(1, round(width * factor)), max(1, round(height * factor))),
                Image.Resampling.BILINEAR
            )

        rgb = np.asarray(analysis, dtype=np.float32) / 255.0
        hsv = np.asarray(analysis.convert('HSV'), dtype=np.float32) / 255.0
        luma = rgb @ self.LUMA

        s = self.settings
        saliency = s.detail_weight * self._edge_energy(luma)
        saliency += s.skin_weight * self._skin_mask(hsv)
        extreme = (luma < s.dark_threshold) | (luma > s.bright_threshold)
        saliency -= s.extreme_weight * extreme.astype(np.float32)
        return saliency

    @staticmethod
    def _edge_energy(luma: np.ndarray) -> np.ndarray:
        """Central-difference gradient magnitude normalized to 0..1."""
        grad_x = np.zeros_like(luma)
        grad_y = np.zeros_like(luma)
        grad_x[:, 1:-1] = luma[:, 2:] - luma[:, :-2]
        grad_y[1:-1, :] = luma[2:, :] - luma[:-2, :]
        energy = np.hypot(grad_x, grad_y)
        peak = energy.max()
        if peak > 0:
            energy /= peak
        return energy

    def _skin_mask(self, hsv: np.ndarray) -> np.ndarray:
        hue, sat, value = hsv[..., 0], hsv[..., 1], hsv[..., 2]
        hue_ok = (hue <= self.SKIN_HUE_MAX) | (hue >= self.SKIN_HUE_WRAP)
        sat_ok = (sat >= self.SKIN_SAT[0]) & (sat <= self.SKIN_SAT[1])
        return (hue_ok & sat_ok & (value >= self.SKIN_VALUE_MIN)).astype(np.float32)

    @staticmethod
    def _integral(saliency: np.ndarray) -> np.ndarray:
        integral = np.zeros((saliency.shape[0] + 1, saliency.shape[1] + 1), dtype=np.float64)
        integral[1:, 1:] = saliency.cumsum(axis=0).cumsum(axis=1)
        return integral

    @staticmethod
    def _window_mean(integral: np.ndarray, box: CropBox, scale_x: float, scale_y: float) -> float:
        """Mean saliency of a source-space box on the analysis grid."""
        rows, cols = integral.shape[0] - 1, integral.shape[1] - 1
        x0 = min(cols - 1, int(box.x * scale_x))
        y0 = min(rows - 1, int(box.y * scale_y))
        x1 = max(x0 + 1, min(cols, math.ceil((box.x + box.width) * scale_x)))
        y1 = max(y0 + 1, min(rows, math.ceil((box.y + box.height) * scale_y)))
        total = integral[y1, x1] - integral[y0, x1] - integral[y1, x0] + integral[y0, x0]
        return float(total) / ((x1 - x0) * (y1 - y0))
