from typing import Optional
import logging

import cv2
import numpy as np

from src.domain.Interfaces.image_enhancer import IImageEnhancer
from src.domain.Models.filter_config import FilterConfig
from src.domain.Models.frame import Frame
from src.domain.Models.rectangle import Rectangle
from src.infrastructure.Imaging.image_loader import encode_image

logger = logging.getLogger(__name__)


# ==========================================================
# FILTROS (arrays RGB uint8, sin estado)
# ==========================================================
def greyscale(image: np.ndarray) -> np.ndarray:
    """Luma BT.709; se mantienen 3 canales."""
    rgb = image.astype(np.float32)
    grey = (0.2126 * rgb[..., 0] + 0.7152 * rgb[..., 1] + 0.0722 * rgb[..., 2]).astype(np.uint8)
    return np.repeat(grey[..., None], 3, axis=2)


def contrast(image: np.ndarray, value: float) -> np.ndarray:
    """value en [-1, 1]; negativo reduce, positivo aumenta."""
    if not -1 <= value <= 1:
        raise ValueError(f"contrast fuera de [-1, 1]: {value}")
    factor = (value + 1) / max(1 - value, 1e-6)
    out = np.floor(factor * (image.astype(np.float32) - 127) + 127)
    return np.clip(out, 0, 255).astype(np.uint8)


def brightness(image: np.ndarray, value: float) -> np.ndarray:
    """value en [-1, 1]; negativo oscurece, positivo aclara."""
    if not -1 <= value <= 1:
        raise ValueError(f"brightness fuera de [-1, 1]: {value}")
    px = image.astype(np.float32)
    out = px * (1 + value) if value < 0 else px + (255 - px) * value
    return np.clip(out, 0, 255).astype(np.uint8)


def normalize(image: np.ndarray) -> np.ndarray:
    """Estira el histograma de cada canal a 0..255 (min-max)."""
    out = image.copy()
    for c in range(out.shape[2]):
        channel = out[..., c].astype(np.float32)
        lo, hi = float(channel.min()), float(channel.max())
        if hi == lo:
            continue
        out[..., c] = ((channel - lo) * 255 / (hi - lo)).astype(np.uint8)
    return out


def sobel_edges(frame: Frame) -> Frame:
    """Magnitud del gradiente Sobel del frame, como imagen gris de 3 canales."""
    grey = cv2.cvtColor(frame.data, cv2.COLOR_RGB2GRAY).astype(np.float32)
    gx = cv2.Sobel(grey, cv2.CV_32F, 1, 0, ksize=3)
    gy = cv2.Sobel(grey, cv2.CV_32F, 0, 1, ksize=3)
    magnitude = np.clip(cv2.magnitude(gx, gy), 0, 255).astype(np.uint8)
    return Frame(
        data=np.repeat(magnitude[..., None], 3, axis=2),
        timestamp=frame.timestamp,
        source=frame.source,
    )


class OpenCVImageEnhancer(IImageEnhancer):
    """
    Recorta y mejora la región antes del OCR.
    Orden fijo: greyscale -> contrast -> brightness -> normalize.
    Primero se recorta: los filtros sólo tocan la región de interés.
    """

    def prepare(self, frame: Frame, rect: Rectangle, filters: Optional[FilterConfig]) -> bytes:
        crop = self.crop(frame.data, rect)
        crop = self.apply_filters(crop, filters)
        return encode_image(crop, ".png")

    @staticmethod
    def crop(image: np.ndarray, rect: Rectangle) -> np.ndarray:
        height, width = image.shape[:2]
        x0, y0 = max(0, rect.x), max(0, rect.y)
        x1, y1 = min(width, rect.right), min(height, rect.bottom)
        if x1 <= x0 or y1 <= y0:
            raise ValueError(f"Rectángulo {rect.to_dict()} fuera de la imagen {width}x{height}")
        return image[y0:y1, x0:x1].copy()

    def apply_filters(self, image: np.ndarray, filters: Optional[FilterConfig]) -> np.ndarray:
        if not filters:
            return image

        if filters.greyscale:
            image = greyscale(image)

        if filters.contrast:
            image = contrast(image, float(filters.contrast))

        if filters.brightness:
            image = brightness(image, float(filters.brightness))

        if filters.normalize:
            image = normalize(image)

        return image
