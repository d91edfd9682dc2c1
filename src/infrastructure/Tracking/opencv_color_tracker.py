# src/infrastructure/Tracking/opencv_color_tracker.py
from typing import List, Optional
import logging

import cv2
import numpy as np

from src.domain.Interfaces.color_tracker import IColorTracker
from src.domain.Models.color_range import ColorRange
from src.domain.Models.frame import Frame
from src.domain.Models.rectangle import Rectangle
from src.core.config import settings

logger = logging.getLogger(__name__)


def union(a: Rectangle, b: Rectangle) -> Rectangle:
    x = min(a.x, b.x)
    y = min(a.y, b.y)
    return Rectangle(
        x=x,
        y=y,
        width=max(a.right, b.right) - x,
        height=max(a.bottom, b.bottom) - y,
        color=a.color,
    )


def merge_rectangles(rects: List[Rectangle]) -> List[Rectangle]:
    """Fusiona boxes que se intersectan hasta que no quede ninguno por fusionar."""
    merged = list(rects)
    changed = True
    while changed:
        changed = False
        result: List[Rectangle] = []
        for rect in merged:
            for i, other in enumerate(result):
                if rect.intersects(other):
                    result[i] = union(other, rect)
                    changed = True
                    break
            else:
                result.append(rect)
        merged = result
    return merged


class OpenCVColorTracker(IColorTracker):
    """
    Agrupador de color sobre OpenCV:
    - máscara por rango inclusivo (cv2.inRange)
    - componentes conexas (8-vecinos)
    - descarta grupos con pocos pixeles y boxes fuera de [min_dim, max_dim]
    - fusiona boxes que se intersectan
    """

    def __init__(
        self,
        color_label: Optional[str] = None,
        min_dimension: Optional[int] = None,
        max_dimension: Optional[int] = None,
        min_group_size: Optional[int] = None,
    ):
        self.color_label = color_label or settings.track_color_label
        self.min_dimension = min_dimension if min_dimension is not None else settings.track_min_dimension
        self.max_dimension = max_dimension if max_dimension is not None else settings.track_max_dimension
        self.min_group_size = min_group_size if min_group_size is not None else settings.track_min_group_size

    def track(self, frame: Frame, color_range: ColorRange) -> List[Rectangle]:
        image = np.ascontiguousarray(frame.data, dtype=np.uint8)
        mask = cv2.inRange(image, color_range.lower, color_range.upper)

        count, _, stats, _ = cv2.connectedComponentsWithStats(mask, connectivity=8)

        boxes: List[Rectangle] = []
        for label in range(1, count):  # 0 = fondo
            x, y, w, h, area = (int(v) for v in stats[label])
            if area < self.min_group_size:
                continue
            rect = Rectangle(x=x, y=y, width=w, height=h, color=self.color_label)
            if self._fits(rect):
                boxes.append(rect)

        boxes = merge_rectangles(boxes)
        logger.debug("[%s] scan: %d componentes, %d boxes", frame.source, count - 1, len(boxes))
        return boxes

    def _fits(self, rect: Rectangle) -> bool:
        if rect.width < self.min_dimension or rect.height < self.min_dimension:
            return False
        if self.max_dimension and (rect.width > self.max_dimension or rect.height > self.max_dimension):
            return False
        return True
