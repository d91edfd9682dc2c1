# src/domain/Services/region_tracker.py
from __future__ import annotations
import logging
from typing import Callable, Iterable, List, Optional, Union

from src.domain.Interfaces.color_tracker import IColorTracker
from src.domain.Models.color_range import ColorRange
from src.domain.Models.frame import Frame
from src.domain.Models.rectangle import Rectangle

logger = logging.getLogger(__name__)


class TrackingPass:
    """
    Acumulador de una sola pasada de tracking.

    - Un scan vacío no resuelve la pasada (frame transitorio).
    - El primer scan con boxes la resuelve.
    - Un box se descarta si su esquina superior izquierda cae dentro de
      un box ya aceptado (test de un solo lado, no es IoU).
    """

    def __init__(self):
        self.rectangles: List[Rectangle] = []
        self.frame: Optional[Frame] = None   # frame que resolvió la pasada
        self.done = False
        self.scans = 0
        self.idle_scans = 0

    def feed(self, boxes: List[Rectangle]) -> bool:
        """Procesa un scan. Devuelve True si la pasada quedó resuelta."""
        if self.done:
            raise RuntimeError("TrackingPass ya resuelta; crear una nueva pasada")

        self.scans += 1
        if not boxes:
            self.idle_scans += 1
            return False

        for box in boxes:
            if self.is_covered(box):
                continue
            self.rectangles.append(box)

        self.done = True
        return True

    def is_covered(self, box: Rectangle) -> bool:
        return any(existing.contains_point(box.x, box.y) for existing in self.rectangles)


class RegionTracker:
    """
    Política de detección sobre el agrupador de color: consume scans hasta
    el primero no vacío y devuelve los rectángulos deduplicados.
    """

    def __init__(self, color_tracker: IColorTracker, max_idle_scans: Optional[int] = None):
        self.color_tracker = color_tracker
        self.max_idle_scans = max_idle_scans or None

    def detect_regions(
        self,
        frames: Union[Frame, Iterable[Frame]],
        color_range: ColorRange,
    ) -> List[Rectangle]:
        tracking_pass = self.run_pass(frames, color_range)
        return list(tracking_pass.rectangles)

    def run_pass(
        self,
        frames: Union[Frame, Iterable[Frame]],
        color_range: ColorRange,
        detection_view: Optional[Callable[[Frame], Frame]] = None,
    ) -> TrackingPass:
        """
        Ejecuta una pasada completa. `detection_view` transforma cada frame
        sólo para la detección (filtros previos, Sobel); la pasada guarda el
        frame original que la resolvió.
        """
        if isinstance(frames, Frame):
            frames = [frames]

        tracking_pass = TrackingPass()
        for frame in frames:
            scanned = detection_view(frame) if detection_view else frame
            boxes = self.color_tracker.track(scanned, color_range)
            if tracking_pass.feed(boxes):
                tracking_pass.frame = frame
                logger.debug(
                    "Pasada resuelta en scan %d: %d boxes, %d aceptados",
                    tracking_pass.scans, len(boxes), len(tracking_pass.rectangles),
                )
                return tracking_pass

            if self.max_idle_scans and tracking_pass.idle_scans >= self.max_idle_scans:
                break

        logger.debug("Sin regiones tras %d scans vacíos", tracking_pass.idle_scans)
        return tracking_pass
