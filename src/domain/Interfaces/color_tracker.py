# src/domain/Interfaces/color_tracker.py
from abc import ABC, abstractmethod
from typing import List

from src.domain.Models.color_range import ColorRange
from src.domain.Models.frame import Frame
from src.domain.Models.rectangle import Rectangle


class IColorTracker(ABC):
    """
    Contrato para el agrupador de pixeles por color.

    Cada llamada a `track` es un "scan": agrupa los pixeles que caen dentro
    del rango y devuelve cero o más bounding boxes. La política de
    deduplicación y de resolución vive fuera (TrackingPass), no aquí.
    """

    @abstractmethod
    def track(self, frame: Frame, color_range: ColorRange) -> List[Rectangle]:
        """
        Parameters
        ----------
        frame : Frame
            Imagen RGB a escanear.
        color_range : ColorRange
            Predicado de color (inclusivo por canal).

        Returns
        -------
        List[Rectangle]
            Boxes encontrados en este scan (puede ser vacía).
        """
        pass
