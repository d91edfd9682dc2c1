from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from src.domain.Models.filter_config import FilterConfig
from src.domain.Models.frame import Frame
from src.domain.Models.rectangle import Rectangle


class IImageEnhancer(ABC):
    """
    Recorte + mejora de imagen previa al OCR.
    """
    @abstractmethod
    def prepare(self, frame: Frame, rect: Rectangle, filters: Optional[FilterConfig]) -> bytes:
        """Recorta el frame al rectángulo, aplica filtros y codifica."""
        pass

    @abstractmethod
    def apply_filters(self, image: np.ndarray, filters: Optional[FilterConfig]) -> np.ndarray:
        """Aplica los filtros habilitados, en orden fijo, a una imagen RGB."""
        pass
