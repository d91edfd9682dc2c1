from dataclasses import dataclass, field
from typing import Optional

from src.domain.Models.color_range import ColorRange
from src.domain.Models.filter_config import FilterConfig


@dataclass(frozen=True)
class ProcessingOptions:
    """
    Opciones de una pasada completa: rango de color para el tracker,
    modo de segmentación del OCR y filtros.

    pre_filters     -> aplica los filtros también al frame completo antes del tracking
    detect_on_edges -> el tracking se hace sobre el gradiente Sobel del frame
    """
    color_range: ColorRange = field(default_factory=ColorRange)
    psm_single_block: bool = True
    filters: Optional[FilterConfig] = None
    pre_filters: bool = False
    detect_on_edges: bool = False

    @staticmethod
    def from_settings(settings) -> "ProcessingOptions":
        return ProcessingOptions(
            color_range=ColorRange.from_settings(settings),
            psm_single_block=settings.ocr_psm_single_block,
            filters=FilterConfig.from_settings(settings),
            pre_filters=settings.filter_pre,
            detect_on_edges=settings.detect_on_edges,
        )
