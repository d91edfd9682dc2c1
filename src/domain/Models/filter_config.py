from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class FilterConfig:
    """
    Ajustes de pixel opcionales aplicados al recorte antes del OCR.
    contrast / brightness: magnitud con signo en [-1, 1]; un valor falsy
    (False, None, 0) desactiva el ajuste.
    """
    greyscale: bool = False
    contrast: Union[float, bool, None] = False
    brightness: Union[float, bool, None] = False
    normalize: bool = False

    @property
    def enabled(self) -> bool:
        return bool(self.greyscale or self.contrast or self.brightness or self.normalize)

    @staticmethod
    def from_settings(settings) -> Optional["FilterConfig"]:
        filters = FilterConfig(
            greyscale=settings.filter_greyscale,
            contrast=settings.filter_contrast or False,
            brightness=settings.filter_brightness or False,
            normalize=settings.filter_normalize,
        )
        return filters if filters.enabled else None
