from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True)
class ColorRange:
    """
    Rango de color inclusivo por canal (R, G, B).
    Un pixel "coincide" si los tres canales caen dentro de sus límites.
    """
    min_r: int = 80
    max_r: int = 255
    min_g: int = 80
    max_g: int = 255
    min_b: int = 80
    max_b: int = 255

    def __post_init__(self):
        for lo, hi, channel in (
            (self.min_r, self.max_r, "R"),
            (self.min_g, self.max_g, "G"),
            (self.min_b, self.max_b, "B"),
        ):
            if not (0 <= lo <= 255 and 0 <= hi <= 255):
                raise ValueError(f"Canal {channel} fuera de rango 0..255: ({lo}, {hi})")
            if lo > hi:
                raise ValueError(f"Canal {channel}: mínimo {lo} mayor que máximo {hi}")

    def matches(self, r: int, g: int, b: int) -> bool:
        return (
            self.min_r <= r <= self.max_r
            and self.min_g <= g <= self.max_g
            and self.min_b <= b <= self.max_b
        )

    @property
    def lower(self) -> np.ndarray:
        return np.array([self.min_r, self.min_g, self.min_b], dtype=np.uint8)

    @property
    def upper(self) -> np.ndarray:
        return np.array([self.max_r, self.max_g, self.max_b], dtype=np.uint8)

    @staticmethod
    def from_settings(settings) -> "ColorRange":
        return ColorRange(
            min_r=settings.track_min_r,
            max_r=settings.track_max_r,
            min_g=settings.track_min_g,
            max_g=settings.track_max_g,
            min_b=settings.track_min_b,
            max_b=settings.track_max_b,
        )
