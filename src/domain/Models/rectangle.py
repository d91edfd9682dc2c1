from dataclasses import dataclass, asdict
from typing import Optional


@dataclass
class Rectangle:
    """
    Bounding box alineado a los ejes, en coordenadas de pixel.
    """
    x: int
    y: int
    width: int
    height: int
    color: Optional[str] = None   # etiqueta del color que lo produjo

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rectángulo con dimensiones negativas: {self.width}x{self.height}")

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def contains_point(self, x: int, y: int) -> bool:
        """Test inclusivo: el punto puede caer sobre el borde derecho/inferior."""
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def intersects(self, other: "Rectangle") -> bool:
        return not (
            other.x > self.right
            or other.right < self.x
            or other.y > self.bottom
            or other.bottom < self.y
        )

    def to_dict(self) -> dict:
        return asdict(self)
