# src/domain/Services/inner_region_resolver.py
from typing import List, Optional

from src.domain.Models.rectangle import Rectangle


class InnerRegionResolver:
    """
    Busca dos regiones "ancla" alineadas verticalmente y devuelve el área
    entre ambas (con margen vertical).

    La tolerancia es en pixeles absolutos: abs(dy) / scale <= tolerance.
    No escala con la resolución de la imagen, por eso ambos valores son
    configurables.
    """

    def __init__(self, tolerance: float = 0.2, scale: float = 100.0, padding: int = 10):
        self.tolerance = tolerance
        self.scale = scale
        self.padding = padding

    def aligned(self, a: Rectangle, b: Rectangle) -> bool:
        return abs(a.y - b.y) / self.scale <= self.tolerance

    def pair(self, rects: List[Rectangle]) -> List[Rectangle]:
        """
        Recorre los rectángulos en orden; cada uno toma como pareja al primer
        candidato con x e y distintos, alineado y todavía no emparejado.
        El orden de entrada importa.
        """
        paired: List[Rectangle] = []
        for cur in rects:
            partner = next(
                (
                    r for r in rects
                    if r.x != cur.x
                    and r.y != cur.y
                    and not any(r.x == p.x and r.y == p.y for p in paired)
                    and self.aligned(cur, r)
                ),
                None,
            )
            if partner is not None:
                paired.extend((cur, partner))
        return paired

    def merge(self, a: Rectangle, b: Rectangle) -> Optional[Rectangle]:
        """Área entre dos anclas, borde a borde. None si se solapan en x."""
        left, right = (a, b) if a.x <= b.x else (b, a)
        x = left.right
        width = right.x - x
        if width <= 0:
            return None

        return Rectangle(
            x=x,
            y=min(a.y, b.y) - self.padding,
            width=width,
            height=max(a.height, b.height) + self.padding,
            color=left.color,
        )

    def resolve(self, rects: List[Rectangle]) -> Optional[Rectangle]:
        paired = self.pair(rects)
        if len(paired) != 2:
            return None
        return self.merge(*paired)
