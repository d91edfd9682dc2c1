from typing import Protocol


class ITextNormalizer(Protocol):
    """
    Limpia una línea OCR antes de buscar la placa.
    Devuelve "" si no queda nada utilizable.
    """
    def normalize(self, text: str) -> str: ...
