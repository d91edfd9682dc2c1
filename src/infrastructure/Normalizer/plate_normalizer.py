# src/infrastructure/Normalizer/plate_normalizer.py
import re
from src.domain.Interfaces.text_normalizer import ITextNormalizer


class PlateTextNormalizer(ITextNormalizer):
    """
    Normaliza una línea OCR:
    - Quitar puntuación / símbolos habituales del OCR
    - Quitar todo espacio en blanco
    - Mayúsculas
    No valida longitudes: eso lo decide el extractor.
    """
    _SYMBOLS = re.compile(r"[&/\\#,+()\-\[\]$~%.'\":*?°‘’`<>{}\s]")

    def normalize(self, text: str) -> str:
        if not text:
            return ""
        return self._SYMBOLS.sub("", text).upper()
