# src/domain/Services/plate_extractor.py
import re
from typing import Iterable, Optional, Tuple

from src.domain.Interfaces.text_normalizer import ITextNormalizer
from src.domain.Models.recognized_line import RecognizedLine

PLATE_LENGTH = 7

# Sustituciones globales, en este orden, por segmento (LL DDD LL)
FIRST_CORRECTIONS: Tuple[Tuple[str, str], ...] = (("1", "T"),)
MIDDLE_CORRECTIONS: Tuple[Tuple[str, str], ...] = (
    ("S", "5"),
    ("O", "0"),
    ("I", "1"),
    ("T", "1"),
    ("Z", "7"),
)
LAST_CORRECTIONS: Tuple[Tuple[str, str], ...] = (("1", "T"), ("7", "Z"), ("8", "Z"))

_SHAPE = re.compile(r"[A-Za-z0-9_]{2}[A-Za-z0-9_]{3}[A-Za-z0-9_]{2}")
_LETTERS = re.compile(r"[A-Za-z]{2}")
_DIGITS = re.compile(r"[0-9]{3}")


def apply_corrections(segment: str, table: Tuple[Tuple[str, str], ...]) -> str:
    for wrong, right in table:
        segment = segment.replace(wrong, right)
    return segment


class PlateExtractor:
    """
    Busca una placa LL DDD LL en las líneas OCR.

    Por cada línea (en orden): normaliza, desliza una ventana de 7
    caracteres y, si la ventana tiene la forma alfanumérica, corrige
    confusiones típicas del OCR por segmento y valida el tipo estricto.
    La primera ventana válida gana; el resto no se evalúa.
    """

    def __init__(self, normalizer: ITextNormalizer):
        self.normalizer = normalizer

    def extract_plate(self, lines: Iterable[RecognizedLine]) -> Optional[str]:
        for line in lines:
            text = self.normalizer.normalize(line.text)
            if len(text) < PLATE_LENGTH:
                continue

            for offset in range(len(text) - PLATE_LENGTH + 1):
                plate = self.match_window(text[offset:offset + PLATE_LENGTH])
                if plate:
                    return plate

        return None

    @staticmethod
    def match_window(window: str) -> Optional[str]:
        if not _SHAPE.fullmatch(window):
            return None

        first = apply_corrections(window[:2], FIRST_CORRECTIONS)
        middle = apply_corrections(window[2:5], MIDDLE_CORRECTIONS)
        last = apply_corrections(window[5:], LAST_CORRECTIONS)

        if _LETTERS.fullmatch(first) and _DIGITS.fullmatch(middle) and _LETTERS.fullmatch(last):
            return first + middle + last
        return None
