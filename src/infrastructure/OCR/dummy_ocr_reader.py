from typing import List, Optional, Sequence

from src.domain.Interfaces.ocr_reader import IOCRReader, PageSegMode
from src.domain.Models.recognized_line import RecognizedLine


class DummyOCRReader(IOCRReader):
    """
    Implementación dummy que devuelve siempre las mismas líneas.
    Útil para pruebas locales sin modelo OCR.
    """

    def __init__(self, lines: Optional[Sequence[str]] = None):
        self.lines = list(lines) if lines is not None else ["AB123CD"]
        self.loaded = False
        self.psm: Optional[PageSegMode] = None
        self.whitelist: Optional[str] = None

    def load(self) -> None:
        self.loaded = True

    def configure(self, whitelist: str, psm: PageSegMode) -> None:
        self.whitelist = whitelist
        self.psm = psm

    def recognize(self, image: bytes) -> List[RecognizedLine]:
        return [RecognizedLine(text=t, raw=t, confidence=0.99) for t in self.lines]

    def release(self) -> None:
        self.loaded = False
