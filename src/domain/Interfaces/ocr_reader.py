from abc import ABC, abstractmethod
from enum import Enum
from typing import List

from src.domain.Models.recognized_line import RecognizedLine


class PageSegMode(str, Enum):
    SINGLE_BLOCK = "single_block"
    SINGLE_LINE = "single_line"

    @staticmethod
    def from_flag(single_block: bool) -> "PageSegMode":
        return PageSegMode.SINGLE_BLOCK if single_block else PageSegMode.SINGLE_LINE


class IOCRReader(ABC):
    """
    Motor OCR externo. Ciclo de vida: load -> configure -> recognize* -> release.
    Una instancia no se comparte entre pasadas concurrentes.
    """
    @abstractmethod
    def load(self) -> None:
        """Carga el modelo / inicializa el motor."""
        pass

    @abstractmethod
    def configure(self, whitelist: str, psm: PageSegMode) -> None:
        """Fija la whitelist de caracteres y el modo de segmentación."""
        pass

    @abstractmethod
    def recognize(self, image: bytes) -> List[RecognizedLine]:
        """Reconoce el texto de una imagen codificada (PNG/JPEG)."""
        pass

    @abstractmethod
    def release(self) -> None:
        """Libera los recursos del motor."""
        pass
