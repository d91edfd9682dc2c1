from dataclasses import dataclass
from typing import List, Optional

from src.domain.Models.ocr_result import OcrResult


@dataclass
class RecognitionReport:
    """
    Resultado de procesar una imagen completa.
    """
    event_id: Optional[str]   # idempotency / tracing
    source: str               # identificador del origen de la imagen
    mode: str                 # track | inner | rect
    results: List[OcrResult]
    captured_at: float        # timestamp original del frame
    processed_at: float       # timestamp cuando se terminó de procesar

    @property
    def plates(self) -> List[str]:
        return [r.plate for r in self.results if r.plate]

    def to_dict(self) -> dict:
        """Convierte a dict serializable."""
        return {
            "event_id": self.event_id,
            "source": self.source,
            "mode": self.mode,
            "results": [r.to_dict() for r in self.results],
            "plates": self.plates,
            "captured_at": self.captured_at,
            "processed_at": self.processed_at,
        }
