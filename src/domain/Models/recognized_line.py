from dataclasses import dataclass


@dataclass(frozen=True)
class RecognizedLine:
    """
    Una línea de texto tal como la devuelve el motor OCR.
    """
    text: str
    raw: str = ""
    confidence: float = 0.0

    def to_dict(self) -> dict:
        return {"text": self.text, "raw": self.raw, "confidence": self.confidence}
