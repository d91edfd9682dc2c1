import base64
from dataclasses import dataclass
from typing import List, Optional

from src.domain.Models.rectangle import Rectangle
from src.domain.Models.recognized_line import RecognizedLine


@dataclass
class OcrResult:
    """
    Resultado de procesar un rectángulo: recorte mejorado, texto OCR
    y placa extraída (None si no se encontró).
    """
    image: bytes                       # recorte codificado (PNG)
    lines: List[RecognizedLine]
    plate: Optional[str] = None
    rect: Optional[Rectangle] = None
    show_ocr_data: bool = False        # flag de UI, lo maneja el llamador
    mime: str = "image/png"

    @property
    def text(self) -> str:
        return "\n".join(line.text for line in self.lines)

    @property
    def open(self) -> bool:
        return self.plate is not None

    def image_data_uri(self) -> str:
        return f"data:{self.mime};base64," + base64.b64encode(self.image).decode("ascii")

    def to_dict(self) -> dict:
        """Convierte a dict serializable (imagen como data URI)."""
        return {
            "image": self.image_data_uri(),
            "ocr_data": {
                "text": self.text,
                "lines": [line.to_dict() for line in self.lines],
            },
            "plate": self.plate,
            "rect": self.rect.to_dict() if self.rect else None,
            "show_ocr_data": self.show_ocr_data,
            "open": self.open,
        }
