from typing import Optional

from src.core.config import settings
from src.domain.Interfaces.ocr_reader import IOCRReader


def create_ocr_reader(engine: Optional[str] = None) -> IOCRReader:
    engine = (engine or settings.ocr_engine).lower()
    if engine == "easyocr":
        from src.infrastructure.OCR.EasyOCR_OCRReader import EasyOCR_OCRReader
        return EasyOCR_OCRReader()
    elif engine == "tesseract":
        from src.infrastructure.OCR.tesseract_ocr_reader import TesseractOCRReader
        return TesseractOCRReader()
    elif engine == "dummy":
        from src.infrastructure.OCR.dummy_ocr_reader import DummyOCRReader
        return DummyOCRReader()
    raise ValueError(f"Motor OCR desconocido: {engine}")
