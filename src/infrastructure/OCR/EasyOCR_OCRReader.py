import easyocr
import logging
from typing import List, Optional

import cv2

from src.domain.Interfaces.ocr_reader import IOCRReader, PageSegMode
from src.domain.Models.recognized_line import RecognizedLine
from src.infrastructure.Imaging.image_loader import decode_image
from src.core.config import settings

logger = logging.getLogger(__name__)


def group_lines(detections) -> List[List[tuple]]:
    """
    Agrupa detecciones (box, text, conf) de EasyOCR en líneas:
    una detección pertenece a la línea actual si su centro vertical
    cae dentro del alto de la línea.
    """
    items = []
    for box, text, conf in detections:
        ys = [p[1] for p in box]
        xs = [p[0] for p in box]
        items.append((min(ys), max(ys), min(xs), text, float(conf)))
    items.sort(key=lambda it: (it[0], it[2]))

    lines: List[List[tuple]] = []
    top = bottom = None
    for item in items:
        center = (item[0] + item[1]) / 2.0
        if lines and top <= center <= bottom:
            lines[-1].append(item)
            bottom = max(bottom, item[1])
        else:
            lines.append([item])
            top, bottom = item[0], item[1]

    return [sorted(line, key=lambda it: it[2]) for line in lines]


class EasyOCR_OCRReader(IOCRReader):
    """
    Implementación sobre EasyOCR:
    - SINGLE_BLOCK -> readtext (detección + reconocimiento), agrupado en líneas
    - SINGLE_LINE  -> recognize sobre el recorte completo como una sola línea
    - allowlist = whitelist de caracteres
    """
    def __init__(self, lang: Optional[str] = None, gpu: Optional[bool] = None):
        self.lang = lang or settings.ocr_lang
        self.gpu = settings.ocr_gpu if gpu is None else gpu
        self.reader = None
        self.whitelist: Optional[str] = None
        self.psm = PageSegMode.SINGLE_BLOCK

    def load(self) -> None:
        self.reader = easyocr.Reader([self.lang], gpu=self.gpu, verbose=False)

    def configure(self, whitelist: str, psm: PageSegMode) -> None:
        self.whitelist = whitelist or None
        self.psm = psm

    def recognize(self, image: bytes) -> List[RecognizedLine]:
        if self.reader is None:
            raise RuntimeError("EasyOCR no está cargado")

        rgb = decode_image(image)

        if self.psm == PageSegMode.SINGLE_LINE:
            grey = cv2.cvtColor(rgb, cv2.COLOR_RGB2GRAY)
            results = self.reader.recognize(grey, allowlist=self.whitelist, detail=1)
            if not results:
                return []
            raw = " ".join(text for _, text, _ in results)
            conf = sum(float(c) for _, _, c in results) / len(results)
            return [RecognizedLine(text=raw.strip(), raw=raw, confidence=conf)]

        # EasyOCR interpreta los arrays de 3 canales como BGR
        bgr = cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)
        results = self.reader.readtext(bgr, allowlist=self.whitelist, detail=1, paragraph=False)
        lines = []
        for line in group_lines(results):
            raw = " ".join(it[3] for it in line)
            conf = sum(it[4] for it in line) / len(line)
            lines.append(RecognizedLine(text=raw.strip(), raw=raw, confidence=conf))
        return lines

    def release(self) -> None:
        self.reader = None
