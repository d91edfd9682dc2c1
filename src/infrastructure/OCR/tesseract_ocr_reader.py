import logging
from typing import Dict, List, Optional, Tuple

import pytesseract

from src.domain.Interfaces.ocr_reader import IOCRReader, PageSegMode
from src.domain.Models.recognized_line import RecognizedLine
from src.infrastructure.Imaging.image_loader import decode_image
from src.core.config import settings

logger = logging.getLogger(__name__)

OEM_LSTM_ONLY = 1
PSM_CODES = {
    PageSegMode.SINGLE_BLOCK: 6,
    PageSegMode.SINGLE_LINE: 7,
}


class TesseractOCRReader(IOCRReader):
    """
    Implementación sobre Tesseract (pytesseract).
    Las líneas salen de image_to_data agrupando por (block, par, line).
    """
    def __init__(self, lang: Optional[str] = None, cmd: Optional[str] = None):
        self.lang = lang or settings.tesseract_lang
        self.cmd = cmd if cmd is not None else settings.tesseract_cmd
        self.config: Optional[str] = None

    def load(self) -> None:
        if self.cmd:
            pytesseract.pytesseract.tesseract_cmd = self.cmd
        version = pytesseract.get_tesseract_version()
        logger.debug("Tesseract %s", version)

    def configure(self, whitelist: str, psm: PageSegMode) -> None:
        config = f"--oem {OEM_LSTM_ONLY} --psm {PSM_CODES[psm]}"
        if whitelist:
            config += f" -c tessedit_char_whitelist={whitelist}"
        self.config = config

    def recognize(self, image: bytes) -> List[RecognizedLine]:
        if self.config is None:
            raise RuntimeError("Tesseract no está configurado")

        data = pytesseract.image_to_data(
            decode_image(image),
            lang=self.lang,
            config=self.config,
            output_type=pytesseract.Output.DICT,
        )

        grouped: Dict[Tuple[int, int, int], List[Tuple[str, float]]] = {}
        for i, word in enumerate(data["text"]):
            if not str(word).strip():
                continue
            key = (data["block_num"][i], data["par_num"][i], data["line_num"][i])
            grouped.setdefault(key, []).append((str(word), float(data["conf"][i])))

        lines = []
        for key in sorted(grouped):
            words = grouped[key]
            raw = " ".join(w for w, _ in words)
            confs = [c for _, c in words if c >= 0]
            conf = (sum(confs) / len(confs) / 100.0) if confs else 0.0
            lines.append(RecognizedLine(text=raw.strip(), raw=raw, confidence=conf))
        return lines

    def release(self) -> None:
        self.config = None
