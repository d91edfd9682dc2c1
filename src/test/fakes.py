import time
from typing import List, Optional, Sequence

import numpy as np

from src.domain.Interfaces.color_tracker import IColorTracker
from src.domain.Interfaces.ocr_reader import IOCRReader, PageSegMode
from src.domain.Models.frame import Frame
from src.domain.Models.rectangle import Rectangle
from src.domain.Models.recognized_line import RecognizedLine


def make_frame(width: int = 120, height: int = 80, value: int = 0, source: str = "test") -> Frame:
    data = np.full((height, width, 3), value, dtype=np.uint8)
    return Frame(data=data, timestamp=time.time(), source=source)


class ScriptedColorTracker(IColorTracker):
    """Devuelve un scan pre-armado por cada llamada (y [] cuando se acaban)."""

    def __init__(self, scans: Sequence[List[Rectangle]]):
        self.scans = list(scans)
        self.calls = 0
        self.seen: List[Frame] = []

    def track(self, frame, color_range):
        self.seen.append(frame)
        scan = self.scans[self.calls] if self.calls < len(self.scans) else []
        self.calls += 1
        return list(scan)


class ScriptedOCRReader(IOCRReader):
    """
    Una respuesta (lista de textos) por llamada a recognize.
    Registra el ciclo de vida para verificar load/release.
    """

    def __init__(
        self,
        responses: Sequence[Sequence[str]] = (),
        fail_on: Optional[str] = None,
        fail_at_call: int = 0,
    ):
        self.responses = [list(r) for r in responses]
        self.fail_on = fail_on
        self.fail_at_call = fail_at_call
        self.events: List[str] = []
        self.recognize_calls = 0
        self.psm: Optional[PageSegMode] = None
        self.whitelist: Optional[str] = None

    def _maybe_fail(self, step: str):
        if self.fail_on == step:
            raise RuntimeError(f"engine broke on {step}")

    def load(self):
        self.events.append("load")
        self._maybe_fail("load")

    def configure(self, whitelist, psm):
        self.events.append("configure")
        self.whitelist = whitelist
        self.psm = psm
        self._maybe_fail("configure")

    def recognize(self, image):
        self.events.append("recognize")
        call = self.recognize_calls
        self.recognize_calls += 1
        if self.fail_on == "recognize" and call == self.fail_at_call:
            raise RuntimeError("engine broke on recognize")
        texts = self.responses[call] if call < len(self.responses) else []
        return [RecognizedLine(text=t, raw=t, confidence=0.9) for t in texts]

    def release(self):
        self.events.append("release")

    @property
    def releases(self) -> int:
        return self.events.count("release")


class ReaderFactory:
    """Fábrica que recuerda cuántos motores creó."""

    def __init__(self, reader: IOCRReader):
        self.reader = reader
        self.created = 0

    def __call__(self) -> IOCRReader:
        self.created += 1
        return self.reader
