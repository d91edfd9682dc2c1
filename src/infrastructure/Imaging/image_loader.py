import time

import cv2
import numpy as np

from src.domain.Models.frame import Frame
from src.domain.errors import ImageDecodeError


def decode_image(data: bytes) -> np.ndarray:
    """Decodifica PNG/JPEG/... a un array RGB."""
    buf = np.frombuffer(data or b"", dtype=np.uint8)
    image = cv2.imdecode(buf, cv2.IMREAD_COLOR) if buf.size else None
    if image is None:
        raise ImageDecodeError("No se pudo decodificar la imagen")
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)


def encode_image(image: np.ndarray, ext: str = ".png") -> bytes:
    """Codifica un array RGB (o gris) al formato indicado."""
    if image.ndim == 3:
        image = cv2.cvtColor(image, cv2.COLOR_RGB2BGR)
    ok, buf = cv2.imencode(ext, image)
    if not ok:
        raise ImageDecodeError(f"No se pudo codificar la imagen como {ext}")
    return buf.tobytes()


def decode_frame(data: bytes, source: str = "upload") -> Frame:
    return Frame(data=decode_image(data), timestamp=time.time(), source=source)


def load_frame(path: str) -> Frame:
    image = cv2.imread(path, cv2.IMREAD_COLOR)
    if image is None:
        raise ImageDecodeError(f"No se pudo abrir la imagen {path}")
    return Frame(
        data=cv2.cvtColor(image, cv2.COLOR_BGR2RGB),
        timestamp=time.time(),
        source=path,
    )
