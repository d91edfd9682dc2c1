from dataclasses import dataclass
import time
import numpy as np

from src.domain.errors import ImageDecodeError


@dataclass
class Frame:
    """
    Imagen (o frame de video) sobre la que se buscan regiones.
    `data` siempre es un array HxWx3 en orden RGB.
    """
    data: np.ndarray   # imagen en formato numpy array (RGB)
    timestamp: float   # momento en que se capturó
    source: str        # identificador del origen (archivo, upload, cámara externa)

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @staticmethod
    def from_buffer(buffer, width: int, height: int, source: str = "buffer") -> "Frame":
        """
        Construye un Frame desde un buffer plano RGB o RGBA (width x height x 3|4).
        El canal alfa se descarta.
        """
        arr = np.frombuffer(bytes(buffer), dtype=np.uint8)
        pixels = width * height
        if pixels <= 0 or arr.size not in (pixels * 3, pixels * 4):
            raise ImageDecodeError(
                f"Buffer de {arr.size} bytes no corresponde a {width}x{height} RGB/RGBA"
            )
        channels = arr.size // pixels
        data = arr.reshape((height, width, channels))[:, :, :3].copy()
        return Frame(data=data, timestamp=time.time(), source=source)

    def to_dict(self) -> dict:
        """Resumen del frame para logs (sin los píxeles)."""
        return {
            "source": self.source,
            "timestamp": self.timestamp,
            "width": self.width,
            "height": self.height,
        }
