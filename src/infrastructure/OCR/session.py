# src/infrastructure/OCR/session.py
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, List

from src.domain.Interfaces.ocr_reader import IOCRReader, PageSegMode
from src.domain.Models.recognized_line import RecognizedLine
from src.domain.errors import RecognitionError

logger = logging.getLogger(__name__)


@contextmanager
def ocr_session(
    factory: Callable[[], IOCRReader],
    psm: PageSegMode,
    whitelist: str,
) -> Iterator[IOCRReader]:
    """
    Adquiere un motor OCR para una pasada: load -> configure -> uso -> release.
    release se llama exactamente una vez, haya error o no.
    """
    try:
        reader = factory()
    except Exception as e:
        raise RecognitionError(f"No se pudo crear el motor OCR: {e}") from e

    try:
        try:
            reader.load()
            reader.configure(whitelist, psm)
        except Exception as e:
            raise RecognitionError(f"No se pudo inicializar el motor OCR: {e}") from e

        logger.debug("Motor OCR %s listo (psm=%s)", type(reader).__name__, psm.value)
        yield reader
    finally:
        try:
            reader.release()
        except Exception:
            logger.exception("Error liberando el motor OCR")


def recognize_crop(reader: IOCRReader, image: bytes) -> List[RecognizedLine]:
    """Una sola llamada al motor por recorte, sin reintentos."""
    try:
        return reader.recognize(image)
    except RecognitionError:
        raise
    except Exception as e:
        raise RecognitionError(f"Falló el reconocimiento: {e}") from e
