class RecognitionError(Exception):
    """
    Falla del motor OCR (carga, configuración o reconocimiento).
    El motor ya fue liberado cuando esta excepción llega al llamador.
    """


class ImageDecodeError(ValueError):
    """La imagen o el buffer de pixeles no se pudo interpretar."""
