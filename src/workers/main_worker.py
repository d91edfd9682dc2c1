import warnings
warnings.filterwarnings("ignore")

import argparse
import logging
import sys

from src.core.config import settings
from src.application.plate_recognition_service import build_service, MODES
from src.domain.Models.processing_options import ProcessingOptions
from src.domain.Models.rectangle import Rectangle
from src.domain.errors import RecognitionError
from src.infrastructure.Imaging.image_loader import load_frame
from src.infrastructure.Messaging.console_publisher import ConsolePublisher
from src.monitoring.metrics import start_metrics_server

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Lectura de placas por regiones de color")
    parser.add_argument("images", nargs="+", help="rutas de imágenes")
    parser.add_argument("--mode", choices=MODES, default="track")
    parser.add_argument("--rect", nargs=4, type=int, metavar=("X", "Y", "W", "H"))
    parser.add_argument("--engine", default=None, help="easyocr | tesseract | dummy")
    parser.add_argument("--images-out", action="store_true", help="incluir recortes (data URI) en la salida")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.mode == "rect" and not args.rect:
        logger.error("--mode rect requiere --rect X Y W H")
        return 2

    if settings.metrics_enabled:
        start_metrics_server(port=settings.prometheus_port)

    service = build_service(ocr_engine=args.engine)
    publisher = ConsolePublisher(include_images=args.images_out)
    options = ProcessingOptions.from_settings(settings)
    rect = Rectangle(*args.rect) if args.rect else None

    logger.info(f"🚀 Procesando {len(args.images)} imágenes (modo {args.mode})")
    failures = 0
    try:
        for path in args.images:
            try:
                frame = load_frame(path)
                logger.debug("Frame cargado: %s", frame.to_dict())
                report = service.run(frame, options, mode=args.mode, rect=rect)
            except ValueError:
                logger.exception(f"⚠️ Imagen o rectángulo inválido: {path}")
                failures += 1
                continue
            except RecognitionError:
                logger.exception(f"❌ OCR falló para {path}")
                failures += 1
                continue
            publisher.publish(report)
    finally:
        service.close()

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
