import json
import logging
from src.domain.Interfaces.event_publisher import IEventPublisher
from src.domain.Models.recognition_report import RecognitionReport

logger = logging.getLogger(__name__)


class ConsolePublisher(IEventPublisher):
    """
    Imprime cada reporte en consola de forma legible.
    Por defecto omite la imagen del recorte (data URI) para no ensuciar la salida.
    """

    def __init__(self, include_images: bool = False, stream=None):
        self.include_images = include_images
        self.stream = stream

    def publish(self, report: RecognitionReport) -> None:
        output = report.to_dict()
        if not self.include_images:
            for result in output["results"]:
                result.pop("image", None)

        print(json.dumps(output, indent=2, ensure_ascii=False), file=self.stream)
        logger.info(f"📢 Publicado {report.source}: {len(report.results)} recortes, placas={report.plates}")
