from abc import ABC, abstractmethod
from src.domain.Models.recognition_report import RecognitionReport

class IEventPublisher(ABC):
    """
    Publicador de resultados hacia el exterior (consola, broker, etc).
    """
    @abstractmethod
    def publish(self, report: RecognitionReport) -> None:
        """Publica un RecognitionReport."""
        pass
