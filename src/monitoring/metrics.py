import logging
from prometheus_client import Gauge, Counter, start_http_server

logger = logging.getLogger(__name__)

# Regiones aceptadas por el tracker
regions_detected_total = Counter(
    "regions_detected_total",
    "Total de regiones detectadas por color",
    ["mode"]
)

# Placas extraídas
plates_extracted_total = Counter(
    "plates_extracted_total",
    "Total de placas extraídas del texto OCR",
    ["mode"]
)

# Fallos del motor OCR
recognition_failures_total = Counter(
    "recognition_failures_total",
    "Total de pasadas abortadas por fallo del motor OCR",
    ["mode"]
)

# Latencia tracking
tracking_latency = Gauge(
    "tracking_latency_seconds",
    "Tiempo de detección de regiones",
    ["mode"]
)

# Latencia OCR (pasada completa, incluye carga del motor)
ocr_latency = Gauge(
    "ocr_latency_seconds",
    "Tiempo de OCR por pasada",
    ["mode"]
)

# Latencia total pipeline
pipeline_latency = Gauge(
    "pipeline_latency_seconds",
    "Tiempo total de procesamiento de una imagen",
    ["mode"]
)

def start_metrics_server(port: int = 9100):
    """Arranca servidor de métricas Prometheus."""
    start_http_server(port)
    logger.info(f"📊 Prometheus metrics disponible en :{port}")
