import logging
from prometheus_client import Gauge, Counter, start_http_server

logger = logging.getLogger(__name__)

# Ciclos de captura por resultado (accepted, low_confidence, ..., engine_error)
scans_total = Counter(
    "scans_total",
    "Total de ciclos de captura por resultado",
    ["outcome"]
)

# Latencia OCR
ocr_latency = Gauge(
    "ocr_latency_seconds",
    "Tiempo de OCR del último ciclo"
)

# Latencia total del ciclo (captura + codificación + OCR + validación)
scan_latency = Gauge(
    "scan_latency_seconds",
    "Tiempo total del último ciclo de captura"
)

# 1 si la cámara está conectada
camera_connected = Gauge(
    "camera_connected",
    "Estado de la conexión con la cámara"
)

def start_metrics_server(port: int = 9100):
    """Arranca servidor de métricas Prometheus (port=0 lo desactiva)."""
    if not port:
        logger.info("📊 Métricas Prometheus desactivadas")
        return
    start_http_server(port)
    logger.info(f"📊 Prometheus metrics disponible en :{port}")
