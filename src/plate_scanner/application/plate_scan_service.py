# src/plate_scanner/application/plate_scan_service.py
import time
import logging
import threading
from typing import Optional

from plate_scanner.application.capture_controller import CaptureController
from plate_scanner.application.scan_state_store import ScanStateStore
from plate_scanner.domain.Interfaces.ocr_reader import IOCRReader
from plate_scanner.domain.Models.frame import Frame
from plate_scanner.domain.Models.recognition_result import RecognitionResult
from plate_scanner.domain.Models.scan_state import ScanState
from plate_scanner.domain.Models.validation import Accepted
from plate_scanner.domain.Services.plate_validator import PlateValidator
from plate_scanner.domain.errors import OCREngineError, ScanInProgressError
from plate_scanner.monitoring import metrics
from plate_scanner.utils.image_encoding import encode_png

logger = logging.getLogger(__name__)

ENGINE_FAILURE_MESSAGE = "Failed to recognize text. Please try again."


class PlateScanService:
    """
    Un ciclo de escaneo por disparo del usuario:
    captura -> PNG para mostrar -> OCR -> validación -> estado.

    Solo un ciclo a la vez: un segundo disparo mientras hay OCR en curso
    lanza ScanInProgressError (no se encola).
    """

    def __init__(
        self,
        controller: CaptureController,
        ocr_reader: IOCRReader,
        validator: PlateValidator,
        state: ScanStateStore,
    ):
        self.controller = controller
        self.ocr_reader = ocr_reader
        self.validator = validator
        self.state = state
        self._scan_lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._scan_lock.locked()

    # ----- START / STOP: ciclo de vida de la cámara -----
    def start(self) -> bool:
        return self.controller.request_camera_access()

    def stop(self) -> None:
        logger.info("Parando servicio, liberando cámara...")
        self.controller.release()

    # ----- Disparo -----
    def scan(self) -> ScanState:
        if not self._scan_lock.acquire(blocking=False):
            raise ScanInProgressError("Ya hay un reconocimiento en curso")

        try:
            return self._scan()
        finally:
            self._scan_lock.release()

    def _scan(self) -> ScanState:
        t0 = time.perf_counter()
        previous = self.state.snapshot()
        self.state.begin_capture()

        try:
            frame = self.controller.capture_frame()
        except Exception:
            logger.exception("❌ Error leyendo frame de la cámara")
            return self._fail(t0, "capture_error")

        if frame is None:
            # sin video todavía: no-op, el estado queda como estaba
            return self.state.restore(previous)

        logger.info(f"📸 Frame capturado {frame.width}x{frame.height} ({frame.source})")
        try:
            self.state.store_capture(encode_png(frame))
            self.state.begin_recognition()
            result = self._recognize(frame)
        except OCREngineError:
            logger.exception("❌ Error de OCR")
            return self._fail(t0, "engine_error")
        except Exception:
            # ValueError de encode_png, cv2.error...
            logger.exception("❌ Error codificando la captura")
            return self._fail(t0, "capture_error")

        logger.info("Raw OCR result: %r", result.text)
        logger.info("Confidence: %.1f", result.confidence)

        outcome = self.validator.validate(result.text, result.confidence)
        if isinstance(outcome, Accepted):
            logger.info(f"✅ Placa válida: {outcome.text}")
            metrics.scans_total.labels(outcome="accepted").inc()
            snapshot = self.state.accept(outcome.text)
        else:
            logger.info(f"🚫 Rechazado: {outcome.reason.value}")
            metrics.scans_total.labels(outcome=outcome.reason.value).inc()
            snapshot = self.state.reject(outcome.reason, outcome.message)

        metrics.scan_latency.set(time.perf_counter() - t0)
        return snapshot

    def _fail(self, t0: float, outcome: str) -> ScanState:
        metrics.scans_total.labels(outcome=outcome).inc()
        metrics.scan_latency.set(time.perf_counter() - t0)
        return self.state.fail(ENGINE_FAILURE_MESSAGE)

    def _recognize(self, frame: Frame) -> RecognitionResult:
        t1 = time.perf_counter()
        try:
            result = self.ocr_reader.recognize(frame)
        except Exception as e:
            raise OCREngineError(f"{type(e).__name__}: {e}") from e
        finally:
            metrics.ocr_latency.set(time.perf_counter() - t1)
        return result

    def last_capture(self) -> Optional[bytes]:
        return self.state.snapshot().last_capture_png
