import time
import threading
from typing import Optional

from plate_scanner.domain.Models.scan_state import ScanPhase, ScanState
from plate_scanner.domain.Models.validation import RejectionReason


class ScanStateStore:
    """
    Registro thread-safe del estado de escaneo.
    Los únicos puntos de transición son los métodos de esta clase;
    la capa de presentación solo lee snapshot().
    """

    def __init__(self, initial: Optional[ScanState] = None):
        self._lock = threading.Lock()
        self._state = initial or ScanState(updated_at=time.time())

    def snapshot(self) -> ScanState:
        with self._lock:
            return self._state

    def _update(self, **changes) -> ScanState:
        with self._lock:
            self._state = self._state.evolve(updated_at=time.time(), **changes)
            return self._state

    # ---------------------------------------------------------
    # CÁMARA
    # ---------------------------------------------------------
    def set_camera_ready(self, ready: bool, error: str = "") -> ScanState:
        # el error de cámara persiste hasta que la cámara vuelva a estar lista
        if ready:
            return self._update(camera_ready=True, error="")
        return self._update(camera_ready=False, error=error)

    # ---------------------------------------------------------
    # CICLO DE CAPTURA
    # ---------------------------------------------------------
    def begin_capture(self) -> ScanState:
        return self._update(
            phase=ScanPhase.CAPTURING,
            plate_text="",
            error="",
            rejection_reason=None,
        )

    def restore(self, previous: ScanState) -> ScanState:
        with self._lock:
            self._state = previous
            return self._state

    def store_capture(self, png: bytes) -> ScanState:
        return self._update(last_capture_png=png)

    def begin_recognition(self) -> ScanState:
        return self._update(phase=ScanPhase.RECOGNIZING)

    def accept(self, plate_text: str) -> ScanState:
        return self._update(phase=ScanPhase.ACCEPTED, plate_text=plate_text)

    def reject(self, reason: RejectionReason, message: str) -> ScanState:
        return self._update(phase=ScanPhase.REJECTED, rejection_reason=reason, error=message)

    def fail(self, message: str) -> ScanState:
        return self._update(phase=ScanPhase.FAILED, error=message)
