import logging
from typing import Optional

from plate_scanner.application.scan_state_store import ScanStateStore
from plate_scanner.domain.Interfaces.camera_stream import ICameraStream
from plate_scanner.domain.Models.frame import Frame
from plate_scanner.monitoring import metrics

logger = logging.getLogger(__name__)

CAMERA_UNAVAILABLE_MESSAGE = (
    "Unable to access camera. Please ensure you have granted camera permissions."
)


class CaptureController:
    """
    Dueño exclusivo del stream de cámara durante la sesión.
    - request_camera_access(): abre el stream una sola vez (sin reintentos).
    - capture_frame(): copia el frame actual a un buffer nuevo.
    - release(): libera la cámara (también vía context manager).
    """

    def __init__(self, camera_stream: ICameraStream, state: ScanStateStore, frame_timeout: float = 1.0):
        self.camera_stream = camera_stream
        self.state = state
        self.frame_timeout = frame_timeout

    @property
    def camera_ready(self) -> bool:
        return self.camera_stream.is_connected

    def request_camera_access(self) -> bool:
        try:
            self.camera_stream.connect()
        except OSError as e:  # CameraUnavailableError, PermissionError...
            logger.error(f"❌ Error accediendo a la cámara: {e}")
            metrics.camera_connected.set(0)
            self.state.set_camera_ready(False, CAMERA_UNAVAILABLE_MESSAGE)
            return False

        metrics.camera_connected.set(1)
        self.state.set_camera_ready(True)
        return True

    def capture_frame(self) -> Optional[Frame]:
        """
        Devuelve un snapshot (copia) del frame actual, o None si el stream
        aún no está conectado o no entregó frames a tiempo.
        """
        if not self.camera_stream.is_connected:
            logger.debug("capture_frame: stream no conectado, se ignora")
            return None

        frame = self.camera_stream.read_frame(timeout=self.frame_timeout)
        if frame is None:
            logger.debug("capture_frame: sin frame disponible, se ignora")
            return None

        return frame.copy()

    def release(self) -> None:
        # disconnect() es idempotente: se llama siempre para no dejar el hilo lector vivo
        was_connected = self.camera_stream.is_connected
        self.camera_stream.disconnect()
        metrics.camera_connected.set(0)
        if was_connected:
            self.state.set_camera_ready(False)

    def __enter__(self):
        self.request_camera_access()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.release()
