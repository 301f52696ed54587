import cv2
import time
import logging
import threading
from typing import Optional, Union

from plate_scanner.domain.Models.frame import Frame
from plate_scanner.domain.Interfaces.camera_stream import ICameraStream
from plate_scanner.domain.errors import CameraUnavailableError

logger = logging.getLogger(__name__)


def _parse_source(url: str) -> Union[int, str]:
    """'0', '1'... son índices de dispositivo local; el resto se trata como URL."""
    url = (url or "").strip()
    return int(url) if url.isdigit() else url


class OpenCVCameraStream(ICameraStream):
    """
    Implementación de ICameraStream usando OpenCV con lectura en hilo separado.
    - Un hilo interno (_update_frames) lee continuamente del stream y mantiene SOLO el último frame.
    - read_frame(timeout=...) devuelve el último frame disponible (vista previa "en vivo").
    - No reintenta la apertura: si connect() falla, el error se propaga al llamador.
    """

    def __init__(self, url: str, read_error_delay: float = 0.2):
        """
        :param url: índice de dispositivo ("0") o URL del stream (RTSP/HTTP/archivo).
        :param read_error_delay: espera tras un cap.read() fallido.
        """
        self.url = url
        self.camera_id: str = str(url)
        self.read_error_delay = read_error_delay

        self.cap = None

        # control del hilo interno
        self._frame_lock = threading.Lock()
        self._latest_frame: Optional[Frame] = None
        self._running = False
        self._thread: Optional[threading.Thread] = None

    @property
    def is_connected(self) -> bool:
        return self._running and self.cap is not None and self.cap.isOpened()

    # ==========================================================
    # CONNECT
    # ==========================================================
    def connect(self) -> None:
        source = _parse_source(self.url)
        self.cap = cv2.VideoCapture(source)

        # Si es RTSP, reducir el buffer
        if isinstance(source, str) and source.startswith("rtsp://"):
            self.cap.set(cv2.CAP_PROP_BUFFERSIZE, 1)

        if not self.cap or not self.cap.isOpened():
            self.cap = None
            raise CameraUnavailableError(f"No se pudo abrir la cámara: {self.url}")

        logger.info(f"🎥 Conectado a cámara {self.camera_id}")

        # Lanzar hilo de lectura continua
        self._running = True
        self._thread = threading.Thread(target=self._update_frames, name="camera-reader", daemon=True)
        self._thread.start()

    # ==========================================================
    # THREAD QUE LEE FRAMES CONTINUAMENTE
    # ==========================================================
    def _update_frames(self):
        """ Hilo que lee continuamente frames y mantiene solo el más reciente. """
        while self._running:
            cap = self.cap
            if cap is None:
                break

            ret, frame = cap.read()
            if not ret or frame is None:
                logger.warning(f"[{self.camera_id}] Error al leer frame")
                time.sleep(self.read_error_delay)
                continue

            with self._frame_lock:
                self._latest_frame = Frame(
                    data=frame,
                    timestamp=time.time(),
                    source=self.camera_id
                )

    # ==========================================================
    # READ FRAME
    # ==========================================================
    def read_frame(self, timeout: float = 1.0) -> Optional[Frame]:
        """
        Devuelve el último frame disponible.
        :param timeout: tiempo máximo esperando a que llegue algún frame.
        """
        deadline = time.time() + timeout

        while time.time() < deadline and self._running:
            with self._frame_lock:
                frame = self._latest_frame
            if frame is not None:
                return frame
            # todavía no hay frames en el buffer
            time.sleep(0.01)

        return None

    # ==========================================================
    # DISCONNECT
    # ==========================================================
    def disconnect(self) -> None:
        self._running = False

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=2.0)
        self._thread = None

        if self.cap:
            self.cap.release()
            self.cap = None

        with self._frame_lock:
            self._latest_frame = None

        logger.info(f"🔌 Stream cerrado ({self.camera_id}).")

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.disconnect()
