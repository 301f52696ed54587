import cv2
import time
from pathlib import Path
from typing import Optional

from plate_scanner.domain.Models.frame import Frame
from plate_scanner.domain.Interfaces.camera_stream import ICameraStream
from plate_scanner.domain.errors import CameraUnavailableError

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".bmp", ".webp"}


class FakeCameraStream(ICameraStream):
    """
    Simula una cámara usando un archivo.
    - Imagen fija: siempre devuelve la misma imagen.
    - Video: lo reproduce en loop infinito.
    """

    def __init__(self, path: str, camera_id: str = "fake"):
        self.path = path
        self.camera_id = camera_id

        self.cap = None
        self._still = None

    @property
    def is_still(self) -> bool:
        return Path(self.path).suffix.lower() in IMAGE_SUFFIXES

    @property
    def is_connected(self) -> bool:
        return self._still is not None or (self.cap is not None and self.cap.isOpened())

    # ==========================================================
    # CONNECT
    # ==========================================================
    def connect(self):
        if self.is_still:
            self._still = cv2.imread(self.path)
            if self._still is None:
                raise CameraUnavailableError(f"No se pudo abrir imagen {self.path}")
            return

        self.cap = cv2.VideoCapture(self.path)
        if not self.cap.isOpened():
            self.cap = None
            raise CameraUnavailableError(f"No se pudo abrir video {self.path}")

    # ==========================================================
    # READ FRAME CON TIMEOUT
    # ==========================================================
    def read_frame(self, timeout: float = 1.0) -> Optional[Frame]:
        """
        Devuelve un Frame o None si pasa el timeout (o no está conectado).
        """
        if self._still is not None:
            return Frame(data=self._still, timestamp=time.time(), source=self.camera_id)

        if self.cap is None:
            return None

        start = time.time()
        while time.time() - start < timeout:
            ok, frame = self.cap.read()

            if ok:
                return Frame(
                    data=frame,
                    timestamp=time.time(),
                    source=self.camera_id
                )

            # Si llega al final del video → reiniciar
            self._restart_video()

        return None

    # ==========================================================
    # INTERNAL: RESTART VIDEO
    # ==========================================================
    def _restart_video(self):
        """Reinicia el archivo simulando un stream continuo."""
        if self.cap:
            self.cap.release()
        self.cap = cv2.VideoCapture(self.path)

    # ==========================================================
    # DISCONNECT
    # ==========================================================
    def disconnect(self):
        if self.cap:
            self.cap.release()
            self.cap = None
        self._still = None
