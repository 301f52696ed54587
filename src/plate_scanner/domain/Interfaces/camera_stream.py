from abc import ABC, abstractmethod
from typing import Optional
from plate_scanner.domain.Models.frame import Frame

class ICameraStream(ABC):
    """
    Abstracción de un stream de cámara.
    """
    @abstractmethod
    def connect(self) -> None:
        """Conecta al stream de video. Lanza CameraUnavailableError si no puede abrirlo."""
        pass

    @abstractmethod
    def read_frame(self, timeout: float = 1.0) -> Optional[Frame]:
        """Devuelve el último frame del stream, o None si no hay ninguno disponible."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Cierra la conexión al stream."""
        pass

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        pass
