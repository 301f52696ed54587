from dataclasses import dataclass
import numpy as np

@dataclass
class Frame:
    """
    Snapshot de un frame capturado desde la cámara.
    """
    data: np.ndarray   # imagen BGR (alto x ancho x canales)
    timestamp: float   # momento en que se capturó
    source: str        # identificador de la cámara o URL

    @property
    def image(self) -> np.ndarray:
        """Alias para compatibilidad con librerías que esperan 'image'."""
        return self.data

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    def copy(self) -> "Frame":
        """Copia profunda del buffer: el snapshot no comparte memoria con el stream."""
        return Frame(data=self.data.copy(), timestamp=self.timestamp, source=self.source)

    def to_dict(self) -> dict:
        """
        Convierte el frame a un dict serializable (sin incluir la imagen).
        Ideal para logs.
        """
        return {
            "timestamp": self.timestamp,
            "source": self.source,
            "shape": self.data.shape if isinstance(self.data, np.ndarray) else None
        }
