from abc import ABC, abstractmethod
from plate_scanner.domain.Models.frame import Frame
from plate_scanner.domain.Models.recognition_result import RecognitionResult

class IOCRReader(ABC):
    """
    Motor OCR que extrae texto de un frame completo.
    """
    @abstractmethod
    def recognize(self, frame: Frame) -> RecognitionResult:
        """
        Reconoce el texto del frame.
        Devuelve el texto crudo y la confianza en escala 0..100.
        """
        pass
