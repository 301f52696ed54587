from typing import Optional

from plate_scanner.domain.Models.frame import Frame
from plate_scanner.domain.Models.recognition_result import RecognitionResult
from plate_scanner.domain.Interfaces.ocr_reader import IOCRReader
from plate_scanner.core.config import settings

class DummyOCRReader(IOCRReader):
    """
    Implementación dummy que simplemente devuelve el mismo texto fijo.
    """

    def __init__(self, text: Optional[str] = None, confidence: Optional[float] = None):
        self.text = settings.dummy_ocr_text if text is None else text
        self.confidence = settings.dummy_ocr_confidence if confidence is None else confidence

    def recognize(self, frame: Frame) -> RecognitionResult:
        return RecognitionResult(text=self.text, confidence=self.confidence)
