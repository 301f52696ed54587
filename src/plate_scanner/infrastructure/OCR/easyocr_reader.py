import easyocr
import logging
from typing import Optional

from plate_scanner.domain.Models.frame import Frame
from plate_scanner.domain.Models.recognition_result import RecognitionResult
from plate_scanner.domain.Interfaces.ocr_reader import IOCRReader
from plate_scanner.core.config import settings

logger = logging.getLogger(__name__)


class EasyOCRReader(IOCRReader):
    """
    Implementación usando EasyOCR sobre el frame completo:
    - texto: detecciones unidas por espacios, en el orden que devuelve EasyOCR
    - confianza: promedio de las detecciones, reescalado de 0..1 a 0..100
    """
    def __init__(self, lang: Optional[str] = None, gpu: Optional[bool] = None, reader=None):
        self.lang = lang or settings.ocr_lang
        self.gpu = settings.ocr_gpu if gpu is None else gpu
        # reader inyectable (tests): cargar el modelo descarga pesos
        self.reader = reader or easyocr.Reader([self.lang], gpu=self.gpu)
        logger.info(f"🔤 EasyOCR listo (lang={self.lang}, gpu={self.gpu})")

    def recognize(self, frame: Frame) -> RecognitionResult:
        results = self.reader.readtext(frame.image)

        texts = []
        confidences = []
        for _bbox, text, confidence in results:
            text = (text or "").strip()
            if not text:
                continue
            texts.append(text)
            confidences.append(float(confidence))

        if not texts:
            return RecognitionResult(text="", confidence=0.0)

        mean_conf = sum(confidences) / len(confidences)
        return RecognitionResult(text=" ".join(texts), confidence=mean_conf * 100.0)
