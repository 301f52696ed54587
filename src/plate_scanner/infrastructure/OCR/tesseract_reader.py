import cv2
import logging
import pytesseract
from typing import Optional

from plate_scanner.domain.Models.frame import Frame
from plate_scanner.domain.Models.recognition_result import RecognitionResult
from plate_scanner.domain.Interfaces.ocr_reader import IOCRReader
from plate_scanner.core.config import settings

logger = logging.getLogger(__name__)


class TesseractOCRReader(IOCRReader):
    """
    Implementación con Tesseract (pytesseract).
    Agrupa las palabras por línea y promedia la confianza de las palabras
    reconocidas (Tesseract marca con -1 los bloques sin texto).
    """
    def __init__(self, lang: Optional[str] = None, config: Optional[str] = None):
        self.lang = lang or settings.tesseract_lang
        self.config = settings.tesseract_config if config is None else config

    def recognize(self, frame: Frame) -> RecognitionResult:
        rgb = cv2.cvtColor(frame.image, cv2.COLOR_BGR2RGB)
        data = pytesseract.image_to_data(
            rgb,
            lang=self.lang,
            config=self.config,
            output_type=pytesseract.Output.DICT,
        )

        lines = {}
        confidences = []
        keys = zip(data.get("block_num", []), data.get("par_num", []), data.get("line_num", []))
        for key, word, conf in zip(keys, data.get("text", []), data.get("conf", [])):
            word = str(word).strip()
            conf = float(conf)
            if not word or conf < 0:
                continue
            lines.setdefault(key, []).append(word)
            confidences.append(conf)

        if not confidences:
            return RecognitionResult(text="", confidence=0.0)

        text = "\n".join(" ".join(words) for words in lines.values())
        logger.debug(f"tesseract: {len(confidences)} palabras en {len(lines)} líneas")
        return RecognitionResult(text=text, confidence=sum(confidences) / len(confidences))
