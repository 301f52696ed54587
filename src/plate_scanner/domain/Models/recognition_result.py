from dataclasses import dataclass

@dataclass(frozen=True)
class RecognitionResult:
    """
    Resultado crudo del motor OCR para un frame.
    """
    text: str           # texto tal cual lo devuelve el motor
    confidence: float   # 0..100

    def to_dict(self) -> dict:
        return {"text": self.text, "confidence": self.confidence}
