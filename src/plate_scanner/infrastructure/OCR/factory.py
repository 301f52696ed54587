from plate_scanner.core.config import Settings, settings as default_settings
from plate_scanner.domain.Interfaces.ocr_reader import IOCRReader

def create_ocr_reader(settings: Settings = default_settings) -> IOCRReader:
    engine = settings.ocr_engine.lower()
    if engine == "easyocr":
        from plate_scanner.infrastructure.OCR.easyocr_reader import EasyOCRReader
        return EasyOCRReader(lang=settings.ocr_lang, gpu=settings.ocr_gpu)
    if engine == "tesseract":
        from plate_scanner.infrastructure.OCR.tesseract_reader import TesseractOCRReader
        return TesseractOCRReader(lang=settings.tesseract_lang, config=settings.tesseract_config)
    if engine == "dummy":
        from plate_scanner.infrastructure.OCR.dummy_ocr_reader import DummyOCRReader
        return DummyOCRReader(text=settings.dummy_ocr_text, confidence=settings.dummy_ocr_confidence)
    raise ValueError(f"OCR_ENGINE desconocido: {settings.ocr_engine}")
