# src/plate_scanner/infrastructure/Normalizer/plate_normalizer.py
import re
from plate_scanner.domain.Interfaces.text_normalizer import ITextNormalizer


class PlateNormalizer(ITextNormalizer):
    """
    Normaliza texto OCR a "cleaned string":
    - Quitar todo lo que no sea letra ASCII, dígito o guion
    - Mayúsculas
    No rechaza nada: la validación de forma es del PlateValidator.
    """
    _NOT_PLATE_CHAR = re.compile(r"[^A-Za-z0-9-]")

    def normalize(self, text: str) -> str:
        if not text:
            return ""
        return self._NOT_PLATE_CHAR.sub("", text).upper()
