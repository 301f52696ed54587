# src/plate_scanner/domain/Services/plate_validator.py
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from plate_scanner.domain.Interfaces.text_normalizer import ITextNormalizer
from plate_scanner.domain.Models.validation import (
    Accepted,
    Rejected,
    RejectionReason,
    ValidationOutcome,
)

_LETTER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")


@dataclass(frozen=True)
class PlateValidationConfig:
    """
    Umbrales del heurístico de placas.

    Son constantes empíricas, no una gramática formal de matrículas:
    ajustarlos por jurisdicción vía settings (PLATE_*).
    """
    min_confidence: float = 15.0
    short_text_confidence: float = 30.0
    short_text_length: int = 4
    min_length: int = 3
    max_length: int = 10
    # (mín. letras, mín. dígitos): basta con cumplir una regla
    letter_digit_rules: Tuple[Tuple[int, int], ...] = ((2, 2), (3, 1), (1, 3))

    @classmethod
    def from_settings(cls, settings) -> "PlateValidationConfig":
        return cls(
            min_confidence=float(settings.plate_min_confidence),
            short_text_confidence=float(settings.plate_short_text_confidence),
            short_text_length=int(settings.plate_short_text_length),
            min_length=int(settings.plate_min_length),
            max_length=int(settings.plate_max_length),
            letter_digit_rules=tuple(
                (int(letters), int(digits))
                for letters, digits in settings.plate_letter_digit_rules
            ),
        )


class PlateValidator:
    """
    Decide si el texto OCR parece una placa.

    Puertas, en orden:
    1) confianza < min_confidence -> LOW_CONFIDENCE (sin mirar el texto)
    2) confianza < short_text_confidence y texto corto -> AMBIGUOUS_SHORT_TEXT
    3) forma: longitud, letras + dígitos, alguna regla de combinación -> NOT_PLATE_SHAPED
    Si pasa todo: Accepted(cleaned string).
    """

    def __init__(
        self,
        config: Optional[PlateValidationConfig] = None,
        normalizer: Optional[ITextNormalizer] = None,
    ):
        if normalizer is None:
            from plate_scanner.infrastructure.Normalizer.plate_normalizer import PlateNormalizer
            normalizer = PlateNormalizer()
        self.config = config or PlateValidationConfig()
        self.normalizer = normalizer

    def validate(self, text: str, confidence: float) -> ValidationOutcome:
        cfg = self.config
        cleaned = self.normalizer.normalize(text or "")

        if confidence < cfg.min_confidence:
            return Rejected(RejectionReason.LOW_CONFIDENCE)

        if confidence < cfg.short_text_confidence and len(cleaned) < cfg.short_text_length:
            return Rejected(RejectionReason.AMBIGUOUS_SHORT_TEXT)

        if not self.is_plate_shaped(cleaned):
            return Rejected(RejectionReason.NOT_PLATE_SHAPED)

        return Accepted(cleaned)

    def is_plate_shaped(self, cleaned: str) -> bool:
        cfg = self.config
        # el guion cuenta para la longitud, no para letras/dígitos
        if len(cleaned) < cfg.min_length or len(cleaned) > cfg.max_length:
            return False

        letters = len(_LETTER.findall(cleaned))
        digits = len(_DIGIT.findall(cleaned))
        if letters == 0 or digits == 0:
            return False

        return any(
            letters >= min_letters and digits >= min_digits
            for min_letters, min_digits in cfg.letter_digit_rules
        )


def validate_plate(
    text: str,
    confidence: float,
    config: Optional[PlateValidationConfig] = None,
) -> ValidationOutcome:
    """Atajo funcional sobre PlateValidator."""
    return PlateValidator(config).validate(text, confidence)
