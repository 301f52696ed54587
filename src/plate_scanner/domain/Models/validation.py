from dataclasses import dataclass
from enum import Enum
from typing import Union


class RejectionReason(str, Enum):
    LOW_CONFIDENCE = "low_confidence"
    AMBIGUOUS_SHORT_TEXT = "ambiguous_short_text"
    NOT_PLATE_SHAPED = "not_plate_shaped"


# Mensajes mostrados al usuario por cada motivo de rechazo
REJECTION_MESSAGES = {
    RejectionReason.LOW_CONFIDENCE: (
        "Low confidence in text recognition. "
        "Please ensure the number plate is clear and well-lit."
    ),
    RejectionReason.AMBIGUOUS_SHORT_TEXT: (
        "Unclear image. "
        "Please try again with better lighting or move closer to the plate."
    ),
    RejectionReason.NOT_PLATE_SHAPED: (
        "No valid number plate detected. "
        "Please ensure you are pointing the camera at a clear number plate."
    ),
}


@dataclass(frozen=True)
class Accepted:
    text: str

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    reason: RejectionReason

    @property
    def accepted(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return REJECTION_MESSAGES[self.reason]


ValidationOutcome = Union[Accepted, Rejected]
