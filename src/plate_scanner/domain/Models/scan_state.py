from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from plate_scanner.domain.Models.validation import RejectionReason


class ScanPhase(str, Enum):
    IDLE = "idle"
    CAPTURING = "capturing"
    RECOGNIZING = "recognizing"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    FAILED = "failed"


@dataclass(frozen=True)
class ScanState:
    """
    Estado observable de un ciclo de captura.
    Inmutable: cada transición produce una instancia nueva.
    """
    phase: ScanPhase = ScanPhase.IDLE
    plate_text: str = ""
    error: str = ""
    rejection_reason: Optional[RejectionReason] = None
    camera_ready: bool = False
    last_capture_png: Optional[bytes] = None
    updated_at: float = 0.0

    @property
    def loading(self) -> bool:
        return self.phase in (ScanPhase.CAPTURING, ScanPhase.RECOGNIZING)

    def evolve(self, **changes) -> "ScanState":
        return replace(self, **changes)
