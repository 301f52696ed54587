from pydantic import BaseModel
from typing import Literal, Optional

from plate_scanner.domain.Models.scan_state import ScanState

Phase = Literal["idle", "capturing", "recognizing", "accepted", "rejected", "failed"]
Reason = Literal["low_confidence", "ambiguous_short_text", "not_plate_shaped"]

class ScanStateOut(BaseModel):
    phase: Phase
    loading: bool
    plate_text: str = ""
    error: str = ""
    rejection_reason: Optional[Reason] = None
    camera_ready: bool
    has_last_capture: bool
    updated_at: float

    @classmethod
    def from_state(cls, state: ScanState) -> "ScanStateOut":
        return cls(
            phase=state.phase.value,
            loading=state.loading,
            plate_text=state.plate_text,
            error=state.error,
            rejection_reason=state.rejection_reason.value if state.rejection_reason else None,
            camera_ready=state.camera_ready,
            has_last_capture=state.last_capture_png is not None,
            updated_at=state.updated_at,
        )

class HealthResponse(BaseModel):
    status: str
    env: str
    camera_ready: bool

class ErrorResponse(BaseModel):
    detail: str
