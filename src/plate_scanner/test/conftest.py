import time
from typing import List, Optional

import numpy as np
import pytest

from plate_scanner.application.capture_controller import CaptureController
from plate_scanner.application.plate_scan_service import PlateScanService
from plate_scanner.application.scan_state_store import ScanStateStore
from plate_scanner.domain.Interfaces.camera_stream import ICameraStream
from plate_scanner.domain.Interfaces.ocr_reader import IOCRReader
from plate_scanner.domain.Models.frame import Frame
from plate_scanner.domain.Models.recognition_result import RecognitionResult
from plate_scanner.domain.Services.plate_validator import PlateValidator
from plate_scanner.domain.errors import CameraUnavailableError


class InMemoryCameraStream(ICameraStream):
    """Stream de prueba: devuelve siempre el mismo frame en memoria."""

    def __init__(self, image: Optional[np.ndarray] = None, fail_connect: bool = False):
        self.image = image if image is not None else np.zeros((48, 64, 3), dtype=np.uint8)
        self.fail_connect = fail_connect
        self.connected = False
        self.connect_calls = 0
        self.disconnect_calls = 0

    @property
    def is_connected(self) -> bool:
        return self.connected

    def connect(self) -> None:
        self.connect_calls += 1
        if self.fail_connect:
            raise CameraUnavailableError("permission denied")
        self.connected = True

    def read_frame(self, timeout: float = 1.0) -> Optional[Frame]:
        if not self.connected or self.image is None:
            return None
        return Frame(data=self.image, timestamp=time.time(), source="memory")

    def disconnect(self) -> None:
        self.disconnect_calls += 1
        self.connected = False


class ScriptedOCRReader(IOCRReader):
    """OCR de prueba: devuelve los resultados en orden; las excepciones se lanzan."""

    def __init__(self, *results):
        self.results: List = list(results)
        self.frames: List[Frame] = []

    def recognize(self, frame: Frame) -> RecognitionResult:
        self.frames.append(frame)
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def stream():
    return InMemoryCameraStream()


@pytest.fixture
def state():
    return ScanStateStore()


@pytest.fixture
def controller(stream, state):
    return CaptureController(stream, state, frame_timeout=0.05)


@pytest.fixture
def make_service(controller, state):
    def _make(*results):
        reader = ScriptedOCRReader(*results)
        return PlateScanService(
            controller=controller,
            ocr_reader=reader,
            validator=PlateValidator(),
            state=state,
        )
    return _make
