import threading

import pytest
from prometheus_client import REGISTRY

from plate_scanner.application import plate_scan_service
from plate_scanner.application.plate_scan_service import ENGINE_FAILURE_MESSAGE, PlateScanService
from plate_scanner.domain.Models.recognition_result import RecognitionResult
from plate_scanner.domain.Models.scan_state import ScanPhase
from plate_scanner.domain.Models.validation import REJECTION_MESSAGES, RejectionReason
from plate_scanner.domain.Services.plate_validator import PlateValidator
from plate_scanner.domain.errors import ScanInProgressError

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def test_accepted_plate(make_service):
    service = make_service(RecognitionResult("KA 01 AB 1234\n", 72.5))
    service.start()

    snapshot = service.scan()

    assert snapshot.phase == ScanPhase.ACCEPTED
    assert snapshot.plate_text == "KA01AB1234"
    assert snapshot.error == ""
    assert snapshot.loading is False
    assert snapshot.last_capture_png.startswith(PNG_SIGNATURE)


@pytest.mark.parametrize(
    "result, reason",
    [
        (RecognitionResult("KA01AB1234", 10), RejectionReason.LOW_CONFIDENCE),
        (RecognitionResult("Z9", 25), RejectionReason.AMBIGUOUS_SHORT_TEXT),
        (RecognitionResult("hello world", 90), RejectionReason.NOT_PLATE_SHAPED),
    ],
)
def test_rejections_surface_specific_messages(make_service, result, reason):
    service = make_service(result)
    service.start()

    snapshot = service.scan()

    assert snapshot.phase == ScanPhase.REJECTED
    assert snapshot.rejection_reason == reason
    assert snapshot.error == REJECTION_MESSAGES[reason]
    assert snapshot.plate_text == ""
    # la captura se guarda aunque se rechace
    assert snapshot.last_capture_png is not None


def test_engine_failure_is_generic_and_recoverable(make_service):
    service = make_service(RuntimeError("tesseract crashed"), RecognitionResult("AB12CD", 80))
    service.start()

    failed = service.scan()
    assert failed.phase == ScanPhase.FAILED
    assert failed.error == ENGINE_FAILURE_MESSAGE
    assert failed.last_capture_png is not None

    retried = service.scan()
    assert retried.phase == ScanPhase.ACCEPTED
    assert retried.plate_text == "AB12CD"
    assert retried.error == ""


def test_new_cycle_clears_previous_result(make_service):
    service = make_service(RecognitionResult("AB12CD", 80), RecognitionResult("???", 90))
    service.start()

    assert service.scan().plate_text == "AB12CD"
    second = service.scan()

    assert second.plate_text == ""
    assert second.rejection_reason == RejectionReason.NOT_PLATE_SHAPED


def test_scan_without_camera_is_noop(make_service, state):
    service = make_service(RecognitionResult("AB12CD", 80))
    before = state.snapshot()

    after = service.scan()

    assert after == before
    assert service.ocr_reader.frames == []


def test_concurrent_trigger_is_rejected(controller, state):
    entered = threading.Event()
    release = threading.Event()

    class SlowReader:
        def recognize(self, frame):
            entered.set()
            release.wait(timeout=5)
            return RecognitionResult("AB12CD", 80)

    service = PlateScanService(controller, SlowReader(), PlateValidator(), state)
    service.start()

    worker = threading.Thread(target=service.scan)
    worker.start()
    try:
        assert entered.wait(timeout=5)
        assert service.busy
        assert state.snapshot().phase == ScanPhase.RECOGNIZING
        assert state.snapshot().loading
        with pytest.raises(ScanInProgressError):
            service.scan()
    finally:
        release.set()
        worker.join(timeout=5)

    assert not service.busy
    assert state.snapshot().phase == ScanPhase.ACCEPTED


def test_outcomes_are_counted(make_service):
    labels = {"outcome": "not_plate_shaped"}
    before = REGISTRY.get_sample_value("scans_total", labels) or 0.0
    service = make_service(RecognitionResult("abc", 90))
    service.start()

    service.scan()

    assert REGISTRY.get_sample_value("scans_total", labels) == before + 1


def test_stop_releases_camera(make_service, stream):
    service = make_service(RecognitionResult("AB12CD", 80))
    service.start()

    service.stop()

    assert stream.disconnect_calls == 1
    assert service.state.snapshot().camera_ready is False


def test_camera_read_error_fails_cycle_and_is_recoverable(make_service, stream, monkeypatch):
    service = make_service(RecognitionResult("AB12CD", 80))
    service.start()

    def device_lost(timeout=1.0):
        raise RuntimeError("device lost")

    monkeypatch.setattr(stream, "read_frame", device_lost)
    failed = service.scan()

    assert failed.phase == ScanPhase.FAILED
    assert failed.loading is False
    assert failed.error == ENGINE_FAILURE_MESSAGE
    assert not service.busy

    monkeypatch.undo()
    assert service.scan().phase == ScanPhase.ACCEPTED


@pytest.mark.parametrize("error", [ValueError("bad png"), RuntimeError("cv2 imencode")])
def test_png_encoding_error_fails_cycle(make_service, monkeypatch, error):
    def broken_encode(frame):
        raise error

    monkeypatch.setattr(plate_scan_service, "encode_png", broken_encode)
    service = make_service(RecognitionResult("AB12CD", 80))
    service.start()

    snapshot = service.scan()

    assert snapshot.phase == ScanPhase.FAILED
    assert snapshot.error == ENGINE_FAILURE_MESSAGE
    assert snapshot.last_capture_png is None
    assert service.ocr_reader.frames == []
