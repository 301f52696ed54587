import logging

from plate_scanner.application.capture_controller import CaptureController
from plate_scanner.application.plate_scan_service import PlateScanService
from plate_scanner.application.scan_state_store import ScanStateStore
from plate_scanner.core.config import Settings, settings as default_settings
from plate_scanner.domain.Services.plate_validator import PlateValidationConfig, PlateValidator
from plate_scanner.infrastructure.Camera.camera_factory import create_camera_stream
from plate_scanner.infrastructure.Normalizer.plate_normalizer import PlateNormalizer
from plate_scanner.infrastructure.OCR.factory import create_ocr_reader

logger = logging.getLogger(__name__)


def build_scan_service(settings: Settings = default_settings) -> PlateScanService:
    """
    Arma el servicio de escaneo con los adaptadores configurados en settings.
    No abre la cámara: eso lo hace PlateScanService.start().
    """
    logger.info(
        f"🎥 Armando servicio (camera={settings.camera_url}, fake={settings.use_fake_cam}, "
        f"ocr={settings.ocr_engine})"
    )

    state = ScanStateStore()
    stream = create_camera_stream(settings)
    controller = CaptureController(stream, state, frame_timeout=settings.frame_timeout)

    validator = PlateValidator(
        config=PlateValidationConfig.from_settings(settings),
        normalizer=PlateNormalizer(),
    )

    return PlateScanService(
        controller=controller,
        ocr_reader=create_ocr_reader(settings),
        validator=validator,
        state=state,
    )
