# src/plate_scanner/infrastructure/Camera/camera_factory.py
from plate_scanner.core.config import Settings, settings as default_settings
from plate_scanner.domain.Interfaces.camera_stream import ICameraStream

def create_camera_stream(settings: Settings = default_settings) -> ICameraStream:
    """
    Factory responsable de crear el stream correcto (OpenCV o FakeCameraStream).
    """

# ==========================================================
# 🧪 1) Fake camera para pruebas y demos
# ==========================================================
    if settings.use_fake_cam:
        from plate_scanner.infrastructure.Camera.fake_camera_stream import FakeCameraStream

        path = settings.fake_cam_path or settings.camera_url.replace("fake://", "")
        return FakeCameraStream(path=path)

# ==========================================================
# 📷 2) OpenCV (dispositivo local o RTSP/HTTP/archivo)
# ==========================================================
    from plate_scanner.infrastructure.Camera.opencv_camera_stream import OpenCVCameraStream
    return OpenCVCameraStream(settings.camera_url)
