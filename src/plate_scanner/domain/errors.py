class CameraUnavailableError(ConnectionError):
    """La cámara no se pudo abrir (permiso denegado, sin dispositivo, URL inválida)."""


class OCREngineError(RuntimeError):
    """El motor OCR falló al procesar la imagen."""


class ScanInProgressError(RuntimeError):
    """Ya hay un reconocimiento en curso."""
