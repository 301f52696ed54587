import cv2

from plate_scanner.domain.Models.frame import Frame


def encode_png(frame: Frame) -> bytes:
    """Codifica el frame en PNG (copia para mostrar al usuario)."""
    ok, buf = cv2.imencode(".png", frame.image)
    if not ok:
        raise ValueError(f"No se pudo codificar frame {frame.to_dict()} como PNG")
    return buf.tobytes()
