import os
from typing import List, Optional, Tuple

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from dotenv import load_dotenv


# ==========================================================
# 1) Cargar .env raíz
# ==========================================================
load_dotenv(".env")
DEPLOY_ENV = os.getenv("DEPLOY_ENV", "dev").lower()

# ==========================================================
# 2) Cargar .env del entorno
# ==========================================================
ENV_PATH = f"deploy/{DEPLOY_ENV}/.env"
load_dotenv(ENV_PATH, override=True)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=ENV_PATH,
        extra="ignore"
    )

    # =========================
    #  App
    # =========================
    deploy_env: str = DEPLOY_ENV
    app_name: str = "plate-scanner"
    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"

    # =========================
    #  Camera
    # =========================
    # índice de dispositivo ("0") o URL RTSP/HTTP/archivo
    camera_url: str = "0"
    use_fake_cam: bool = False
    fake_cam_path: Optional[str] = None
    frame_timeout: float = Field(1.0, gt=0)

    # =========================
    #  OCR
    # =========================
    ocr_engine: str = "easyocr"        # easyocr | tesseract | dummy
    ocr_lang: str = "en"
    ocr_gpu: bool = False
    tesseract_lang: str = "eng"
    tesseract_config: str = ""
    dummy_ocr_text: str = "ABC123"
    dummy_ocr_confidence: float = 90.0

    # =========================
    #  Validación de placas
    # =========================
    plate_min_confidence: float = 15.0
    plate_short_text_confidence: float = 30.0
    plate_short_text_length: int = 4
    plate_min_length: int = 3
    plate_max_length: int = 10
    plate_letter_digit_rules: List[Tuple[int, int]] = [(2, 2), (3, 1), (1, 3)]

    # =========================
    #  Monitoring
    # =========================
    metrics_port: int = 9100


settings = Settings()
