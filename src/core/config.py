import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from dotenv import load_dotenv


# ==========================================================
# 1) Cargar .env raíz
# ==========================================================
load_dotenv(".env")
DEPLOY_ENV = os.getenv("DEPLOY_ENV", "prod").lower()

# ==========================================================
# 2) Cargar .env del entorno
# ==========================================================
ENV_PATH = f"DevOps/{DEPLOY_ENV}/.env"
load_dotenv(ENV_PATH, override=True)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=ENV_PATH,
        extra="allow"
    )

    # =========================
    #  App
    # =========================
    deploy_env: str = Field("prod", env="DEPLOY_ENV")
    app_name: str = Field("plate-reader", env="APP_NAME")
    app_env: str = Field("prod", env="APP_ENV")
    app_port: int = Field(8000, env="APP_PORT")

    # =========================
    #  Color tracker
    # =========================
    track_min_r: int = Field(80, env="TRACK_MIN_R")
    track_max_r: int = Field(255, env="TRACK_MAX_R")
    track_min_g: int = Field(80, env="TRACK_MIN_G")
    track_max_g: int = Field(255, env="TRACK_MAX_G")
    track_min_b: int = Field(80, env="TRACK_MIN_B")
    track_max_b: int = Field(255, env="TRACK_MAX_B")
    track_color_label: str = Field("white", env="TRACK_COLOR_LABEL")

    track_min_dimension: int = Field(20, env="TRACK_MIN_DIMENSION")
    track_max_dimension: int = Field(0, env="TRACK_MAX_DIMENSION")  # 0 = sin límite
    track_min_group_size: int = Field(30, env="TRACK_MIN_GROUP_SIZE")
    track_max_idle_scans: int = Field(0, env="TRACK_MAX_IDLE_SCANS")  # 0 = hasta agotar la fuente

    # =========================
    #  Inner region
    # =========================
    inner_tolerance: float = Field(0.2, env="INNER_TOLERANCE")
    inner_scale: float = Field(100.0, env="INNER_SCALE")
    inner_padding: int = Field(10, env="INNER_PADDING")

    # =========================
    #  OCR
    # =========================
    ocr_engine: str = Field("easyocr", env="OCR_ENGINE")
    ocr_lang: str = Field("en", env="OCR_LANG")
    ocr_gpu: bool = Field(False, env="OCR_GPU")
    ocr_whitelist: str = Field("0123456789QWERTYUIOPASDFGHJKLZXCVBNM", env="OCR_WHITELIST")
    ocr_psm_single_block: bool = Field(True, env="OCR_PSM_SINGLE_BLOCK")
    tesseract_cmd: str = Field("", env="TESSERACT_CMD")
    tesseract_lang: str = Field("eng", env="TESSERACT_LANG")

    # =========================
    #  Filters
    # =========================
    filter_greyscale: bool = Field(False, env="FILTER_GREYSCALE")
    filter_contrast: float = Field(0.0, env="FILTER_CONTRAST")
    filter_brightness: float = Field(0.0, env="FILTER_BRIGHTNESS")
    filter_normalize: bool = Field(False, env="FILTER_NORMALIZE")
    filter_pre: bool = Field(False, env="FILTER_PRE")
    detect_on_edges: bool = Field(False, env="DETECT_ON_EDGES")

    # =========================
    #  Runtime
    # =========================
    prepare_workers: int = Field(2, env="PREPARE_WORKERS")

    # =========================
    #  Monitoring
    # =========================
    prometheus_port: int = Field(9100, env="PROMETHEUS_PORT")
    metrics_enabled: bool = Field(False, env="METRICS_ENABLED")


settings = Settings()
