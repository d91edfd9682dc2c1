import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool

from src.application.plate_recognition_service import build_service
from src.domain.Models.filter_config import FilterConfig
from src.domain.Models.processing_options import ProcessingOptions
from src.domain.Models.rectangle import Rectangle
from src.domain.errors import ImageDecodeError, RecognitionError
from src.infrastructure.Imaging.image_loader import decode_frame
from src.core.config import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if app.state.service is not None:
        app.state.service.close()


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.state.service = None


def get_service():
    if app.state.service is None:
        app.state.service = build_service()
    return app.state.service


@app.get("/health")
def health_check():
    return {"status": "ok", "env": settings.app_env}


@app.post("/recognize")
async def recognize(
    file: UploadFile = File(...),
    mode: str = Query("track", pattern="^(track|inner|rect)$"),
    x: Optional[int] = None,
    y: Optional[int] = None,
    width: Optional[int] = Query(None, ge=0),
    height: Optional[int] = Query(None, ge=0),
    psm_single_block: Optional[bool] = None,
    greyscale: Optional[bool] = None,
    contrast: Optional[float] = Query(None, ge=-1, le=1),
    brightness: Optional[float] = Query(None, ge=-1, le=1),
    normalize: Optional[bool] = None,
):
    rect = None
    if mode == "rect":
        if None in (x, y, width, height):
            raise HTTPException(status_code=422, detail="mode=rect requiere x, y, width y height")
        rect = Rectangle(x=x, y=y, width=width, height=height)

    try:
        frame = decode_frame(await file.read(), source=file.filename or "upload")
    except ImageDecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    options = _options(psm_single_block, greyscale, contrast, brightness, normalize)

    try:
        report = await run_in_threadpool(get_service().run, frame, options, mode=mode, rect=rect)
    except RecognitionError as e:
        logger.exception("Fallo del motor OCR")
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return report.to_dict()


def _options(psm_single_block, greyscale, contrast, brightness, normalize) -> ProcessingOptions:
    """Parte de los defaults de settings y pisa lo que venga en la request."""
    base = ProcessingOptions.from_settings(settings)
    filters = base.filters or FilterConfig()
    filters = FilterConfig(
        greyscale=filters.greyscale if greyscale is None else greyscale,
        contrast=filters.contrast if contrast is None else contrast,
        brightness=filters.brightness if brightness is None else brightness,
        normalize=filters.normalize if normalize is None else normalize,
    )
    return ProcessingOptions(
        color_range=base.color_range,
        psm_single_block=base.psm_single_block if psm_single_block is None else psm_single_block,
        filters=filters if filters.enabled else None,
        pre_filters=base.pre_filters,
        detect_on_edges=base.detect_on_edges,
    )
