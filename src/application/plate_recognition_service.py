import logging
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, Union

from src.monitoring.metrics import (
    regions_detected_total, plates_extracted_total, recognition_failures_total,
    tracking_latency, ocr_latency, pipeline_latency
)

from src.domain.Models.frame import Frame
from src.domain.Models.ocr_result import OcrResult
from src.domain.Models.processing_options import ProcessingOptions
from src.domain.Models.recognition_report import RecognitionReport
from src.domain.Models.rectangle import Rectangle
from src.domain.Interfaces.color_tracker import IColorTracker
from src.domain.Interfaces.image_enhancer import IImageEnhancer
from src.domain.Interfaces.ocr_reader import IOCRReader, PageSegMode
from src.domain.Services.inner_region_resolver import InnerRegionResolver
from src.domain.Services.plate_extractor import PlateExtractor
from src.domain.Services.region_tracker import RegionTracker
from src.domain.errors import RecognitionError
from src.infrastructure.Imaging.opencv_image_enhancer import sobel_edges
from src.infrastructure.OCR.session import ocr_session, recognize_crop
from src.core.config import settings

logger = logging.getLogger(__name__)

MODES = ("track", "inner", "rect")


class PlateRecognitionService:
    """
    Pipeline completo: regiones por color -> recorte/mejora -> OCR -> placa.

    Tres entradas:
    - track:               todas las regiones detectadas
    - track_inner:         la región entre dos anclas alineadas
    - recognize_from_rect: un rectángulo dado por el llamador

    Cada llamada es independiente: un motor OCR por pasada, liberado al final.
    """

    def __init__(
        self,
        color_tracker: IColorTracker,
        ocr_factory: Callable[[], IOCRReader],
        enhancer: IImageEnhancer,
        extractor: PlateExtractor,
        resolver: Optional[InnerRegionResolver] = None,
        whitelist: Optional[str] = None,
        max_idle_scans: Optional[int] = None,
        prepare_workers: Optional[int] = None,
    ):
        self.region_tracker = RegionTracker(color_tracker, max_idle_scans=max_idle_scans)
        self.ocr_factory = ocr_factory
        self.enhancer = enhancer
        self.extractor = extractor
        self.resolver = resolver or InnerRegionResolver(
            tolerance=settings.inner_tolerance,
            scale=settings.inner_scale,
            padding=settings.inner_padding,
        )
        self.whitelist = whitelist if whitelist is not None else settings.ocr_whitelist

        # Recortes en paralelo (funciones puras); el OCR es secuencial
        self.prepare_workers = max(1, prepare_workers or settings.prepare_workers)
        self.prepare_executor = ThreadPoolExecutor(max_workers=self.prepare_workers)

    def close(self):
        self.prepare_executor.shutdown(wait=True)

    # ---------------------------------------------------------
    # ENTRADAS
    # ---------------------------------------------------------
    def track(
        self,
        frames: Union[Frame, Iterable[Frame]],
        options: Optional[ProcessingOptions] = None,
    ) -> List[OcrResult]:
        options = options or ProcessingOptions.from_settings(settings)
        frame, rects = self._detect(frames, options, mode="track")
        if not rects:
            return []
        return self._crop_and_recognize(frame, rects, options, mode="track")

    def track_inner(
        self,
        frames: Union[Frame, Iterable[Frame]],
        options: Optional[ProcessingOptions] = None,
    ) -> List[OcrResult]:
        options = options or ProcessingOptions.from_settings(settings)
        frame, rects = self._detect(frames, options, mode="inner")
        inner = self.resolver.resolve(rects) if rects else None
        if inner is None:
            logger.debug("Sin región interior entre %d regiones", len(rects))
            return []
        return self._crop_and_recognize(frame, [inner], options, mode="inner")

    def recognize_from_rect(
        self,
        frame: Frame,
        rect: Rectangle,
        options: Optional[ProcessingOptions] = None,
    ) -> List[OcrResult]:
        options = options or ProcessingOptions.from_settings(settings)
        return self._crop_and_recognize(frame, [rect], options, mode="rect")

    def resolve_inner_region(
        self,
        frames: Union[Frame, Iterable[Frame]],
        options: Optional[ProcessingOptions] = None,
    ) -> Optional[Rectangle]:
        options = options or ProcessingOptions.from_settings(settings)
        _, rects = self._detect(frames, options, mode="inner")
        return self.resolver.resolve(rects)

    def run(
        self,
        frame: Frame,
        options: Optional[ProcessingOptions] = None,
        mode: str = "track",
        rect: Optional[Rectangle] = None,
    ) -> RecognitionReport:
        if mode not in MODES:
            raise ValueError(f"Modo desconocido: {mode}")

        t0 = time.perf_counter()
        if mode == "track":
            results = self.track(frame, options)
        elif mode == "inner":
            results = self.track_inner(frame, options)
        else:
            if rect is None:
                raise ValueError("mode=rect requiere un rectángulo")
            results = self.recognize_from_rect(frame, rect, options)

        pipeline_latency.labels(mode=mode).set(time.perf_counter() - t0)
        return self._make_report(frame, mode, results)

    # ---------------------------------------------------------
    # DETECCIÓN
    # ---------------------------------------------------------
    def _detect(self, frames, options: ProcessingOptions, mode: str):
        t0 = time.perf_counter()
        tracking_pass = self.region_tracker.run_pass(
            frames,
            options.color_range,
            detection_view=self._detection_view(options),
        )
        tracking_latency.labels(mode=mode).set(time.perf_counter() - t0)

        rects = list(tracking_pass.rectangles)
        if rects:
            regions_detected_total.labels(mode=mode).inc(len(rects))
        logger.debug("[%s] %d regiones detectadas", mode, len(rects))
        return tracking_pass.frame, rects

    def _detection_view(self, options: ProcessingOptions):
        if not (options.detect_on_edges or (options.pre_filters and options.filters)):
            return None

        def view(frame: Frame) -> Frame:
            if options.pre_filters and options.filters:
                frame = Frame(
                    data=self.enhancer.apply_filters(frame.data, options.filters),
                    timestamp=frame.timestamp,
                    source=frame.source,
                )
            if options.detect_on_edges:
                frame = sobel_edges(frame)
            return frame

        return view

    # ---------------------------------------------------------
    # RECORTE + OCR
    # ---------------------------------------------------------
    def _crop_and_recognize(
        self,
        frame: Frame,
        rects: List[Rectangle],
        options: ProcessingOptions,
        mode: str,
    ) -> List[OcrResult]:
        images = list(self.prepare_executor.map(
            lambda r: self.enhancer.prepare(frame, r, options.filters),
            rects,
        ))

        results: List[OcrResult] = []
        psm = PageSegMode.from_flag(options.psm_single_block)

        t0 = time.perf_counter()
        try:
            with ocr_session(self.ocr_factory, psm, self.whitelist) as reader:
                for i, (rect, image) in enumerate(zip(rects, images)):
                    lines = recognize_crop(reader, image)
                    plate = self.extractor.extract_plate(lines)
                    logger.debug("[%s] recorte %d: %d líneas, placa=%s", mode, i, len(lines), plate)

                    results.append(OcrResult(image=image, lines=lines, plate=plate, rect=rect))
        except RecognitionError:
            recognition_failures_total.labels(mode=mode).inc()
            logger.error("[%s] OCR abortado tras %d de %d recortes", mode, len(results), len(rects))
            raise
        finally:
            ocr_latency.labels(mode=mode).set(time.perf_counter() - t0)

        found = sum(1 for r in results if r.plate)
        if found:
            plates_extracted_total.labels(mode=mode).inc(found)
        return results

    # ---------------------------------------------------------
    # REPORT FACTORY
    # ---------------------------------------------------------
    def _make_report(self, frame: Frame, mode: str, results: List[OcrResult]) -> RecognitionReport:
        return RecognitionReport(
            event_id=str(uuid.uuid4()),
            source=getattr(frame, "source", None),
            mode=mode,
            results=results,
            captured_at=getattr(frame, "timestamp", time.time()),
            processed_at=time.time(),
        )


def build_service(ocr_engine: Optional[str] = None) -> PlateRecognitionService:
    """Arma el servicio con las implementaciones por defecto según settings."""
    from src.infrastructure.OCR.factory import create_ocr_reader
    from src.infrastructure.Tracking.opencv_color_tracker import OpenCVColorTracker
    from src.infrastructure.Imaging.opencv_image_enhancer import OpenCVImageEnhancer
    from src.infrastructure.Normalizer.plate_normalizer import PlateTextNormalizer

    return PlateRecognitionService(
        color_tracker=OpenCVColorTracker(),
        ocr_factory=lambda: create_ocr_reader(ocr_engine),
        enhancer=OpenCVImageEnhancer(),
        extractor=PlateExtractor(PlateTextNormalizer()),
        max_idle_scans=settings.track_max_idle_scans,
    )
