import pytest

from src.domain.Services.plate_extractor import PlateExtractor
from src.infrastructure.Imaging.opencv_image_enhancer import OpenCVImageEnhancer
from src.infrastructure.Normalizer.plate_normalizer import PlateTextNormalizer


@pytest.fixture
def extractor():
    return PlateExtractor(PlateTextNormalizer())


@pytest.fixture
def enhancer():
    return OpenCVImageEnhancer()
