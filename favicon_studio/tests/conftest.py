"""Pytest fixtures and config."""

import base64
import io

import pytest
from PIL import Image

from favicon_studio.models.favicon_model import SourceImage

SOLID_COLOR = (30, 120, 220, 255)


def png_bytes(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture(autouse=True)
def env_cleanup(monkeypatch):
    """Tests never see a real API key or local overrides."""
    monkeypatch.delenv("API_KEY", raising=False)
    for name in ("FAVICON_SIZES", "FAVICON_THEME_COLOR", "FAVICON_APP_NAME", "FAVICON_PARALLEL_RESIZE"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def to_png():
    return png_bytes


@pytest.fixture
def solid_image() -> Image.Image:
    return Image.new("RGBA", (512, 512), SOLID_COLOR)


@pytest.fixture
def solid_png_b64(solid_image) -> str:
    return base64.b64encode(png_bytes(solid_image)).decode("ascii")


@pytest.fixture
def solid_source(solid_image) -> SourceImage:
    return SourceImage.from_pil(solid_image)


@pytest.fixture
def pattern_source() -> SourceImage:
    """Non-uniform RGBA image with a transparent block, 300x200."""
    image = Image.new("RGBA", (300, 200), (255, 255, 255, 255))
    for x in range(300):
        for y in range(0, 200, 10):
            image.putpixel((x, y), (x % 256, 0, 255 - x % 256, 255))
    # inside the centre square that a square crop keeps
    for x in range(50, 100):
        for y in range(50):
            image.putpixel((x, y), (0, 0, 0, 0))
    return SourceImage.from_pil(image)
