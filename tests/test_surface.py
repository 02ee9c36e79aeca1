from __future__ import annotations

import base64
import io

import numpy as np
import pytest
from PIL import Image, UnidentifiedImageError

from canvas_bmp.errors import BufferSizeMismatch, InvalidDimensions, SourceLoadFailure
from canvas_bmp.surface import PixelSurface, load_surface


def _png_bytes(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def rgba_image() -> Image.Image:
    rng = np.random.default_rng(5)
    array = rng.integers(0, 256, size=(3, 4, 4), dtype=np.uint8)
    return Image.fromarray(array)


def test_surface_validates_buffer_length():
    with pytest.raises(BufferSizeMismatch):
        PixelSurface(width=2, height=2, pixels=bytes(15))
    with pytest.raises(InvalidDimensions):
        PixelSurface(width=0, height=2, pixels=b"")


def test_surface_copies_pixels_into_bytes():
    source = bytearray(4)
    surface = PixelSurface(width=1, height=1, pixels=source)
    source[0] = 99
    assert surface.pixels == bytes(4)


def test_from_image_converts_to_rgba():
    image = Image.new("RGB", (2, 1), color=(1, 2, 3))
    surface = PixelSurface.from_image(image)
    assert (surface.width, surface.height) == (2, 1)
    assert surface.pixels == bytes([1, 2, 3, 255] * 2)


def test_from_array_adds_opaque_alpha():
    array = np.array([[[10, 20, 30], [40, 50, 60]]], dtype=np.uint8)
    surface = PixelSurface.from_array(array)
    np.testing.assert_array_equal(
        surface.as_array(), [[[10, 20, 30, 255], [40, 50, 60, 255]]]
    )


def test_from_array_rejects_bad_shapes():
    with pytest.raises(ValueError):
        PixelSurface.from_array(np.zeros((2, 2), dtype=np.uint8))
    with pytest.raises(TypeError):
        PixelSurface.from_array(np.zeros((2, 2, 4), dtype=np.int32))


def test_as_array_is_read_only(rgba_image):
    view = PixelSurface.from_image(rgba_image).as_array()
    assert view.shape == (3, 4, 4)
    assert not view.flags.writeable


def test_load_surface_from_path(tmp_path, rgba_image):
    path = tmp_path / "input.png"
    rgba_image.save(path)

    surface = load_surface(path)
    assert surface.pixels == rgba_image.tobytes()
    assert load_surface(str(path)) == surface
    assert load_surface(path.as_uri()) == surface


def test_load_surface_from_data_url_and_bytes(rgba_image):
    png = _png_bytes(rgba_image)
    data_url = "data:image/png;base64," + base64.b64encode(png).decode("ascii")

    assert load_surface(data_url).pixels == rgba_image.tobytes()
    assert load_surface(png).pixels == rgba_image.tobytes()


def test_load_surface_passes_through_objects(rgba_image):
    surface = PixelSurface.from_image(rgba_image)
    assert load_surface(surface) is surface
    assert load_surface(rgba_image) == surface
    assert load_surface(np.asarray(rgba_image)) == surface


def test_missing_file_is_a_load_failure(tmp_path):
    with pytest.raises(SourceLoadFailure) as excinfo:
        load_surface(tmp_path / "missing.png")
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)
    assert excinfo.value.cause is excinfo.value.__cause__


def test_undecodable_bytes_are_a_load_failure():
    with pytest.raises(SourceLoadFailure) as excinfo:
        load_surface(b"not an image")
    assert isinstance(excinfo.value.__cause__, UnidentifiedImageError)


@pytest.mark.parametrize(
    "source",
    ["https://example.com/image.png", "data:image/png;base64,%%%"],
)
def test_unsupported_uris_are_load_failures(source):
    with pytest.raises(SourceLoadFailure):
        load_surface(source)


def test_unsupported_source_type():
    with pytest.raises(TypeError):
        load_surface(42)
