from __future__ import annotations

import base64
import io

import numpy as np
import pytest
from PIL import Image

from canvas_bmp import CanvasToBMP, EncoderSettings, PixelSurface, SourceLoadFailure, encode


@pytest.fixture
def array() -> np.ndarray:
    rng = np.random.default_rng(9)
    return rng.integers(0, 256, size=(5, 6, 4), dtype=np.uint8)


def test_to_bytes_matches_encoder(array):
    canvas = CanvasToBMP.from_array(array)
    assert (canvas.width, canvas.height) == (6, 5)
    assert canvas.to_bytes() == encode(6, 5, array.tobytes())


def test_to_blob(array):
    canvas = CanvasToBMP.from_array(array)
    blob = canvas.to_blob()
    assert blob.type == "image/bmp"
    assert blob.data == canvas.to_bytes()


def test_to_data_url(array):
    canvas = CanvasToBMP.from_array(array)
    url = canvas.to_data_url()
    prefix = "data:image/bmp;base64,"
    assert url.startswith(prefix)
    assert base64.b64decode(url[len(prefix):]) == canvas.to_bytes()


def test_from_data_url_round_trip(array):
    first = CanvasToBMP.from_array(array)
    second = CanvasToBMP.from_data_url(first.to_data_url())
    assert second.to_bytes() == first.to_bytes()


def test_from_image_drops_alpha_in_output():
    image = Image.new("RGBA", (3, 2), color=(200, 100, 50, 0))
    data = CanvasToBMP.from_image(image).to_bytes()
    with Image.open(io.BytesIO(data)) as decoded:
        assert decoded.getpixel((2, 1)) == (200, 100, 50)


def test_settings_are_applied(array):
    canvas = CanvasToBMP(PixelSurface.from_array(array), EncoderSettings.from_dpi(96))
    data = canvas.to_bytes()
    assert int.from_bytes(data[38:42], "little") == 3780


def test_save(tmp_path, array):
    canvas = CanvasToBMP.from_array(array)
    path = canvas.save(tmp_path / "canvas.bmp")
    assert path.read_bytes() == canvas.to_bytes()


def test_from_uri_propagates_load_failure(tmp_path):
    with pytest.raises(SourceLoadFailure):
        CanvasToBMP.from_uri(tmp_path / "nope.png")
