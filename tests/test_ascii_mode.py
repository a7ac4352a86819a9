import numpy as np
import pytest
from PIL import Image

from ascii_image.config import DEFAULT_RAMP, RenderSettings
from ascii_image.loader import SourceImage, load_image
from ascii_image.rendering.ascii_mode import AsciiRenderer, brightness, ramp_index, sample_coordinates


def solid(width, height, channels, value):
    return SourceImage.from_bytes(width, height, channels, bytes([value]) * (width * height * channels))


def render(image, **kwargs):
    return AsciiRenderer().render(image, RenderSettings(**kwargs))


@pytest.mark.parametrize("channels", [1, 2, 3, 4])
def test_black_image_is_all_darkest_glyph(channels):
    grid = render(solid(160, 100, channels, 0))
    assert grid.height == 25
    assert grid.rows == ("@" * 80,) * 25


@pytest.mark.parametrize("channels", [1, 2, 3, 4])
def test_white_image_is_all_lightest_glyph(channels):
    grid = render(solid(160, 100, channels, 255))
    assert grid.rows == (" " * 80,) * 25


def test_black_png_end_to_end(make_image):
    grid = render(load_image(make_image(size=(160, 100), color=(0, 0, 0))))
    assert grid.rows == ("@" * 80,) * 25


@pytest.mark.parametrize("color", [(0, 0, 0), (255, 255, 255), (12, 200, 99), (128, 128, 128)])
def test_single_pixel_image_is_uniform(color):
    image = SourceImage.from_bytes(1, 1, 3, bytes(color))
    grid = render(image)
    assert grid.width == 80
    assert grid.height == 40  # 1 * 80 / (1 * 2.0)
    assert len(set("".join(grid.rows))) == 1


def test_rows_have_exact_width_and_only_ramp_glyphs():
    rng = np.random.default_rng(1234)
    data = rng.integers(0, 256, size=(57, 131, 3), dtype=np.uint8)
    image = SourceImage(131, 57, 3, data)
    grid = render(image, target_width=73, aspect_correction=1.7)
    assert grid.height == 19  # round(57 * 73 / (131 * 1.7)) = round(18.68...)
    for row in grid:
        assert len(row) == 73
        assert set(row) <= set(DEFAULT_RAMP)


def test_rendering_is_idempotent():
    rng = np.random.default_rng(7)
    data = rng.integers(0, 256, size=(40, 64, 4), dtype=np.uint8)
    image = SourceImage(64, 40, 4, data)
    assert render(image).to_text() == render(image).to_text()


def test_center_point_sampling():
    # left half black, right half white
    image = SourceImage.from_bytes(2, 1, 1, bytes([0, 255]))
    grid = render(image, target_width=2)
    assert grid.rows == ("@ ",)


def test_alpha_is_ignored():
    image = SourceImage.from_bytes(1, 1, 4, bytes([255, 255, 255, 0]))
    assert set(render(image, target_width=4).rows[0]) == {" "}


def test_grayscale_alpha_reads_second_channel_as_green():
    # r=0, g=255, b=r=0 -> 255 // 3 == 85 -> index 3
    image = SourceImage.from_bytes(1, 1, 2, bytes([0, 255]))
    assert set(render(image, target_width=4).rows[0]) == {"*"}


def test_custom_ramp():
    grid = render(solid(4, 2, 1, 255), target_width=4, ramp="XY")
    assert grid.rows == ("YYYY",)


def test_single_glyph_ramp():
    grid = render(solid(4, 4, 3, 90), target_width=3, ramp="#")
    assert set("".join(grid.rows)) == {"#"}


def test_released_image_cannot_be_rendered():
    image = solid(2, 2, 1, 0)
    image.release()
    with pytest.raises(ValueError):
        render(image)


def test_sample_coordinates_centers():
    assert sample_coordinates(10, 4).tolist() == [1, 3, 6, 8]


def test_sample_coordinates_upsampling_clamped():
    coords = sample_coordinates(3, 80)
    assert coords.min() == 0
    assert coords.max() == 2
    assert list(coords) == sorted(coords)


def test_brightness_truncates():
    assert brightness(1, 1, 0) == 0
    assert brightness(255, 255, 254) == 254
    assert brightness(255, 255, 255) == 255


def test_ramp_index_exact_boundaries():
    n = len(DEFAULT_RAMP)
    assert ramp_index(0, n) == 0
    assert ramp_index(85, n) == 3       # 85 / 255 * 9 == 3 exactly
    assert ramp_index(254, n) == 8
    assert ramp_index(255, n) == 9


def test_ramp_index_monotonic():
    n = len(DEFAULT_RAMP)
    indices = [ramp_index(g, n) for g in range(256)]
    assert indices == sorted(indices)
    assert all(0 <= i < n for i in indices)


def test_vectorized_matches_scalar_mapping():
    values = np.arange(256, dtype=np.uint8)
    image = SourceImage(256, 1, 1, values.reshape(1, 256, 1))
    grid = render(image, target_width=256, aspect_correction=1000.0)
    expected = "".join(DEFAULT_RAMP[ramp_index(g, len(DEFAULT_RAMP))] for g in range(256))
    assert grid.rows == (expected,)


def test_mid_gray_16bit_png_renders_mid_ramp(tmp_path):
    p = tmp_path / "gray16.png"
    Image.fromarray(np.full((100, 160), 32768, dtype=np.uint16)).save(p)
    grid = render(load_image(str(p)))
    # 32768 >> 8 == 128 -> 128 * 9 // 255 == 4
    assert grid.rows == ("+" * 80,) * 25
