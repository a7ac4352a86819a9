import pytest
from PIL import Image


@pytest.fixture
def make_image(tmp_path):
    """Write a solid-color image and return its path as str."""
    def _make(mode="RGB", size=(160, 100), color=(0, 0, 0), name="img.png"):
        path = tmp_path / name
        Image.new(mode, size, color).save(path)
        return str(path)
    return _make


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Never read the developer's real config file."""
    monkeypatch.setenv("ASCII_IMAGE_CONFIG", str(tmp_path / "no_such_config.json"))
