"""
Integration tests for ResolverManager on a real directory tree.
"""

from pathlib import Path

import pytest
from PIL import Image

import config as app_config
from resolver.errors import SourceNotFoundError
from resolver.interfaces.render import RenderInterface
from resolver.interfaces.resolution import TransformSpec
from resolver.resolver_manager import ResolverManager
from resolver.services.cache_key_service import CacheKeyService
from utils.settings import save_settings_yaml

TRANSFORM = TransformSpec(width=100, height=100)
KEY = CacheKeyService().derive(TRANSFORM)
SKIN_RELATIVE = "images/catalog/product/placeholder/image.jpg"


class _CopyRenderer(RenderInterface):
    """Writes a small JPEG instead of a real derivative."""

    def __init__(self, succeed=True):
        self.calls = []
        self.succeed = succeed

    def render(self, source_path, transform, cache_path):
        self.calls.append((source_path, transform, cache_path))
        if self.succeed:
            Image.new("RGB", (transform.width, transform.height)).save(cache_path, format="JPEG")
        return self.succeed


def _jpeg(path: Path, size=(50, 50)):
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, (200, 10, 10)).save(path, format="JPEG")
    return path


@pytest.fixture
def store(tmp_path, monkeypatch):
    """Media and skin trees plus configuration pointing at them."""
    media = tmp_path / "media"
    skin = tmp_path / "skin"
    media.mkdir()
    monkeypatch.setenv("MEDIA_BASE_DIR", str(media))
    monkeypatch.setenv("SKIN_BASE_DIR", str(skin))
    monkeypatch.setenv("DESIGN_PACKAGE", "mypackage")
    monkeypatch.setenv("DESIGN_THEME", "mytheme")
    monkeypatch.setenv("STORE_ID", "1")
    monkeypatch.setenv("MEMORY_LIMIT", "-1")
    monkeypatch.setenv("STORE_SETTINGS_FILE", str(tmp_path / "store_settings.yaml"))
    monkeypatch.setattr(app_config, "_config", None)
    return {"media": media, "skin": skin, "settings": tmp_path / "store_settings.yaml"}


def test_resolves_existing_source(store):
    _jpeg(store["media"] / "a" / "b" / "shoe.jpg")

    result = ResolverManager().resolve("a/b/shoe.jpg", TRANSFORM)

    assert result.source.absolute_path == str(store["media"] / "a" / "b" / "shoe.jpg")
    assert result.source.is_placeholder is False
    assert result.cache_path == f"{store['media']}/cache/1/image/100x100/{KEY}/a/b/shoe.jpg"
    assert result.is_cached is False


def test_memory_pressure_uses_base_package_placeholder(store, monkeypatch):
    monkeypatch.setenv("MEMORY_LIMIT", "1K")
    monkeypatch.setattr(app_config, "_config", None)
    _jpeg(store["media"] / "shoe.jpg")
    placeholder = _jpeg(store["skin"] / "base" / "default" / SKIN_RELATIVE)

    result = ResolverManager().resolve("/shoe.jpg", TRANSFORM)

    assert result.source.is_placeholder is True
    assert result.source.absolute_path == str(placeholder)
    assert result.cache_path.startswith(f"{store['media']}/cache/1/image/100x100/{KEY}/images/")


def test_cached_derivative_bypasses_memory_check(store, monkeypatch):
    monkeypatch.setenv("MEMORY_LIMIT", "1K")
    monkeypatch.setattr(app_config, "_config", None)
    _jpeg(store["media"] / "shoe.jpg")
    _jpeg(store["media"] / "cache" / "1" / "image" / "100x100" / KEY / "shoe.jpg")

    result = ResolverManager().resolve("/shoe.jpg", TRANSFORM)

    assert result.source.is_placeholder is False
    assert result.is_cached is True


def test_configured_placeholder_from_yaml(store):
    save_settings_yaml(
        {"stores": {"1": {"catalog": {"placeholder": {"thumbnail_placeholder": "stores/1/thumb.jpg"}}}}},
        str(store["settings"]),
    )
    placeholder = _jpeg(store["media"] / "placeholder" / "stores" / "1" / "thumb.jpg")

    result = ResolverManager().resolve("/no_selection", TRANSFORM, "thumbnail")

    assert result.source.absolute_path == str(placeholder)
    assert result.source.relative_path == "/placeholder/stores/1/thumb.jpg"


def test_missing_everything_raises(store):
    with pytest.raises(SourceNotFoundError):
        ResolverManager().resolve("/gone.jpg", TRANSFORM)


def test_prepare_renders_once(store):
    _jpeg(store["media"] / "a" / "shoe.jpg")
    manager = ResolverManager()
    renderer = _CopyRenderer()

    first = manager.prepare("a/shoe.jpg", TRANSFORM, renderer=renderer)
    second = manager.prepare("a/shoe.jpg", TRANSFORM, renderer=renderer)

    assert first.is_cached is True
    assert Path(first.cache_path).is_file()
    assert second.is_cached is True
    assert len(renderer.calls) == 1
    assert renderer.calls[0][0] == str(store["media"] / "a" / "shoe.jpg")
    assert manager.is_cached("a/shoe.jpg", TRANSFORM) is True


def test_prepare_without_renderer_only_resolves(store):
    _jpeg(store["media"] / "shoe.jpg")
    result = ResolverManager().prepare("shoe.jpg", TRANSFORM)
    assert result.is_cached is False
    assert not Path(result.cache_path).exists()


def test_prepare_failed_render(store):
    _jpeg(store["media"] / "shoe.jpg")
    result = ResolverManager().prepare("shoe.jpg", TRANSFORM, renderer=_CopyRenderer(succeed=False))
    assert result.is_cached is False


def test_estimate(store):
    path = _jpeg(store["media"] / "shoe.jpg", size=(100, 100))
    assert ResolverManager().estimate(str(path)).bytes == 157635


def test_clear_cache(store):
    original = _jpeg(store["media"] / "shoe.jpg")
    _jpeg(store["media"] / "cache" / "1" / "image" / KEY / "shoe.jpg")
    _jpeg(store["media"] / "cache" / "2" / "image" / KEY / "shoe.jpg")
    manager = ResolverManager()

    assert manager.clear_cache(dry_run=True)["would_delete"] == 2
    assert manager.clear_cache(store_id=2)["deleted"] == 1
    assert not (store["media"] / "cache" / "2").exists()
    assert manager.clear_cache()["deleted"] == 1
    assert original.exists()
    assert list((store["media"] / "cache").rglob("*")) == []


def test_clear_missing_cache(store):
    assert ResolverManager().clear_cache() == {"deleted": 0, "missing": 0, "errors": 0}
