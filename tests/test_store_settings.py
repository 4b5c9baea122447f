"""
Unit tests for YAML store settings and the store config provider.
"""

import config as app_config
from core import settings_core
from resolver.services.config_service import SkinDesign, StoreConfigProvider
from utils.path_manager import PathManager
from utils.settings import get_store_value, load_settings_yaml, lookup_path, save_settings_yaml

SETTINGS = {
    "stores": {
        "default": {
            "catalog": {
                "placeholder": {
                    "image_placeholder": "default/image.jpg",
                    "thumbnail_placeholder": "default/thumb.jpg",
                }
            }
        },
        "1": {"catalog": {"placeholder": {"thumbnail_placeholder": "stores/1/thumb.jpg"}}},
    }
}


def test_lookup_path():
    assert lookup_path({"a": {"b": {"c": 3}}}, "a/b/c") == 3
    assert lookup_path({"a": {"b": 1}}, "/a/b/") == 1
    assert lookup_path({"a": {}}, "a/b") is None
    assert lookup_path(None, "a") is None


def test_store_scope_wins_over_default():
    assert get_store_value(SETTINGS, "1", "catalog/placeholder/thumbnail_placeholder") == "stores/1/thumb.jpg"


def test_default_scope_fallback():
    assert get_store_value(SETTINGS, "1", "catalog/placeholder/image_placeholder") == "default/image.jpg"
    assert get_store_value(SETTINGS, "7", "catalog/placeholder/thumbnail_placeholder") == "default/thumb.jpg"


def test_missing_and_non_leaf_values():
    assert get_store_value(SETTINGS, "1", "catalog/placeholder/small_image_placeholder") is None
    assert get_store_value(SETTINGS, "1", "catalog/placeholder") is None
    assert get_store_value({}, "1", "catalog") is None


def test_load_missing_file(tmp_path):
    assert load_settings_yaml(str(tmp_path / "missing.yaml")) == {}


def test_load_malformed_file(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("stores: [unclosed", encoding="utf-8")
    assert load_settings_yaml(str(path)) == {}


def test_load_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    assert load_settings_yaml(str(path)) == {}


def test_save_and_load_round_trip(tmp_path):
    path = str(tmp_path / "nested" / "settings.yaml")
    save_settings_yaml(SETTINGS, path)
    provider = StoreConfigProvider(store_id=1, settings_file=path)
    assert provider.get_config("catalog/placeholder/thumbnail_placeholder") == "stores/1/thumb.jpg"


def test_provider_with_inline_settings():
    provider = StoreConfigProvider(store_id="5", settings=SETTINGS)
    assert provider.get_config("catalog/placeholder/image_placeholder") == "default/image.jpg"


def test_skin_design_dirs(tmp_path, monkeypatch):
    monkeypatch.setenv("DESIGN_PACKAGE", "mypackage")
    monkeypatch.setenv("DESIGN_THEME", "mytheme")
    monkeypatch.setattr(app_config, "_config", None)

    design = SkinDesign(path_manager=PathManager(str(tmp_path / "media"), str(tmp_path / "skin")))

    assert design.get_skin_base_dir() == str(tmp_path / "skin" / "mypackage" / "mytheme")
    assert design.get_skin_base_dir(theme="default") == str(tmp_path / "skin" / "mypackage" / "default")
    assert design.get_skin_base_dir(theme="default", package="base") == str(
        tmp_path / "skin" / "base" / "default"
    )


def test_settings_core_set_and_get(tmp_path, monkeypatch):
    monkeypatch.setenv("STORE_SETTINGS_FILE", str(tmp_path / "settings.yaml"))
    monkeypatch.setenv("STORE_ID", "3")
    monkeypatch.setattr(app_config, "_config", None)

    settings_core.set_store_setting("catalog/placeholder/image_placeholder", "default/image.jpg")
    settings_core.set_store_setting("catalog/placeholder/image_placeholder", "stores/3/image.jpg", store_id=3)

    assert settings_core.get_store_setting("catalog/placeholder/image_placeholder") == "stores/3/image.jpg"
    assert settings_core.get_store_setting("catalog/placeholder/image_placeholder", store_id=4) == "default/image.jpg"
    assert settings_core.get_setting("STORE_ID") == "3"
    assert settings_core.get_setting("NOPE", "fallback") == "fallback"


def test_unquoted_numeric_store_key(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "stores:\n"
        "  1:\n"
        "    catalog:\n"
        "      placeholder:\n"
        "        image_placeholder: stores/1/image.jpg\n",
        encoding="utf-8",
    )
    provider = StoreConfigProvider(store_id="1", settings_file=str(path))
    assert provider.get_config("catalog/placeholder/image_placeholder") == "stores/1/image.jpg"
