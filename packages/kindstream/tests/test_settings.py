import logging
import sys
import types

from kindstream.conf import DEFAULTS, Settings, get_settings, reset_settings


def test_defaults_are_visible_and_overridable():
    settings = Settings({"BUFFER_SIZE": 16})

    assert settings["BUFFER_SIZE"] == 16
    assert settings["FREEZE_REGISTRY"] is DEFAULTS["FREEZE_REGISTRY"]

    settings["BUFFER_SIZE"] = 32
    assert settings.as_dict()["BUFFER_SIZE"] == 32


def test_config_module_overlays_known_settings_only(monkeypatch, caplog):
    module = types.ModuleType("kindstream_partial_conf")
    module.SKIP_EMPTY_DOCUMENTS = False
    module.BUFER_SIZE = 1
    module.helper = "not a setting"
    monkeypatch.setitem(sys.modules, "kindstream_partial_conf", module)
    settings = Settings()

    with caplog.at_level(logging.WARNING, logger="kindstream.conf.settings"):
        settings.load_module("kindstream_partial_conf")

    assert settings["SKIP_EMPTY_DOCUMENTS"] is False
    assert "BUFER_SIZE" not in settings
    assert "helper" not in settings
    assert "BUFER_SIZE" in caplog.text


def test_get_settings_loads_config_module_from_envvar(monkeypatch):
    module = types.ModuleType("kindstream_test_conf")
    module.BUFFER_SIZE = 64
    module.OBJECT_MODULES = ("fruit_kinds",)
    monkeypatch.setitem(sys.modules, "kindstream_test_conf", module)
    monkeypatch.setenv("KINDSTREAM_CONFIG_MODULE", "kindstream_test_conf")
    reset_settings()

    settings = get_settings()

    assert settings["BUFFER_SIZE"] == 64
    assert settings["OBJECT_MODULES"] == ("fruit_kinds",)
    assert get_settings() is settings


def test_decoder_reads_buffer_size_from_settings():
    from kindstream.codecs import ObjectDecoder
    from kindstream.registry import ObjectRegistry

    get_settings()["BUFFER_SIZE"] = 8

    assert ObjectDecoder(ObjectRegistry()).buffer_size == 8
    assert ObjectDecoder(ObjectRegistry(), buffer_size=3).buffer_size == 3
