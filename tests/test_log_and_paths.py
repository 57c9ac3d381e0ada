import os
import sys

from vtmenu.config import CONFIG_NAME, config_path
from vtmenu.utils import app_path
from vtmenu.utils import log as log_mod


def test_log_appends_timestamped_lines():
    log_mod.log("first")
    log_mod.log("second")
    with open(log_mod.LOG_PATH, encoding="utf-8") as f:
        lines = f.read().splitlines()
    assert lines[0].startswith("[") and lines[0].endswith("] first")
    assert lines[1].endswith("] second")


def test_log_exception_includes_traceback():
    try:
        raise ValueError("bad input")
    except ValueError:
        log_mod.log_exception("While testing:")
    with open(log_mod.LOG_PATH, encoding="utf-8") as f:
        text = f.read()
    assert "While testing:" in text
    assert "ValueError: bad input" in text


def test_app_dir_frozen_is_executable_dir(monkeypatch, tmp_path):
    exe = tmp_path / "vtmenu.exe"
    monkeypatch.setattr(sys, "frozen", True, raising=False)
    monkeypatch.setattr(sys, "executable", str(exe))
    assert app_path.app_dir() == str(tmp_path)
    assert config_path() == os.path.join(str(tmp_path), CONFIG_NAME)


def test_app_dir_from_source_is_package_dir(monkeypatch):
    monkeypatch.delattr(sys, "frozen", raising=False)
    assert os.path.basename(app_path.app_dir()) == "vtmenu"
