"""
Pytest configuration and fixtures
"""

import pytest

from vtmenu.utils import log as log_mod
from vtmenu.utils import console


@pytest.fixture(autouse=True)
def _isolate_log(tmp_path, monkeypatch):
    monkeypatch.setattr(log_mod, "LOG_PATH", str(tmp_path / "vtmenu.log"))


@pytest.fixture
def no_key_wait(monkeypatch):
    calls = []
    monkeypatch.setattr(console, "wait_for_key", lambda: calls.append(1))
    return calls


class FakeWinreg:
    """In-memory stand-in for the winreg module (HKEY_CLASSES_ROOT only)."""

    HKEY_CLASSES_ROOT = "HKCR"
    REG_SZ = 1

    def __init__(self):
        self.keys = {}

    class _Handle:
        def __init__(self, path):
            self.path = path

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

    def OpenKey(self, root, path):
        if path not in self.keys:
            raise FileNotFoundError(path)
        return self._Handle(path)

    def CreateKey(self, root, path):
        self.keys.setdefault(path, {})
        return self._Handle(path)

    def SetValueEx(self, handle, name, reserved, kind, value):
        self.keys[handle.path][name] = value

    def DeleteKey(self, root, path):
        if path not in self.keys:
            raise FileNotFoundError(path)
        if any(k.startswith(path + "\\") for k in self.keys):
            raise PermissionError(f"{path} has subkeys")
        del self.keys[path]


@pytest.fixture
def fake_winreg(monkeypatch):
    from vtmenu import shell_integration
    reg = FakeWinreg()
    monkeypatch.setattr(shell_integration, "_winreg", lambda: reg)
    return reg
