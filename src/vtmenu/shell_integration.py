import ctypes, enum, os, sys

from .utils.log import log

FILE_TYPE = "*"
KEY_NAME = "VirusTotalContextMenu"
MENU_TEXT = "VT Scan"


class RegistrationState(enum.Enum):
    REGISTERED = "registered"
    UNREGISTERED = "unregistered"


class Action(enum.Enum):
    REGISTER = "--register"
    UNREGISTER = "--unregister"

    @classmethod
    def from_arg(cls, arg: str):
        for a in cls:
            if a.value == (arg or "").lower():
                return a
        return None


def _winreg():
    import winreg
    return winreg


def _verb_key(file_type: str, key_name: str) -> str:
    return f"{file_type}\\shell\\{key_name}"


def menu_command() -> str:
    # %L is replaced by Explorer with the selected file's long path
    if getattr(sys, "frozen", False):
        return f'"{sys.executable}" "%L"'
    return f'"{sys.executable}" -m vtmenu.app "%L"'


def is_registered(file_type: str = FILE_TYPE, key_name: str = KEY_NAME) -> bool:
    winreg = _winreg()
    try:
        with winreg.OpenKey(winreg.HKEY_CLASSES_ROOT, _verb_key(file_type, key_name)):
            return True
    except FileNotFoundError:
        return False


def registration_state(file_type: str = FILE_TYPE, key_name: str = KEY_NAME) -> RegistrationState:
    if is_registered(file_type, key_name):
        return RegistrationState.REGISTERED
    return RegistrationState.UNREGISTERED


def decide_action(state: RegistrationState) -> Action:
    # no-arg invocation toggles
    if state is RegistrationState.REGISTERED:
        return Action.UNREGISTER
    return Action.REGISTER


def register(file_type: str, key_name: str, menu_text: str, command_line: str) -> None:
    winreg = _winreg()
    key_path = _verb_key(file_type, key_name)
    with winreg.CreateKey(winreg.HKEY_CLASSES_ROOT, key_path) as k:
        winreg.SetValueEx(k, None, 0, winreg.REG_SZ, menu_text)
    with winreg.CreateKey(winreg.HKEY_CLASSES_ROOT, key_path + r"\command") as c:
        winreg.SetValueEx(c, None, 0, winreg.REG_SZ, command_line)
    log(f"Registered {key_path} -> {command_line}")


def unregister(file_type: str, key_name: str) -> None:
    winreg = _winreg()
    key_path = _verb_key(file_type, key_name)
    # DeleteKey cannot remove a key with subkeys, so the command goes first
    for sub_key in (key_path + r"\command", key_path):
        try:
            winreg.DeleteKey(winreg.HKEY_CLASSES_ROOT, sub_key)
        except FileNotFoundError:
            continue
    log(f"Unregistered {key_path}")


def is_elevated() -> bool:
    if sys.platform == "win32":
        return bool(ctypes.windll.shell32.IsUserAnAdmin())
    return os.geteuid() == 0
