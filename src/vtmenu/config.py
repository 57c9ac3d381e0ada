import json, os
from typing import Any, Dict, Optional

from .utils.app_path import app_file
from .utils.log import log

CONFIG_NAME = "appsettings.json"
API_KEY_LENGTH = 64

DEFAULT_CONFIG: Dict[str, Any] = {
    "apikey": "",
    "use_tls": True,
    "timeout": {
        "connect": 12,
        "read": 45,
    },
}


def config_path() -> str:
    return app_file(CONFIG_NAME)


def _deep_merge_missing(dst, src):
    # fill only missing keys in dst from src; never overwrite explicit user values
    if isinstance(dst, dict) and isinstance(src, dict):
        for k, v in src.items():
            if k not in dst:
                dst[k] = v
            else:
                dst[k] = _deep_merge_missing(dst[k], v)
        return dst
    return dst


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    path = path or config_path()
    if not os.path.exists(path):
        # give the user a template to fill in; the empty key fails validation
        try:
            save_config(DEFAULT_CONFIG, path)
        except OSError as ex:
            log(f"Could not write config template {path}: {ex}")
        return json.loads(json.dumps(DEFAULT_CONFIG))

    with open(path, "r", encoding="utf-8") as f:
        cfg = json.load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"{path} must contain a JSON object")

    return _deep_merge_missing(cfg, json.loads(json.dumps(DEFAULT_CONFIG)))


def save_config(cfg: Dict[str, Any], path: Optional[str] = None) -> None:
    path = path or config_path()
    with open(path, "w", encoding="utf-8") as f:
        json.dump(cfg, f, indent=2)


def is_valid_api_key(key) -> bool:
    if not isinstance(key, str) or not key.strip():
        return False
    return len(key) == API_KEY_LENGTH
