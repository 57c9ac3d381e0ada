from datetime import datetime
import os
import pathlib
import traceback


APP_DIR = os.path.join(pathlib.Path.home(), ".vtmenu")
LOG_PATH = os.path.join(APP_DIR, "vtmenu.log")


os.makedirs(APP_DIR, exist_ok=True)


def log(message: str) -> None:
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    with open(LOG_PATH, "a", encoding="utf-8") as f:
        f.write(f"[{ts}] {message}\n")


def log_exception(context: str) -> None:
    """Log context plus the traceback of the exception being handled."""
    log(f"{context}\n{traceback.format_exc().rstrip()}")
