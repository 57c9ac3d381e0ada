import os, sys


def app_dir() -> str:
    # frozen builds keep appsettings.json next to the .exe
    if getattr(sys, "frozen", False):
        return os.path.dirname(os.path.abspath(sys.executable))
    return os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def app_file(name: str) -> str:
    return os.path.join(app_dir(), name)
