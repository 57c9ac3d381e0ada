import sys

PRESS_KEY = "Press a key to continue"


def wait_for_key() -> None:
    """Block until a key is pressed; the shell launches us in a console that closes on exit."""
    if sys.platform == "win32":
        import msvcrt
        msvcrt.getwch()
        return
    try:
        input()
    except EOFError:
        pass  # stdin closed (piped/CI), nothing to wait on


def write_error(message: str) -> None:
    print(message, file=sys.stderr)
    print(PRESS_KEY, file=sys.stderr)
    wait_for_key()


def write_success(message: str) -> None:
    print(message)
    print(PRESS_KEY)
    wait_for_key()
