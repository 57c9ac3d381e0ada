import argparse, sys
from typing import List, Optional

from . import shell_integration as shell
from .scanner import scan_file, MSG_UNKNOWN
from .utils.console import write_error, write_success
from .utils.log import log, log_exception

MSG_NEED_ADMIN = "You have to run as admin to register or unregister the context menu."


def _require_admin() -> None:
    if shell.is_elevated():
        return
    log("Registration attempted without elevation")
    write_error(MSG_NEED_ADMIN)
    sys.exit(1)


def process_command(args: List[str]) -> bool:
    """Handle --register/--unregister (or the no-arg toggle). False means args name a file."""
    if not args:
        action = shell.decide_action(shell.registration_state(shell.FILE_TYPE, shell.KEY_NAME))
    else:
        action = shell.Action.from_arg(args[0])

    if action is shell.Action.REGISTER:
        _require_admin()
        shell.register(shell.FILE_TYPE, shell.KEY_NAME, shell.MENU_TEXT, shell.menu_command())
        write_success(f"The '{shell.KEY_NAME}' shell extension was registered.")
        return True

    if action is shell.Action.UNREGISTER:
        _require_admin()
        shell.unregister(shell.FILE_TYPE, shell.KEY_NAME)
        write_success(f"The '{shell.KEY_NAME}' shell extension was unregistered.")
        return True

    return False


def run_scan(file_path: str) -> int:
    outcome = scan_file(file_path)
    log(f"Scan of {file_path}: {outcome.kind.value}")
    if outcome.is_error:
        write_error(outcome.message)
    elif outcome.message:
        print(outcome.message)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="vtmenu", add_help=False)
    parser.add_argument("target", nargs="?", help="--register, --unregister or a file to scan")
    args, extra = parser.parse_known_args(argv)
    # --register/--unregister are not declared options; they land in extra
    argv = [a for a in [args.target] + extra if a]

    try:
        if process_command(argv):
            return 0
    except (OSError, ImportError) as ex:
        log_exception("Registry access failed:")
        write_error(MSG_UNKNOWN.format(ex))
        return 1

    return run_scan(argv[0])


if __name__ == "__main__":
    sys.exit(main())
