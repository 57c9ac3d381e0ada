import enum, os, subprocess, sys, webbrowser
from dataclasses import dataclass
from typing import Callable, Optional

from .config import load_config, config_path, is_valid_api_key
from .services.vt_client import VirusTotalClient, RateLimitError, SizeLimitError
from .utils.log import log, log_exception

MSG_INVALID_KEY = "Invalid API key. Did you remember to change appsettings.json?"
MSG_NO_PERMALINK = "No permalink associated with the file. Cannot open URL."
MSG_RATE_LIMIT = "Virus Total limits the number of calls you can make to 4 calls each 60 seconds."
MSG_SIZE_LIMIT = "Virus Total limits the filesize to 32 MB."
MSG_UNKNOWN = "Unknown error happened: {}"


class ScanStatus(enum.Enum):
    OPENED_REPORT = "opened_report"
    OPENED_SCAN = "opened_scan"
    INVALID_API_KEY = "invalid_api_key"
    FILE_MISSING = "file_missing"
    NO_PERMALINK = "no_permalink"
    RATE_LIMITED = "rate_limited"
    SIZE_LIMITED = "size_limited"
    FAILED = "failed"


_ERRORS = {ScanStatus.INVALID_API_KEY, ScanStatus.NO_PERMALINK, ScanStatus.FAILED}


@dataclass
class ScanOutcome:
    kind: ScanStatus
    message: str = ""
    permalink: str = ""

    @property
    def is_error(self) -> bool:
        return self.kind in _ERRORS


def browser_command(url: str) -> str:
    # cmd treats a bare & as a command separator
    return "/c start " + url.replace("&", "^&")


def open_url(url: str) -> None:
    if sys.platform != "win32":
        webbrowser.open(url)
        return
    # command line goes to CreateProcess unquoted
    subprocess.Popen("cmd " + browser_command(url),
                     creationflags=subprocess.CREATE_NO_WINDOW)


def _default_client(cfg) -> VirusTotalClient:
    return VirusTotalClient(cfg["apikey"], use_tls=cfg.get("use_tls", True),
                            timeout=cfg.get("timeout"))


def scan_file(file_path: str, *, cfg_path: Optional[str] = None,
              client_factory: Callable = _default_client,
              opener: Callable[[str], None] = open_url,
              out: Callable[[str], None] = print) -> ScanOutcome:
    """
    Look up the report for file_path and open it, or upload the file and open
    the new scan. Expected failures come back as a ScanOutcome; anything else
    is folded into ScanStatus.FAILED.
    """
    try:
        return _scan(file_path, cfg_path, client_factory, opener, out)
    except Exception as ex:
        log_exception(f"Scan of {file_path} failed:")
        return ScanOutcome(ScanStatus.FAILED, MSG_UNKNOWN.format(ex))


def _scan(file_path, cfg_path, client_factory, opener, out) -> ScanOutcome:
    cfg_path = cfg_path or config_path()
    out(cfg_path)
    cfg = load_config(cfg_path)
    if not is_valid_api_key(cfg.get("apikey")):
        log(f"Invalid API key in {cfg_path}")
        return ScanOutcome(ScanStatus.INVALID_API_KEY, MSG_INVALID_KEY)

    if not os.path.isfile(file_path):
        log(f"Ignoring missing file {file_path}")
        return ScanOutcome(ScanStatus.FILE_MISSING)

    name = os.path.basename(file_path)
    with client_factory(cfg) as vt:
        out(f"Getting report for {name}")
        log(f"Getting report for {file_path}")
        report = vt.get_file_report(file_path)

        if report is not None and report.present:
            if not report.permalink:
                log(f"Report for {name} has no permalink")
                return ScanOutcome(ScanStatus.NO_PERMALINK, MSG_NO_PERMALINK)
            _open(report.permalink, opener, out)
            return ScanOutcome(ScanStatus.OPENED_REPORT, permalink=report.permalink)

        out(f"No report for {name} - sending file to VT")
        log(f"Uploading {file_path}")
        try:
            result = vt.scan_file(file_path)
        except RateLimitError as ex:
            log(str(ex))
            return ScanOutcome(ScanStatus.RATE_LIMITED, MSG_RATE_LIMIT)
        except SizeLimitError as ex:
            log(str(ex))
            return ScanOutcome(ScanStatus.SIZE_LIMITED, MSG_SIZE_LIMIT)

        _open(result.permalink, opener, out)
        return ScanOutcome(ScanStatus.OPENED_SCAN, permalink=result.permalink)


def _open(url: str, opener, out) -> None:
    out(f"Opening {url}")
    log(f"Opening {url}")
    opener(url)
