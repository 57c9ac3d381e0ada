import hashlib, os
from dataclasses import dataclass
from typing import Dict, Optional
import requests


VT_HOST = "www.virustotal.com"
VT_API_PATH = "/vtapi/v2"
MAX_UPLOAD_BYTES = 32 * 1024 * 1024

REPORT_PRESENT = 1
REPORT_NOT_PRESENT = 0
REPORT_QUEUED = -2


class VirusTotalError(RuntimeError):
    pass


class RateLimitError(VirusTotalError):
    pass


class SizeLimitError(VirusTotalError):
    pass


class AccessDeniedError(VirusTotalError):
    pass


@dataclass
class FileReport:
    resource: str
    response_code: int
    permalink: str = ""
    positives: Optional[int] = None
    total: Optional[int] = None
    scan_date: str = ""
    verbose_msg: str = ""

    @property
    def present(self) -> bool:
        return self.response_code == REPORT_PRESENT


@dataclass
class ScanResult:
    resource: str
    scan_id: str = ""
    permalink: str = ""
    response_code: int = 0
    verbose_msg: str = ""


def _default_timeout(kwargs, connect=12, read=45):
    # allow caller to override, else supply sane defaults
    if "timeout" not in kwargs or kwargs["timeout"] is None:
        kwargs["timeout"] = (connect, read)
    return kwargs


def sha256_of(path: str, chunk_size: int = 1024 * 1024) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as fh:
        for block in iter(lambda: fh.read(chunk_size), b""):
            h.update(block)
    return h.hexdigest()


class VirusTotalClient:
    """
    Minimal client for the VirusTotal public file API.
    Rate limiting is reported as RateLimitError and never retried here.
    """

    def __init__(self, api_key: str, use_tls: bool = True, timeout: Optional[Dict] = None,
                 session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.use_tls = use_tls
        t = timeout or {}
        self._connect = t.get("connect", 12)
        self._read = t.get("read", 45)
        self._sess = session or requests.Session()

    @property
    def base_url(self) -> str:
        scheme = "https" if self.use_tls else "http"
        return f"{scheme}://{VT_HOST}{VT_API_PATH}"

    def close(self):
        self._sess.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # -------------------- transport --------------------
    def _request(self, method: str, endpoint: str, **kwargs) -> Dict:
        _default_timeout(kwargs, self._connect, self._read)
        r = self._sess.request(method, f"{self.base_url}/{endpoint}", **kwargs)
        # the public API answers 204 (no body) once the quota is spent
        if r.status_code in (204, 429):
            raise RateLimitError(f"{endpoint}: rate limit exceeded ({r.status_code})")
        if r.status_code == 413:
            raise SizeLimitError(f"{endpoint}: file too large")
        if r.status_code == 403:
            raise AccessDeniedError(f"{endpoint}: access denied, check the API key")
        if r.status_code != 200:
            raise VirusTotalError(f"{endpoint} failed: {r.status_code} {r.text}")
        return r.json()

    # -------------------- files --------------------
    def get_file_report(self, path: str) -> FileReport:
        """Look up the stored report for the file's SHA-256."""
        resource = sha256_of(path)
        data = self._request("GET", "file/report",
                             params={"apikey": self.api_key, "resource": resource})
        return FileReport(
            resource=data.get("resource") or resource,
            response_code=int(data.get("response_code", REPORT_NOT_PRESENT)),
            permalink=data.get("permalink") or "",
            positives=data.get("positives"),
            total=data.get("total"),
            scan_date=data.get("scan_date") or "",
            verbose_msg=data.get("verbose_msg") or "",
        )

    def scan_file(self, path: str) -> ScanResult:
        """Upload the file for scanning (max 32 MB)."""
        size = os.path.getsize(path)
        if size > MAX_UPLOAD_BYTES:
            raise SizeLimitError(f"{os.path.basename(path)} is {size} bytes, limit is {MAX_UPLOAD_BYTES}")

        with open(path, "rb") as fh:
            data = self._request("POST", "file/scan",
                                 data={"apikey": self.api_key},
                                 files={"file": (os.path.basename(path), fh)})
        return ScanResult(
            resource=data.get("resource") or "",
            scan_id=data.get("scan_id") or "",
            permalink=data.get("permalink") or "",
            response_code=int(data.get("response_code", 0)),
            verbose_msg=data.get("verbose_msg") or "",
        )
