"""Download link information returned by the locate and dlink APIs."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import urlsplit, urlunsplit

from panpcs.paths import get_http_scheme
from panpcs.pcserror import BaiduError, PanErrorInfo, PCSErrInfo, handle_json_parse

OPERATION_LOCATE_DOWNLOAD = "获取下载链接"
OPERATION_LOCATE_PAN_API_DOWNLOAD = "获取下载链接2"
INIT_RANGE_SIZE = 32 * 1024
LOCATE_DOWNLOAD_URL_NOT_FOUND = "locatedownload url not found"


def _decode(op: str, obj: Any, info: BaiduError) -> dict[str, Any]:
    if isinstance(obj, (str, bytes, bytearray)) or hasattr(obj, "read"):
        data = obj
    else:
        data = json.dumps(obj)
    return handle_json_parse(op, data, info)


def _with_scheme(url: str, https: bool) -> Optional[str]:
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    return urlunsplit(parts._replace(scheme=get_http_scheme(https)))


@dataclass
class URLInfo:
    """Download URLs returned by locatedownload."""

    urls: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, obj: Any) -> "URLInfo":
        """Build from a locatedownload response; raises PCSErrInfo on a server error."""
        decoded = _decode(OPERATION_LOCATE_DOWNLOAD, obj, PCSErrInfo(OPERATION_LOCATE_DOWNLOAD))
        return cls(urls=[item.get("url") or "" for item in decoded.get("urls") or () if item is not None])

    def url_strings(self, https: bool) -> list[str]:
        """All parseable URLs with their scheme set to http or https."""
        converted = (_with_scheme(url, https) for url in self.urls)
        return [url for url in converted if url is not None]

    def single_url(self, https: bool) -> Optional[str]:
        """The first URL, or None when there is none or it cannot be parsed."""
        return _with_scheme(self.urls[0], https) if self.urls else None

    def last_url(self, https: bool) -> Optional[str]:
        """The last URL, or None when there is none or it cannot be parsed."""
        return _with_scheme(self.urls[-1], https) if self.urls else None


@dataclass
class DlinkInfo:
    """A direct download link for one file id."""

    dlink: str = ""
    fs_id: str = ""


def parse_dlink_list(obj: Any) -> list[DlinkInfo]:
    """Links from the netdisk web download API; raises PanErrorInfo on a server error."""
    op = OPERATION_LOCATE_PAN_API_DOWNLOAD
    decoded = _decode(op, obj, PanErrorInfo(op))
    return [
        DlinkInfo(dlink=item.get("dlink") or "", fs_id=str(item.get("fs_id") or ""))
        for item in decoded.get("dlink") or ()
        if item is not None
    ]