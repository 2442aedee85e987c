"""Signature scraped from the netdisk home page, cached for an hour."""

from __future__ import annotations

import base64
import re
from dataclasses import dataclass
from typing import Any, Optional, Union
from urllib.parse import urlsplit

import requests

from panpcs.expires import Expires, expires_in
from panpcs.netdisksign import sign2

OPERATION_SIGNATURE = "signature"
PAN_HOME_URL = "https://pan.baidu.com/disk/home"
PAN_HOME_USER_AGENT = "Mozilla/5.0"
SIGN_LIFETIME_SECONDS = 3600

_SIGN_INFO_RE = re.compile(r'"sign1":"(.*?)"[\s\S]*"sign3":"(.*?)","timestamp":(\d*?),')


class PanHomeError(Exception):
    """Failure while reading the netdisk home page."""


class CookieInvalidError(PanHomeError):
    def __init__(self) -> None:
        super().__init__("cookie is invalid")


class UnknownLocationError(PanHomeError):
    def __init__(self) -> None:
        super().__init__("unknown location")


class MatchPanHomeError(PanHomeError):
    def __init__(self) -> None:
        super().__init__("网盘首页数据匹配出错")


@dataclass(frozen=True)
class SignRes:
    """A computed signature and the timestamp it belongs to."""

    sign: str
    timestamp: str


def parse_sign_info(body: Union[str, bytes]) -> tuple[str, str, str]:
    """Extract (sign1, sign3, timestamp) from the home page body."""
    if isinstance(body, (bytes, bytearray)):
        body = bytes(body).decode("utf-8", "replace")
    match = _SIGN_INFO_RE.search(body)
    if match is None:
        raise MatchPanHomeError()
    return match.group(1), match.group(2), match.group(3)


def make_signature(sign1: str, sign3: str, timestamp: str) -> SignRes:
    """Sign `sign1` with key `sign3` and base64-encode the result."""
    signed = base64.b64encode(sign2(sign3, sign1)).decode("ascii")
    return SignRes(sign=signed, timestamp=timestamp)


class PanHome:
    """Fetches and caches the home page signature for a logged-in session."""

    def __init__(self, session: Optional[Any] = None) -> None:
        self.session = session if session is not None else requests.Session()
        self.sign1 = ""
        self.sign3 = ""
        self.timestamp = ""
        self._sign_res: Optional[SignRes] = None
        self._sign_expires: Optional[Expires] = None

    def fetch_sign_info(self) -> None:
        """Load sign1, sign3 and timestamp from the home page."""
        resp = self.session.get(
            PAN_HOME_URL,
            headers={"User-Agent": PAN_HOME_USER_AGENT},
            allow_redirects=False,
        )
        try:
            location = resp.headers.get("Location", "")
            if location == "/":
                raise CookieInvalidError()
            if location:
                try:
                    host = urlsplit(location).hostname
                except ValueError:
                    raise UnknownLocationError() from None
                if host == "passport.baidu.com":
                    raise CookieInvalidError()
                raise UnknownLocationError()
            body = resp.content
        finally:
            close = getattr(resp, "close", None)
            if close is not None:
                close()
        self.sign1, self.sign3, self.timestamp = parse_sign_info(body)

    def signature(self) -> SignRes:
        """Fetch the home page and compute a fresh signature."""
        self.fetch_sign_info()
        return make_signature(self.sign1, self.sign3, self.timestamp)

    def cache_signature(self) -> SignRes:
        """Return the cached signature, refreshing it once it has expired."""
        if self._sign_res is None or self._sign_expires is None or self._sign_expires.is_expired():
            self._sign_res = self.signature()
            self._sign_expires = expires_in(SIGN_LIFETIME_SECONDS)
        return self._sign_res

    def set_sign_expired(self) -> None:
        """Force the cached signature to be refreshed on next use."""
        if self._sign_expires is not None:
            self._sign_expires.set_expired(True)