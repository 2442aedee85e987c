"""Request signatures used by the netdisk web and client APIs."""

from __future__ import annotations

import hashlib
import time as _time
from dataclasses import dataclass

_RAND_SALT = b"ebrcUYiuxaZv2XGu7KIYKxUrqfnOfpDF"
_SHARE_SURL_SUFFIX = b"_sharesurlinfo!@#"


def dev_uid(feature: str) -> str:
    """Derive a device id: upper-case md5 hex of `feature` followed by '|0'."""
    return hashlib.md5(feature.encode()).hexdigest().upper() + "|0"


@dataclass
class LocateDownloadSign:
    """Signature parameters for the locatedownload request."""

    time: int
    dev_uid: str
    rand: str = ""

    def sign(self, uid: int, bduss: str) -> None:
        """Compute `rand` from the user id and login cookie."""
        digest = hashlib.sha1()
        digest.update(hashlib.sha1(bduss.encode()).hexdigest().encode())
        digest.update(str(uid).encode())
        digest.update(_RAND_SALT)
        digest.update(str(self.time).encode())
        digest.update(self.dev_uid.encode())
        self.rand = digest.hexdigest()

    def url_param(self) -> str:
        """Render the signature as URL query parameters."""
        return f"time={self.time}&rand={self.rand}&devuid={self.dev_uid}&cuid={self.dev_uid}"


def new_locate_download_sign(uid: int, bduss: str) -> LocateDownloadSign:
    """Create a signature for the current time, signed for `uid`."""
    result = LocateDownloadSign(time=int(_time.time()), dev_uid=dev_uid(bduss))
    result.sign(uid, bduss)
    return result


def share_surl_info_sign(share_id: int) -> str:
    """Sign a share id for the share-info-in-record request."""
    digest = hashlib.md5(str(share_id).encode())
    digest.update(_SHARE_SURL_SUFFIX)
    return digest.hexdigest()


def sign2(key: str, data: str) -> bytes:
    """RC4-style keystream over the characters of `data`, keyed by `key`."""
    if not key:
        return bytes(len(data))
    key_codes = [ord(key[q % len(key)]) for q in range(256)]
    box = list(range(256))
    u = 0
    for q in range(256):
        u = (u + box[q] + key_codes[q]) % 256
        box[q], box[u] = box[u], box[q]

    out = bytearray()
    i = u = 0
    for ch in data:
        i = (i + 1) % 256
        u = (u + box[i]) % 256
        box[i], box[u] = box[u], box[i]
        k = box[(box[i] + box[u]) % 256]
        out.append((ord(ch) ^ k) & 0xFF)
    return bytes(out)