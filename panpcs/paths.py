"""Request payload builders and path helpers for the netdisk APIs."""

from __future__ import annotations

import hashlib
import json
import posixpath
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable

PATH_SEPARATOR = "/"


def _dumps(obj: Any) -> str:
    """Compact JSON with HTML-sensitive characters escaped."""
    text = json.dumps(obj, separators=(",", ":"), ensure_ascii=False)
    return text.replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026")


def _clean(path: str) -> str:
    if not path:
        return "."
    result = posixpath.normpath(path)
    if result.startswith("//"):
        result = "/" + result.lstrip("/")
    return result


def _dir(path: str) -> str:
    """Everything but the last element of `path`, cleaned."""
    return _clean(path[: path.rfind("/") + 1])


def _unique(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


@dataclass
class CpMv:
    """Source and destination of a copy, move or rename."""

    src: str
    dst: str

    def as_dict(self) -> dict[str, str]:
        return {"from": self.src, "to": self.dst}

    def to_json(self) -> str:
        """The single item as JSON."""
        return _dumps(self.as_dict())


def cpmv_list_json(items: Iterable[CpMv]) -> str:
    """JSON body listing copy/move items."""
    return _dumps({"list": [item.as_dict() for item in items]})


def paths_list_json(paths: Iterable[str]) -> str:
    """JSON body listing netdisk paths."""
    return _dumps({"list": [{"path": p} for p in paths]})


def fs_id_list_json(fs_ids: Iterable[int]) -> str:
    """JSON body listing file ids."""
    return _dumps({"list": [{"fs_id": int(f)} for f in fs_ids]})


def block_list_json(blocks: Iterable[str]) -> str:
    """JSON body holding a block md5 list."""
    return _dumps({"block_list": list(blocks)})


def merge_string_list(*args: str) -> str:
    """Render strings as a JSON-style list without escaping."""
    return '["' + '","'.join(args) + '"]'


def merge_int64_list(*args: int) -> str:
    """Render integers as a JSON list."""
    return "[" + ",".join(str(int(a)) for a in args) + "]"


def all_related_dir(paths: Iterable[str]) -> list[str]:
    """Parent directories of `paths`, without duplicates, in first-seen order."""
    return _unique(_dir(p) for p in paths)


def cpmv_related_dirs(items: Iterable[CpMv]) -> list[str]:
    """Parent directories of every source and destination, without duplicates."""
    dirs: list[str] = []
    for item in items:
        dirs.append(_dir(item.src))
        dirs.append(_dir(item.dst))
    return _unique(dirs)


def get_http_scheme(https: bool) -> str:
    """'https' or 'http'."""
    return "https" if https else "http"


def create_passwd() -> str:
    """A four-character share password derived from the current time."""
    digest = hashlib.md5()
    digest.update(b"Asswecan")
    digest.update(str(datetime.now()).encode())
    return digest.hexdigest()[:4]


def public_suffix(domain: str) -> str:
    """Cookie public suffix: 'com' for baidu.com subdomains, else the domain."""
    if domain.endswith(".baidu.com"):
        return "com"
    return domain