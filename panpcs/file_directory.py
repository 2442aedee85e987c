"""Metadata of netdisk files and directories."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional


class OrderBy(str, enum.Enum):
    """Sort field for directory listings."""

    NAME = "name"
    TIME = "time"
    SIZE = "size"


class Order(str, enum.Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class OrderOptions:
    """Listing order."""

    by: OrderBy = OrderBy.NAME
    order: Order = Order.ASC


DEFAULT_ORDER_OPTIONS = OrderOptions()


@dataclass
class FileDirectory:
    """Metadata of one file or directory."""

    fs_id: int = 0
    app_id: int = 0
    path: str = ""
    filename: str = ""
    ctime: int = 0
    mtime: int = 0
    md5: str = ""
    block_list: list[str] = field(default_factory=list)
    size: int = 0
    isdir: bool = False
    ifhassubdir: bool = False
    pre_base: str = ""
    parent: Optional["FileDirectory"] = field(default=None, repr=False, compare=False)
    children: Optional["FileDirectoryList"] = None

    @classmethod
    def from_json(cls, obj: dict[str, Any]) -> "FileDirectory":
        """Build from a server JSON object."""
        return cls(
            fs_id=int(obj.get("fs_id") or 0),
            app_id=int(obj.get("app_id") or 0),
            path=obj.get("path") or "",
            filename=obj.get("server_filename") or "",
            ctime=int(obj.get("ctime") or 0),
            mtime=int(obj.get("mtime") or 0),
            md5=obj.get("md5") or "",
            block_list=list(obj.get("block_list") or []),
            size=int(obj.get("size") or 0),
            isdir=bool(obj.get("isdir")),
            ifhassubdir=bool(obj.get("ifhassubdir")),
        )

    def fix_md5(self) -> None:
        """Use the single block md5 as the file md5; the server's field may be wrong."""
        if len(self.block_list) == 1:
            self.md5 = self.block_list[0]


class FileDirectoryList(list):
    """A list of FileDirectory entries (None entries are skipped in totals)."""

    @classmethod
    def from_json(cls, items: Optional[Iterable[dict[str, Any]]]) -> "FileDirectoryList":
        """Build from a server JSON list, fixing md5 fields."""
        result = cls()
        for obj in items or ():
            fd = FileDirectory.from_json(obj)
            fd.fix_md5()
            result.append(fd)
        return result

    def _entries(self) -> Iterable[FileDirectory]:
        return (fd for fd in self if fd is not None)

    def total_size(self) -> int:
        """Total size of all entries, including children."""
        return sum(
            fd.size + (fd.children.total_size() if fd.children is not None else 0)
            for fd in self._entries()
        )

    def count(self) -> tuple[int, int]:
        """(files, directories), including children."""
        files = dirs = 0
        for fd in self._entries():
            if fd.isdir:
                dirs += 1
            else:
                files += 1
            if fd.children is not None:
                sub_files, sub_dirs = fd.children.count()
                files += sub_files
                dirs += sub_dirs
        return files, dirs

    def all_file_paths(self) -> list[str]:
        """Every path, depth first, each directory before its children."""
        paths: list[str] = []
        for fd in self._entries():
            paths.append(fd.path)
            if fd.children is not None:
                paths.extend(fd.children.all_file_paths())
        return paths