"""Offline ("cloud download") task records and response parsing."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from panpcs.pcserror import ErrType, PCSErrInfo, handle_json_parse

OPERATION_CLOUD_DL_QUERY_TASK = "精确查询离线下载任务"
MAX_QUERY_TASK_IDS = 100

_STATUS_TEXTS = {
    0: "下载成功",
    1: "下载进行中",
    2: "系统错误",
    3: "资源不存在",
    4: "下载超时",
    5: "资源存在但下载失败",
    6: "存储空间不足",
    7: "任务取消",
}


def status_text(status: int) -> str:
    """Readable text for an offline task status code."""
    return _STATUS_TEXTS.get(status, f"未知状态码: {status}")


def _must_int(value: Any) -> int:
    """Integer value of a numeric field, 0 when it is missing or malformed."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass
class CloudDlFileInfo:
    """A file belonging to an offline task."""

    file_name: str = ""
    file_size: int = 0


@dataclass
class CloudDlTaskInfo:
    """State of one offline download task."""

    task_id: int = 0
    status: int = 0
    file_size: int = 0
    finished_size: int = 0
    create_time: int = 0
    start_time: int = 0
    finish_time: int = 0
    save_path: str = ""
    source_url: str = ""
    task_name: str = ""
    od_type: int = 0
    file_list: list[CloudDlFileInfo] = field(default_factory=list)
    result: int = 0

    @classmethod
    def from_json(cls, task_id: int, obj: dict[str, Any]) -> "CloudDlTaskInfo":
        """Build from the server's per-task object, whose numbers arrive as strings."""
        files = [
            CloudDlFileInfo(
                file_name=item.get("file_name") or "",
                file_size=_must_int(item.get("file_size")),
            )
            for item in obj.get("file_list") or ()
            if item is not None
        ]
        return cls(
            task_id=task_id,
            status=_must_int(obj.get("status")),
            file_size=_must_int(obj.get("file_size")),
            finished_size=_must_int(obj.get("finished_size")),
            create_time=_must_int(obj.get("create_time")),
            start_time=_must_int(obj.get("start_time")),
            finish_time=_must_int(obj.get("finish_time")),
            save_path=obj.get("save_path") or "",
            source_url=obj.get("source_url") or "",
            task_name=obj.get("task_name") or "",
            od_type=_must_int(obj.get("od_type")),
            file_list=files,
            result=_must_int(obj.get("result")),
        )

    def status_text(self) -> str:
        """Readable text for this task's status."""
        return status_text(self.status)


def _decode(op: str, obj: Any, info: PCSErrInfo) -> dict[str, Any]:
    if isinstance(obj, (str, bytes, bytearray)) or hasattr(obj, "read"):
        data = obj
    else:
        data = json.dumps(obj)
    return handle_json_parse(op, data, info)


def parse_query_response(task_ids: Iterable[int], obj: Any) -> list[CloudDlTaskInfo]:
    """Tasks from a query_task response, in the order of `task_ids`.

    At most the first 100 ids are used; ids the server did not report are
    skipped. Raises PCSErrInfo when no ids are given or the server reports
    an error.
    """
    ids = list(task_ids)
    if not ids:
        raise PCSErrInfo(
            OPERATION_CLOUD_DL_QUERY_TASK,
            ErrType.OTHERS,
            ValueError("no input any task_ids"),
        )
    ids = ids[:MAX_QUERY_TASK_IDS]

    decoded = _decode(OPERATION_CLOUD_DL_QUERY_TASK, obj, PCSErrInfo(OPERATION_CLOUD_DL_QUERY_TASK))
    task_info = decoded.get("task_info") or {}
    if not isinstance(task_info, dict):
        task_info = {}

    tasks = []
    for task_id in ids:
        entry = task_info.get(str(task_id))
        if entry is None:
            continue
        tasks.append(CloudDlTaskInfo.from_json(int(task_id), entry))
    return tasks