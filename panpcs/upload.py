"""Upload records and parsing of the upload API responses."""

from __future__ import annotations

import json
import random
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Sequence

from panpcs.pcserror import BaiduError, ErrType, PanErrorInfo, handle_json_parse

KB = 1 << 10
MB = 1 << 20
GB = 1 << 30

MAX_UPLOAD_BLOCK_SIZE = 2 * GB
MIN_UPLOAD_BLOCK_SIZE = 4 * MB
MAX_RAPID_UPLOAD_SIZE = 20 * GB
RECOMMEND_UPLOAD_BLOCK_SIZE = 1 * GB
SLICE_MD5_SIZE = 256 * KB
EMPTY_CONTENT_MD5 = "d41d8cd98f00b204e9800998ecf8427e"

OPERATION_UPLOAD_PRECREATE = "分片上传—Precreate"

ERR_UPLOAD_MD5_NOT_FOUND = "unknown response data, md5 not found"
ERR_UPLOAD_SAVE_PATH_NOT_FOUND = "unknown response data, file saved path not found"
ERR_UPLOAD_SEQ_NOT_MATCH = "服务器返回的上传队列不匹配"
ERR_UPLOAD_MD5_UNKNOWN = "服务器无匹配文件/秒传未生效"
ERR_UPLOAD_FILE_EXISTS = "文件已存在"

_RETURN_TYPE_UPLOAD = 1
_RETURN_TYPE_RAPID = 2


class _Random(Protocol):
    def random(self) -> float: ...


@dataclass
class RapidUploadInfo:
    """What the server needs to recognise a file for rapid upload."""

    filename: str = ""
    content_length: int = 0
    content_md5: str = ""
    slice_md5: str = ""
    content_crc32: str = ""


@dataclass
class UploadSeq:
    """A block md5 and the part sequence number the server assigned to it."""

    seq: int
    block: str


@dataclass
class PrecreateInfo:
    """Result of a precreate call: either a rapid upload or an upload plan."""

    is_rapid_upload: bool = False
    upload_id: str = ""
    upload_seq_list: list[UploadSeq] = field(default_factory=list)


def randomify_md5(md5: str, rng: Optional[_Random] = None) -> str:
    """Return `md5` with each character upper-cased with probability 0.4."""
    rng = rng if rng is not None else random.Random()
    return "".join(ch.upper() if rng.random() > 0.6 else ch.lower() for ch in md5)


def _decode(op: str, obj: Any, info: BaiduError) -> dict[str, Any]:
    if isinstance(obj, (str, bytes, bytearray)) or hasattr(obj, "read"):
        data = obj
    else:
        data = json.dumps(obj)
    return handle_json_parse(op, data, info)


def _int_field(info: BaiduError, name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or (
        isinstance(value, float) and not value.is_integer()
    ):
        exc = TypeError(f"json: cannot unmarshal {value!r} into int field {name}")
        info.set_json_error(exc)
        raise info from exc
    return int(value)


def parse_precreate(obj: Any, block_list: Sequence[str]) -> PrecreateInfo:
    """Interpret a precreate response for the blocks in `block_list`.

    Raises PanErrorInfo when the server reports an error or its block
    sequence does not match `block_list`, and ValueError for an unknown
    return type.
    """
    op = OPERATION_UPLOAD_PRECREATE
    info = PanErrorInfo(op)
    decoded = _decode(op, obj, info)

    return_type = _int_field(info, "return_type", decoded.get("return_type") or 0)
    if return_type == _RETURN_TYPE_UPLOAD:
        seqs = [_int_field(info, "block_list", s) for s in decoded.get("block_list") or ()]
        if len(seqs) != len(block_list):
            info.err_type = ErrType.REMOTE
            info.err = ValueError(ERR_UPLOAD_SEQ_NOT_MATCH)
            raise info
        upload_id = decoded.get("uploadid") or ""
        if not isinstance(upload_id, str):
            exc = TypeError("json: cannot unmarshal uploadid into string")
            info.set_json_error(exc)
            raise info from exc
        return PrecreateInfo(
            upload_id=upload_id,
            upload_seq_list=[UploadSeq(seq=s, block=b) for s, b in zip(seqs, block_list)],
        )
    if return_type == _RETURN_TYPE_RAPID:
        return PrecreateInfo(is_rapid_upload=True)
    raise ValueError("unknown returntype")