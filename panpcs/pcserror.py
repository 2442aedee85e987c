"""Errors reported by the PCS, netdisk web and dlink APIs."""

from __future__ import annotations

import enum
import json
from typing import Any, ClassVar, Optional

STR_SUCCESS = "操作成功"
STR_INTERNAL_ERROR = "内部错误"
STR_REMOTE_ERROR = "远端服务器返回错误"
STR_NET_ERROR = "网络错误"
STR_JSON_PARSE_ERROR = "json 数据解析失败"


class ErrType(enum.IntEnum):
    """Kind of failure carried by a BaiduError."""

    NO_ERROR = 0
    INTERNAL = 1
    REMOTE = 2
    NET = 3
    JSON_PARSE = 4
    OTHERS = 5


class BaiduError(Exception):
    """Base error for one API operation."""

    _json_fields: ClassVar[dict[str, tuple[str, type]]] = {}
    _label: ClassVar[str] = "baiduerror"

    def __init__(
        self,
        operation: str = "",
        err_type: ErrType = ErrType.NO_ERROR,
        err: Optional[BaseException] = None,
    ) -> None:
        super().__init__(operation)
        self.operation = operation
        self.err_type = err_type
        self.err = err

    def set_json_error(self, err: BaseException) -> None:
        """Mark this error as a JSON decoding failure."""
        self.err_type = ErrType.JSON_PARSE
        self.err = err

    def set_net_error(self, err: BaseException) -> None:
        """Mark this error as a network failure."""
        self.err_type = ErrType.NET
        self.err = err

    def set_remote_error(self) -> None:
        """Mark this error as reported by the remote server."""
        self.err_type = ErrType.REMOTE

    def remote_err_code(self) -> int:
        """The error code the server returned (0 means none)."""
        raise NotImplementedError

    def remote_err_msg(self) -> str:
        """A readable message for the server's error code."""
        raise NotImplementedError

    def _remote_detail(self) -> tuple[int, str]:
        return self.remote_err_code(), self.remote_err_msg()

    def _load(self, obj: dict[str, Any]) -> None:
        for key, (attr, kind) in self._json_fields.items():
            if key not in obj or obj[key] is None:
                continue
            value = obj[key]
            if kind is int:
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise TypeError(f"json: cannot unmarshal {type(value).__name__} into int field {key}")
                if isinstance(value, float) and not value.is_integer():
                    raise TypeError(f"json: cannot unmarshal number {value} into int field {key}")
                value = int(value)
            elif kind is str and not isinstance(value, str):
                raise TypeError(f"json: cannot unmarshal {type(value).__name__} into string field {key}")
            setattr(self, attr, value)

    def __str__(self) -> str:
        op = self.operation
        if op == "":
            return str(self.err) if self.err is not None else STR_SUCCESS
        if self.err_type == ErrType.INTERNAL:
            return f"{op}: {STR_INTERNAL_ERROR}, {self.err}"
        if self.err_type == ErrType.JSON_PARSE:
            return f"{op}: {STR_JSON_PARSE_ERROR}, {self.err}"
        if self.err_type == ErrType.NET:
            return f"{op}: {STR_NET_ERROR}, {self.err}"
        if self.err_type == ErrType.REMOTE:
            if self.remote_err_code() == 0:
                return f"{op}: {STR_SUCCESS}"
            code, msg = self._remote_detail()
            return f"{op}: 遇到错误, {STR_REMOTE_ERROR}, 代码: {code}, 消息: {msg}"
        if self.err_type == ErrType.OTHERS:
            if self.err is None:
                return f"{op}: {STR_SUCCESS}"
            return f"{op}, 遇到错误, {self.err}"
        raise ValueError(f"{self._label}: unknown ErrType")


class PCSErrInfo(BaiduError):
    """Error from the PCS REST API (error_code / error_msg)."""

    _json_fields = {"error_code": ("err_code", int), "error_msg": ("err_msg", str)}
    _label = "pcserrorinfo"

    def __init__(
        self,
        operation: str = "",
        err_type: ErrType = ErrType.NO_ERROR,
        err: Optional[BaseException] = None,
        err_code: int = 0,
        err_msg: str = "",
    ) -> None:
        super().__init__(operation, err_type, err)
        self.err_code = err_code
        self.err_msg = err_msg

    def remote_err_code(self) -> int:
        return self.err_code

    def remote_err_msg(self) -> str:
        return find_pcs_err(self.err_code, self.err_msg)[1]

    def _remote_detail(self) -> tuple[int, str]:
        return find_pcs_err(self.err_code, self.err_msg)


class PanErrorInfo(BaiduError):
    """Error from the netdisk web API (errno)."""

    _json_fields = {"errno": ("errno", int)}
    _label = "panerrorinfo"

    def __init__(
        self,
        operation: str = "",
        err_type: ErrType = ErrType.NO_ERROR,
        err: Optional[BaseException] = None,
        errno: int = 0,
    ) -> None:
        super().__init__(operation, err_type, err)
        self.errno = errno

    def remote_err_code(self) -> int:
        return self.errno

    def remote_err_msg(self) -> str:
        return find_pan_err(self.errno)


class DlinkErrInfo(BaiduError):
    """Error from the dlink server (errno / msg)."""

    _json_fields = {"errno": ("errno", int), "msg": ("msg", str)}
    _label = "dlinkerrinfo"

    def __init__(
        self,
        operation: str = "",
        err_type: ErrType = ErrType.NO_ERROR,
        err: Optional[BaseException] = None,
        errno: int = 0,
        msg: str = "",
    ) -> None:
        super().__init__(operation, err_type, err)
        self.errno = errno
        self.msg = msg

    def remote_err_code(self) -> int:
        return self.errno

    def remote_err_msg(self) -> str:
        return self.msg


_PCS_MESSAGES = {
    31061: "文件已存在",
    31066: "文件或目录不存在",
    31079: "秒传文件失败",
}


def find_pcs_err(code: int, msg: str) -> tuple[int, str]:
    """Translate a known PCS error code into a message."""
    if code == 0:
        return code, ""
    if code == 31045:
        return code, "操作失败, 可能百度帐号登录状态过期, 请尝试重新登录, 消息: " + msg
    return code, _PCS_MESSAGES.get(code, msg)


_PAN_MESSAGES = {
    0: STR_SUCCESS,
    -1: "由于您分享了违反相关法律法规的文件，分享功能已被禁用，之前分享出去的文件不受影响。",
    -2: "用户不存在,请刷新页面后重试",
    -3: "文件不存在,请刷新页面后重试",
    -4: "登录信息有误，请重新登录试试",
    -5: "host_key和user_key无效",
    -6: "请重新登录",
    -7: "该分享已删除或已取消",
    -8: "该分享已经过期",
    -9: "文件不存在",
    -10: "分享外链已经达到最大上限100000条，不能再次分享",
    -11: "验证cookie无效",
    -12: "访问密码错误",
    -14: "对不起，短信分享每天限制20条，你今天已经分享完，请明天再来分享吧！",
    -15: "对不起，邮件分享每天限制20封，你今天已经分享完，请明天再来分享吧！",
    -16: "对不起，该文件已经限制分享！",
    -17: "文件分享超过限制",
    -19: "需要输入验证码",
    -21: "分享已取消或分享信息无效",
    -30: "文件已存在",
    -31: "文件保存失败",
    -33: "一次支持操作999个，减点试试吧",
    -62: "可能需要输入验证码",
    -70: "你分享的文件中包含病毒或疑似病毒，为了你和他人的数据安全，换个文件分享吧",
    2: "参数错误",
    3: "未登录或帐号无效",
    4: "存储好像出问题了，请稍候再试",
    105: "啊哦，链接错误没找到文件，请打开正确的分享链接",
    108: "文件名有敏感词，优化一下吧",
    110: "分享次数超出限制，可以到“我的分享”中查看已分享的文件链接",
    112: "页面已过期，请刷新后重试",
    113: "签名错误",
    114: "当前任务不存在，保存失败",
    115: "该文件禁止分享",
    132: "您的帐号可能存在安全风险，为了确保为您本人操作，请先进行安全验证。",
}


def find_pan_err(errno: int) -> str:
    """Translate a netdisk web errno into a message."""
    return _PAN_MESSAGES.get(errno, "未知错误")


def _read_json(data: Any) -> Any:
    if hasattr(data, "read"):
        data = data.read()
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    return json.loads(data)


def handle_json_parse(op: str, data: Any, info: Optional[BaiduError] = None) -> dict[str, Any]:
    """Decode a JSON response into `info` and return the decoded object.

    `data` may be bytes, text or a readable file. Raises `info` (a PCSErrInfo
    for `op` when none is given) on malformed JSON or a non-zero remote code.
    """
    if info is None:
        info = PCSErrInfo(op)
    try:
        obj = _read_json(data)
        if obj is None:
            obj = {}
        if not isinstance(obj, dict):
            raise ValueError(f"json: cannot unmarshal {type(obj).__name__} into object")
        info._load(obj)
    except (ValueError, TypeError) as exc:
        info.set_json_error(exc)
        raise info from exc
    if info.remote_err_code() != 0:
        info.set_remote_error()
        raise info
    return obj


def decode_pcs_json_error(op: str, data: Any) -> dict[str, Any]:
    """Check a PCS JSON response, raising PCSErrInfo on error."""
    return handle_json_parse(op, data, PCSErrInfo(op))


def decode_pan_json_error(op: str, data: Any) -> dict[str, Any]:
    """Check a netdisk web JSON response, raising PanErrorInfo on error."""
    return handle_json_parse(op, data, PanErrorInfo(op))