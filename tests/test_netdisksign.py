import base64
import re
import time

from panpcs.netdisksign import (
    LocateDownloadSign,
    dev_uid,
    new_locate_download_sign,
    share_surl_info_sign,
    sign2,
)


def test_locate_download_sign():
    sign = LocateDownloadSign(time=1571140066, dev_uid="O|1E67351CCE80B2CF48DB511CD77ACD9F")
    sign.sign(10086, "test_bduss")
    assert sign.rand == "b6bb7a6f46899e181baea58798d4fdb889775c2c"


def test_sign2():
    res = sign2("e8c7d729eea7b54551aa594f942decbe", "37dbe07ade9359c1aa70807e847f768c13360ad2")
    standard = base64.b64decode("8RxCbsVeSzn2UjxJAAiV9QQs/WetOj2FJUGwjsMG6SgxFMWlLS/U1Q==")
    assert res == standard
    assert base64.b64encode(res) == b"8RxCbsVeSzn2UjxJAAiV9QQs/WetOj2FJUGwjsMG6SgxFMWlLS/U1Q=="


def test_sign2_empty_key_gives_zeros():
    assert sign2("", "abc") == b"\x00\x00\x00"


def test_sign2_preserves_length():
    assert len(sign2("key", "x" * 77)) == 77


def test_dev_uid_format():
    value = dev_uid("test_bduss")
    assert re.fullmatch(r"[0-9A-F]{32}\|0", value)
    assert value == dev_uid("test_bduss")
    assert value != dev_uid("other_bduss")


def test_url_param():
    sign = LocateDownloadSign(time=1571140066, dev_uid="O|1E67351CCE80B2CF48DB511CD77ACD9F")
    sign.sign(10086, "test_bduss")
    assert sign.url_param() == (
        "time=1571140066&rand=b6bb7a6f46899e181baea58798d4fdb889775c2c"
        "&devuid=O|1E67351CCE80B2CF48DB511CD77ACD9F&cuid=O|1E67351CCE80B2CF48DB511CD77ACD9F"
    )


def test_new_locate_download_sign_matches_explicit_sign():
    bduss = "test_bduss"
    before = int(time.time())
    sign = new_locate_download_sign(10086, bduss)
    after = int(time.time())
    assert before <= sign.time <= after
    assert sign.dev_uid == dev_uid(bduss)
    explicit = LocateDownloadSign(time=sign.time, dev_uid=sign.dev_uid)
    explicit.sign(10086, bduss)
    assert explicit.rand == sign.rand
    assert re.fullmatch(r"[0-9a-f]{40}", sign.rand)


def test_share_surl_info_sign():
    value = share_surl_info_sign(12345)
    assert re.fullmatch(r"[0-9a-f]{32}", value)
    assert value == share_surl_info_sign(12345)
    assert value != share_surl_info_sign(12346)