# panpcs

Building blocks for talking to the Baidu PCS and Pan web APIs from Python:
request signatures, decoding of the error payloads both services return,
thread-safe expiring caches, JSON payload builders and typed models for the
JSON responses (file listings, offline-download tasks, download links,
upload precreate).

## Installation

```
pip install panpcs
```

For running the test suite:

```
pip install "panpcs[test]"
pytest
```

## Modules

| Module | What it does |
| --- | --- |
| `panpcs.expires` | `Expires` / `DataExpires` values with a deadline and a manual abort flag; `expires_in`, `expires_at`, `data_expires` |
| `panpcs.cachemap` | `CacheOpMap` of per-operation `CacheUnit`s with per-key locking |
| `panpcs.netdisksign` | `dev_uid`, `LocateDownloadSign`, `new_locate_download_sign`, `share_surl_info_sign`, `sign2` |
| `panpcs.pcserror` | `BaiduError` and its `PCSErrInfo`, `PanErrorInfo`, `DlinkErrInfo` kinds; `handle_json_parse`, `find_pcs_err`, `find_pan_err` |
| `panpcs.panhome` | `PanHome`: reads the signing material from the Pan home page and caches the signature for an hour |
| `panpcs.paths` | JSON payload builders (`CpMv`, `cpmv_list_json`, `paths_list_json`, `fs_id_list_json`), list formatting and path helpers |
| `panpcs.file_directory` | `FileDirectory`, `FileDirectoryList`, `OrderBy`, `Order`, `OrderOptions` |
| `panpcs.cloud_dl` | Offline-download task models, status texts and `parse_query_response` |
| `panpcs.download` | `URLInfo` for locate-download responses and `parse_dlink_list` |
| `panpcs.upload` | `RapidUploadInfo`, `parse_precreate`, `randomify_md5` and the upload size limits |
| `panpcs.ndkbuild` | Wrapper that runs the Android NDK gcc with the right sysroot |

## Examples

### Signing a locate-download request

```python
from panpcs.netdisksign import dev_uid, new_locate_download_sign

bduss = "placeholder"
sign = new_locate_download_sign(10086, bduss)
query = sign.url_param()   # "time=...&rand=...&devuid=...&cuid=..."
print(dev_uid(bduss))      # 32 upper-case hex digits followed by "|0"
```

### Caching an expensive call

```python
from panpcs.cachemap import CacheOpMap
from panpcs.expires import data_expires

caches = CacheOpMap()
entry = caches.cache_operation("list", "/docs", lambda: data_expires(["a.txt"], 60))
print(entry.data)  # ['a.txt']
# A second call with the same op and key within 60 seconds returns the same
# entry without running the function again, even under concurrent callers.
```

### Decoding server errors

Decoders return the decoded JSON object and raise the matching error when the
payload is malformed or carries a non-zero error code.

```python
import io
from panpcs.pcserror import PCSErrInfo, decode_pcs_json_error, find_pan_err

body = io.BytesIO(b'{"error_code": 31066, "error_msg": "file does not exist"}')
try:
    decode_pcs_json_error("meta", body)
except PCSErrInfo as err:
    print(err.remote_err_code(), err.remote_err_msg())  # 31066 文件或目录不存在

print(find_pan_err(-9))  # 文件不存在
```

### Working with file listings

```python
from panpcs.file_directory import FileDirectoryList

listing = FileDirectoryList.from_json([
    {"path": "/a.txt", "server_filename": "a.txt", "size": 10, "isdir": 0},
    {"path": "/dir", "server_filename": "dir", "isdir": 1},
])
print(listing.total_size())      # 10
print(listing.count())           # (1, 1)
print(listing.all_file_paths())  # ['/a.txt', '/dir']
```

### Building request bodies

```python
from panpcs.paths import CpMv, cpmv_list_json, cpmv_related_dirs

moves = [CpMv("/a/x.txt", "/b/x.txt")]
print(cpmv_list_json(moves))     # {"list":[{"from":"/a/x.txt","to":"/b/x.txt"}]}
print(cpmv_related_dirs(moves))  # ['/a', '/b']
```

## Android NDK compiler wrapper

`panpcs-ndk-gcc` finds the NDK gcc for the target architecture and runs it with
`--sysroot` pointing at the matching Android platform directory; all other
arguments are passed through and its exit status is returned.

```
panpcs-ndk-gcc -c hello.c -o hello.o
```

The NDK location is taken from `NDK`, `ANDROID_NDK_ROOT` or `ANDROID_NDK_DIR`,
the API level from `ANDROID_API_LEVEL` (default `21`), and the target
architecture from `GOARCH`, falling back to the host machine. When no matching
gcc is found it raises `FileNotFoundError`.

## What this package does not do

panpcs is not a netdisk client. It does not log in, list, upload, download,
copy, move or delete files, and has no interactive shell or file-transfer
command. It builds request payloads and signatures and interprets the JSON the
services send back; sending requests is left to the caller. The only network
access it makes itself is `PanHome`, which fetches the Pan home page with a
`requests` session to obtain the signature.