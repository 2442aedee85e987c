"""Compiler wrapper that runs the Android NDK gcc with the right sysroot."""

from __future__ import annotations

import glob
import os
import platform
import subprocess
import sys
from typing import Mapping, Optional, Sequence

_GO_ARCH_BY_MACHINE = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "aarch64": "arm64",
    "arm64": "arm64",
}

_NDK_ARCH = {"386": "x86", "amd64": "x86_64", "arm64": "aarch64"}


def _environ(env: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if env is None else env


def _host_os() -> str:
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform.startswith("linux"):
        return "linux"
    return sys.platform


def _host_goarch() -> str:
    machine = platform.machine().lower()
    return _GO_ARCH_BY_MACHINE.get(machine, machine)


def ndk_path(env: Optional[Mapping[str, str]] = None) -> str:
    """Locate the NDK from NDK, ANDROID_NDK_ROOT or ANDROID_NDK_DIR."""
    env = _environ(env)
    for name in ("NDK", "ANDROID_NDK_ROOT", "ANDROID_NDK_DIR"):
        if name in env:
            return env[name]
    return ""


def api_level(env: Optional[Mapping[str, str]] = None) -> str:
    """The Android API level, from ANDROID_API_LEVEL or 21."""
    return _environ(env).get("ANDROID_API_LEVEL", "21")


def target_arch(env: Optional[Mapping[str, str]] = None) -> str:
    """The NDK toolchain architecture for GOARCH (or the host machine)."""
    goarch = _environ(env).get("GOARCH") or _host_goarch()
    return _NDK_ARCH.get(goarch, goarch)


def platforms_arch(arch: str) -> str:
    """The architecture name used under the NDK platforms directory."""
    return "arm64" if arch == "aarch64" else arch


def build_command(ndk: str, level: str, arch: str, args: Sequence[str]) -> list[str]:
    """Build the gcc command line; raises FileNotFoundError if no gcc is found."""
    host = _host_os()
    last_pattern = "*-gcc" + (".exe" if host == "windows" else "")
    pattern = os.path.join(ndk, "toolchains", arch + "-*", "prebuilt", host + "-*", "bin", last_pattern)
    gcc_paths = sorted(glob.glob(pattern))
    if not gcc_paths:
        raise FileNotFoundError("no match gcc")
    sysroot = os.path.join(ndk, "platforms", "android-" + level, "arch-" + platforms_arch(arch))
    return [gcc_paths[0], "--sysroot=" + sysroot, *args]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the NDK gcc with the given arguments and return its exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    command = build_command(ndk_path(), api_level(), target_arch(), args)
    try:
        completed = subprocess.run(command)
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 0
    return completed.returncode


if __name__ == "__main__":
    sys.exit(main())