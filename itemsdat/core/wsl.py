from functools import cache
import logging
import os
from pathlib import Path
import subprocess

logger = logging.getLogger("wsl")

_PROBES = ("/proc/version", "/proc/sys/kernel/osrelease")


def _looks_like_wsl(s: str) -> bool:
    s = s.lower()
    return "microsoft" in s or "wsl1" in s or "wsl2" in s


def is_running_wsl() -> bool:
    if hasattr(os, "uname") and _looks_like_wsl(os.uname().release):
        return True

    for probe in _PROBES:
        try:
            if _looks_like_wsl(Path(probe).read_text()):
                return True
        except OSError:
            continue

    return False


def _wslpath(p: str) -> str:
    return subprocess.run(["wslpath", "-au", p], capture_output=True, text=True, check=True).stdout.strip()


@cache
def windows_home() -> Path:
    """Home directory of the Windows user, also when running inside WSL."""
    if not is_running_wsl():
        return Path.home()

    try:
        cmd = _wslpath(r"C:\Windows\System32\cmd.exe")
        profile = subprocess.run([cmd, "/c", "echo %USERPROFILE%"], capture_output=True, text=True, check=True).stdout.strip()
        return Path(_wslpath(profile))
    except (OSError, subprocess.CalledProcessError) as e:
        logger.warning(f"could not resolve windows home from wsl, using {Path.home()}: {e}")
        return Path.home()
