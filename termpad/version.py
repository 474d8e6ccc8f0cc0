from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional


class BuildInfo(NamedTuple):
    version: str
    commit: Optional[str]
    date: Optional[str]


def _run_git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (OSError, subprocess.CalledProcessError):
        return None


def _package_version() -> str:
    try:
        return importlib.metadata.version("termpad")
    except importlib.metadata.PackageNotFoundError:
        return "0+unknown"


def _from_embedded_file() -> tuple[Optional[str], Optional[str]]:
    # Generated at build time by the hatch build hook
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None, None
    return getattr(_build_info, "COMMIT", None), getattr(_build_info, "DATE", None)


def get_build_info() -> BuildInfo:
    # Priority: live git checkout -> embedded file -> unknown
    here = Path(__file__).resolve().parent
    commit = _run_git(["rev-parse", "HEAD"], cwd=here)
    date = _run_git(["show", "-s", "--format=%cI", "HEAD"], cwd=here) if commit else None
    if not commit:
        commit, date = _from_embedded_file()
    return BuildInfo(version=_package_version(), commit=commit, date=date)


def get_version_string() -> str:
    info = get_build_info()
    # Short (7-character) git hashes when available
    commit = info.commit[:7] if info.commit else "unknown"
    return f"termpad {info.version} ({commit} {info.date or 'unknown'})"
