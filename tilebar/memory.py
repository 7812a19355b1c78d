"""RAM, swap and disk usage readings."""

from __future__ import annotations

import os

from .util import StrPath, fmt_human, warn

MEMINFO = "/proc/meminfo"


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def parse_meminfo(text: str) -> dict[str, int]:
    """Parse meminfo text into a mapping of field name to value in kB."""
    fields: dict[str, int] = {}
    for line in text.splitlines():
        name, sep, rest = line.partition(":")
        if not sep:
            continue
        parts = rest.split()
        if parts and parts[0].isdigit():
            fields[name.strip()] = int(parts[0])
    return fields


def _load(path: StrPath, *names: str) -> tuple[int, ...] | None:
    try:
        with open(path, encoding="utf-8") as handle:
            fields = parse_meminfo(handle.read())
    except OSError as exc:
        warn(f"open '{path}': {exc.strerror or exc}")
        return None
    try:
        return tuple(fields[name] for name in names)
    except KeyError:
        return None


def ram_free(unused: object = None, path: StrPath = MEMINFO) -> str | None:
    """Return available memory, human readable."""
    values = _load(path, "MemAvailable")
    if values is None:
        return None
    return fmt_human(values[0] * 1024, 1024)


def ram_perc(unused: object = None, path: StrPath = MEMINFO) -> str | None:
    """Return memory usage in percent, excluding buffers and cache."""
    values = _load(path, "MemTotal", "MemFree", "Buffers", "Cached")
    if values is None:
        return None
    total, free, buffers, cached = values
    if total == 0:
        return None
    return str(_trunc_div(100 * ((total - free) - (buffers + cached)), total))


def ram_total(unused: object = None, path: StrPath = MEMINFO) -> str | None:
    """Return total memory, human readable."""
    values = _load(path, "MemTotal")
    if values is None:
        return None
    return fmt_human(values[0] * 1024, 1024)


def ram_used(unused: object = None, path: StrPath = MEMINFO) -> str | None:
    """Return used memory, excluding buffers and cache, human readable."""
    values = _load(path, "MemTotal", "MemFree", "Buffers", "Cached")
    if values is None:
        return None
    total, free, buffers, cached = values
    return fmt_human((total - free - buffers - cached) * 1024, 1024)


def swap_free(unused: object = None, path: StrPath = MEMINFO) -> str | None:
    """Return free swap, human readable."""
    values = _load(path, "SwapFree")
    if values is None:
        return None
    return fmt_human(values[0] * 1024, 1024)


def swap_perc(unused: object = None, path: StrPath = MEMINFO) -> str | None:
    """Return swap usage in percent."""
    values = _load(path, "SwapTotal", "SwapFree", "SwapCached")
    if values is None:
        return None
    total, free, cached = values
    if total == 0:
        return None
    return str(_trunc_div(100 * (total - free - cached), total))


def swap_total(unused: object = None, path: StrPath = MEMINFO) -> str | None:
    """Return total swap, human readable."""
    values = _load(path, "SwapTotal")
    if values is None:
        return None
    return fmt_human(values[0] * 1024, 1024)


def swap_used(unused: object = None, path: StrPath = MEMINFO) -> str | None:
    """Return used swap, human readable."""
    values = _load(path, "SwapTotal", "SwapFree", "SwapCached")
    if values is None:
        return None
    total, free, cached = values
    return fmt_human((total - free - cached) * 1024, 1024)


def _statvfs(path: StrPath) -> os.statvfs_result | None:
    try:
        return os.statvfs(path)
    except OSError as exc:
        warn(f"statvfs '{path}': {exc.strerror or exc}")
        return None


def disk_free(path: StrPath) -> str | None:
    """Return space available to unprivileged users, human readable."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * fs.f_bavail, 1024)


def disk_perc(path: StrPath) -> str | None:
    """Return disk usage in percent."""
    fs = _statvfs(path)
    if fs is None or fs.f_blocks == 0:
        return None
    return str(int(100 * (1 - fs.f_bavail / fs.f_blocks)))


def disk_total(path: StrPath) -> str | None:
    """Return total disk size, human readable."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * fs.f_blocks, 1024)


def disk_used(path: StrPath) -> str | None:
    """Return used disk space, human readable."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * (fs.f_blocks - fs.f_bfree), 1024)