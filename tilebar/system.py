"""Miscellaneous status readings: files, clock, host, commands and users."""

from __future__ import annotations

import os
import pwd
import socket
import subprocess
import time

from .util import StrPath, warn

# Size of the shared output buffer; results must stay below it.
_BUFFER_SIZE = 1024
# Longest line read from a file or a command.
_LINE_LIMIT = _BUFFER_SIZE - 2

# Prefixes of symbols in xkb rules that never name a layout.
_INVALID_LAYOUTS = ("evdev", "inet", "pc", "base")


def _strip_line(line: str) -> str | None:
    newline = line.rfind("\n")
    if newline >= 0:
        line = line[:newline]
    return line or None


def cat(path: StrPath) -> str | None:
    """Return the first line of a file, or None if it is missing or empty."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            line = handle.readline(_LINE_LIMIT)
    except OSError as exc:
        warn(f"fopen '{path}': {exc.strerror or exc}")
        return None
    return _strip_line(line)


def datetime(fmt: str) -> str | None:
    """Return the local time formatted with a strftime format."""
    result = time.strftime(fmt, time.localtime())
    if not result or len(result) >= _BUFFER_SIZE:
        warn("strftime: Result string exceeds buffer size")
        return None
    return result


def hostname(unused: object = None) -> str | None:
    """Return the host name."""
    try:
        return socket.gethostname()
    except OSError as exc:
        warn(f"gethostname: {exc.strerror or exc}")
        return None


def kernel_release(unused: object = None) -> str | None:
    """Return the kernel release, as printed by uname -r."""
    try:
        return os.uname().release
    except OSError as exc:
        warn(f"uname: {exc.strerror or exc}")
        return None


def num_files(path: StrPath) -> str | None:
    """Return the number of entries in a directory."""
    try:
        entries = os.listdir(path)
    except OSError as exc:
        warn(f"opendir '{path}': {exc.strerror or exc}")
        return None
    return str(len(entries))


def run_command(cmd: str) -> str | None:
    """Run a shell command and return the first line of its output."""
    try:
        with subprocess.Popen(
            cmd, shell=True, stdout=subprocess.PIPE, stdin=subprocess.DEVNULL
        ) as proc:
            assert proc.stdout is not None
            raw = proc.stdout.readline(_LINE_LIMIT)
    except OSError as exc:
        warn(f"popen '{cmd}': {exc.strerror or exc}")
        return None
    return _strip_line(raw.decode("utf-8", errors="replace"))


def gid(unused: object = None) -> str:
    """Return the group id of the current user."""
    return str(os.getgid())


def uid(unused: object = None) -> str:
    """Return the effective user id."""
    return str(os.geteuid())


def username(unused: object = None) -> str | None:
    """Return the name of the effective user."""
    euid = os.geteuid()
    try:
        return pwd.getpwuid(euid).pw_name
    except KeyError:
        warn(f"getpwuid '{euid}': no such user")
        return None


def format_indicators(fmt: str, led_mask: int) -> str:
    """Render caps and num lock state according to ``fmt``.

    ``fmt`` holds 'c' (caps lock) and/or 'n' (num lock) in either case, each
    optionally followed by '?'.  With '?', the letter appears as written only
    while the indicator is on; without it, the letter always appears,
    upper case when on and lower case when off.  Only the first four
    characters of ``fmt`` are considered.
    """
    fmt = fmt[:4]
    out = []
    for position, char in enumerate(fmt):
        key = char.lower()
        if key not in ("c", "n"):
            continue
        toggle_case = position + 1 >= len(fmt) or fmt[position + 1] != "?"
        is_set = bool(led_mask & (1 << (key == "n")))
        if toggle_case:
            out.append(key.upper() if is_set else key)
        elif is_set:
            out.append(char)
    return "".join(out)


def _valid_layout(symbol: str) -> bool:
    return not symbol.startswith(_INVALID_LAYOUTS)


def get_layout(symbols: str, group: int) -> str | None:
    """Return the layout of keyboard ``group`` from an xkb symbols string."""
    tokens = (token for token in symbols.replace(":", "+").split("+") if token)
    layout = None
    found = 0
    for token in tokens:
        if found > group:
            break
        if not _valid_layout(token):
            continue
        if len(token) == 1 and token.isdigit():
            # :2, :3, :4 mark additional layout groups
            continue
        layout = token
        found += 1
    return layout