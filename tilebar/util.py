"""Shared helpers for status components: formatting, warnings and file reads."""

from __future__ import annotations

import re
import sys
from os import PathLike
from typing import Union

StrPath = Union[str, "PathLike[str]"]

_PREFIXES = {
    1000: ("", "k", "M", "G", "T", "P", "E", "Z", "Y"),
    1024: ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"),
}

_LEADING_UINT = re.compile(r"\s*(\d+)")


def warn(message: str) -> None:
    """Write a diagnostic line to standard error."""
    print(message, file=sys.stderr, flush=True)


def fmt_human(num: float, base: int) -> str:
    """Scale ``num`` by ``base`` and return it with one decimal and a unit prefix."""
    try:
        prefixes = _PREFIXES[base]
    except KeyError:
        raise ValueError(f"fmt_human: invalid base {base!r}") from None

    scaled = float(num)
    index = 0
    while index < len(prefixes) - 1 and scaled >= base:
        scaled /= base
        index += 1
    return f"{scaled:.1f} {prefixes[index]}"


def read_line(path: StrPath) -> str | None:
    """Return the first line of a file without its newline, or None if unreadable."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            line = handle.readline()
    except OSError as exc:
        warn(f"open '{path}': {exc.strerror or exc}")
        return None
    if not line:
        return None
    return line.rstrip("\n")


def read_uint(path: StrPath) -> int | None:
    """Return the unsigned integer at the start of a file, or None."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            text = handle.read()
    except OSError as exc:
        warn(f"open '{path}': {exc.strerror or exc}")
        return None
    match = _LEADING_UINT.match(text)
    if match is None:
        return None
    return int(match.group(1))