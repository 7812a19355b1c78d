"""CPU frequency and usage, load average, uptime and entropy readings."""

from __future__ import annotations

import os
import time

from .util import StrPath, fmt_human, read_uint, warn

PROC_STAT = "/proc/stat"
CPU_FREQ = "/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq"
ENTROPY_AVAIL = "/proc/sys/kernel/random/entropy_avail"

_UPTIME_CLOCK = getattr(
    time, "CLOCK_BOOTTIME", getattr(time, "CLOCK_UPTIME", time.CLOCK_MONOTONIC)
)

# user nice system idle iowait irq softirq
_FIELDS = 7


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def parse_proc_stat(text: str) -> tuple[int, ...]:
    """Return the first seven counters of the aggregate cpu line.

    Raises ValueError if the text does not start with such a line.
    """
    first = text.split("\n", 1)[0].split()
    if len(first) < _FIELDS + 1:
        raise ValueError("proc stat: too few fields on the first line")
    try:
        return tuple(int(field) for field in first[1 : _FIELDS + 1])
    except ValueError:
        raise ValueError("proc stat: non-numeric counter") from None


class CpuMeter:
    """Computes CPU usage between successive readings of a proc stat file."""

    def __init__(self, path: StrPath = PROC_STAT) -> None:
        self._path = path
        self._previous: tuple[int, ...] = (0,) * _FIELDS

    def _read(self) -> tuple[int, ...] | None:
        try:
            with open(self._path, encoding="utf-8") as handle:
                text = handle.read()
        except OSError as exc:
            warn(f"open '{self._path}': {exc.strerror or exc}")
            return None
        try:
            return parse_proc_stat(text)
        except ValueError:
            return None

    def percent(self) -> str | None:
        """Return usage since the previous call in percent, or None on the first."""
        before = self._previous
        current = self._read()
        if current is None:
            return None
        self._previous = current
        if before[0] == 0:
            return None

        total = sum(before) - sum(current)
        if total == 0:
            return None

        def busy(sample: tuple[int, ...]) -> int:
            return sample[0] + sample[1] + sample[2] + sample[5] + sample[6]

        return str(_trunc_div(100 * (busy(before) - busy(current)), total))


_METER = CpuMeter()


def cpu_freq(unused: object = None, path: StrPath = CPU_FREQ) -> str | None:
    """Return the current frequency of the first CPU, human readable in Hz."""
    khz = read_uint(path)
    if khz is None:
        return None
    return fmt_human(khz * 1000, 1000)


def cpu_perc(unused: object = None) -> str | None:
    """Return overall CPU usage in percent since the previous call."""
    return _METER.percent()


def load_avg(unused: object = None) -> str | None:
    """Return the 1, 5 and 15 minute load averages."""
    try:
        one, five, fifteen = os.getloadavg()
    except OSError:
        warn("getloadavg: Failed to obtain load average")
        return None
    return f"{one:.2f} {five:.2f} {fifteen:.2f}"


def format_uptime(seconds: int) -> str:
    """Format a number of seconds as 'Hh Mm'."""
    seconds = int(seconds)
    hours, rest = divmod(seconds, 3600)
    return f"{hours}h {rest // 60}m"


def uptime(unused: object = None) -> str | None:
    """Return the system uptime as 'Hh Mm'."""
    try:
        seconds = time.clock_gettime(_UPTIME_CLOCK)
    except OSError:
        warn(f"clock_gettime {_UPTIME_CLOCK}")
        return None
    return format_uptime(int(seconds))


def entropy(unused: object = None, path: StrPath = ENTROPY_AVAIL) -> str | None:
    """Return the available entropy of the kernel pool."""
    value = read_uint(path)
    return None if value is None else str(value)