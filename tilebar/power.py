"""Battery and temperature readings from sysfs."""

from __future__ import annotations

import os
import re
from pathlib import Path

from .util import StrPath, read_line, read_uint

POWER_SUPPLY_ROOT = "/sys/class/power_supply"

_STATE_SYMBOLS = {
    "Charging": "+",
    "Discharging": "-",
    "Full": "o",
    "Not charging": "o",
}

_STATE_PATTERN = re.compile(r"[a-zA-Z ]{1,12}")


def _read_state(bat: str, root: StrPath) -> str | None:
    line = read_line(Path(root) / bat / "status")
    if line is None:
        return None
    match = _STATE_PATTERN.match(line)
    return match.group(0) if match else None


def _pick(bat: str, root: StrPath, *names: str) -> Path | None:
    for name in names:
        candidate = Path(root) / bat / name
        if os.access(candidate, os.R_OK):
            return candidate
    return None


def battery_perc(bat: str, root: StrPath = POWER_SUPPLY_ROOT) -> str | None:
    """Return the battery capacity in percent."""
    capacity = read_uint(Path(root) / bat / "capacity")
    return None if capacity is None else str(capacity)


def battery_state(bat: str, root: StrPath = POWER_SUPPLY_ROOT) -> str | None:
    """Return a symbol for the charging state: '+', '-', 'o' or '?'."""
    state = _read_state(bat, root)
    if state is None:
        return None
    return _STATE_SYMBOLS.get(state, "?")


def battery_remaining(bat: str, root: StrPath = POWER_SUPPLY_ROOT) -> str | None:
    """Return the remaining time as 'Hh Mm' when discharging, '' otherwise."""
    state = _read_state(bat, root)
    if state is None:
        return None

    charge_path = _pick(bat, root, "charge_now", "energy_now")
    if charge_path is None:
        return None
    charge_now = read_uint(charge_path)
    if charge_now is None:
        return None

    if state != "Discharging":
        return ""

    current_path = _pick(bat, root, "current_now", "power_now")
    if current_path is None:
        return None
    current_now = read_uint(current_path)
    if not current_now:
        return None

    timeleft = charge_now / current_now
    hours = int(timeleft)
    minutes = int((timeleft - hours) * 60)
    return f"{hours}h {minutes}m"


def temp(file: StrPath) -> str | None:
    """Return the temperature in whole degrees Celsius from a millidegree file."""
    millidegrees = read_uint(file)
    return None if millidegrees is None else str(millidegrees // 1000)