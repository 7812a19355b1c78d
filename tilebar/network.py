"""Network addresses, throughput and wireless readings."""

from __future__ import annotations

import array
import fcntl
import re
import socket
import struct
from pathlib import Path

import psutil

from .util import StrPath, fmt_human, read_uint, warn

NET_ROOT = "/sys/class/net"
DEFAULT_INTERVAL = 1000

_IFNAMSIZ = 16
_IW_ESSID_MAX_SIZE = 32
_SIOCGIWESSID = 0x8B1B
_IWREQ_SIZE = 32

_WIRELESS_LINK = re.compile(r"\s*[-+]?\d+\s+([-+]?\d+)")
# Highest link quality reported in /proc/net/wireless.
_MAX_LINK_QUALITY = 70


def _ip(interface: str, family: int) -> str | None:
    try:
        table = psutil.net_if_addrs()
    except OSError as exc:
        warn(f"getifaddrs: {exc}")
        return None
    for address in table.get(interface, ()):
        if address.family == family:
            return address.address
    return None


def ipv4(interface: str) -> str | None:
    """Return the IPv4 address of an interface."""
    return _ip(interface, socket.AF_INET)


def ipv6(interface: str) -> str | None:
    """Return the IPv6 address of an interface."""
    return _ip(interface, socket.AF_INET6)


class NetSpeed:
    """Turns successive byte counters of an interface into a transfer rate."""

    def __init__(
        self,
        direction: str,
        interval: int = DEFAULT_INTERVAL,
        root: StrPath = NET_ROOT,
    ) -> None:
        if direction not in ("rx", "tx"):
            raise ValueError(f"direction must be 'rx' or 'tx', not {direction!r}")
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._direction = direction
        self._interval = interval
        self._root = root
        self._bytes = 0

    def sample(self, interface: str) -> str | None:
        """Return bytes per second since the previous sample, human readable."""
        previous = self._bytes
        path = Path(self._root) / interface / "statistics" / f"{self._direction}_bytes"
        current = read_uint(path)
        if current is None:
            return None
        self._bytes = current
        if previous == 0:
            return None
        if current < previous:  # counter was reset
            return None
        return fmt_human((current - previous) * 1000 // self._interval, 1024)


_RX = NetSpeed("rx")
_TX = NetSpeed("tx")


def netspeed_rx(interface: str) -> str | None:
    """Return the receive rate of an interface."""
    return _RX.sample(interface)


def netspeed_tx(interface: str) -> str | None:
    """Return the transmit rate of an interface."""
    return _TX.sample(interface)


def rssi_to_perc(rssi: int) -> int:
    """Map a signal strength in dBm to a percentage."""
    if rssi >= -50:
        return 100
    if rssi <= -100:
        return 0
    return 2 * (rssi + 100)


def parse_wireless(text: str, interface: str) -> int | None:
    """Return the link quality of an interface from /proc/net/wireless text."""
    lines = text.splitlines()
    if len(lines) < 3:
        return None
    line = lines[2]
    start = line.find(interface)
    if start < 0:
        return None
    match = _WIRELESS_LINK.match(line, start + len(interface) + 2)
    if match is None:
        return None
    return int(match.group(1))


def wifi_perc(interface: str, root: StrPath = "/") -> str | None:
    """Return the wireless link quality of an interface in percent."""
    operstate = Path(root) / "sys" / "class" / "net" / interface / "operstate"
    try:
        with open(operstate, encoding="utf-8", errors="replace") as handle:
            status = handle.readline(4)
    except OSError as exc:
        warn(f"open '{operstate}': {exc.strerror or exc}")
        return None
    if status != "up\n":
        return None

    wireless = Path(root) / "proc" / "net" / "wireless"
    try:
        text = wireless.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        warn(f"open '{wireless}': {exc.strerror or exc}")
        return None

    link = parse_wireless(text, interface)
    if link is None:
        return None
    return str(int(link / _MAX_LINK_QUALITY * 100))


def wifi_essid(interface: str) -> str | None:
    """Return the ESSID the interface is associated with."""
    name = interface.encode()
    if len(name) >= _IFNAMSIZ:
        warn("snprintf: Output truncated")
        return None

    essid = array.array("B", bytes(_IW_ESSID_MAX_SIZE + 1))
    address, _ = essid.buffer_info()
    request = struct.pack(
        f"{_IFNAMSIZ}sPHH", name, address, _IW_ESSID_MAX_SIZE + 1, 0
    ).ljust(_IWREQ_SIZE, b"\0")

    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError as exc:
        warn(f"socket 'AF_INET': {exc.strerror or exc}")
        return None
    with sock:
        try:
            fcntl.ioctl(sock.fileno(), _SIOCGIWESSID, request)
        except OSError as exc:
            warn(f"ioctl 'SIOCGIWESSID': {exc.strerror or exc}")
            return None

    value = essid.tobytes().split(b"\0", 1)[0].decode(errors="replace")
    return value or None