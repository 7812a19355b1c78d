"""Master volume reading from an OSS mixer device."""

from __future__ import annotations

import fcntl
import os
import struct

from .util import StrPath, warn

SOUND_DEVICE_NAMES = (
    "vol", "bass", "treble", "synth", "pcm", "speaker", "line", "mic",
    "cd", "mix", "pcm2", "rec", "igain", "ogain", "line1", "line2",
    "line3", "dig1", "dig2", "dig3", "phin", "phout", "video", "radio",
    "monitor",
)

_SOUND_MIXER_DEVMASK = 0xFE


def _mixer_read(device: int) -> int:
    """Return the request code that reads an int for a mixer channel."""
    return 0x80000000 | (4 << 16) | (ord("M") << 8) | device


SOUND_MIXER_READ_DEVMASK = _mixer_read(_SOUND_MIXER_DEVMASK)


def _ioctl_int(fd: int, request: int) -> int:
    buffer = bytearray(4)
    fcntl.ioctl(fd, request, buffer, True)
    return struct.unpack("i", bytes(buffer))[0]


def vol_perc(card: StrPath) -> str | None:
    """Return the master volume of a mixer device in percent."""
    try:
        fd = os.open(card, os.O_RDONLY | os.O_NONBLOCK)
    except OSError as exc:
        warn(f"open '{card}': {exc.strerror or exc}")
        return None

    level = None
    try:
        try:
            devmask = _ioctl_int(fd, SOUND_MIXER_READ_DEVMASK)
        except OSError as exc:
            warn(f"ioctl 'SOUND_MIXER_READ_DEVMASK': {exc.strerror or exc}")
            return None
        for index, name in enumerate(SOUND_DEVICE_NAMES):
            if devmask & (1 << index) and name == "vol":
                try:
                    level = _ioctl_int(fd, _mixer_read(index))
                except OSError as exc:
                    warn(f"ioctl 'MIXER_READ({index})': {exc.strerror or exc}")
                    return None
    finally:
        os.close(fd)

    if level is None:
        return None
    return str(level & 0xFF)