import pytest

from tilebar.memory import (
    disk_free,
    disk_perc,
    disk_total,
    disk_used,
    parse_meminfo,
    ram_free,
    ram_perc,
    ram_total,
    ram_used,
    swap_free,
    swap_perc,
    swap_total,
    swap_used,
)
from tilebar.util import fmt_human

MEMINFO_TEXT = """\
MemTotal:       16000000 kB
MemFree:         4000000 kB
MemAvailable:    8000000 kB
Buffers:         1000000 kB
Cached:          3000000 kB
SwapCached:       100000 kB
Active:          5000000 kB
SwapTotal:       2000000 kB
SwapFree:        1500000 kB
HugePages_Total:       0
"""

BINARY_PREFIXES = ["", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"]


@pytest.fixture
def meminfo(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text(MEMINFO_TEXT)
    return path


def test_parse_meminfo_fields():
    fields = parse_meminfo(MEMINFO_TEXT)
    assert fields["MemTotal"] == 16000000
    assert fields["SwapCached"] == 100000
    assert fields["HugePages_Total"] == 0
    assert "Nonexistent" not in fields


def test_parse_meminfo_ignores_malformed_lines():
    fields = parse_meminfo("garbage line\nMemFree: notanumber kB\nCached: 7 kB\n")
    assert fields == {"Cached": 7}


def test_ram_free_uses_available(meminfo):
    assert ram_free(path=meminfo) == fmt_human(8000000 * 1024, 1024)


def test_ram_total(meminfo):
    assert ram_total(path=meminfo) == fmt_human(16000000 * 1024, 1024)


def test_ram_used_excludes_buffers_and_cache(meminfo):
    assert ram_used(path=meminfo) == fmt_human(8000000 * 1024, 1024)


def test_ram_perc(meminfo):
    assert ram_perc(path=meminfo) == "50"


def test_ram_perc_zero_total(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("MemTotal: 0 kB\nMemFree: 0 kB\nBuffers: 0 kB\nCached: 0 kB\n")
    assert ram_perc(path=path) is None


def test_swap_values(meminfo):
    assert swap_total(path=meminfo) == fmt_human(2000000 * 1024, 1024)
    assert swap_free(path=meminfo) == fmt_human(1500000 * 1024, 1024)
    assert swap_used(path=meminfo) == fmt_human(400000 * 1024, 1024)


def test_swap_perc(meminfo):
    assert swap_perc(path=meminfo) == "20"


def test_swap_perc_without_swap(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("SwapTotal: 0 kB\nSwapFree: 0 kB\nSwapCached: 0 kB\n")
    assert swap_perc(path=path) is None


@pytest.mark.parametrize(
    "func", [ram_free, ram_perc, ram_total, ram_used, swap_free, swap_perc, swap_total, swap_used]
)
def test_missing_meminfo(tmp_path, func):
    assert func(path=tmp_path / "missing") is None


def test_missing_fields(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("MemTotal: 100 kB\n")
    assert ram_used(path=path) is None
    assert swap_total(path=path) is None


def test_disk_perc_in_range(tmp_path):
    value = int(disk_perc(tmp_path))
    assert 0 <= value <= 100


@pytest.mark.parametrize("func", [disk_free, disk_total, disk_used])
def test_disk_sizes_are_human(tmp_path, func):
    number, _, prefix = func(tmp_path).partition(" ")
    assert prefix in BINARY_PREFIXES
    assert 0 <= float(number) < 1024.05


@pytest.mark.parametrize("func", [disk_free, disk_perc, disk_total, disk_used])
def test_disk_missing_path(tmp_path, func):
    assert func(tmp_path / "does-not-exist") is None