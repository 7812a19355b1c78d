import re
from unittest import mock

import pytest

from tilebar.cpu import (
    CpuMeter,
    cpu_freq,
    entropy,
    format_uptime,
    load_avg,
    parse_proc_stat,
    uptime,
)
from tilebar.util import fmt_human


def _stat(user, nice, system, idle, iowait=0, irq=0, softirq=0):
    return (
        f"cpu  {user} {nice} {system} {idle} {iowait} {irq} {softirq} 0 0 0\n"
        "cpu0 1 1 1 1 1 1 1 0 0 0\n"
    )


def test_parse_proc_stat_takes_first_seven():
    text = "cpu  1 2 3 4 5 6 7 8 9\ncpu0 9 9 9 9 9 9 9\n"
    assert parse_proc_stat(text) == (1, 2, 3, 4, 5, 6, 7)


def test_parse_proc_stat_too_short():
    with pytest.raises(ValueError):
        parse_proc_stat("cpu 1 2 3\n")


def test_parse_proc_stat_non_numeric():
    with pytest.raises(ValueError):
        parse_proc_stat("cpu a b c d e f g\n")


def test_meter_first_reading_is_none(tmp_path):
    path = tmp_path / "stat"
    path.write_text(_stat(100, 0, 100, 800))
    assert CpuMeter(path).percent() is None


def test_meter_all_busy_interval(tmp_path):
    path = tmp_path / "stat"
    path.write_text(_stat(100, 0, 100, 800))
    meter = CpuMeter(path)
    meter.percent()
    path.write_text(_stat(300, 0, 100, 800))
    assert meter.percent() == "100"


def test_meter_all_idle_interval(tmp_path):
    path = tmp_path / "stat"
    path.write_text(_stat(100, 0, 100, 800))
    meter = CpuMeter(path)
    meter.percent()
    path.write_text(_stat(100, 0, 100, 1800))
    assert meter.percent() == "0"


def test_meter_mixed_interval_in_range(tmp_path):
    path = tmp_path / "stat"
    path.write_text(_stat(100, 0, 100, 800))
    meter = CpuMeter(path)
    meter.percent()
    path.write_text(_stat(200, 0, 200, 1600))
    value = int(meter.percent())
    assert 0 < value < 100


def test_meter_unchanged_counters_is_none(tmp_path):
    path = tmp_path / "stat"
    path.write_text(_stat(100, 0, 100, 800))
    meter = CpuMeter(path)
    meter.percent()
    assert meter.percent() is None


def test_meter_missing_file(tmp_path):
    assert CpuMeter(tmp_path / "absent").percent() is None


def test_cpu_freq_scales_khz(tmp_path):
    path = tmp_path / "freq"
    path.write_text("2400000\n")
    assert cpu_freq(None, path) == fmt_human(2400000 * 1000, 1000)


def test_cpu_freq_missing(tmp_path):
    assert cpu_freq(None, tmp_path / "absent") is None


def test_entropy_reads_value(tmp_path):
    path = tmp_path / "entropy_avail"
    path.write_text("256\n")
    assert entropy(None, path) == "256"


def test_entropy_missing(tmp_path):
    assert entropy(None, tmp_path / "absent") is None


def test_format_uptime_hours_and_minutes():
    assert format_uptime(5 * 3600 + 7 * 60 + 30) == "5h 7m"


def test_format_uptime_under_a_minute():
    assert format_uptime(59) == "0h 0m"


def test_uptime_shape():
    value = uptime(None)
    match = re.fullmatch(r"(\d+)h (\d+)m", value)
    assert match is not None
    assert int(match.group(2)) < 60


def test_load_avg_formats_two_decimals():
    with mock.patch("tilebar.cpu.os.getloadavg", return_value=(0.5, 1.25, 2.0)):
        assert load_avg(None) == "0.50 1.25 2.00"


def test_load_avg_failure():
    with mock.patch("tilebar.cpu.os.getloadavg", side_effect=OSError):
        assert load_avg(None) is None