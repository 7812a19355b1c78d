import pytest

from tilebar.util import fmt_human, read_line, read_uint, warn


def test_fmt_human_binary_kibi():
    assert fmt_human(1024, 1024) == "1.0 Ki"


def test_fmt_human_decimal_kilo():
    assert fmt_human(1536, 1000) == "1.5 k"


@pytest.mark.parametrize("base", [1000, 1024])
@pytest.mark.parametrize("num", [0, 1, 999, 1000, 1023, 1024, 10**6, 3 * 10**9, 2**50])
def test_fmt_human_invariants(num, base):
    result = fmt_human(num, base)
    value, _, prefix = result.partition(" ")
    prefixes = {
        1000: ["", "k", "M", "G", "T", "P", "E", "Z", "Y"],
        1024: ["", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"],
    }[base]
    assert prefix in prefixes
    assert float(value) < base + 0.05
    if num < base:
        assert prefix == ""


def test_fmt_human_larger_numbers_get_larger_prefixes():
    small = fmt_human(2**20, 1024).split(" ")[1]
    large = fmt_human(2**40, 1024).split(" ")[1]
    order = ["", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"]
    assert order.index(large) > order.index(small)


def test_fmt_human_invalid_base():
    with pytest.raises(ValueError):
        fmt_human(10, 10)


def test_read_line_returns_first_line(tmp_path):
    path = tmp_path / "file"
    path.write_text("hello\nworld\n")
    assert read_line(path) == "hello"


def test_read_line_without_newline(tmp_path):
    path = tmp_path / "file"
    path.write_text("single")
    assert read_line(path) == "single"


def test_read_line_missing_file(tmp_path, capsys):
    assert read_line(tmp_path / "missing") is None
    assert "missing" in capsys.readouterr().err


def test_read_line_empty_file(tmp_path):
    path = tmp_path / "empty"
    path.write_text("")
    assert read_line(path) is None


def test_read_uint_parses_leading_number(tmp_path):
    path = tmp_path / "num"
    path.write_text("  42\n")
    assert read_uint(path) == 42


def test_read_uint_rejects_garbage(tmp_path):
    path = tmp_path / "num"
    path.write_text("abc\n")
    assert read_uint(path) is None


def test_read_uint_missing_file(tmp_path):
    assert read_uint(tmp_path / "nothing") is None


def test_warn_writes_to_stderr(capsys):
    warn("something went wrong")
    captured = capsys.readouterr()
    assert "something went wrong" in captured.err
    assert captured.out == ""