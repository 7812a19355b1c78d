import os
import socket

import pytest

from tilebar import system


def test_cat_returns_first_line(tmp_path):
    path = tmp_path / "file"
    path.write_text("first\nsecond\n")
    assert system.cat(path) == "first"


def test_cat_without_newline(tmp_path):
    path = tmp_path / "file"
    path.write_text("only")
    assert system.cat(path) == "only"


def test_cat_empty_file_is_none(tmp_path):
    path = tmp_path / "file"
    path.write_text("")
    assert system.cat(path) is None


def test_cat_empty_first_line_is_none(tmp_path):
    path = tmp_path / "file"
    path.write_text("\nmore\n")
    assert system.cat(path) is None


def test_cat_missing_file(tmp_path):
    assert system.cat(tmp_path / "missing") is None


def test_datetime_literal_format():
    assert system.datetime("plain text") == "plain text"


def test_datetime_empty_result_is_none():
    assert system.datetime("") is None


def test_datetime_year_is_digits():
    result = system.datetime("%Y")
    assert result is not None and result.isdigit() and len(result) == 4


def test_hostname_matches_socket():
    assert system.hostname() == socket.gethostname()


def test_kernel_release_matches_uname():
    assert system.kernel_release() == os.uname().release


def test_num_files_counts_entries(tmp_path):
    for name in ("a", "b", "c"):
        (tmp_path / name).write_text("x")
    (tmp_path / "sub").mkdir()
    assert system.num_files(tmp_path) == "4"


def test_num_files_missing_directory(tmp_path):
    assert system.num_files(tmp_path / "nope") is None


def test_run_command_first_line():
    assert system.run_command("echo foo; echo bar") == "foo"


def test_run_command_no_output():
    assert system.run_command("true") is None


def test_user_ids():
    assert system.uid() == str(os.geteuid())
    assert system.gid() == str(os.getgid())


def test_username_is_a_known_user():
    import pwd

    name = system.username()
    assert pwd.getpwnam(name).pw_uid == os.geteuid()


@pytest.mark.parametrize("fmt", ["c?n?", "C?N?"])
def test_indicators_optional_off_is_empty(fmt):
    assert system.format_indicators(fmt, 0) == ""


def test_indicators_optional_keeps_case():
    assert system.format_indicators("C?n?", 3) == "Cn"


def test_indicators_toggle_case():
    assert system.format_indicators("cn", 0) == "cn"
    assert system.format_indicators("cn", 3) == "CN"


def test_indicators_only_num_lock():
    assert system.format_indicators("c?n?", 2) == "n"


def test_indicators_ignore_other_letters_and_long_format():
    assert system.format_indicators("xc", 1) == "C"
    # only the first four characters count
    assert system.format_indicators("c?n?c", 1) == "c"


def test_get_layout_first_group():
    assert system.get_layout("pc+us+de:2+inet(evdev)", 0) == "us"


def test_get_layout_second_group():
    assert system.get_layout("pc+us+de:2+inet(evdev)", 1) == "de"


def test_get_layout_beyond_available_returns_last():
    assert system.get_layout("pc+us+inet(evdev)", 3) == "us"


def test_get_layout_nothing_valid():
    assert system.get_layout("pc+evdev+base", 0) is None