import pytest

from kernsim.devfs import create_devfs
from kernsim.fs import FileMode, FileSystem
from kernsim.tty import format_integer, format_text, fprintf
from kernsim.vga import VgaText


def test_zero():
    assert format_integer(0, 10) == "0"
    assert format_integer(0, 16) == "0"


@pytest.mark.parametrize("num", [1, 7, 10, 255, 4096, 123456789, 0xFFFFFFFF])
@pytest.mark.parametrize("base", [2, 8, 10, 16, 36])
def test_integer_round_trip(num, base):
    text = format_integer(num, base)
    assert int(text, base) == num
    assert text == text.upper()


def test_hex_uses_upper_case():
    assert format_integer(255, 16) == "FF"


def test_negative_is_unsigned():
    assert format_integer(-1, 10) == str(0xFFFFFFFF)
    assert format_integer(-1, 16) == format_integer(0xFFFFFFFF, 16)


def test_bad_base():
    with pytest.raises(ValueError):
        format_integer(5, 1)
    with pytest.raises(ValueError):
        format_integer(5, 37)


def test_decimal_and_string():
    assert format_text("%d apples for %s", 3, "bob") == "3 apples for bob"


def test_hex_matches_format_integer():
    assert format_text("0x%x", 3054) == "0x" + format_integer(3054, 16)


def test_char_from_int_and_str():
    assert format_text("[%c%c]", ord("A"), "z") == "[Az]"


def test_percent_escape():
    assert format_text("100%%") == "100%"


def test_unknown_spec_vanishes_without_consuming():
    assert format_text("a%qb%d", 5) == "ab5"


def test_trailing_mark_dropped():
    assert format_text("abc%") == "abc"


def test_stops_at_nul():
    assert format_text("ab\0cd") == "ab"
    assert format_text("<%s>", "x\0y") == "<x>"


def test_missing_argument():
    with pytest.raises(ValueError):
        format_text("%d and %d", 1)


def test_fprintf_to_screen():
    screen = VgaText()
    fs = FileSystem(create_devfs(screen))
    fh = fs.open("stdout", FileMode.WRONLY)
    fprintf(fs, fh, "n=%d %s", 42, "ok")
    assert screen.line(0).startswith("n=42 ok ")