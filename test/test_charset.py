""" Unit tests for RTF text decoding and encoding through codepages and escapes. """

import pytest

from rtfcre.charset import codec_name, decode, decode_escape, encode, encode_char, escape
from rtfcre.errors import InvalidFormat, MalformedEscape


@pytest.mark.parametrize("data, text", [
    (b"plain text",                   "plain text"),
    (b"caf\\'e9",                     "café"),
    (b"caf\xe9",                      "café"),
    (b"\\{braces\\} and \\\\",        "{braces} and \\"),
    (b"\\u20320 \\u22909 !",          "你好!"),
    (b"\\u20320\\u22909",             "你好"),
    (b"\\u-10179 \\u-8704 ",          "\U0001f600"),
    (b"\\u55357 \\u56832 ",           "\U0001f600"),
])
def test_decode(data, text) -> None:
    """ Literal bytes, byte escapes, and Unicode escapes (signed or not) all decode to the same text. """
    assert decode(data) == text


@pytest.mark.parametrize("text, data", [
    ("plain text",        b"plain text"),
    ("café",         b"caf\\'e9"),
    ("{x}\\",             b"\\{x\\}\\\\"),
    ("你好!",     b"\\u20320 \\u22909 !"),
    ("\U0001f600",        b"\\u-10179 \\u-8704 "),
    ("—",            b"\\'97"),
])
def test_encode(text, data) -> None:
    """ The codepage byte escape is preferred. Anything the codepage can't hold gets Unicode escapes. """
    assert encode(text) == data


@pytest.mark.parametrize("text", [
    "",
    "ASCII only, with {braces} and \\backslashes\\.",
    "Français et café",
    "你好世界",
    "mixed é and 你 and \U0001f600 and \U0010ffff",
    "\x00\x01\x7f\t\n",
])
@pytest.mark.parametrize("codepage", [1252, 437, 1251, 932, 65001])
def test_charset_round_trip(text, codepage) -> None:
    """ Encoding then decoding must recover any text exactly under any codepage. """
    data = encode(text, codepage)
    assert data.isascii()
    assert decode(data, codepage) == text


def test_multibyte_codepage() -> None:
    """ Byte escapes from a double-byte codepage must be decoded together. """
    assert encode("é", 65001) == b"\\'c3\\'a9"
    assert decode(b"\\'c3\\'a9", 65001) == "é"
    assert decode(b"\\'82\\'a0", 932) == "あ"


def test_escape_is_plain_when_possible() -> None:
    s = "KAT/TKOG-Z *"
    assert escape(s) is s


@pytest.mark.parametrize("sequence, codepoint", [
    ("\\'e9",      0xE9),
    (b"\\'41",     0x41),
    ("\\u20320",   20320),
    ("\\u20320 ",  20320),
    (b"\\u-10179", 0xD83D),
])
def test_decode_escape(sequence, codepoint) -> None:
    assert decode_escape(sequence) == codepoint


@pytest.mark.parametrize("sequence", ["\\'zz", "\\{", "abc", "\\u70000", "\\'81"])
def test_decode_escape_invalid(sequence) -> None:
    """ Only a single character escape with an in-range value is accepted. 0x81 is undefined in Windows-1252. """
    with pytest.raises(MalformedEscape):
        decode_escape(sequence)


@pytest.mark.parametrize("codepoint, rtf", [
    (ord("a"),  "a"),
    (ord("{"),  "\\{"),
    (ord("\\"), "\\\\"),
    (0xE9,      "\\'e9"),
    (0x4F60,    "\\u20320 "),
    (0x1F600,   "\\u-10179 \\u-8704 "),
])
def test_encode_char(codepoint, rtf) -> None:
    assert encode_char(codepoint) == rtf


@pytest.mark.parametrize("data, offset", [
    (b"\\x",             0),
    (b"ab\\u70000",      2),
    (b"ab\\u-32769",     2),
    (b"\\u-10179 x",     0),
    (b"ok\\u-8704 ",     2),
    (b"\\u-10179 ",      0),
    (b"xyz\\'81",        3),
])
def test_decode_errors(data, offset) -> None:
    """ Bad escapes, out-of-range values, unpaired surrogates, and undefined bytes report where they start. """
    with pytest.raises(MalformedEscape) as exc_info:
        decode(data)
    assert exc_info.value.offset == offset
    assert f"(at byte {offset})" in str(exc_info.value)


def test_codepages() -> None:
    assert codec_name(1252) == "cp1252"
    assert codec_name(65001) == "utf-8"
    with pytest.raises(InvalidFormat):
        codec_name(99999)
    with pytest.raises(InvalidFormat):
        decode(b"text", 99999)
