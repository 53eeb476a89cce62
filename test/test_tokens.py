""" Unit tests for the RTF tokenizer. """

import pytest

from rtfcre.errors import InvalidFormat, MalformedEscape
from rtfcre.tokens import ControlWord, GroupEnd, GroupStart, Text, tokenize


def _texts(data) -> list:
    return [e.text for e in tokenize(data) if type(e) is Text]


def test_structure() -> None:
    """ Events come out in order with the offsets where they start. """
    events = list(tokenize(b"{\\rtf1 hi}"))
    assert events == [GroupStart(0), ControlWord("rtf", 1, 1), Text("hi", 7), GroupEnd(9)]
    assert [type(e) for e in events] == [GroupStart, ControlWord, Text, GroupEnd]


def test_control_words() -> None:
    """ One space after a control word is its delimiter and not part of the text. Arguments may be negative. """
    events = list(tokenize(b"\\li-120 x\\b  y"))
    assert events == [ControlWord("li", -120, 0), Text("x", 8), ControlWord("b", None, 9), Text(" y", 12)]


def test_control_symbols() -> None:
    assert [e.name for e in tokenize("\\~\\_\\*\\-")] == ["~", "_", "*", "-"]


def test_escaped_line_break_is_paragraph() -> None:
    events = list(tokenize("a\\\nb"))
    assert [type(e) for e in events] == [Text, ControlWord, Text]
    assert events[1].name == "par"


def test_raw_line_breaks_ignored() -> None:
    assert list(tokenize(b"a\r\nb")) == [Text("ab", 0)]


@pytest.mark.parametrize("data, texts", [
    (b"caf\\'e9",                      ["café"]),
    (b"caf\xe9",                       ["café"]),
    (b"\\{x\\}\\\\",                   ["{x}\\"]),
    (b"\\u20320 \\u22909 ",            ["你好"]),
    (b"{\\uc1\\u20320?x}",             ["你x"]),
    (b"{\\uc2\\u20320\\'3f\\'3fx}",    ["你x"]),
    (b"{{\\uc1\\u20320?}\\u22909?}",   ["你", "好?"]),
    (b"{\\ansicpg1251 \\'e0}",         ["а"]),
    (b"{\\mac \\'8e}",                 ["é"]),
])
def test_text(data, texts) -> None:
    """ Text runs are decoded through the active codepage. Unicode escapes skip \\ucN fallback characters,
        and the \\uc count only applies to the group it is in. """
    assert _texts(data) == texts


def test_codepage_word_emitted() -> None:
    events = list(tokenize(b"\\ansicpg1251 "))
    assert events == [ControlWord("ansicpg", 1251, 0)]


@pytest.mark.parametrize("data, offset", [
    (b"\\",             0),
    (b"a\\'zz",         1),
    (b"ab\\u",          2),
    (b"\\u99999 ",      0),
    (b"{\\uc-1 }",      1),
])
def test_malformed_escapes(data, offset) -> None:
    with pytest.raises(MalformedEscape) as exc_info:
        list(tokenize(data))
    assert exc_info.value.offset == offset


def test_unknown_codepage() -> None:
    with pytest.raises(InvalidFormat) as exc_info:
        list(tokenize(b"x\\ansicpg99999 y"))
    assert exc_info.value.offset == 1
