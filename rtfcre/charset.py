""" Module for the character set rules of RTF text.

    RTF documents are not Unicode-encoded. Literal bytes are read through a legacy codepage (Windows-1252 unless
    the document says otherwise with \\ansicpgN). Characters outside ASCII may also be written as escapes:
    \\'hh - one byte of the codepage in hex. Consecutive byte escapes decode together (for double-byte codepages).
    \\uN  - one UTF-16 code unit as a signed 16-bit decimal. Characters above U+FFFF take a surrogate pair. """

import codecs
import re
from typing import Union

from .errors import InvalidFormat, MalformedEscape

DEFAULT_CODEPAGE = 1252

# Codepage numbers that do not follow the cpNNNN naming convention in Python.
_CODEPAGE_NAMES = {10000: "mac_roman",
                   65001: "utf-8"}

# Legal range for the \uN argument. Writers disagree on signed vs. unsigned, so accept both.
UNICODE_MIN = -32768
UNICODE_MAX = 65535

# Printable ASCII with no syntax characters. Text made only of these needs no escaping at all.
_PLAIN_RX = re.compile(r'[ -\[\]-z|~]*')
# Escapes understood in a standalone text fragment.
_ESCAPE_RX = re.compile(rb"""\\(?: '(?P<hex>[0-9a-fA-F]{2})
                                 | u(?P<unicode>-?[0-9]{1,10})\x20?
                                 | (?P<char>[\\{}]) )""", re.VERBOSE)


def codec_name(codepage:int) -> str:
    """ Return the name of the Python codec for an RTF/Windows <codepage> number. """
    name = _CODEPAGE_NAMES.get(codepage, f"cp{codepage}")
    try:
        return codecs.lookup(name).name
    except LookupError:
        raise InvalidFormat(f'Unknown codepage {codepage}.') from None


def unicode_unit(arg:int, offset:int=None) -> int:
    """ Convert the signed or unsigned argument of a \\u escape to a UTF-16 code unit. """
    if not UNICODE_MIN <= arg <= UNICODE_MAX:
        raise MalformedEscape(f'Unicode escape argument {arg} is out of range.', offset)
    if arg < 0:
        arg += 0x10000
    return arg


class TextDecoder:
    """ Accumulates pieces of RTF text into a single Unicode string.
        Raw bytes are buffered so that multi-byte codepage sequences split across escapes decode correctly.
        UTF-16 code units from \\u escapes are buffered until their surrogate pair is complete. """

    def __init__(self, codec:str) -> None:
        self.codec = codec       # Python codec name for the current codepage.
        self._parts = []         # Finished Unicode pieces.
        self._raw = bytearray()  # Undecoded codepage bytes.
        self._raw_offset = 0     # Document offset of the first undecoded byte.
        self._raw_escaped = False  # True if any undecoded byte came from a \' escape.
        self._high = None        # Pending high surrogate code unit.
        self._high_offset = 0    # Document offset of the pending high surrogate.

    def __bool__(self) -> bool:
        return bool(self._parts or self._raw or self._high is not None)

    def _check_unpaired(self) -> None:
        if self._high is not None:
            raise MalformedEscape('Unpaired high surrogate in Unicode escape.', self._high_offset)

    def _flush_raw(self) -> None:
        if self._raw:
            try:
                self._parts.append(self._raw.decode(self.codec))
            except UnicodeDecodeError as e:
                exc_type = MalformedEscape if self._raw_escaped else InvalidFormat
                raise exc_type(f'Bytes are not valid in codec {self.codec}.', self._raw_offset + e.start) from None
            self._raw.clear()
            self._raw_escaped = False

    def add_bytes(self, data:bytes, offset:int, *, escaped=False) -> None:
        """ Add literal or escaped bytes that must be read through the codepage. """
        self._check_unpaired()
        if not self._raw:
            self._raw_offset = offset
        self._raw += data
        self._raw_escaped |= escaped

    def add_text(self, text:str) -> None:
        """ Add text that is already Unicode. """
        self._check_unpaired()
        self._flush_raw()
        self._parts.append(text)

    def add_unit(self, unit:int, offset:int) -> None:
        """ Add one UTF-16 code unit, pairing surrogates as they arrive. """
        self._flush_raw()
        if 0xD800 <= unit < 0xDC00:
            self._check_unpaired()
            self._high = unit
            self._high_offset = offset
        elif 0xDC00 <= unit < 0xE000:
            if self._high is None:
                raise MalformedEscape('Unpaired low surrogate in Unicode escape.', offset)
            cp = 0x10000 + ((self._high - 0xD800) << 10) + (unit - 0xDC00)
            self._high = None
            self._parts.append(chr(cp))
        else:
            self._check_unpaired()
            self._parts.append(chr(unit))

    def finish(self) -> str:
        """ Decode anything pending and return the full text. The decoder is left empty for reuse. """
        self._check_unpaired()
        self._flush_raw()
        text = "".join(self._parts)
        self._parts.clear()
        return text


def decode(data:bytes, codepage:int=DEFAULT_CODEPAGE) -> str:
    """ Decode an escaped RTF text fragment into Unicode. Literal bytes go through <codepage>. """
    decoder = TextDecoder(codec_name(codepage))
    pos = 0
    size = len(data)
    while pos < size:
        i = data.find(b"\\", pos)
        if i < 0:
            decoder.add_bytes(data[pos:], pos)
            break
        if i > pos:
            decoder.add_bytes(data[pos:i], pos)
        m = _ESCAPE_RX.match(data, i)
        if m is None:
            raise MalformedEscape('Invalid escape sequence.', i)
        hex_digits, unicode_arg, char = m.groups()
        if hex_digits is not None:
            decoder.add_bytes(bytes.fromhex(hex_digits.decode()), i, escaped=True)
        elif unicode_arg is not None:
            decoder.add_unit(unicode_unit(int(unicode_arg), i), i)
        else:
            decoder.add_bytes(char, i)
        pos = m.end()
    return decoder.finish()


def decode_escape(sequence:Union[bytes, str], codepage:int=DEFAULT_CODEPAGE) -> int:
    """ Return the code point for a single \\'hh or \\uN escape sequence.
        A \\u escape for half of a surrogate pair returns the code unit itself. """
    if isinstance(sequence, str):
        sequence = sequence.encode('ascii', 'replace')
    m = _ESCAPE_RX.fullmatch(sequence)
    if m is None or m.group("char") is not None:
        raise MalformedEscape(f'Not a character escape: {sequence!r}.', 0)
    hex_digits, unicode_arg, _ = m.groups()
    if unicode_arg is not None:
        return unicode_unit(int(unicode_arg), 0)
    try:
        text = bytes.fromhex(hex_digits.decode()).decode(codec_name(codepage))
    except UnicodeDecodeError:
        raise MalformedEscape(f'Byte escape {sequence!r} does not map to a character in codepage {codepage}.', 0)
    if len(text) != 1:
        raise MalformedEscape(f'Byte escape {sequence!r} does not map to a single character.', 0)
    return ord(text)


def _unicode_escape(cp:int) -> str:
    """ Write a code point as one or two signed \\u escapes, each with a delimiter space. """
    if cp > 0xFFFF:
        cp -= 0x10000
        units = [0xD800 + (cp >> 10), 0xDC00 + (cp & 0x3FF)]
    else:
        units = [cp]
    return "".join([f"\\u{u - 0x10000 if u > 0x7FFF else u} " for u in units])


def _encode_char(c:str, codec:str) -> str:
    if c in "\\{}":
        return "\\" + c
    if " " <= c < "\x7f":
        return c
    try:
        raw = c.encode(codec)
    except UnicodeEncodeError:
        return _unicode_escape(ord(c))
    return "".join([f"\\'{b:02x}" for b in raw])


def encode_char(codepoint:int, codepage:int=DEFAULT_CODEPAGE) -> str:
    """ Return the RTF representation of a single code point.
        Printable ASCII is literal (with syntax characters escaped by a backslash).
        Anything else prefers the codepage byte escape and falls back to the Unicode escape. """
    return _encode_char(chr(codepoint), codec_name(codepage))


def escape(text:str, codepage:int=DEFAULT_CODEPAGE) -> str:
    """ Escape a string of literal text for RTF. The result contains only ASCII characters. """
    if _PLAIN_RX.fullmatch(text):
        return text
    codec = codec_name(codepage)
    return "".join([_encode_char(c, codec) for c in text])


def encode(text:str, codepage:int=DEFAULT_CODEPAGE) -> bytes:
    """ Encode Unicode text as escaped RTF bytes. This is the exact inverse of decode(). """
    return escape(text, codepage).encode('ascii')
