""" Module for breaking raw RTF into a flat stream of structural events.

    The tokenizer knows nothing about dictionaries. It only handles the lexical rules of RTF:
    groups, control words with optional numeric arguments, control symbols, and literal text.
    Character escapes and codepage changes are interpreted here so that every Text event is already Unicode. """

import re
from typing import Iterator, NamedTuple, Optional, Union

from .charset import codec_name, DEFAULT_CODEPAGE, TextDecoder, unicode_unit
from .errors import InvalidFormat, MalformedEscape


class GroupStart(NamedTuple):
    """ An opening brace. """
    offset: int


class GroupEnd(NamedTuple):
    """ A closing brace. """
    offset: int


class ControlWord(NamedTuple):
    """ A control word (letters with an optional signed argument) or a one-character control symbol.
        Control symbols keep their character as the name, e.g. \\* -> "*" and \\~ -> "~". """
    name: str
    arg: Optional[int]
    offset: int


class Text(NamedTuple):
    """ A run of decoded literal text, including anything produced by character escapes. """
    text: str
    offset: int


Event = Union[GroupStart, GroupEnd, ControlWord, Text]

# Control words that select the codepage for literal text, with their fixed codepages.
CHARSET_WORDS = {"ansi": 1252,
                 "mac":  10000,
                 "pc":   437,
                 "pca":  850}

_TOKEN_RX = re.compile(r"""
    (?P<open>\{)
  | (?P<close>\})
  | \\(?P<word>[a-zA-Z]{1,32})(?P<arg>-?[0-9]{1,10})?\x20?
  | \\'(?P<hex>[0-9a-fA-F]{2})
  | \\(?P<escaped>[\\{}])
  | \\(?P<symbol>[^a-zA-Z'\\{}])
  | (?P<newline>[\r\n]+)
  | (?P<text>[^\\{}\r\n]+)
""", re.VERBOSE)


class RtfTokenizer:
    """ Single-pass, regex-driven tokenizer over an entire RTF document.
        Bytes are decoded through the active codepage. Strings are taken as already-decoded Unicode,
        except for \\'hh byte escapes, which always go through the codepage.
        Offsets are byte offsets for bytes input and character offsets for string input. """

    def __init__(self, data:Union[bytes, str], codepage:int=DEFAULT_CODEPAGE) -> None:
        if isinstance(data, str):
            self._source = data
            self._raw_mode = False
        else:
            # Latin-1 maps every byte to one character, so offsets stay byte offsets.
            self._source = bytes(data).decode('latin-1')
            self._raw_mode = True
        self._decoder = TextDecoder(codec_name(codepage))
        self._text_offset = 0

    def _set_codepage(self, codepage:int, offset:int) -> None:
        try:
            self._decoder.codec = codec_name(codepage)
        except InvalidFormat as e:
            raise InvalidFormat(str(e), offset) from None

    def _add_literal(self, chunk:str, offset:int) -> None:
        if not self._decoder:
            self._text_offset = offset
        if self._raw_mode:
            self._decoder.add_bytes(chunk.encode('latin-1'), offset)
        else:
            self._decoder.add_text(chunk)

    def _flush(self) -> Iterator[Text]:
        """ Yield the pending text run, if any. The decoder must be flushed before any codepage change. """
        if self._decoder:
            text = self._decoder.finish()
            if text:
                yield Text(text, self._text_offset)

    def __iter__(self) -> Iterator[Event]:
        src = self._source
        match = _TOKEN_RX.match
        decoder = self._decoder
        uc_stack = [0]  # Unicode fallback skip counts (\ucN), scoped by group.
        skip = 0        # Fallback characters left to skip after the last \uN.
        pos = 0
        end = len(src)
        while pos < end:
            m = match(src, pos)
            if m is None:
                raise MalformedEscape('Invalid escape sequence.', pos)
            kind = m.lastgroup
            pos = m.end()
            if kind == "text":
                chunk = m.group("text")
                start = m.start()
                if skip:
                    n = min(skip, len(chunk))
                    chunk = chunk[n:]
                    start += n
                    skip -= n
                if chunk:
                    self._add_literal(chunk, start)
            elif kind == "newline":
                # Raw line breaks are not part of the text in RTF.
                pass
            elif kind == "hex":
                if skip:
                    skip -= 1
                else:
                    if not decoder:
                        self._text_offset = m.start()
                    decoder.add_bytes(bytes.fromhex(m.group("hex")), m.start(), escaped=True)
            elif kind == "escaped":
                if skip:
                    skip -= 1
                else:
                    if not decoder:
                        self._text_offset = m.start()
                    decoder.add_text(m.group("escaped"))
            elif kind == "open":
                skip = 0
                yield from self._flush()
                uc_stack.append(uc_stack[-1])
                yield GroupStart(m.start())
            elif kind == "close":
                skip = 0
                yield from self._flush()
                if len(uc_stack) > 1:
                    uc_stack.pop()
                yield GroupEnd(m.start())
            elif kind == "symbol":
                skip = 0
                yield from self._flush()
                symbol = m.group("symbol")
                # An escaped line break is an old-fashioned paragraph mark.
                name = "par" if symbol in "\r\n" else symbol
                yield ControlWord(name, None, m.start())
            else:
                skip = 0
                name = m.group("word")
                arg = m.group("arg")
                if arg is not None:
                    arg = int(arg)
                offset = m.start()
                if name == "u":
                    if arg is None:
                        raise MalformedEscape('Unicode escape has no value.', offset)
                    if not decoder:
                        self._text_offset = offset
                    decoder.add_unit(unicode_unit(arg, offset), offset)
                    skip = uc_stack[-1]
                    continue
                if name == "uc":
                    if arg is not None and arg < 0:
                        raise MalformedEscape(f'Negative Unicode fallback count {arg}.', offset)
                    uc_stack[-1] = 1 if arg is None else arg
                    continue
                yield from self._flush()
                if name == "ansicpg" and arg is not None:
                    self._set_codepage(arg, offset)
                elif name in CHARSET_WORDS:
                    self._set_codepage(CHARSET_WORDS[name], offset)
                yield ControlWord(name, arg, offset)
        yield from self._flush()


def tokenize(data:Union[bytes, str], codepage:int=DEFAULT_CODEPAGE) -> Iterator[Event]:
    """ Yield the structural events of an RTF document or fragment in order. """
    return iter(RtfTokenizer(data, codepage))
