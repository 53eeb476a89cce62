""" Module for writing RTF/CRE dictionary documents. """

from typing import Iterable, Iterator, Tuple

from .charset import DEFAULT_CODEPAGE, escape
from .dictionary import DictionaryEntry, DictionaryHeader
from .translation import format_plover_to_rtf

# Fixed styles for paragraph markup (\par\s0 and \par\s1) used in translations.
STYLESHEET = "{\\stylesheet{\\s0 Normal;\\s1 Contin;}}"


def format_header(header:DictionaryHeader) -> str:
    """ Return the document preamble up to and including the stylesheet line. """
    parts = ["{\\rtf1\\ansi"]
    codepage = header.codepage
    if codepage != DEFAULT_CODEPAGE:
        parts.append(f"\\ansicpg{codepage}")
    parts.append(f"{{\\*\\cxrev{header.revision}}}\\cxdict")
    if header.system_name is not None:
        parts.append(f"{{\\*\\cxsystem {escape(header.system_name, codepage)}}}")
    parts += STYLESHEET, "\n"
    return "".join(parts)


def format_entry(strokes:str, entry:DictionaryEntry, codepage:int=DEFAULT_CODEPAGE) -> str:
    """ Return one line of the document with the stroke group, translation markup, and comment group. """
    parts = [f"{{\\*\\cxs {escape(strokes, codepage)}}}",
             format_plover_to_rtf(entry.translation, codepage)]
    if entry.comment is not None:
        parts.append(f"{{\\*\\cxcomment {escape(entry.comment, codepage)}}}")
    parts.append("\n")
    return "".join(parts)


def iter_document(header:DictionaryHeader, entries:Iterable[Tuple[str, DictionaryEntry]]) -> Iterator[str]:
    """ Yield the document a line at a time. Every character is ASCII. """
    yield format_header(header)
    for strokes, entry in entries:
        yield format_entry(strokes, entry, header.codepage)
    yield "}\n"


def serialize(header:DictionaryHeader, entries:Iterable[Tuple[str, DictionaryEntry]]) -> bytes:
    """ Write a complete document to bytes. """
    return "".join(iter_document(header, entries)).encode('ascii')
