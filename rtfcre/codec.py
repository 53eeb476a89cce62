""" Read/write API in the style of the standard json and pickle modules. """

from typing import BinaryIO, Union

from .charset import DEFAULT_CODEPAGE
from .dictionary import StenoDictionary
from .keys import KeyLayout
from .parser import parse
from .serializer import iter_document, serialize
from .translation import format_rtf_to_plover, format_rtf_to_text


def loads(data:Union[bytes, str], *, layout:KeyLayout=None, codepage=DEFAULT_CODEPAGE) -> StenoDictionary:
    """ Read an RTF/CRE dictionary from bytes (or an already-decoded string).
        <layout> decides which stroke keys are valid. <codepage> applies until the document declares its own. """
    header, raw_entries = parse(data, codepage=codepage, layout=layout)
    d = StenoDictionary(header, layout=layout)
    for strokes, markup, comment_markup in raw_entries:
        translation = format_rtf_to_plover(markup)
        comment = None if comment_markup is None else format_rtf_to_text(comment_markup)
        d.set(strokes, translation, comment)
    return d


def load(fp:BinaryIO, **kwargs) -> StenoDictionary:
    """ Read an RTF/CRE dictionary from a binary file object. """
    return loads(fp.read(), **kwargs)


def dumps(d:StenoDictionary) -> bytes:
    """ Write a dictionary to RTF/CRE bytes. """
    return serialize(d.header, d.entries())


def dump(d:StenoDictionary, fp:BinaryIO) -> None:
    """ Write a dictionary to a binary file object a line at a time. """
    for line in iter_document(d.header, d.entries()):
        fp.write(line.encode('ascii'))
