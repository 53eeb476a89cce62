""" Exception types raised while reading, writing, or editing RTF/CRE dictionaries. """

from typing import Optional


class RtfCreError(Exception):
    """ Base exception for every error raised by this package.
        Parser errors carry the byte offset where the problem was found. """

    def __init__(self, message:str, offset:Optional[int]=None) -> None:
        if offset is not None:
            message = f'{message} (at byte {offset})'
        super().__init__(message)
        self.offset = offset  # Byte offset into the source document, or None if not applicable.


class InvalidFormat(RtfCreError, ValueError):
    """ Raised when a document is not an RTF/CRE dictionary at all (missing or garbled preamble, bad codepage). """


class UnbalancedGroup(InvalidFormat):
    """ Raised when group braces do not nest properly. """


class MalformedEscape(InvalidFormat):
    """ Raised for bad escape syntax or an escape argument that is out of range. """


class InvalidStroke(RtfCreError, ValueError):
    """ Raised when a steno key string fails normalization or validation against the stroke alphabet. """


class NotFound(RtfCreError, KeyError):
    """ Raised when a stroke is not present in the dictionary. Subclasses KeyError so mapping code works as usual. """

    def __init__(self, stroke:str) -> None:
        super().__init__(stroke)
        self.stroke = stroke

    def __str__(self) -> str:
        # KeyError wraps its message in quotes; we want the bare message.
        return Exception.__str__(self)
