""" Module for the grammar of RTF/CRE dictionary documents.

    A dictionary document is a single RTF group:

    {\\rtf1\\ansi{\\*\\cxrev100}\\cxdict{\\*\\cxsystem Name}{\\stylesheet...}
    {\\*\\cxs KAT}cat{\\*\\cxcomment a comment}
    {\\*\\cxs TKOG}dog
    }

    Everything from one stroke group to the next (or to the closing brace) is the markup for that entry's translation.
    The parser only splits the document into header fields and raw entries. Translating the markup is left to the mapper. """

from collections import deque
from typing import List, NamedTuple, Optional, Tuple, Union

from .charset import DEFAULT_CODEPAGE
from .dictionary import DictionaryHeader
from .errors import InvalidFormat, InvalidStroke, UnbalancedGroup
from .keys import KeyLayout
from .tokens import ControlWord, Event, GroupEnd, GroupStart, Text, tokenize
from .translation import format_rtf_to_text


class RawEntry(NamedTuple):
    """ One dictionary entry as found in the document. Markup fields are tuples of tokenizer events. """
    strokes: str
    translation: tuple
    comment: Optional[tuple]


# Parser states.
PREAMBLE = "preamble"              # Before the opening {\rtf1.
AWAITING_ENTRY = "awaiting_entry"  # Inside the document, before the first stroke group.
IN_TRANSLATION = "in_translation"  # After a stroke group. Markup is collected for the current entry.
IN_COMMENT = "in_comment"          # Inside a comment group belonging to the current entry.
CLOSED = "closed"                  # After the document's closing brace. Only whitespace may follow.

# Top-level groups with meaning to the dictionary, by the control word that names them.
STROKES_GROUP = "cxs"
COMMENT_GROUP = "cxcomment"
SYSTEM_GROUP = "cxsystem"
REVISION_WORD = "cxrev"
CODEPAGE_WORD = "ansicpg"
DESTINATIONS = {STROKES_GROUP, COMMENT_GROUP, SYSTEM_GROUP, REVISION_WORD}


def _is_blank(event:Event) -> bool:
    return type(event) is Text and not event.text.strip()


def strip_markup(events:List[Event]) -> List[Event]:
    """ Remove leading and trailing whitespace from a markup event list.
        This takes out the indentation and line spacing between entries. """
    events = events[:]
    while events and _is_blank(events[0]):
        del events[0]
    while events and _is_blank(events[-1]):
        del events[-1]
    if events and type(events[0]) is Text:
        first = events[0]
        events[0] = first._replace(text=first.text.lstrip())
    if events and type(events[-1]) is Text:
        last = events[-1]
        events[-1] = last._replace(text=last.text.rstrip())
    return events


class RtfParser:
    """ Single-pass state machine over the tokenizer's event stream.
        Group depth is tracked with a counter, so nesting depth in the input does not affect the call stack. """

    def __init__(self, data:Union[bytes, str], *, codepage=DEFAULT_CODEPAGE, layout:KeyLayout=None) -> None:
        self._size = len(data)
        self._events = tokenize(data, codepage)
        self._lookahead = deque()            # Events read ahead of the main loop.
        self._layout = layout or KeyLayout()  # Normalizes stroke keys.
        self._state = PREAMBLE
        self._depth = 0
        self._revision = 1
        self._system_name = None
        self._codepage = codepage
        self._entries = []
        self._strokes = None                 # Keys of the entry being collected.
        self._markup = []                    # Translation markup of the entry being collected.
        self._comment = None                 # Comment markup of the entry being collected, if any.
        self._capture = None                 # Events inside the recognized (or skipped) group being read.
        self._capture_word = None            # Control word naming that group. None means the group is skipped.
        self._capture_depth = 0              # Depth of that group.

    def _next(self) -> Optional[Event]:
        if self._lookahead:
            return self._lookahead.popleft()
        return next(self._events, None)

    def _peek(self, i:int) -> Optional[Event]:
        while len(self._lookahead) <= i:
            event = next(self._events, None)
            if event is None:
                return None
            self._lookahead.append(event)
        return self._lookahead[i]

    def _next_nonblank(self) -> Optional[Event]:
        event = self._next()
        while event is not None and _is_blank(event):
            event = self._next()
        return event

    def _destination(self) -> Optional[ControlWord]:
        """ Called after an opening brace. If the group is one we recognize (with or without the \\* marker),
            consume its leading control word(s) and return the word that names it. """
        first = self._peek(0)
        if type(first) is ControlWord and first.name == "*":
            word = self._peek(1)
            n = 2
        else:
            word = first
            n = 1
        if type(word) is ControlWord and word.name in DESTINATIONS:
            for _ in range(n):
                self._next()
            return word
        return None

    def _read_preamble(self) -> None:
        """ The document must open with {\\rtf1, with nothing but whitespace before it. """
        event = self._next_nonblank()
        if type(event) is not GroupStart:
            offset = 0 if event is None else event.offset
            raise InvalidFormat('Document does not start with {\\rtf1.', offset)
        word = self._next_nonblank()
        if type(word) is not ControlWord or word.name != "rtf" or word.arg != 1:
            offset = event.offset if word is None else word.offset
            raise InvalidFormat('Document does not start with {\\rtf1.', offset)
        self._depth = 1
        self._state = AWAITING_ENTRY

    def _finish_entry(self) -> None:
        if self._strokes is not None:
            markup = tuple(strip_markup(self._markup))
            comment = None if self._comment is None else tuple(self._comment)
            self._entries.append(RawEntry(self._strokes, markup, comment))
        self._strokes = None
        self._markup = []
        self._comment = None

    def _start_entry(self, events:List[Event], offset:int) -> None:
        keys = format_rtf_to_text(events)
        try:
            strokes = self._layout.normalize(keys)
        except InvalidStroke as e:
            raise InvalidStroke(str(e), offset) from None
        self._finish_entry()
        self._strokes = strokes
        self._state = IN_TRANSLATION

    def _finish_group(self, word:Optional[ControlWord], events:List[Event], offset:int) -> None:
        """ Apply a recognized top-level group once its closing brace is found. Skipped groups do nothing. """
        if word is None:
            return
        name = word.name
        if name == STROKES_GROUP:
            self._start_entry(events, offset)
        elif name == COMMENT_GROUP:
            if self._strokes is not None:
                # Comments may be split into more than one group. They are concatenated.
                self._comment = (self._comment or []) + events
                self._state = IN_TRANSLATION
        elif name == SYSTEM_GROUP:
            self._system_name = format_rtf_to_text(events).strip()
        elif name == REVISION_WORD and word.arg is not None:
            self._revision = word.arg

    def _on_group_start(self, event:GroupStart) -> None:
        self._depth += 1
        if self._capture is None and self._depth == 2:
            word = self._destination()
            if word is not None or self._state == AWAITING_ENTRY:
                self._capture = []
                self._capture_word = word
                self._capture_depth = self._depth
                if word is not None and word.name == COMMENT_GROUP and self._strokes is not None:
                    self._state = IN_COMMENT
                return
        self._on_content(event)

    def _on_group_end(self, event:GroupEnd) -> None:
        if self._capture is not None and self._depth == self._capture_depth:
            events, self._capture = self._capture, None
            self._finish_group(self._capture_word, events, event.offset)
        elif self._depth == 1:
            self._finish_entry()
            self._state = CLOSED
        else:
            self._on_content(event)
        self._depth -= 1

    def _on_content(self, event:Event) -> None:
        if self._capture is not None:
            self._capture.append(event)
        elif self._state == IN_TRANSLATION:
            self._markup.append(event)
        elif type(event) is ControlWord and event.arg is not None:
            # Bare header words are only read before the first entry.
            if event.name == REVISION_WORD:
                self._revision = event.arg
            elif event.name == CODEPAGE_WORD:
                self._codepage = event.arg

    def _on_trailing(self, event:Event) -> None:
        if _is_blank(event):
            return
        if type(event) is GroupEnd:
            raise UnbalancedGroup('Closing brace has no matching open group.', event.offset)
        raise InvalidFormat('Unexpected content after the end of the document.', event.offset)

    def parse(self) -> Tuple[DictionaryHeader, List[RawEntry]]:
        """ Read the whole document. Any error aborts the parse; there are no partial results. """
        self._read_preamble()
        for event in iter(self._next, None):
            etype = type(event)
            if self._state == CLOSED:
                self._on_trailing(event)
            elif etype is GroupStart:
                self._on_group_start(event)
            elif etype is GroupEnd:
                self._on_group_end(event)
            else:
                self._on_content(event)
        if self._state != CLOSED:
            raise UnbalancedGroup(f'Document ended with {self._depth} group(s) still open.', self._size)
        header = DictionaryHeader(self._revision, self._system_name, self._codepage)
        return header, self._entries


def parse(data:Union[bytes, str], *, codepage=DEFAULT_CODEPAGE,
          layout:KeyLayout=None) -> Tuple[DictionaryHeader, List[RawEntry]]:
    """ Split an RTF/CRE document into its header and raw entries in document order. """
    return RtfParser(data, codepage=codepage, layout=layout).parse()
