""" Module for the in-memory model of an RTF/CRE steno dictionary. """

from collections import Counter
from typing import Iterable, Iterator, List, Mapping, NamedTuple, Optional, Tuple, Union

from .charset import DEFAULT_CODEPAGE
from .errors import NotFound
from .keys import KeyLayout
from .reverse import ReverseDict


class DictionaryEntry(NamedTuple):
    """ Everything stored under one stroke. The translation is in Plover syntax. """
    translation: str
    comment: Optional[str] = None


class DictionaryHeader(NamedTuple):
    """ Document-level metadata. The defaults are what new dictionaries are written with. """
    revision: int = 100
    system_name: Optional[str] = None
    codepage: int = DEFAULT_CODEPAGE


class StenoDictionary:
    """ Ordered mapping of steno strokes to translations with optional comments.

        Insertion order is kept and is the order entries are written out in. Replacing an entry keeps its position.
        Stroke arguments to every method are normalized by the key layout first.
        A reverse index from translations back to strokes and the longest key length are kept in sync on every change.
        The common mapping operations work on translations only; the named methods also handle comments. """

    def __init__(self, header:DictionaryHeader=None, *, layout:KeyLayout=None) -> None:
        self._header = header or DictionaryHeader()
        self._layout = layout or KeyLayout()  # Normalizes and validates stroke keys.
        self._entries = {}                    # Entries keyed by normalized stroke, in insertion order.
        self._reverse = ReverseDict()         # Strokes keyed by normalized translation.
        self._stroke_counts = Counter()       # Number of keys that have each stroke count.

    def __repr__(self) -> str:
        return f'<{type(self).__name__}: {len(self._entries)} entries>'

    @property
    def header(self) -> DictionaryHeader:
        return self._header

    @header.setter
    def header(self, header:DictionaryHeader) -> None:
        if not isinstance(header, DictionaryHeader):
            raise TypeError(f'Header must be a DictionaryHeader, not {type(header).__name__}.')
        self._header = header

    @property
    def system_name(self) -> Optional[str]:
        """ Name of the steno software that prepared this dictionary. """
        return self._header.system_name

    @system_name.setter
    def system_name(self, name:Optional[str]) -> None:
        if name is not None and not isinstance(name, str):
            raise TypeError(f'System name must be a string or None, not {type(name).__name__}.')
        self._header = self._header._replace(system_name=name)

    @property
    def longest_key(self) -> int:
        """ The number of strokes in the longest key, or 0 if the dictionary is empty. """
        return max(self._stroke_counts, default=0)

    def _normalize(self, stroke:str) -> str:
        return self._layout.normalize(stroke)

    def _get(self, stroke:str) -> Tuple[str, DictionaryEntry]:
        """ Return the normalized stroke and the entry stored under it. Raise NotFound if there is none. """
        key = self._normalize(stroke)
        try:
            return key, self._entries[key]
        except KeyError:
            raise NotFound(key) from None

    def _add_count(self, key:str, n:int) -> None:
        length = self._layout.count_strokes(key)
        self._stroke_counts[length] += n
        if not self._stroke_counts[length]:
            del self._stroke_counts[length]

    def get(self, stroke:str) -> DictionaryEntry:
        """ Return the full entry for <stroke>. Raise NotFound if it isn't defined. """
        return self._get(stroke)[1]

    def lookup(self, stroke:str) -> Optional[DictionaryEntry]:
        """ Return the full entry for <stroke>, or None if it isn't defined. """
        key = self._normalize(stroke)
        return self._entries.get(key)

    def set(self, stroke:str, translation:str, comment:str=None) -> None:
        """ Insert a new entry or replace an existing one in place.
            The reverse index only changes if the translation changes in more than case or surrounding space. """
        if not isinstance(translation, str):
            raise TypeError(f'Translation must be a string, not {type(translation).__name__}.')
        if comment is not None and not isinstance(comment, str):
            raise TypeError(f'Comment must be a string or None, not {type(comment).__name__}.')
        key = self._normalize(stroke)
        old = self._entries.get(key)
        if old is None:
            self._add_count(key, 1)
            self._reverse.append_key(translation, key)
        elif ReverseDict.normalize(old.translation) != ReverseDict.normalize(translation):
            self._reverse.remove_key(old.translation, key)
            self._reverse.append_key(translation, key)
        self._entries[key] = DictionaryEntry(translation, comment)

    def delete(self, stroke:str) -> None:
        """ Remove the entry for <stroke> from the dictionary and the reverse index. """
        key, entry = self._get(stroke)
        del self._entries[key]
        self._reverse.remove_key(entry.translation, key)
        self._add_count(key, -1)

    def reverse_lookup(self, translation:str) -> List[str]:
        """ Return every stroke that translates to <translation> (ignoring case and surrounding space), oldest first. """
        return self._reverse.lookup(translation)

    def add_comment(self, stroke:str, comment:str) -> None:
        """ Attach <comment> to an existing entry, replacing any comment it had. """
        if not isinstance(comment, str):
            raise TypeError(f'Comment must be a string, not {type(comment).__name__}.')
        key, entry = self._get(stroke)
        self._entries[key] = entry._replace(comment=comment)

    def remove_comment(self, stroke:str) -> None:
        """ Remove the comment from an existing entry, if it has one. """
        key, entry = self._get(stroke)
        self._entries[key] = entry._replace(comment=None)

    def entries(self) -> Iterator[Tuple[str, DictionaryEntry]]:
        """ Yield every (stroke, entry) pair in order. """
        return iter(self._entries.items())

    @property
    def stroke_to_translation(self) -> dict:
        """ A new dict of strokes mapped to translations in order. """
        return {k: e.translation for k, e in self._entries.items()}

    @property
    def translation_to_strokes(self) -> dict:
        """ A new dict of normalized translations mapped to lists of strokes. """
        return {v: keys[:] for v, keys in self._reverse.items()}

    # Mapping interface. Values are translations; comments are only reachable through the methods above.

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __contains__(self, stroke:object) -> bool:
        if not isinstance(stroke, str):
            return False
        try:
            key = self._normalize(stroke)
        except ValueError:
            return False
        return key in self._entries

    def __getitem__(self, stroke:str) -> str:
        return self.get(stroke).translation

    def __setitem__(self, stroke:str, translation:str) -> None:
        self.set(stroke, translation)

    def __delitem__(self, stroke:str) -> None:
        self.delete(stroke)

    def keys(self) -> List[str]:
        return list(self._entries)

    def values(self) -> List[str]:
        return [e.translation for e in self._entries.values()]

    def items(self) -> List[Tuple[str, str]]:
        return [(k, e.translation) for k, e in self._entries.items()]

    def clear(self) -> None:
        """ Remove every entry. The header is kept. """
        self._entries.clear()
        self._reverse.clear()
        self._stroke_counts.clear()

    def update(self, other:Union[Mapping, Iterable[tuple]]=(), **kwargs:str) -> None:
        """ Add entries from a mapping or an iterable of pairs, as with dict.update().
            Values may be translations or DictionaryEntry tuples. Another StenoDictionary brings its comments along. """
        if isinstance(other, StenoDictionary):
            items = other.entries()
        elif hasattr(other, "keys"):
            items = ((k, other[k]) for k in other.keys())
        else:
            items = other
        for k, v in items:
            if isinstance(v, DictionaryEntry):
                self.set(k, *v)
            else:
                self.set(k, v)
        for k, v in kwargs.items():
            self.set(k, v)
