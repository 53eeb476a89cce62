""" Module for steno key strings as they appear in RTF/CRE stroke groups. """

from typing import Dict, Type

from .errors import InvalidStroke


class KeyLayout:
    """ Normalizes and validates RTFCRE key strings.

    A key string is one or more strokes separated by slashes. Keys are always stored uppercase
    with all whitespace removed, so "kat" and " KAT " name the same entry.
    The base layout accepts any printable key characters, which is what steno systems other than
    English (e.g. Korean, Palantype) need. Subclasses restrict the alphabet to a specific board. """

    # Stroke delimiter. Separates individual strokes of a multi-stroke action.
    sep = "/"
    # Characters that can never appear in a key since they break the RTF group structure.
    forbidden = "{}\\"
    # All characters allowed in a stroke besides the separator. Empty means any character not forbidden.
    alphabet = ""

    def __init__(self) -> None:
        self._valid = frozenset(self.alphabet + self.sep) if self.alphabet else None
        self._forbidden = frozenset(self.forbidden)

    def _check_chars(self, s:str, original:str) -> None:
        """ Raise if any character of the normalized key string <s> is not allowed. """
        for c in s:
            if c in self._forbidden or (self._valid is not None and c not in self._valid):
                raise InvalidStroke(f'Invalid character {c!r} in steno keys {original!r}.')

    def normalize(self, keys:str) -> str:
        """ Return the canonical form of a key string, or raise InvalidStroke if it cannot be a key. """
        if not isinstance(keys, str):
            raise InvalidStroke(f'Steno keys must be a string, not {type(keys).__name__}.')
        s = "".join(keys.split()).upper()
        if not all(s.split(self.sep)):
            raise InvalidStroke(f'Steno keys {keys!r} contain an empty stroke.')
        self._check_chars(s, keys)
        return s

    def count_strokes(self, s:str) -> int:
        """ Return the number of strokes in a normalized key string. """
        return s.count(self.sep) + 1


class EnglishKeyLayout(KeyLayout):
    """ Layout for the standard English steno board. Only board keys, the hyphen side split,
        and number key aliases are allowed. Steno order is not checked. """

    # RTFCRE board split delimiter. Separates ambiguous strokes into left+center and right sides of the board.
    split = "-"
    # Unique characters for each key in steno order, moving left -> center -> right.
    left = "#STKPWHR"
    center = "AO*EU"
    right = "FRPBLGTSDZ"
    # Digits are written directly in place of the keys they alias under the number bar.
    numbers = "0123456789"
    alphabet = split + left + center + right + numbers


LAYOUTS:Dict[str, Type[KeyLayout]] = {"any":     KeyLayout,
                                      "english": EnglishKeyLayout}


def get_layout(name:str) -> KeyLayout:
    """ Create a key layout by its short name. """
    try:
        layout_cls = LAYOUTS[name.lower()]
    except KeyError:
        raise ValueError(f'Unknown key layout "{name}". Choices are: {", ".join(LAYOUTS)}.') from None
    return layout_cls()
