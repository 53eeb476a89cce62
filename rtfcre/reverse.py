""" Module for the translation -> strokes reverse index. """

from typing import Dict, List


class ReverseDict(Dict[str, List[str]]):
    """
    A reverse dictionary. Inverts a mapping from (stroke: translation) to (translation: [strokes]).

    Since many strokes may map to the same translation (many-to-one),
    the reverse mapping must be one-to-many, so each entry is a list of strokes in the order they were added.
    Translations are matched loosely: surrounding whitespace and case are ignored,
    so that "Cat", "cat" and " cat " all land in the same bucket.
    """

    @staticmethod
    def normalize(translation:str) -> str:
        """ Return the bucket key for <translation>. """
        return translation.strip().lower()

    def append_key(self, v:str, k:str) -> None:
        """ Append the stroke <k> to the bucket for the translation <v>.
            Create a new bucket with that stroke if the translation doesn't exist yet. """
        v = self.normalize(v)
        if v in self:
            self[v].append(k)
        else:
            self[v] = [k]

    def remove_key(self, v:str, k:str) -> None:
        """ Remove the stroke <k> from the bucket for the translation <v>. The stroke must exist.
            If it was the last stroke in the bucket, remove the bucket entirely. """
        v = self.normalize(v)
        bucket = self[v]
        bucket.remove(k)
        if not bucket:
            del self[v]

    def lookup(self, v:str) -> List[str]:
        """ Return a copy of the bucket for the translation <v>, or an empty list if there is none. """
        return self.get(self.normalize(v), [])[:]
