""" Module for reading and writing dictionary files on disk. All files are opened in binary mode. """

from functools import wraps
import json
from typing import Any, Callable

from .codec import dump, load
from .dictionary import StenoDictionary
from .errors import RtfCreError
from .keys import KeyLayout


class DictionaryFileError(Exception):
    """ General exception for any dictionary file IO or decoding error, with a message fit for the end-user. """


def try_io(func:Callable) -> Callable:
    """ Decorator to re-raise I/O and parsing exceptions with more general error messages for the end-user.
        Errors from the RTF reader already say what went wrong and where, so their message is kept. """
    @wraps(func)
    def call(self, filename:str, *args, **kwargs) -> Any:
        try:
            return func(self, filename, *args, **kwargs)
        except OSError as e:
            raise DictionaryFileError(f'{filename} is inaccessible or missing.') from e
        except RtfCreError as e:
            raise DictionaryFileError(f'{filename}: {e}') from e
        except (TypeError, ValueError) as e:
            raise DictionaryFileError(f'{filename} is not formatted correctly.') from e
    return call


class DictionaryFileIO:
    """ Loads and saves steno dictionaries as RTF/CRE or Plover-style JSON. """

    def __init__(self, *, layout:KeyLayout=None, codepage:int=None) -> None:
        self._layout = layout      # Key layout used to validate strokes from either format.
        self._codepage = codepage  # Fallback codepage for RTF input, and the codepage for RTF output. None = default.

    @try_io
    def load_rtf(self, filename:str) -> StenoDictionary:
        """ Load a dictionary from an RTF/CRE file. """
        kwargs = {} if self._codepage is None else {"codepage": self._codepage}
        with open(filename, 'rb') as fp:
            return load(fp, layout=self._layout, **kwargs)

    @try_io
    def save_rtf(self, filename:str, d:StenoDictionary) -> None:
        """ Save a dictionary to an RTF/CRE file. """
        if self._codepage is not None:
            d.header = d.header._replace(codepage=self._codepage)
        with open(filename, 'wb') as fp:
            dump(d, fp)

    @try_io
    def load_json(self, filename:str) -> StenoDictionary:
        """ Load a dictionary from a UTF-8 JSON object of strokes mapped to translations. """
        with open(filename, 'rb') as fp:
            data = fp.read()
        obj = json.loads(data.decode('utf-8'))
        if not isinstance(obj, dict) or not all(isinstance(v, str) for v in obj.values()):
            raise TypeError(filename + ' does not contain a string dictionary.')
        d = StenoDictionary(layout=self._layout)
        d.update(obj)
        return d

    @try_io
    def save_json(self, filename:str, d:StenoDictionary) -> None:
        """ Save a dictionary's translations as a JSON object in dictionary order. Comments are not kept.
            ensure_ascii=False is required to preserve Unicode symbols. """
        s = json.dumps(d.stroke_to_translation, ensure_ascii=False, indent=0)
        with open(filename, 'wb') as fp:
            fp.write(s.encode('utf-8'))
