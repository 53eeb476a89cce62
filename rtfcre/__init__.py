""" Package for reading and writing steno dictionaries in RTF/CRE, the Rich Text Format with Court Reporting Extensions.
    The public API mirrors the standard json and pickle modules for whole documents, and the builtin dict for entries.

    charset - RTF text is not Unicode. Literal bytes are read through a legacy codepage, and anything else is written
    as a byte escape (\\'hh) or a UTF-16 escape (\\uN). This module decodes and encodes text fragments either way.

    tokens, parser - The document grammar. The tokenizer breaks raw RTF into groups, control words, and decoded text.
    The parser is a state machine over that stream which finds the header fields and splits out one raw entry for each
    stroke group: the stroke keys, the translation markup that follows, and any comment group.

    translation - Translations are stored in RTF/CRE as markup, but steno engines (Plover in particular) use their
    own brace-based syntax. The mapper converts between the two through a common table of directives.

    keys - Stroke keys are normalized (uppercase, no whitespace) and may be checked against a stroke alphabet.

    dictionary - The in-memory model. An ordered mapping of strokes to translations and comments, with a reverse index
    from translations back to strokes that is kept in step with every change.

    serializer - Writes a header, one line per entry, and a closing brace. The output is plain ASCII.

    codec - load/loads/dump/dumps.

    convert - A command-line converter between RTF/CRE and JSON dictionaries (python -m rtfcre, or rtfcre).

    Reading dictionaries:

        >>> import rtfcre
        >>> with open("dict.rtf", "rb") as fp:
        ...     d = rtfcre.load(fp)
        >>> d = rtfcre.loads(b"{\\\\rtf1\\\\ansi{\\\\*\\\\cxrev100}\\\\cxdict{\\\\*\\\\cxs KAT}cat}")
        >>> d["KAT"]
        'cat'

    Writing dictionaries:

        >>> with open("dict.rtf", "wb") as fp:
        ...     rtfcre.dump(d, fp)
        >>> data = rtfcre.dumps(d)

    Using dictionaries:

        >>> d["KOU"] = "cow"
        >>> d.reverse_lookup("cow")
        ['KOU']
        >>> d.add_comment("KOU", "moo")
        >>> d.lookup("KOU")
        DictionaryEntry(translation='cow', comment='moo') """

from .codec import dump, dumps, load, loads
from .dictionary import DictionaryEntry, DictionaryHeader, StenoDictionary
from .errors import InvalidFormat, InvalidStroke, MalformedEscape, NotFound, RtfCreError, UnbalancedGroup
from .keys import EnglishKeyLayout, KeyLayout
from .translation import format_plover_to_rtf, format_rtf_to_plover, format_rtf_to_text
