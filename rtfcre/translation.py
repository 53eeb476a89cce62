""" Module for converting translations between RTF/CRE markup and Plover's translation syntax.

    Both directions go through the same intermediate form: a flat list of atoms, one for each directive or run of text.
    The correspondences are held in the module-level tables below, so new directives can be added without new code.

    Plover side                    RTF/CRE side
    {&a}                           {\\cxfing a}
    {.} {,} {?} ...                {\\cxp. }
    {^} {^ing} {pre^}              \\cxds   {\\*\\cxplvrortho}\\cxds ing   {\\*\\cxplvrortho}pre\\cxds
    {-|} {>}                       \\cxfc   \\cxfl
    {plover:lookup}                {\\*\\cxplvrcmd lookup}
    =undo                          \\cxdstroke
    ...and the rest of the {\\*\\cxplvr...} family, which exists only to carry Plover's directives.

    Plover's attach directives change orthography when they join words. RTF/CRE has only a raw "delete space".
    Translations that needed the orthographic form are written with an {\\*\\cxplvrortho} marker so that they
    can be recovered when read back. """

import re
from typing import Iterable, List, NamedTuple, Optional, Union

from .charset import DEFAULT_CODEPAGE, escape
from .tokens import ControlWord, Event, GroupEnd, GroupStart, Text, tokenize


class Atom(NamedTuple):
    """ One directive or run of literal text. Fields beyond the kind depend on it. """
    kind: str
    text: str = ""
    arg: Optional[str] = None


# Atom kinds with no fields.
CANCEL = "cancel"
NOOP = "noop"
DELETE_STROKE = "delete_stroke"
REPEAT_LAST_STROKE = "repeat_last_stroke"
RETRO_TOGGLE_STAR = "retro_toggle_star"
RETRO_INSERT_SPACE = "retro_insert_space"
RETRO_DELETE_SPACE = "retro_delete_space"
HARD_SPACE = "hard_space"
ATTACH = "attach"
ORTHO = "ortho"
FORCE_CAP = "force_cap"
FORCE_LOWER = "force_lower"
RETRO_FORCE_CAP = "retro_force_cap"
RETRO_FORCE_LOWER = "retro_force_lower"
FORCE_CAP_WORD = "force_cap_word"
RETRO_FORCE_CAP_WORD = "retro_force_cap_word"
RESET_MODE = "reset_mode"
# Atom kinds with a text field.
TEXT = "text"
SPACE = "space"
PARAGRAPH = "paragraph"
FINGERSPELL = "fingerspell"
STITCH = "stitch"
PUNCTUATION = "punctuation"
KEY_COMBO = "key_combo"
CASE_MODE = "case_mode"
ATTACH_PREFIX = "attach_prefix"
ATTACH_SUFFIX = "attach_suffix"
ATTACH_INFIX = "attach_infix"
CARRY_CAP = "carry_cap"
CARRY_CAP_PREFIX = "carry_cap_prefix"
CARRY_CAP_SUFFIX = "carry_cap_suffix"
CARRY_CAP_INFIX = "carry_cap_infix"
# Atom kinds with a text field and an optional argument.
COMMAND = "command"
META = "meta"
MACRO = "macro"
CURRENCY = "currency"
SPACE_MODE = "space_mode"

# Plover syntax for atoms that need no fields.
PLOVER_FIXED = {CANCEL:               "{}",
                NOOP:                 "{#}",
                DELETE_STROKE:        "=undo",
                REPEAT_LAST_STROKE:   "{*+}",
                RETRO_TOGGLE_STAR:    "{*}",
                RETRO_INSERT_SPACE:   "{*?}",
                RETRO_DELETE_SPACE:   "{*!}",
                HARD_SPACE:           "{^ ^}",
                ATTACH:               "{^}",
                FORCE_CAP:            "{-|}",
                FORCE_LOWER:          "{>}",
                RETRO_FORCE_CAP:      "{*-|}",
                RETRO_FORCE_LOWER:    "{*>}",
                FORCE_CAP_WORD:       "{<}",
                RETRO_FORCE_CAP_WORD: "{*<}",
                RESET_MODE:           "{mode:reset}",
                ORTHO:                ""}

# Bare Plover operators inside braces. Derived from the fixed table, with {} and {#} handled separately.
PLOVER_OPERATORS = {s[1:-1]: kind for kind, s in PLOVER_FIXED.items()
                    if s.startswith("{") and kind not in (CANCEL, NOOP, HARD_SPACE, RESET_MODE)}

# Punctuation directives. Plover writes these as {.}, RTF/CRE as {\cxp. }.
PUNCTUATION_MARKS = {".", ",", "?", "!", ":", ";", "-", "--", "..."}

# Macros that are really retro directives with their own RTF form.
PLOVER_MACROS = {"undo":                          DELETE_STROKE,
                 "repeat_last_stroke":            REPEAT_LAST_STROKE,
                 "retrospective_toggle_asterisk": RETRO_TOGGLE_STAR,
                 "retrospective_insert_space":    RETRO_INSERT_SPACE,
                 "retrospective_delete_space":    RETRO_DELETE_SPACE}

# Arguments of the {:case:...} and {:retro_case:...} metas that have dedicated atoms.
CASE_METAS = {"cap_first_word":   FORCE_CAP,
              "upper_first_word": FORCE_CAP_WORD,
              "lower_first_char": FORCE_LOWER}
RETRO_CASE_METAS = {"cap_first_word":   RETRO_FORCE_CAP,
                    "upper_first_word": RETRO_FORCE_CAP_WORD,
                    "lower_first_char": RETRO_FORCE_LOWER}

# RTF/CRE case mode numbers for Plover's {mode:...} names. Camel and snake case also change the space mode.
CASE_NUMBERS = {"reset_case": 0,
                "lower":      1,
                "caps":       2,
                "title":      3}
CASE_MODE_RTF = {**{name: f"{{\\*\\cxplvrcase{n}}}" for name, n in CASE_NUMBERS.items()},
                 "camel": "{\\*\\cxplvrcase4\\cxplvrspc}",
                 "snake": "{\\*\\cxplvrcase0\\cxplvrspc _}"}

# Control words used outside groups for atoms with no fields.
RTF_WORDS = {"cxds":      ATTACH,
             "cxdstroke": DELETE_STROKE,
             "cxfc":      FORCE_CAP,
             "cxfl":      FORCE_LOWER,
             "~":         HARD_SPACE}

# {\*\cxplvr...} destinations for atoms with no fields.
RTF_PLOVER_GROUPS = {"cxplvrcancel": CANCEL,
                     "cxplvrnop":    NOOP,
                     "cxplvrast":    RETRO_TOGGLE_STAR,
                     "cxplvrrpt":    REPEAT_LAST_STROKE,
                     "cxplvrrtisp":  RETRO_INSERT_SPACE,
                     "cxplvrrtdsp":  RETRO_DELETE_SPACE,
                     "cxplvrrtfc":   RETRO_FORCE_CAP,
                     "cxplvrrtfl":   RETRO_FORCE_LOWER,
                     "cxplvrfcw":    FORCE_CAP_WORD,
                     "cxplvrrtfcw":  RETRO_FORCE_CAP_WORD,
                     "cxplvrortho":  ORTHO}

# {\*\cxplvr...} destinations whose text is a name with an optional argument after a colon.
RTF_NAMED_GROUPS = {"cxplvrcmd":  COMMAND,
                    "cxplvrmeta": META,
                    "cxplvrmac":  MACRO}

# Groups whose whole text content is the field of one atom.
RTF_TEXT_GROUPS = {"cxfing": FINGERSPELL,
                   "cxstit": STITCH,
                   "cxp":    PUNCTUATION}

# Control words (and symbols) that stand for literal characters.
RTF_CHARS = {"_":         "-",
             "line":      "\n",
             "tab":       "\t",
             "emdash":    "—",
             "endash":    "–",
             "lquote":    "‘",
             "rquote":    "’",
             "ldblquote": "“",
             "rdblquote": "”",
             "bullet":    "•"}

# Characters in literal text with their own RTF control word rather than a character escape.
RTF_TEXT_SPECIALS = {"-":  "\\_",
                     "\n": "\\line ",
                     "\t": "\\tab "}

# The RTF written for each fixed atom, derived from the reading tables.
RTF_FIXED = {**{kind: f"{{\\*\\{name}}}" for name, kind in RTF_PLOVER_GROUPS.items()},
             **{kind: f"\\{name} " for name, kind in RTF_WORDS.items()},
             HARD_SPACE: "\\~",
             RESET_MODE: "{\\*\\cxplvrcase0\\cxplvrspc0}"}

_PLOVER_RX = re.compile(r"""
    (?P<paragraph>\{\#return\}\{\#return\}(?P<indent>\x20{4})?)
  | \{(?P<meta>(?:[^{}\\]|\\.)*)\}
  | \\(?P<escape>.)
  | (?P<text>[^{}\\]+)
  | (?P<stray>[{}\\])
""", re.VERBOSE | re.IGNORECASE | re.DOTALL)
_PLOVER_MACRO_RX = re.compile(r'=(\w+)(?::(.*))?', re.DOTALL)
_PLOVER_UNESCAPE_RX = re.compile(r'\\(.)', re.DOTALL)
# Plover's \n and \t escapes are read, but real newlines and tabs are written as they are.
_PLOVER_UNESCAPES = {"n": "\n", "t": "\t", "{": "{", "}": "}", "\\": "\\"}
_PLOVER_ESCAPES = str.maketrans({"{": "\\{", "}": "\\}", "\\": "\\\\"})
_RTF_SPECIAL_RX = re.compile('([-\n\t])')

# Whole-translation patterns that recover orthographic attach forms, applied in order when the marker is present.
_ORTHO_FIXES = [(re.compile(pattern), repl) for pattern, repl in [
    (r'^\{\^\}([^{]+?)\{\^\}$',          r'{^\1^}'),
    (r'^([^{]+?)\{\^\}$',                r'{\1^}'),
    (r'^\{\^\}([^{]+?)$',                r'{^\1}'),
    (r'^\{~\|\}\{\^\}([^{]+?)\{\^\}$',   r'{~|^\1^}'),
    (r'^\{~\|\}([^{]+?)\{\^\}$',         r'{~|\1^}'),
    (r'^\{~\|\}\{\^\}([^{]+?)$',         r'{~|^\1}'),
    (r'^\{~\|\}([^{]+?)$',               r'{~|\1}')]]


def _plover_unescape(s:str) -> str:
    """ Replace Plover's backslash escapes with the characters they stand for. Unknown escapes are left alone. """
    if "\\" not in s:
        return s
    return _PLOVER_UNESCAPE_RX.sub(lambda m: _PLOVER_UNESCAPES.get(m.group(1), m.group(0)), s)


def _affix_atom(body:str, kinds:tuple, bare_kind:str) -> Atom:
    """ Classify <body> by its carets as an infix, suffix, or prefix. <bare_kind> is used if it has none. """
    infix, suffix, prefix = kinds
    if len(body) >= 2 and body.startswith("^") and body.endswith("^"):
        return Atom(infix, _plover_unescape(body[1:-1]))
    if body.startswith("^"):
        return Atom(suffix, _plover_unescape(body[1:]))
    if body.endswith("^"):
        return Atom(prefix, _plover_unescape(body[:-1]))
    return Atom(bare_kind, _plover_unescape(body))


_ATTACH_KINDS = (ATTACH_INFIX, ATTACH_SUFFIX, ATTACH_PREFIX)
_CARRY_CAP_KINDS = (CARRY_CAP_INFIX, CARRY_CAP_SUFFIX, CARRY_CAP_PREFIX)


def _currency_atom(body:str) -> Atom:
    """ The currency format puts the amount where the letter c is, e.g. $c or c EUR. """
    if "c" not in body:
        return Atom(TEXT, _plover_unescape(body))
    pre, _, post = body.partition("c")
    return Atom(CURRENCY, _plover_unescape(pre), _plover_unescape(post))


def _command_atom(body:str) -> Atom:
    cmd, sep, arg = body.partition(":")
    return Atom(COMMAND, _plover_unescape(cmd).lower(), _plover_unescape(arg) if sep else None)


def _mode_atom(mode:str) -> Atom:
    name = mode.lower()
    if name in CASE_MODE_RTF:
        return Atom(CASE_MODE, name)
    if name == "reset":
        return Atom(RESET_MODE)
    if name == "reset_space":
        return Atom(SPACE_MODE)
    if name.startswith("set_space:"):
        space = mode[len("set_space:"):]
        return Atom(SPACE_MODE) if space == " " else Atom(SPACE_MODE, "", space)
    return Atom(META, "mode", mode)


def _colon_meta_atom(name:str, arg:Optional[str]) -> Atom:
    """ Parse a {:name:arg} meta. Plover has long forms for most of its directives. """
    name = _plover_unescape(name).lower()
    text = arg or ""
    if name == "glue":
        return Atom(FINGERSPELL, _plover_unescape(text))
    if name in ("stop", "comma"):
        return Atom(PUNCTUATION, _plover_unescape(text))
    if name == "key_combo":
        return Atom(KEY_COMBO, _plover_unescape(text).strip())
    if name == "case" and text in CASE_METAS:
        return Atom(CASE_METAS[text])
    if name == "retro_case" and text in RETRO_CASE_METAS:
        return Atom(RETRO_CASE_METAS[text])
    if name == "attach":
        if arg is None:
            return Atom(ATTACH)
        if arg == " ":
            return Atom(HARD_SPACE)
        if "^" not in arg:
            return Atom(ATTACH_INFIX, _plover_unescape(arg))
        return _affix_atom(arg, _ATTACH_KINDS, ATTACH_INFIX)
    if name == "carry_capitalize":
        return _affix_atom(text, _CARRY_CAP_KINDS, CARRY_CAP)
    if name == "retro_currency":
        return _currency_atom(text)
    if name == "stitch":
        # Stitch delimiters after a second colon are not supported by the RTF form.
        return Atom(STITCH, _plover_unescape(text.split(":", 1)[0]))
    if name == "command":
        return _command_atom(text)
    if name == "mode":
        return _mode_atom(text)
    return Atom(META, name, _plover_unescape(arg) if arg else None)


def _meta_atom(inner:str) -> Atom:
    """ Parse the contents of one {...} directive. Anything unrecognized is kept as literal text. """
    if not inner:
        return Atom(CANCEL)
    if not inner.strip():
        return Atom(SPACE, inner)
    if inner == "#":
        return Atom(NOOP)
    if inner in PLOVER_OPERATORS:
        return Atom(PLOVER_OPERATORS[inner])
    if inner in PUNCTUATION_MARKS:
        return Atom(PUNCTUATION, inner)
    lowered = inner.lower()
    if inner.startswith("&"):
        return Atom(FINGERSPELL, _plover_unescape(inner[1:]))
    if inner.startswith("#"):
        return Atom(KEY_COMBO, _plover_unescape(inner[1:]).strip())
    if lowered.startswith("plover:"):
        return _command_atom(inner[len("plover:"):])
    if lowered.startswith("mode:"):
        return _mode_atom(inner[len("mode:"):])
    if inner.startswith("*(") and inner.endswith(")"):
        return _currency_atom(inner[2:-1])
    if inner.startswith(":"):
        name, sep, arg = inner[1:].partition(":")
        return _colon_meta_atom(name, arg if sep else None)
    if inner.startswith("~|"):
        return _affix_atom(inner[2:], _CARRY_CAP_KINDS, CARRY_CAP)
    if inner == "^ ^":
        return Atom(HARD_SPACE)
    if inner.startswith("^") or inner.endswith("^"):
        return _affix_atom(inner, _ATTACH_KINDS, ATTACH_INFIX)
    return Atom(TEXT, _plover_unescape(inner))


def parse_plover(translation:str) -> List[Atom]:
    """ Split a Plover translation into atoms. """
    m = _PLOVER_MACRO_RX.fullmatch(translation)
    if m is not None:
        name, arg = m.groups()
        name = name.lower()
        if name in PLOVER_MACROS:
            return [Atom(PLOVER_MACROS[name])]
        return [Atom(MACRO, name, arg)]
    atoms = []
    for m in _PLOVER_RX.finditer(translation):
        kind = m.lastgroup
        if kind == "indent" or kind == "paragraph":
            atoms.append(Atom(PARAGRAPH, "1" if m.group("indent") else "0"))
        elif kind == "meta":
            atoms.append(_meta_atom(m.group("meta")))
        elif kind == "escape":
            atoms.append(Atom(TEXT, _plover_unescape(m.group(0))))
        else:
            atoms.append(Atom(TEXT, m.group(0)))
    return atoms


def _rtf_text(text:str, codepage:int) -> str:
    """ Escape literal translation text. Hyphens and whitespace controls get their RTF control words. """
    parts = _RTF_SPECIAL_RX.split(text)
    parts[::2] = [escape(p, codepage) for p in parts[::2]]
    parts[1::2] = [RTF_TEXT_SPECIALS[p] for p in parts[1::2]]
    return "".join(parts)


def _rtf_named(word:str, name:str, arg:Optional[str], codepage:int) -> str:
    body = name if arg is None else f"{name}:{arg}"
    return f"{{\\*\\{word} {escape(body, codepage)}}}"


def _atom_to_rtf(atom:Atom, codepage:int) -> str:
    kind, text, arg = atom
    if kind in RTF_FIXED:
        return RTF_FIXED[kind]
    if kind == TEXT:
        return _rtf_text(text, codepage)
    if kind == SPACE:
        return text
    if kind == PARAGRAPH:
        return f"\\par\\s{text} "
    if kind == FINGERSPELL:
        return f"{{\\cxfing {escape(text, codepage)}}}"
    if kind == STITCH:
        return f"{{\\cxstit {escape(text, codepage)}}}"
    if kind == PUNCTUATION:
        # A space delimiter is only needed if the mark could be read as part of the control word.
        sep = " " if text[:1].isalnum() else ""
        return f"{{\\cxp{sep}{escape(text, codepage)} }}"
    if kind == KEY_COMBO:
        return f"{{\\*\\cxplvrkey {escape(text, codepage)}}}"
    if kind == CASE_MODE:
        return CASE_MODE_RTF[text]
    if kind == SPACE_MODE:
        if arg is None:
            return "{\\*\\cxplvrspc0}"
        return f"{{\\*\\cxplvrspc {escape(arg, codepage)}}}"
    if kind == CURRENCY:
        return f"{{\\*\\cxplvrcurr {escape(text, codepage)}c{escape(arg, codepage)}}}"
    if kind == COMMAND:
        return _rtf_named("cxplvrcmd", text, arg, codepage)
    if kind == META:
        return _rtf_named("cxplvrmeta", text, arg, codepage)
    if kind == MACRO:
        return _rtf_named("cxplvrmac", text, arg, codepage)
    body = _rtf_text(text, codepage)
    ortho = "{\\*\\cxplvrortho}"
    if kind == ATTACH_PREFIX:
        return f"{ortho}{body}\\cxds "
    if kind == ATTACH_SUFFIX:
        return f"{ortho}\\cxds {body}"
    if kind == ATTACH_INFIX:
        return f"{ortho}\\cxds {body}\\cxds "
    ccap = "{\\*\\cxplvrccap}"
    if kind == CARRY_CAP:
        return f"{ccap}{ortho}{body}" if body else ccap
    if kind == CARRY_CAP_PREFIX:
        return f"{ccap}{ortho}{body}\\cxds "
    if kind == CARRY_CAP_SUFFIX:
        return f"{ccap}{ortho}\\cxds {body}"
    if kind == CARRY_CAP_INFIX:
        return f"{ccap}{ortho}\\cxds {body}\\cxds "
    raise ValueError(f'No RTF form for atom {atom}.')


def format_plover_to_rtf(translation:str, codepage:int=DEFAULT_CODEPAGE) -> str:
    """ Convert a Plover translation to RTF/CRE markup. Literal text is escaped for <codepage>. """
    return "".join([_atom_to_rtf(atom, codepage) for atom in parse_plover(translation)])


def _events(markup:Union[str, Iterable[Event]]) -> List[Event]:
    if isinstance(markup, str):
        return list(tokenize(markup))
    return list(markup)


def _group_end(events:List[Event], start:int) -> int:
    """ Return the index of the brace that closes the group opened at <start>, or the end if it is never closed. """
    depth = 0
    for i in range(start, len(events)):
        etype = type(events[i])
        if etype is GroupStart:
            depth += 1
        elif etype is GroupEnd:
            depth -= 1
            if not depth:
                return i
    return len(events)


def _plain_text(events:Iterable[Event]) -> str:
    """ Return the literal text in <events>, including characters written as control words.
        Ignorable destinations are skipped along with everything inside them. """
    parts = []
    skip_depth = 0
    depth = 0
    after_brace = False
    for event in events:
        etype = type(event)
        if etype is GroupStart:
            depth += 1
            after_brace = True
            continue
        if etype is GroupEnd:
            if depth == skip_depth:
                skip_depth = 0
            depth -= 1
        elif skip_depth:
            pass
        elif etype is Text:
            parts.append(event.text)
        elif event.name == "*" and after_brace:
            skip_depth = depth
        elif event.name in RTF_CHARS:
            parts.append(RTF_CHARS[event.name])
        elif event.name == "~":
            parts.append(" ")
        after_brace = False
    return "".join(parts)


def _plover_group_atoms(body:List[Event]) -> List[Atom]:
    """ Read the contents of a {\\*\\cxplvr...} group, starting after the \\* marker. """
    words = [(e.name, e.arg) for e in body if type(e) is ControlWord]
    text = _plain_text(body)
    if len(words) == 2 and words[0][0] == "cxplvrcase" and words[1][0] == "cxplvrspc":
        case, space = words[0][1], words[1][1]
        if case == 0 and space == 0:
            return [Atom(RESET_MODE)]
        if case == 4 and space is None and not text:
            return [Atom(CASE_MODE, "camel")]
        if case == 0 and space is None and text == "_":
            return [Atom(CASE_MODE, "snake")]
    name, num = words[0]
    if name in RTF_PLOVER_GROUPS:
        return [Atom(RTF_PLOVER_GROUPS[name])]
    if name == "cxplvrccap":
        return [Atom(CARRY_CAP)]
    if name == "cxplvrcase":
        names = {n: case_name for case_name, n in CASE_NUMBERS.items()}
        return [Atom(CASE_MODE, names.get(num, "reset_case"))]
    if name == "cxplvrspc":
        # \cxplvrspc0 resets the space. Otherwise the group text is the new space, which may be empty.
        return [Atom(SPACE_MODE, "", None if num == 0 else text)]
    if name in RTF_NAMED_GROUPS:
        field, sep, arg = text.partition(":")
        return [Atom(RTF_NAMED_GROUPS[name], field, arg if sep else None)]
    if name == "cxplvrkey":
        return [Atom(KEY_COMBO, text.strip())]
    if name == "cxplvrcurr" and "c" in text:
        return [_currency_atom(text)]
    return []


def _conflict_atoms(body:List[Event]) -> List[Atom]:
    """ A conflict group lists its choices as {\\cxc ...} subgroups. The last choice wins. """
    choice = None
    i = 0
    while i < len(body):
        if type(body[i]) is GroupStart:
            end = _group_end(body, i)
            inner = body[i+1:end]
            if inner and type(inner[0]) is ControlWord and inner[0].name == "cxc":
                choice = inner[1:]
            i = end
        i += 1
    return [] if choice is None else _rtf_atoms(choice)


def _group_atoms(body:List[Event]) -> Optional[List[Atom]]:
    """ Return atoms for a group with special meaning, or None if the group should be read through. """
    if not body:
        return []
    first = body[0]
    if type(first) is not ControlWord:
        return None
    name = first.name
    if name == "*":
        if len(body) > 1 and type(body[1]) is ControlWord and body[1].name.startswith("cxplvr"):
            return _plover_group_atoms(body[1:])
        # Unknown destinations may be ignored by any RTF reader.
        return []
    if name in RTF_TEXT_GROUPS:
        text = _plain_text(body[1:])
        kind = RTF_TEXT_GROUPS[name]
        if kind == PUNCTUATION:
            text = text.strip()
            if not text:
                return []
        return [Atom(kind, text)]
    if name == "cxconf":
        return _conflict_atoms(body[1:])
    return None


def _rtf_atoms(events:List[Event]) -> List[Atom]:
    atoms = []
    i = 0
    n = len(events)
    while i < n:
        event = events[i]
        etype = type(event)
        i += 1
        if etype is Text:
            atoms.append(Atom(TEXT, event.text))
        elif etype is GroupStart:
            end = _group_end(events, i - 1)
            group = _group_atoms(events[i:end])
            if group is not None:
                atoms += group
                i = end + 1
        elif etype is ControlWord:
            name = event.name
            if name in RTF_WORDS:
                atoms.append(Atom(RTF_WORDS[name]))
            elif name in RTF_CHARS:
                atoms.append(Atom(TEXT, RTF_CHARS[name]))
            elif name == "par":
                style = "0"
                if i < n and type(events[i]) is ControlWord and events[i].name == "s":
                    style = "1" if events[i].arg == 1 else "0"
                    i += 1
                atoms.append(Atom(PARAGRAPH, style))
            # Anything else is formatting with no Plover equivalent.
    return atoms


def _atom_to_plover(atom:Atom) -> str:
    kind, text, arg = atom
    if kind in PLOVER_FIXED:
        return PLOVER_FIXED[kind]
    if kind == MACRO:
        # Macros are whole translations, not brace directives, so nothing is escaped.
        return "=" + text + ("" if arg is None else ":" + arg)
    if kind == SPACE:
        return "{" + text + "}"
    if kind == PARAGRAPH:
        return "{#return}{#return}" + ("    " if text == "1" else "")
    if kind == CASE_MODE:
        return "{mode:" + text + "}"
    if kind == SPACE_MODE:
        return "{mode:reset_space}" if arg is None else "{mode:set_space:" + arg + "}"
    body = text.translate(_PLOVER_ESCAPES)
    if arg is not None:
        arg = arg.translate(_PLOVER_ESCAPES)
    if kind == TEXT:
        return body
    if kind == FINGERSPELL:
        return "{&" + body + "}"
    if kind == STITCH:
        return "{:stitch:" + body + "}"
    if kind == PUNCTUATION:
        if text in PUNCTUATION_MARKS:
            return "{" + text + "}"
        return "{:stop:" + body + "}"
    if kind == KEY_COMBO:
        return "{#" + body + "}"
    if kind == CURRENCY:
        return "{*(" + body + "c" + arg + ")}"
    suffix = "" if arg is None else ":" + arg
    if kind == COMMAND:
        return "{plover:" + body + suffix + "}"
    if kind == META:
        return "{:" + body + suffix + "}"
    if kind == ATTACH_PREFIX:
        return "{" + body + "^}"
    if kind == ATTACH_SUFFIX:
        return "{^" + body + "}"
    if kind == ATTACH_INFIX:
        return "{^" + body + "^}"
    if kind == CARRY_CAP:
        return "{~|" + body + "}"
    if kind == CARRY_CAP_PREFIX:
        return "{~|" + body + "^}"
    if kind == CARRY_CAP_SUFFIX:
        return "{~|^" + body + "}"
    if kind == CARRY_CAP_INFIX:
        return "{~|^" + body + "^}"
    raise ValueError(f'No Plover form for atom {atom}.')


def format_rtf_to_plover(markup:Union[str, Iterable[Event]]) -> str:
    """ Convert RTF/CRE translation markup (a fragment string or tokenizer events) to a Plover translation. """
    atoms = _rtf_atoms(_events(markup))
    translation = "".join(map(_atom_to_plover, atoms))
    if any(atom.kind == ORTHO for atom in atoms):
        for rx, repl in _ORTHO_FIXES:
            translation = rx.sub(repl, translation, count=1)
    return translation


def format_rtf_to_text(markup:Union[str, Iterable[Event]]) -> str:
    """ Return only the literal text of RTF markup. Used for comments, keys, and header fields. """
    return _plain_text(_events(markup))
