""" Unit tests for the translation mapper between Plover syntax and RTF/CRE markup. """

import pytest

from rtfcre.tokens import tokenize
from rtfcre.translation import format_plover_to_rtf, format_rtf_to_plover, format_rtf_to_text


@pytest.mark.parametrize("plover, rtf", [
    # Text
    ("mooo",                            "mooo"),
    ("{ }",                             " "),
    ("-",                               "\\_"),
    ("un-",                             "un\\_"),
    ("x\ny",                            "x\\line y"),
    ("tab\tx",                          "tab\\tab x"),
    ("\\{",                             "\\{"),
    ("\\}",                             "\\}"),
    ("\\\\",                            "\\\\"),
    ("你好!",                   "\\u20320 \\u22909 !"),
    ("café",                       "caf\\'e9"),
    # Cancel and no-op
    ("{}",                              "{\\*\\cxplvrcancel}"),
    ("{#}",                             "{\\*\\cxplvrnop}"),
    # Metas and macros
    ("{:test_meta:arg}",                "{\\*\\cxplvrmeta test_meta:arg}"),
    ("{:no_arg}",                       "{\\*\\cxplvrmeta no_arg}"),
    ("=undo",                           "\\cxdstroke "),
    ("=test_macro",                     "{\\*\\cxplvrmac test_macro}"),
    ("=test_macro:arg",                 "{\\*\\cxplvrmac test_macro:arg}"),
    ("=repeat_last_stroke",             "{\\*\\cxplvrrpt}"),
    ("{*+}",                            "{\\*\\cxplvrrpt}"),
    ("{*}",                             "{\\*\\cxplvrast}"),
    ("=retrospective_toggle_asterisk",  "{\\*\\cxplvrast}"),
    ("{*?}",                            "{\\*\\cxplvrrtisp}"),
    ("{*!}",                            "{\\*\\cxplvrrtdsp}"),
    # Commands
    ("{plover:lookup}",                 "{\\*\\cxplvrcmd lookup}"),
    ("{PLOVER:SWITCH_SYSTEM:English}",  "{\\*\\cxplvrcmd switch_system:English}"),
    ("{:command:focus}",                "{\\*\\cxplvrcmd focus}"),
    # Modes
    ("{mode:caps}",                     "{\\*\\cxplvrcase2}"),
    ("{MODE:TITLE}",                    "{\\*\\cxplvrcase3}"),
    ("{mode:lower}",                    "{\\*\\cxplvrcase1}"),
    ("{mode:reset_case}",               "{\\*\\cxplvrcase0}"),
    ("{mode:camel}",                    "{\\*\\cxplvrcase4\\cxplvrspc}"),
    ("{mode:snake}",                    "{\\*\\cxplvrcase0\\cxplvrspc _}"),
    ("{mode:set_space:a}",              "{\\*\\cxplvrspc a}"),
    ("{mode:set_space:}",               "{\\*\\cxplvrspc }"),
    ("{mode:reset_space}",              "{\\*\\cxplvrspc0}"),
    ("{mode:reset}",                    "{\\*\\cxplvrcase0\\cxplvrspc0}"),
    # Paragraphs and key combos
    ("{#return}{#return}",              "\\par\\s0 "),
    ("{#Return}{#Return}    ",          "\\par\\s1 "),
    ("{#Left}",                         "{\\*\\cxplvrkey Left}"),
    ("{:key_combo:Control_L(a)}",       "{\\*\\cxplvrkey Control_L(a)}"),
    # Punctuation
    ("{.}",                             "{\\cxp. }"),
    ("{,}",                             "{\\cxp, }"),
    ("{?}",                             "{\\cxp? }"),
    ("{...}",                           "{\\cxp... }"),
    ("{:stop:!}",                       "{\\cxp! }"),
    ("{:stop:5}",                       "{\\cxp 5 }"),
    # Attach
    ("{^}",                             "\\cxds "),
    ("{:attach}",                       "\\cxds "),
    ("{^ing}",                          "{\\*\\cxplvrortho}\\cxds ing"),
    ("{pre^}",                          "{\\*\\cxplvrortho}pre\\cxds "),
    ("{^...^}",                         "{\\*\\cxplvrortho}\\cxds ...\\cxds "),
    ("{:attach:^ing}",                  "{\\*\\cxplvrortho}\\cxds ing"),
    ("{:attach:-}",                     "{\\*\\cxplvrortho}\\cxds \\_\\cxds "),
    ("{^ ^}",                           "\\~"),
    ("{^\\n^}",                         "{\\*\\cxplvrortho}\\cxds \\line \\cxds "),
    ("{^\\t^}",                         "{\\*\\cxplvrortho}\\cxds \\tab \\cxds "),
    # Glue and stitch
    ("{&a}",                            "{\\cxfing a}"),
    ("{:glue:b}",                       "{\\cxfing b}"),
    ("{&\\{}",                          "{\\cxfing \\{}"),
    ("{:stitch:c}",                     "{\\cxstit c}"),
    # Capitalization
    ("{-|}",                            "\\cxfc "),
    ("{>}",                             "\\cxfl "),
    ("{<}",                             "{\\*\\cxplvrfcw}"),
    ("{*-|}",                           "{\\*\\cxplvrrtfc}"),
    ("{*>}",                            "{\\*\\cxplvrrtfl}"),
    ("{*<}",                            "{\\*\\cxplvrrtfcw}"),
    ("{:case:cap_first_word}",          "\\cxfc "),
    ("{:retro_case:upper_first_word}",  "{\\*\\cxplvrrtfcw}"),
    ("{~|^-^}",                         "{\\*\\cxplvrccap}{\\*\\cxplvrortho}\\cxds \\_\\cxds "),
    ("{~|^-esque}",                     "{\\*\\cxplvrccap}{\\*\\cxplvrortho}\\cxds \\_esque"),
    ("{~|un-^}",                        "{\\*\\cxplvrccap}{\\*\\cxplvrortho}un\\_\\cxds "),
    ("{~|5}",                           "{\\*\\cxplvrccap}{\\*\\cxplvrortho}5"),
    # Currency
    ("{*($c)}",                         "{\\*\\cxplvrcurr $c}"),
    ("{*(c EUR)}",                      "{\\*\\cxplvrcurr c EUR}"),
    ("{:retro_currency:$c}",            "{\\*\\cxplvrcurr $c}"),
    # Everything together
    ("mooo啦!{#}test{*}",          "mooo\\u21862 !{\\*\\cxplvrnop}test{\\*\\cxplvrast}"),
    ("{^}{-|}",                         "\\cxds \\cxfc "),
])
def test_plover_to_rtf(plover, rtf) -> None:
    assert format_plover_to_rtf(plover) == rtf


@pytest.mark.parametrize("rtf, plover", [
    # Text
    ("mooo",                                            "mooo"),
    ("\\_",                                             "-"),
    ("\\~",                                             "{^ ^}"),
    ("\\{",                                             "\\{"),
    ("\\}",                                             "\\}"),
    ("\\\\",                                            "\\\\"),
    ("\\u20320 \\u22909 !",                             "你好!"),
    ("\\emdash \\endash ",                              "—–"),
    # Cancel and no-op
    ("{\\*\\cxplvrcancel}",                             "{}"),
    ("{\\*\\cxplvrnop}",                                "{#}"),
    # Metas and macros
    ("{\\*\\cxplvrmeta test_meta:arg}",                 "{:test_meta:arg}"),
    ("\\cxdstroke ",                                    "=undo"),
    ("{\\*\\cxplvrmac test_macro:arg}",                 "=test_macro:arg"),
    ("{\\*\\cxplvrrpt}",                                "{*+}"),
    ("{\\*\\cxplvrast}",                                "{*}"),
    ("{\\*\\cxplvrrtisp}",                              "{*?}"),
    ("{\\*\\cxplvrrtdsp}",                              "{*!}"),
    # Commands
    ("{\\*\\cxplvrcmd lookup}",                         "{plover:lookup}"),
    ("{\\*\\cxplvrcmd switch_system:English}",          "{plover:switch_system:English}"),
    # Modes
    ("{\\*\\cxplvrcase2}",                              "{mode:caps}"),
    ("{\\*\\cxplvrcase4\\cxplvrspc}",                   "{mode:camel}"),
    ("{\\*\\cxplvrcase0\\cxplvrspc _}",                 "{mode:snake}"),
    ("{\\*\\cxplvrspc a}",                              "{mode:set_space:a}"),
    ("{\\*\\cxplvrspc }",                               "{mode:set_space:}"),
    ("{\\*\\cxplvrspc0}",                               "{mode:reset_space}"),
    ("{\\*\\cxplvrcase0\\cxplvrspc0}",                  "{mode:reset}"),
    # Paragraphs and key combos
    ("\\par\\s0 ",                                      "{#return}{#return}"),
    ("\\par\\s1 ",                                      "{#return}{#return}    "),
    ("\\par ",                                          "{#return}{#return}"),
    ("{\\*\\cxplvrkey Left}",                           "{#Left}"),
    # Punctuation
    ("{\\cxp. }",                                       "{.}"),
    ("{\\cxp ,}",                                       "{,}"),
    ("{\\cxp }",                                        ""),
    ("{\\cxp 5 }",                                      "{:stop:5}"),
    # Auto text and conflicts
    ("{\\cxa Q. }",                                     "Q. "),
    ("{\\cxconf [{\\cxc abc}|{\\cxc def}]}",            "def"),
    # Attach without the marker is read literally
    ("\\cxds ",                                         "{^}"),
    ("\\cxds ing",                                      "{^}ing"),
    ("pre\\cxds ",                                      "pre{^}"),
    ("\\cxds ...\\cxds ",                               "{^}...{^}"),
    # Attach with the marker is read as the orthographic form
    ("{\\*\\cxplvrortho}\\cxds ing",                    "{^ing}"),
    ("{\\*\\cxplvrortho}pre\\cxds ",                    "{pre^}"),
    ("{\\*\\cxplvrortho}\\cxds ...\\cxds ",             "{^...^}"),
    ("{\\*\\cxplvrortho}\\cxds \\line \\cxds ",         "{^\n^}"),
    ("{\\*\\cxplvrortho}\\cxds \\tab \\cxds ",          "{^\t^}"),
    # Glue and stitch
    ("{\\cxfing a}",                                    "{&a}"),
    ("{\\cxfing \\{}",                                  "{&\\{}"),
    ("{\\cxstit c}",                                    "{:stitch:c}"),
    # Capitalization
    ("\\cxfc ",                                         "{-|}"),
    ("\\cxfl ",                                         "{>}"),
    ("{\\*\\cxplvrfcw}",                                "{<}"),
    ("{\\*\\cxplvrrtfc}",                               "{*-|}"),
    ("{\\*\\cxplvrrtfl}",                               "{*>}"),
    ("{\\*\\cxplvrrtfcw}",                              "{*<}"),
    ("{\\*\\cxplvrccap}",                               "{~|}"),
    ("{\\*\\cxplvrccap}\\cxds \\_\\cxds ",              "{~|}{^}-{^}"),
    ("{\\*\\cxplvrccap}{\\*\\cxplvrortho}\\cxds \\_\\cxds ",  "{~|^-^}"),
    ("{\\*\\cxplvrccap}{\\*\\cxplvrortho}\\cxds \\_esque",    "{~|^-esque}"),
    ("{\\*\\cxplvrccap}{\\*\\cxplvrortho}un\\_\\cxds ",       "{~|un-^}"),
    ("{\\*\\cxplvrccap}{\\*\\cxplvrortho}5",                  "{~|5}"),
    # Currency
    ("{\\*\\cxplvrcurr $c}",                            "{*($c)}"),
    # Unknown markup
    ("a{\\*\\foo bar}b",                                "ab"),
    ("{\\i italic}",                                    "italic"),
    ("\\b bold\\b0 ",                                   "bold"),
    ("{\\*\\cxplvrunknown x}",                          ""),
    # Everything together
    ("mooo\\u21862 !{\\*\\cxplvrnop}test{\\*\\cxplvrast}",  "mooo啦!{#}test{*}"),
])
def test_rtf_to_plover(rtf, plover) -> None:
    assert format_rtf_to_plover(rtf) == plover


@pytest.mark.parametrize("plover", [
    "cat",
    "{^ing}",
    "{pre^}",
    "{^-^}",
    "{~|^-esque}",
    "{~|5}",
    "{&a}",
    "{:stitch:a}",
    "{plover:lookup}",
    "=undo",
    "=test_macro:arg",
    "{:test_meta:arg}",
    "{mode:snake}",
    "{mode:set_space:a}",
    "{*($c)}",
    "{#return}{#return}    ",
    "{#Left}",
    "{.}",
    "{^ ^}",
    "{^\n^}",
    "x\ny",
    "tab\tx",
    "{mode:set_space:}",
    "{&\\{}",
    "{:stitch:\\}}",
    "{:stop:5}",
    "{:test_meta:\\}}",
    "{plover:x:\\{}",
    "\\{x\\}",
    "你好!",
    "Hello{.}{-|}",
])
def test_round_trip(plover) -> None:
    """ Canonical Plover translations must survive a trip to RTF and back. """
    rtf = format_plover_to_rtf(plover)
    assert format_rtf_to_plover(rtf) == plover


@pytest.mark.parametrize("rtf", [
    "{\\cxfing \\{}",
    "{\\cxstit \\\\}",
    "{\\*\\cxplvrkey \\}}",
    "{\\*\\cxplvrcmd x:\\{}",
    "{\\*\\cxplvrcurr \\{c}",
    "{\\cxp 5 }",
    "{\\*\\cxplvrspc }",
    "a\\line b",
])
def test_rtf_read_is_stable(rtf) -> None:
    """ A translation read from RTF must map to the same Plover text after another trip through RTF. """
    plover = format_rtf_to_plover(rtf)
    assert format_rtf_to_plover(format_plover_to_rtf(plover)) == plover


def test_events_input() -> None:
    """ Markup may also be given as tokenizer events. """
    assert format_rtf_to_plover(tokenize(b"\\cxds ing")) == "{^}ing"
    assert format_rtf_to_text(list(tokenize(b"caf\\'e9"))) == "café"


@pytest.mark.parametrize("rtf, text", [
    ("a\\_b\\~c",                   "a-b c"),
    ("{\\*\\cxcomment x}y",         "y"),
    ("caf\\'e9",                    "café"),
    ("one\\line two\\tab three",    "one\ntwo\tthree"),
    ("{\\b bold} text",             "bold text"),
])
def test_rtf_to_text(rtf, text) -> None:
    assert format_rtf_to_text(rtf) == text
