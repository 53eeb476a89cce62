""" Benchmark test generators for each library component. Counts are tailored for a reasonable running time. """


# Setup functions for fixtures and test data. Some benchmarks count import time, so all imports are local.

_LEFT = "#STKPWHR"
_CENTER = "AO*EU"
_RIGHT = "FRPBLGTSDZ"
_WORDS = ["cat", "dog", "the", "of", "and", "café", "naïve", "你好", "\U0001f600", "Mr.", "x-ray", "{braces}"]
_DIRECTIVES = ["{^ing}", "{pre^}", "{^-^}", "{.}", "{,}", "{-|}", "{&a}", "{plover:lookup}", "=undo",
               "{#return}{#return}", "{mode:caps}", "{~|^-esque}", "{*($c)}", "{:stitch:b}", "{^}", "{>}"]


def _random(seed:int=None):
    from random import Random
    return Random(seed)


def _random_stroke(rnd) -> str:
    left = "".join([k for k in _LEFT if rnd.random() < 0.3])
    center = "".join([k for k in _CENTER if rnd.random() < 0.3])
    right = "".join([k for k in _RIGHT if rnd.random() < 0.3])
    if not center and right:
        center = "-"
    return left + center + right or "*"


def _random_translation(rnd) -> str:
    parts = [rnd.choice(_WORDS if rnd.random() < 0.7 else _DIRECTIVES) for _ in range(rnd.randint(1, 3))]
    return " ".join(parts)


def _random_translations(n:int) -> dict:
    """ Make a Plover-style dictionary with <n> random entries of one to three strokes. """
    rnd = _random(n)
    translations = {}
    while len(translations) < n:
        keys = "/".join([_random_stroke(rnd) for _ in range(rnd.randint(1, 3))])
        translations[keys] = _random_translation(rnd)
    return translations


def _random_dictionary(n:int):
    from rtfcre import StenoDictionary
    d = StenoDictionary()
    d.update(_random_translations(n))
    rnd = _random(n)
    for k in rnd.sample(d.keys(), n // 10):
        d.add_comment(k, "comment for " + k)
    return d


def _rtf_data(n:int) -> bytes:
    from rtfcre import dumps
    return dumps(_random_dictionary(n))


# Main benchmark functions. Each returns a no-arg callable suitable for profiling a particular component.

def app_start():
    def run() -> None:
        from rtfcre.convert import ConverterOptions
        ConverterOptions()
    return run


def loads(n=20000):
    from rtfcre import loads
    data = _rtf_data(n)
    def run() -> None:
        loads(data)
    return run


def dumps(n=20000):
    from rtfcre import dumps
    d = _random_dictionary(n)
    def run() -> None:
        dumps(d)
    return run


def tokenize(n=20000):
    from rtfcre.tokens import tokenize
    data = _rtf_data(n)
    def run() -> None:
        for _ in tokenize(data):
            pass
    return run


def plover_to_rtf(n=20000):
    from rtfcre import format_plover_to_rtf
    translations = list(_random_translations(n).values())
    def run() -> None:
        for t in translations:
            format_plover_to_rtf(t)
    return run


def rtf_to_plover(n=20000):
    from rtfcre import format_plover_to_rtf, format_rtf_to_plover
    fragments = [format_plover_to_rtf(t) for t in _random_translations(n).values()]
    def run() -> None:
        for markup in fragments:
            format_rtf_to_plover(markup)
    return run


def edit(n=50000):
    from rtfcre import StenoDictionary
    items = list(_random_translations(n).items())
    rnd = _random(n)
    replacements = [(k, rnd.choice(_WORDS)) for k, _ in items]
    def run() -> None:
        d = StenoDictionary()
        for k, v in items:
            d[k] = v
        for k, v in replacements:
            d[k] = v
        for k, v in replacements:
            d.reverse_lookup(v)
        for k, _ in items:
            del d[k]
    return run


def convert(n=20000):
    import os
    from tempfile import mkdtemp
    from rtfcre.convert import main
    data = _rtf_data(n)
    tmpdir = mkdtemp()
    rtf_path = os.path.join(tmpdir, "in.rtf")
    json_path = os.path.join(tmpdir, "out.json")
    with open(rtf_path, 'wb') as fp:
        fp.write(data)
    def run() -> None:
        main(["rtfcre", rtf_path, json_path])
        main(["rtfcre", json_path, rtf_path])
    return run
