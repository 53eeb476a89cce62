""" Profilers for the no-arg callables made by the benchmark generators. """

from cProfile import Profile
from io import StringIO
import os
import pstats
import time


class AbstractProfiler:
    """ Abstract tool to measure and format details about the execution of a Python callable. """

    def run(self, func, *, repeat=3) -> None:
        """ Evaluate <func> <repeat> times and record details about each run. """
        for _ in range(repeat):
            self._run_once(func)

    def _run_once(self, func) -> None:
        raise NotImplementedError

    def format_best(self) -> str:
        """ Format a string with the details about the quickest recorded run. """
        raise NotImplementedError


class RawProfiler(AbstractProfiler):
    """ Records a function's total execution time only. """

    def __init__(self) -> None:
        self._times = []  # Time in seconds for each run.

    def _run_once(self, func) -> None:
        start_time = time.perf_counter()
        func()
        self._times.append(time.perf_counter() - start_time)

    def format_best(self) -> str:
        best = min(self._times)
        mean = sum(self._times) / len(self._times)
        return f'Best time = {best:.3f}s, mean of {len(self._times)} = {mean:.3f}s\n'


class DetailedProfiler(AbstractProfiler):
    """ Records cumulative time spent in each function called by the benchmark.
        The parser and mapper are made of many small functions, so profiling overhead may be substantial. """

    def __init__(self, *, max_lines=40, path_levels=2, sort_key='cumulative') -> None:
        self._profiles = []              # Finished profile for each run.
        self._max_lines = max_lines      # Maximum number of functions to show.
        self._path_levels = path_levels  # Trailing path components kept in file names. None keeps full paths.
        self._sort_key = sort_key        # pstats sort key for the listing.

    def _run_once(self, func) -> None:
        pr = Profile()
        pr.runcall(func)
        pr.create_stats()
        self._profiles.append(pr)

    def _short_path(self, path:str) -> str:
        if self._path_levels is None:
            return path
        segments = os.path.normpath(path).split(os.sep)
        return "/".join(segments[-self._path_levels:])

    def format_best(self) -> str:
        """ The quickest run is the one whose slowest function (by cumulative time) finished first. """
        best_pr = min(self._profiles, key=lambda p: max(s[3] for s in p.stats.values()))
        s_buf = StringIO()
        pstats.Stats(best_pr, stream=s_buf).sort_stats(self._sort_key).print_stats(self._max_lines)
        lines = []
        for line in s_buf.getvalue().splitlines()[4:]:
            fields = line.split(maxsplit=5)
            if len(fields) < 6 or fields[0] == "ncalls":
                continue
            ncalls, tottime, _, cumtime, _, location = fields
            lines.append(f'{ncalls:>12}   {tottime:>7}   {cumtime:>7}   {self._short_path(location)}\n')
        return "".join(lines)
