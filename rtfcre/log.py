""" Module for status and error logging from the converter. """

import sys
from threading import Lock
from time import strftime
from traceback import format_exception
from types import TracebackType
from typing import Any, Callable, List, TextIO, Type


class StreamLogger:
    """ Line logger over text streams that are already open. With no streams, messages are discarded.
        One logger may be shared between threads. """

    def __init__(self, *streams:TextIO, time_fmt="[%b %d %Y %H:%M:%S]: ", repeat_mark="*") -> None:
        self._streams:List[TextIO] = [*streams]
        self._time_fmt = time_fmt        # strftime format put before each line. None for no timestamps.
        self._repeat_mark = repeat_mark  # Written in place of a message identical to the one before. None to disable.
        self._last_message = None
        self._lock = Lock()

    def _format(self, message:str) -> str:
        if self._repeat_mark is not None:
            if message == self._last_message:
                message = self._repeat_mark
            else:
                self._last_message = message
        if self._time_fmt is not None:
            message = strftime(self._time_fmt) + message
        return message + '\n'

    def log(self, message:str) -> None:
        """ Write <message> as one line to every stream, flushing each one right away. """
        line = self._format(message)
        with self._lock:
            for stream in self._streams:
                try:
                    stream.write(line)
                    stream.flush()
                except (OSError, ValueError):
                    # Closed or broken streams are skipped so the rest still get the message.
                    continue

    def close(self) -> None:
        """ Close every stream except the standard ones and stop writing to any of them. """
        with self._lock:
            for stream in self._streams:
                if stream not in (sys.stdout, sys.stderr):
                    stream.close()
            self._streams.clear()


def open_logger(*filenames:str, encoding='utf-8', to_stdout=False, to_stderr=False, **kwargs) -> StreamLogger:
    """ Open a logger that appends to each of <filenames>, and optionally echoes to stdout and/or stderr. """
    streams = [open(f, 'a', encoding=encoding) for f in filenames]
    if to_stdout:
        streams.append(sys.stdout)
    if to_stderr:
        streams.append(sys.stderr)
    return StreamLogger(*streams, **kwargs)


class ExceptionLogger:
    """ Sends exception tracebacks to a string logger. Called with the same arguments as sys.excepthook. """

    def __init__(self, logger:Callable[[str], Any], *, max_frames=20) -> None:
        self._logger = logger
        self._max_frames = max_frames  # Innermost stack frames beyond this are not written.

    def __call__(self, exc_type:Type[BaseException], exc:BaseException, tb:TracebackType) -> bool:
        """ Log the traceback. Returns False since the exception is not handled here. """
        tb_text = "".join(format_exception(exc_type, exc, tb, limit=self._max_frames))
        self._logger(tb_text.rstrip('\n'))
        return False
