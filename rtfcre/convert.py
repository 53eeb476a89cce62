""" Main module for the command-line dictionary converter. """

import os
import sys
from time import time
from typing import Callable, List

from .charset import codec_name, DEFAULT_CODEPAGE
from .cmdline import CmdlineOptions
from .files import DictionaryFileIO
from .keys import get_layout, LAYOUTS
from .log import ExceptionLogger, open_logger, StreamLogger

RTF_EXT = ".rtf"
JSON_EXT = ".json"


class ConverterOptions(CmdlineOptions):
    """ Contains all command-line options for the converter. """

    def __init__(self, app_description="Convert steno dictionaries between RTF/CRE and JSON.") -> None:
        super().__init__(app_description)
        self.add_positional("input", "Dictionary file to read (.rtf or .json).")
        self.add_positional("output", "Dictionary file to write (.json or .rtf).")
        self.add("system", "", "CAT system name written to RTF output. Default keeps the input's name, if any.")
        self.add("codepage", DEFAULT_CODEPAGE, "Codepage for RTF output, and for RTF input that does not declare one.")
        self.add("keys", "any", "Stroke key layout to validate against.", choices=list(LAYOUTS))
        self.add("log", "", "Text file to append status and exceptions to.")


class DictionaryConverter:
    """ Converts a dictionary file to the other format, chosen by file extensions. """

    def __init__(self, io:DictionaryFileIO, log:Callable[[str], None]) -> None:
        self._io = io    # Loads and saves dictionaries in both formats.
        self._log = log  # Status message callable.

    def convert(self, file_in:str, file_out:str, *, system_name:str=None) -> int:
        """ Convert one file and return the number of entries written. """
        ext_in = os.path.splitext(file_in)[1].lower()
        ext_out = os.path.splitext(file_out)[1].lower()
        if (ext_in, ext_out) == (RTF_EXT, JSON_EXT):
            d = self._io.load_rtf(file_in)
            self._log(f"Loaded {len(d)} entries from {file_in}.")
            self._io.save_json(file_out, d)
        elif (ext_in, ext_out) == (JSON_EXT, RTF_EXT):
            d = self._io.load_json(file_in)
            self._log(f"Loaded {len(d)} entries from {file_in}.")
            if system_name:
                d.system_name = system_name
            self._io.save_rtf(file_out, d)
        else:
            raise ValueError(f'Cannot convert "{ext_in or file_in}" to "{ext_out or file_out}". '
                             f'Supported conversions are {RTF_EXT} -> {JSON_EXT} and {JSON_EXT} -> {RTF_EXT}.')
        self._log(f"Saved {len(d)} entries to {file_out}.")
        return len(d)


def main(argv:List[str]=None) -> int:
    """ Convert a dictionary given on the command line. Time the execution.
        Any failure is reported as a single line on stderr with exit status 1. """
    opts = ConverterOptions()
    logger = StreamLogger()
    try:
        opts.parse(argv)
        if opts.log:
            logger = open_logger(opts.log)
        codec_name(opts.codepage)
        io = DictionaryFileIO(layout=get_layout(opts.keys), codepage=opts.codepage)
        converter = DictionaryConverter(io, logger.log)
        logger.log(f"Converting {opts.input} to {opts.output}...")
        start_time = time()
        converter.convert(opts.input, opts.output, system_name=opts.system)
        total_time = time() - start_time
        logger.log(f"Conversion complete in {total_time:.2f} seconds.")
    except Exception as e:
        ExceptionLogger(logger.log)(type(e), e, e.__traceback__)
        print(f'error: {e}', file=sys.stderr)
        return 1
    finally:
        logger.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
