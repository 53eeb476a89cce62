""" Module for the converter's command-line arguments. """

import os
import sys
from typing import Any, Iterable, Iterator, List, Optional, Sequence


class CmdlineError(ValueError):
    """ Raised when the command line does not fit the declared arguments. """


class CmdlineArgument:
    """ Abstract class for one kind of argument the command line may contain. """

    def __call__(self, *args:str) -> Any:
        """ Return the parsed value from zero or more argument strings. """
        raise NotImplementedError

    def names(self) -> List[str]:
        """ Return every string that names this argument on the command line or in help. """
        raise NotImplementedError

    def usage(self) -> str:
        return "|".join(self.names())

    def description(self) -> str:
        raise NotImplementedError


class CmdlineOption(CmdlineArgument):
    """ A --key=value option. The value is converted to the type of the default.
        If a list of choices is given, the value must be one of them. """

    def __init__(self, key:str, opt_type:type, desc:str, choices:Sequence=None) -> None:
        self._key = key
        self._opt_type = opt_type
        self._desc = desc
        self._choices = choices

    def __call__(self, *args:str) -> Any:
        if len(args) != 1:
            raise CmdlineError(f'Option {self._key} needs a value, as in {self.usage()}.')
        try:
            value = self._opt_type(args[0])
        except ValueError:
            raise CmdlineError(f'Option {self._key} needs a value of type {self._opt_type.__name__}.') from None
        if self._choices is not None and value not in self._choices:
            raise CmdlineError(f'Option {self._key} must be one of: {", ".join(map(str, self._choices))}.')
        return value

    def names(self) -> List[str]:
        return [self._key]

    def usage(self) -> str:
        if self._choices is not None:
            return f'{self._key}=' + "|".join(map(str, self._choices))
        return f'{self._key}=<{self._opt_type.__name__}>'

    def description(self) -> str:
        return self._desc


class CmdlinePositional(CmdlineArgument):
    """ A required argument found by position, such as a file name. """

    def __init__(self, placeholder:str, desc:str) -> None:
        self._placeholder = placeholder
        self._desc = desc

    def __call__(self, *args:str) -> str:
        arg, = args
        return arg

    def names(self) -> List[str]:
        return [self._placeholder]

    def description(self) -> str:
        return self._desc


class CmdlineHelp(CmdlineArgument):
    """ Writes a usage line and a table of argument descriptions, then exits the program. """

    def __init__(self, args:Iterable[CmdlineArgument], script_name:str, app_description:str,
                 *, file=None, max_col_width=28) -> None:
        self._args = [*args, self]
        self._script_name = script_name
        self._app_description = app_description
        self._file = file or sys.stdout
        self._max_col_width = max_col_width  # Wider key columns push the description onto the next line.

    def format_help(self) -> str:
        usage = ['usage:', self._script_name]
        for arg in self._args:
            s = arg.usage()
            usage.append(s if isinstance(arg, CmdlinePositional) else f'[{s}]')
        keys = [", ".join(arg.names()) for arg in self._args]
        col_width = max([len(k) for k in keys if len(k) < self._max_col_width], default=0) + 2
        lines = [self._app_description, " ".join(usage), ""]
        for arg, k in zip(self._args, keys):
            if len(k) < col_width:
                lines.append(k.ljust(col_width) + arg.description())
            else:
                lines += [k, " " * col_width + arg.description()]
        lines.append("")
        return "\n".join(lines)

    def __call__(self, *args:str) -> None:
        """ Any value given to --help is ignored. """
        self._file.write(self.format_help())
        sys.exit(0)

    def names(self) -> List[str]:
        return ['-h', '--help']

    def description(self) -> str:
        return "Show this help message and exit."


class CmdlineOptions:
    """ Namespace for parsed command-line values, accessed as instance attributes.
        Options keep their default until parsed. Positional arguments are all required and are None until parsed. """

    def __init__(self, app_description="Command line application.") -> None:
        self._app_description = app_description
        self._options = {}      # Options keyed by the attribute they set.
        self._positionals = {}  # Positional arguments keyed by attribute, in order.

    def __getattr__(self, name:str) -> Any:
        raise AttributeError(f'"{name}" is not the name of a command-line argument.')

    def add(self, name:str, default:Any, desc="No description.", choices:Sequence=None) -> None:
        """ Add an option --<name> with a typed <default>. Hyphens in <name> become underscores in the attribute. """
        attr = name.replace("-", "_")
        self._options[attr] = CmdlineOption("--" + name, type(default), desc, choices)
        setattr(self, attr, default)

    def add_positional(self, name:str, desc="No description.") -> None:
        """ Add the next required positional argument. The attribute is the lowercase <name>. """
        attr = name.lower()
        self._positionals[attr] = CmdlinePositional(name.upper(), desc)
        setattr(self, attr, None)

    def _help(self, script_name:str) -> CmdlineHelp:
        args = [*self._positionals.values(), *self._options.values()]
        return CmdlineHelp(args, script_name, self._app_description)

    def format_help(self, script_name="") -> str:
        return self._help(script_name).format_help()

    def _split(self, argv:Iterable[str], help_opt:CmdlineHelp) -> Iterator[tuple]:
        """ Yield (attribute, option, values) for each --key[=value] and (None, None, (arg,)) for each positional. """
        attrs = {opt.names()[0]: attr for attr, opt in self._options.items()}
        for s in argv:
            if not s.startswith('-') or s == '-':
                yield None, None, (s,)
                continue
            key, *value = s.split('=', 1)
            if key in help_opt.names():
                yield None, help_opt, value
            elif key in attrs:
                attr = attrs[key]
                yield attr, self._options[attr], value
            else:
                raise CmdlineError(f'Unknown option {key}.')

    def parse(self, argv:Optional[List[str]]=None) -> None:
        """ Parse arguments from <argv>, or from sys.argv if not given, into attributes. argv[0] is the script.
            Options may come before, after, or between positional arguments. """
        script, *argv = argv or sys.argv
        help_opt = self._help(os.path.basename(script) if script else "")
        values = {}
        positional = []
        for attr, opt, args in self._split(argv, help_opt):
            if opt is None:
                positional += args
            elif attr is None:
                opt(*args)
            else:
                values[attr] = opt(*args)
        if len(positional) != len(self._positionals):
            expected = " ".join([arg.usage() for arg in self._positionals.values()])
            raise CmdlineError(f'Expected {len(self._positionals)} positional argument(s) ({expected}), '
                               f'got {len(positional)}.')
        for (attr, arg), s in zip(self._positionals.items(), positional):
            values[attr] = arg(s)
        self.__dict__.update(values)
