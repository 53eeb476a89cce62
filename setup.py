#!/usr/bin/env python3

""" Build script for the rtfcre package. """

import glob
import os
import shutil
import subprocess
import sys

from setuptools import Command as stCommand, find_packages, setup


def iglob_all(*patterns):
    """ Yield each unique file path that matches one of many glob <patterns>. """
    seen = set()
    for pattern in patterns:
        for path in glob.iglob(pattern, recursive=True):
            if path not in seen:
                yield path
                seen.add(path)


class BaseCommand(stCommand):
    """ Abstract command class that runs dependencies before the command itself. """
    requires = ""
    def __init__(self, *args):
        """ Run all dependency commands in order before touching the main one. """
        super().__init__(*args)
        for cmd in self.requires.split():
            self.run_command(cmd)


class Command(BaseCommand):
    """ BaseCommand with default fields and methods defined. """
    user_options = []
    def initialize_options(self):
        self.args = []
    def finalize_options(self):
        pass


class CommandNamespace:
    """ Contains all command classes for use in setuptools.setup().
        Any command here may be run by name, e.g. > python3 setup.py clean. """

    class bench(Command):
        description = "Run all parser and serializer benchmarks."
        command_consumes_arguments = True
        def run(self):
            cmd = (sys.executable, '-m', 'benchmarks', *self.args)
            subprocess.run(cmd, check=True)

    class clean(Command):
        description = "Remove all build and test-generated files."
        def run(self):
            for path in iglob_all('.pytest_cache', 'build', 'dist', '*.egg-info', '**/__pycache__'):
                if os.path.isdir(path):
                    shutil.rmtree(path)
                elif os.path.exists(path):
                    os.remove(path)

    class run(Command):
        description = "Run the dictionary converter from source."
        command_consumes_arguments = True
        def run(self):
            cmd = (sys.executable, '-m', 'rtfcre', *self.args)
            subprocess.run(cmd, check=True)

    class test(Command):
        description = "Run all unit tests."
        def run(self):
            import pytest
            sys.exit(pytest.main(['test']))


setup(
    name="rtfcre",
    version="0.4.0",
    description="Read and write steno dictionaries in RTF/CRE format.",
    python_requires=">=3.7",
    packages=find_packages(exclude=["test", "test.*", "benchmarks", "benchmarks.*"]),
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["rtfcre=rtfcre.__main__:main"]},
    cmdclass={k: v for k, v in vars(CommandNamespace).items() if not k.startswith('_')},
)
