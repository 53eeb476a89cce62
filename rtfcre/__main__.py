#!/usr/bin/env python3

""" Console script and primary entry point for the dictionary converter. """

import sys

from rtfcre.convert import main

if __name__ == '__main__':
    sys.exit(main())
