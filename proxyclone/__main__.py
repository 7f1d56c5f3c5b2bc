"""Entry point for running proxyclone as a module.

This module allows proxyclone to be run as a Python module using the -m flag:
    python -m proxyclone
"""

from . import cli

if __name__ == "__main__":
    cli._main()
