"""
CLI layer for resultkit.

All validation logic lives in ``resultkit.validation``; this package handles
only terminal transport: argument parsing, coloured output and JSON output.

Entry point::

    resultkit --help
"""

from resultkit.cli.app import app

__all__ = ["app"]
