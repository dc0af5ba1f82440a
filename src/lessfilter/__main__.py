# lessfilter:header:start
#
#   project      : LessFilter
#   file         : __main__.py
#   file_relpath : src/lessfilter/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Module entry point for running LessFilter via ``python -m lessfilter``.

It delegates directly to :func:`lessfilter.cli.main.cli`, ensuring a single,
authoritative CLI entry point regardless of how LessFilter is launched.

Examples:
    Check whether a file can be rendered::

        python -m lessfilter --supports README.md
"""

from __future__ import annotations

from lessfilter.cli.main import cli

if __name__ == "__main__":
    cli()
