# lessfilter:header:start
#
#   project      : LessFilter
#   file         : pyc_view.py
#   file_relpath : src/lessfilter/pipeline/reformatters/pyc_view.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Print the header and a recursive disassembly of a Python bytecode file.

This script is executed by an *external* interpreter (``python3``, else ``python``
on ``PATH``), whose version must match the bytecode; it therefore only uses
the standard library and does not import LessFilter.

Usage:
    python3 pyc_view.py <file.pyc>
"""

from __future__ import annotations

import binascii
import dis
import marshal
import platform
import struct
import sys
import time

FLAG_HASH_BASED = 0x1


def view_pyc_file(path: str) -> None:
    """Read and display the content of the Python bytecode in a pyc file."""
    with open(path, "rb") as handle:
        magic: bytes = handle.read(4)
        flags: int = struct.unpack("<I", handle.read(4))[0]
        if flags & FLAG_HASH_BASED:
            source_hash: bytes = handle.read(8)
            timestamp = f"hash-based ({binascii.hexlify(source_hash).decode('ascii')})"
            size = "not known"
        else:
            mtime: int = struct.unpack("<I", handle.read(4))[0]
            timestamp = time.asctime(time.localtime(mtime))
            size = str(struct.unpack("<I", handle.read(4))[0])
        code = marshal.load(handle)

    print(f"Python version: {platform.python_version()}")
    print(f"Magic code: {binascii.hexlify(magic).decode('ascii')}")
    print(f"Timestamp: {timestamp}")
    print(f"Size: {size}")
    print("-" * 80)
    dis.dis(code)


if __name__ == "__main__":
    view_pyc_file(sys.argv[1])
