# lessfilter:header:start
#
#   project      : LessFilter
#   file         : pipelines.py
#   file_relpath : src/lessfilter/pipeline/pipelines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Fixed priority order of LessFilter's transformers (immutable tables).

More specific transformers come first: a JUnit report must be recognised
before generic XML pretty-printing, and the generic syntax highlighter is last
because it would otherwise shadow everything else.

Overview
--------
- ``REFORMATTERS``: test reports → XML → BASIC → ARM (dumpi, armdiss) → AOF →
  ALF → ar → RISC OS data → ELF → Mach-O → Markdown → plist → certificates →
  bytecode
- ``COLOURIZERS``: CSV → Graphviz → JSON → generic highlighter
- ``TRANSFORMERS``: ``REFORMATTERS + COLOURIZERS``, the order the Dispatch
  Controller walks.

Notes:
* Reordering is a reviewable change to these tuples; nothing is computed.
* Transformers are instantiated objects (not classes).
"""

from __future__ import annotations

from typing import Final

from lessfilter.pipeline.colourizers.graphviz import GrcColourizer
from lessfilter.pipeline.colourizers.highlighter import HighlighterColourizer
from lessfilter.pipeline.colourizers.structured import JqColourizer
from lessfilter.pipeline.colourizers.tabular import CsvColourizer
from lessfilter.pipeline.contracts import BaseTransformer
from lessfilter.pipeline.reformatters.archives import ArReformatter, LibFileReformatter
from lessfilter.pipeline.reformatters.certificates import OpensslReformatter
from lessfilter.pipeline.reformatters.disassembly import ObjdumpReformatter, OtoolReformatter
from lessfilter.pipeline.reformatters.markdown import MarkdownReformatter
from lessfilter.pipeline.reformatters.plist import PlutilReformatter
from lessfilter.pipeline.reformatters.pyc import PycReformatter
from lessfilter.pipeline.reformatters.riscos import (
    ArmDissReformatter,
    BasicDetokeniser,
    DecAofReformatter,
    DumpiReformatter,
    RiscosDumpReformatter,
)
from lessfilter.pipeline.reformatters.xml import JunitXmlReformatter, XmlLintReformatter

REFORMATTERS: Final[tuple[BaseTransformer, ...]] = (
    JunitXmlReformatter(),  # JUnit XML test report summary
    XmlLintReformatter(),  # Generic XML/SVG pretty-print
    BasicDetokeniser(),  # Tokenised BBC BASIC
    DumpiReformatter(),  # ARM code, primary disassembler (emits)
    ArmDissReformatter(),  # ARM code, secondary disassembler
    DecAofReformatter(),  # RISC OS AOF object files
    LibFileReformatter(),  # RISC OS ALF libraries
    ArReformatter(),  # ar archives
    RiscosDumpReformatter(),  # RISC OS data files
    ObjdumpReformatter(),  # ELF aarch64 (emits)
    OtoolReformatter(),  # Mach-O
    MarkdownReformatter(),  # Markdown re-wrap
    PlutilReformatter(),  # Property lists
    OpensslReformatter(),  # Certificates and requests (emits)
    PycReformatter(),  # Python bytecode
)

COLOURIZERS: Final[tuple[BaseTransformer, ...]] = (
    CsvColourizer(),  # CSV via csvkit
    GrcColourizer(),  # Graphviz via grcat
    JqColourizer(),  # JSON via jq
    HighlighterColourizer(),  # Anything pygmentize has a lexer for
)

TRANSFORMERS: Final[tuple[BaseTransformer, ...]] = REFORMATTERS + COLOURIZERS
