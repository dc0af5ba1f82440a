# lessfilter:header:start
#
#   project      : LessFilter
#   file         : __init__.py
#   file_relpath : src/lessfilter/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""LessFilter detection-and-dispatch pipeline.

This package contains:

- the immutable context threaded through the transformers
  ([`lessfilter.pipeline.context`][lessfilter.pipeline.context]);
- the private scratch directory ([`lessfilter.pipeline.scratch`][lessfilter.pipeline.scratch]);
- the external tool contract ([`lessfilter.pipeline.tools`][lessfilter.pipeline.tools]);
- the transformer base class ([`lessfilter.pipeline.contracts`][lessfilter.pipeline.contracts]);
- the reformatter and colourizer adapters and their fixed priority order
  ([`lessfilter.pipeline.pipelines`][lessfilter.pipeline.pipelines]);
- the Dispatch Controller ([`lessfilter.pipeline.engine`][lessfilter.pipeline.engine]).
"""
