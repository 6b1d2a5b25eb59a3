"""dirstream: streamed NDJSON directory listings over HTTP."""

__version__ = "0.1.0"
