# Streaming directory listing pipeline.
# Created: 2026-10-19
#
# PathResolver -> DirectoryEnumerator -> MetadataResolver -> RecordEncoder
# -> StreamWriter, composed per request by DirectoryListing.

from dirstream.listing.encoder import EntryRecord, RecordEncoder
from dirstream.listing.enumerator import DirectoryEnumerator, RawEntry
from dirstream.listing.metadata import MetadataResolver, ResolvedEntry
from dirstream.listing.paths import PathResolver, is_within
from dirstream.listing.pipeline import DirectoryListing
from dirstream.listing.response import ASGISink, NDJSONStreamResponse
from dirstream.listing.writer import Sink, StreamStats, StreamWriter

__all__ = [
    "ASGISink",
    "DirectoryEnumerator",
    "DirectoryListing",
    "EntryRecord",
    "MetadataResolver",
    "NDJSONStreamResponse",
    "PathResolver",
    "RawEntry",
    "RecordEncoder",
    "ResolvedEntry",
    "Sink",
    "StreamStats",
    "StreamWriter",
    "is_within",
]
