"""
Errors that abort a build. Each one ends the run with a non-zero exit.

Per-record problems (unknown book, non-numeric chapter or verse) are never
raised; those records are dropped during indexing.
"""


class BuildError(Exception):
    """Base class for every error that aborts a build."""


class SourceUnavailable(BuildError):
    """Neither the local cache nor any mirror produced parseable JSON."""


class UnsupportedShape(BuildError):
    """The parsed JSON matches none of the recognised encodings."""


class EmptyCorpus(BuildError):
    """The input parsed and flattened, but no usable verse survived."""
