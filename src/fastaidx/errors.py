"""Exception types raised by fastaidx.

Every failure in the package is reported as a subclass of
:class:`FastaError`. Each subclass also derives from the closest builtin
exception, so callers that already catch ``OSError`` or ``ValueError``
keep working.
"""


class FastaError(Exception):
    """Base class for all fastaidx errors."""


class FastaIOError(FastaError, OSError):
    """Open, read, seek or write failure on the sequence or index stream."""


class FastaFormatError(FastaError, ValueError):
    """Malformed FASTA header or unparseable index line."""


class FastaRangeError(FastaError, IndexError):
    """Record id or sequence coordinate outside the valid bounds."""


class FastaStateError(FastaError, RuntimeError):
    """Operation not allowed in the current handle state.

    Raised for queries on a handle that is not open, and for length
    queries when no index is loaded.
    """
