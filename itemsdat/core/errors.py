"""Errors raised while decoding items.dat.

DecodeError (base)
├── UnsupportedVersion
├── OutOfBounds
├── SequenceMismatch
└── MalformedDatabase

A decode either returns a complete database or raises one of these; there is
no partial result.
"""


class DecodeError(Exception):
    pass


class UnsupportedVersion(DecodeError):
    def __init__(self, version: int, max_version: int) -> None:
        self.version = version
        self.max_version = max_version
        super().__init__(f"unsupported items.dat version {version} (max supported is {max_version})")


class OutOfBounds(DecodeError, EOFError):
    def __init__(self, offset: int, wanted: int, size: int) -> None:
        self.offset = offset
        self.wanted = wanted
        self.size = size
        super().__init__(f"attempt to read {wanted} bytes beyond end (rpos={offset}, len={size})")


class SequenceMismatch(DecodeError):
    def __init__(self, index: int, found: int) -> None:
        self.index = index
        self.found = found
        super().__init__(f"item at index {index} has id {found}")


class MalformedDatabase(DecodeError):
    """Wraps the structural failure of a single record (or the header).

    `index` is the record ordinal being decoded, or None when the header itself
    could not be read.
    """

    def __init__(self, index: int | None, cause: DecodeError) -> None:
        self.index = index
        self.cause = cause
        where = "header" if index is None else f"item {index}"
        super().__init__(f"malformed items.dat at {where}: {cause}")
