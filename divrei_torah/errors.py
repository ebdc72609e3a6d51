"""Exception hierarchy for the Divrei Torah library.

    LibraryError            (base)
    +-- RejectedRow         (malformed or unclassifiable source row, never fatal)
    +-- InvalidQuery        (bad caller input, a client-side error)
    +-- StorageFailure      (snapshot unit exists but cannot be read or parsed)
    +-- MissingSnapshotUnit (snapshot unit absent, read as an empty result)
"""


class LibraryError(Exception):
    """Base exception for all library errors."""

    def __init__(self, message: str = "An unexpected error occurred") -> None:
        self._message = message
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message


class RejectedRow(LibraryError):
    """Raised by the normalizer for a row that cannot enter the corpus.

    ``ignored`` marks rows whose type is simply not one of ours; those are
    counted but not warned about.
    """

    def __init__(self, reason: str, ignored: bool = False) -> None:
        super().__init__(message=reason)
        self._ignored = ignored

    @property
    def reason(self) -> str:
        return self._message

    @property
    def ignored(self) -> bool:
        return self._ignored


class InvalidQuery(LibraryError):
    """Raised when caller input is invalid (e.g. a search query that is too short)."""

    def __init__(self, message: str = "Invalid query") -> None:
        super().__init__(message=message)


class StorageFailure(LibraryError):
    """Raised when a snapshot unit exists but is unreadable or malformed."""

    def __init__(self, message: str = "Snapshot storage failure", unit_key: tuple[str, ...] | None = None) -> None:
        super().__init__(message=message)
        self._unit_key = unit_key

    @property
    def unit_key(self) -> tuple[str, ...] | None:
        return self._unit_key

    def __str__(self) -> str:
        if self._unit_key:
            return f"[{'/'.join(self._unit_key)}] {self._message}"
        return self._message


class MissingSnapshotUnit(LibraryError):
    """Raised by strict store reads when a unit does not exist."""

    def __init__(self, unit_key: tuple[str, ...]) -> None:
        super().__init__(message=f"Snapshot unit not found: {'/'.join(unit_key)}")
        self._unit_key = unit_key

    @property
    def unit_key(self) -> tuple[str, ...]:
        return self._unit_key
