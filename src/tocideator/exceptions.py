"""Custom exceptions for tocideator."""


class TocIdeatorError(Exception):
    """Base exception for tocideator operations."""


class ValidationError(TocIdeatorError):
    """Imported JSON does not have the shape of an outline."""


class ParseError(TocIdeatorError):
    """Snapshot text could not be decoded as JSON."""


class DragError(TocIdeatorError):
    """Drag transition requested from the wrong state."""


class PublishError(TocIdeatorError):
    """Publishing a snapshot to the remote store failed."""


class StoreError(TocIdeatorError):
    """Error raised by the snapshot store."""


class InvalidShareIdError(StoreError):
    """Share id is not 32 lowercase hex characters."""


class SnapshotNotFoundError(StoreError):
    """No snapshot is stored under the requested id."""


class CorruptSnapshotError(StoreError):
    """Stored snapshot cannot be decoded."""


class PayloadError(StoreError):
    """Submitted snapshot payload was rejected."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code
