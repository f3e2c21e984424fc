"""Exception hierarchy for s3-tidy."""


class S3TidyError(Exception):
    """Base exception for all s3-tidy errors."""

    pass


class StorageConnectionError(S3TidyError):
    """Raised when a storage client or its credentials cannot be set up."""

    pass


class ListingError(S3TidyError):
    """Raised when a page of the bucket listing cannot be retrieved."""

    pass


class DeletionError(S3TidyError):
    """Raised when a single object cannot be deleted."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Failed to delete {key}: {reason}")
        self.key = key
        self.reason = reason
