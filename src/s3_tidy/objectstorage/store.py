"""Object store capabilities used by the stale-object scan.

The scan only needs two things from a storage backend: a lazy listing of
object records for a bucket and a delete-by-key operation. ``ObjectStore``
describes that contract; ``S3ObjectStore`` fulfils it with boto3.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Optional, Protocol

from botocore.exceptions import BotoCoreError, ClientError

from s3_tidy.core import get_logger
from s3_tidy.core.exceptions import DeletionError, ListingError
from s3_tidy.objectstorage.clients import S3ClientConfig, S3ClientManager

logger = get_logger(__name__)


@dataclass(frozen=True)
class ObjectRecord:
    """A single entry from a bucket listing.

    Attributes:
        key: Object key, unique within the bucket
        last_modified: Timezone-aware last modification time
        size: Size in bytes, or None when the backend does not report one
    """

    key: str
    last_modified: datetime
    size: Optional[int] = None


class ObjectStore(Protocol):
    """Protocol for the storage backend a scan runs against."""

    def iter_objects(self, bucket: str) -> Iterator[ObjectRecord]:
        """Yield every object in the bucket, page by page, in backend order.

        Raises:
            ListingError: If a page cannot be retrieved
        """
        ...

    def delete_object(self, bucket: str, key: str) -> None:
        """Delete one object.

        Raises:
            DeletionError: If the backend rejects the deletion
        """
        ...


def _error_reason(error: Exception) -> str:
    if isinstance(error, ClientError):
        details = error.response.get("Error", {})
        code = details.get("Code", "Unknown")
        message = details.get("Message", str(error))
        return f"{code}: {message}"
    return str(error)


class S3ObjectStore(ObjectStore):
    """ObjectStore backed by a boto3 S3 client."""

    def __init__(self, client_manager: S3ClientManager):
        self.client_manager = client_manager

    @classmethod
    def from_config(cls, config: S3ClientConfig) -> "S3ObjectStore":
        """Create a store and its client eagerly.

        Raises:
            StorageConnectionError: If the client cannot be created
        """
        manager = S3ClientManager(config)
        # Fail before any listing if credentials cannot be resolved
        _ = manager.client
        return cls(manager)

    def iter_objects(self, bucket: str) -> Iterator[ObjectRecord]:
        client = self.client_manager.client
        paginator = client.get_paginator("list_objects_v2")
        page_iterator = iter(paginator.paginate(Bucket=bucket))

        page_number = 0
        while True:
            try:
                page = next(page_iterator)
            except StopIteration:
                break
            except (BotoCoreError, ClientError) as e:
                error_msg = f"Failed to list objects: {_error_reason(e)}"
                logger.error(error_msg, bucket=bucket, page=page_number + 1)
                raise ListingError(error_msg) from e

            page_number += 1
            contents = page.get("Contents", [])
            logger.debug(
                "Listing page received",
                bucket=bucket,
                page=page_number,
                object_count=len(contents),
            )
            for obj in contents:
                yield ObjectRecord(
                    key=obj["Key"],
                    last_modified=obj["LastModified"],
                    size=obj.get("Size"),
                )

    def delete_object(self, bucket: str, key: str) -> None:
        client = self.client_manager.client
        try:
            client.delete_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise DeletionError(key, _error_reason(e)) from e
