"""Tests for the S3-backed object store and client management."""

from datetime import datetime, timezone
from unittest.mock import Mock

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from s3_tidy.core.exceptions import DeletionError, ListingError, StorageConnectionError
from s3_tidy.objectstorage.clients import S3ClientConfig, S3ClientManager
from s3_tidy.objectstorage.store import ObjectRecord, S3ObjectStore


def client_error(code, message, operation):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


@pytest.fixture
def s3_client(aws_credentials):
    """Mocked S3 with a populated test bucket."""
    with mock_aws():
        client = boto3.client("s3", region_name="us-east-1")
        client.create_bucket(Bucket="test-bucket")
        client.put_object(Bucket="test-bucket", Key="data/file1.txt", Body=b"content1")
        client.put_object(
            Bucket="test-bucket", Key="data/file2.txt", Body=b"content2content2"
        )
        client.put_object(Bucket="test-bucket", Key="empty.txt", Body=b"")
        yield client


@pytest.fixture
def no_credentials(monkeypatch, tmp_path):
    """Environment in which boto3 can resolve no credentials at all."""
    for name in (
        "AWS_ACCESS_KEY_ID",
        "AWS_SECRET_ACCESS_KEY",
        "AWS_SESSION_TOKEN",
        "AWS_SECURITY_TOKEN",
        "AWS_PROFILE",
        "AWS_DEFAULT_PROFILE",
        "AWS_CONTAINER_CREDENTIALS_RELATIVE_URI",
        "AWS_CONTAINER_CREDENTIALS_FULL_URI",
        "AWS_WEB_IDENTITY_TOKEN_FILE",
        "AWS_ROLE_ARN",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "credentials"))
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "config"))
    monkeypatch.setenv("AWS_EC2_METADATA_DISABLED", "true")


class TestS3ClientManager:
    """Test S3 client creation."""

    def test_client_with_default_chain(self, s3_client):
        """Test client creation from environment credentials."""
        manager = S3ClientManager(S3ClientConfig(region_name="us-east-1"))
        assert manager.client.list_buckets()["Buckets"][0]["Name"] == "test-bucket"

    def test_client_is_cached(self, aws_credentials):
        """Test the client is created once per manager."""
        manager = S3ClientManager(S3ClientConfig(region_name="us-east-1"))
        assert manager.client is manager.client

    def test_missing_credentials(self, no_credentials):
        """Test missing credentials are a connection error."""
        manager = S3ClientManager(S3ClientConfig(region_name="us-east-1"))
        with pytest.raises(StorageConnectionError, match="no AWS credentials"):
            manager.client

    def test_unknown_profile(self, no_credentials):
        """Test an unknown profile is a connection error."""
        manager = S3ClientManager(S3ClientConfig(aws_profile="does-not-exist"))
        with pytest.raises(StorageConnectionError, match="Unable to load SDK config"):
            manager.client

    def test_store_from_config_fails_eagerly(self, no_credentials):
        """Test the store resolves credentials before any listing."""
        with pytest.raises(StorageConnectionError):
            S3ObjectStore.from_config(S3ClientConfig(region_name="us-east-1"))


class TestS3ObjectStoreWithMoto:
    """Test listing and deletion against mocked S3."""

    def test_iter_objects(self, s3_client):
        """Test every object is yielded with key, timestamp and size."""
        store = S3ObjectStore.from_config(S3ClientConfig(region_name="us-east-1"))

        records = {record.key: record for record in store.iter_objects("test-bucket")}

        assert set(records) == {"data/file1.txt", "data/file2.txt", "empty.txt"}
        assert records["data/file1.txt"].size == 8
        assert records["data/file2.txt"].size == 16
        assert records["empty.txt"].size == 0
        assert all(r.last_modified.tzinfo is not None for r in records.values())

    def test_iter_objects_empty_bucket(self, s3_client):
        """Test an empty bucket yields nothing."""
        s3_client.create_bucket(Bucket="empty-bucket")
        store = S3ObjectStore.from_config(S3ClientConfig(region_name="us-east-1"))

        assert list(store.iter_objects("empty-bucket")) == []

    def test_iter_objects_missing_bucket(self, s3_client):
        """Test listing a missing bucket is a listing error."""
        store = S3ObjectStore.from_config(S3ClientConfig(region_name="us-east-1"))

        with pytest.raises(ListingError, match="NoSuchBucket"):
            list(store.iter_objects("no-such-bucket"))

    def test_delete_object(self, s3_client):
        """Test deleting an object removes it from the bucket."""
        store = S3ObjectStore.from_config(S3ClientConfig(region_name="us-east-1"))

        store.delete_object("test-bucket", "data/file1.txt")

        keys = [r.key for r in store.iter_objects("test-bucket")]
        assert "data/file1.txt" not in keys
        assert len(keys) == 2


class TestS3ObjectStoreFailures:
    """Test error translation with a stubbed boto3 client."""

    def make_store(self, client):
        return S3ObjectStore(Mock(client=client))

    def test_listing_is_lazy_and_fails_on_bad_page(self):
        """Test records before a failing page are yielded, then the error."""
        modified = datetime(2024, 1, 1, tzinfo=timezone.utc)

        def pages(**kwargs):
            yield {"Contents": [{"Key": "a", "LastModified": modified, "Size": 3}]}
            yield {}
            raise client_error("AccessDenied", "Access Denied", "ListObjectsV2")

        client = Mock()
        client.get_paginator.return_value.paginate.side_effect = pages
        iterator = self.make_store(client).iter_objects("test-bucket")

        assert next(iterator) == ObjectRecord(key="a", last_modified=modified, size=3)
        with pytest.raises(ListingError, match="AccessDenied: Access Denied"):
            next(iterator)
        client.get_paginator.assert_called_once_with("list_objects_v2")

    def test_listing_without_size(self):
        """Test records without a Size field have no size."""
        modified = datetime(2024, 1, 1, tzinfo=timezone.utc)
        client = Mock()
        client.get_paginator.return_value.paginate.return_value = [
            {"Contents": [{"Key": "a", "LastModified": modified}]}
        ]

        records = list(self.make_store(client).iter_objects("test-bucket"))

        assert records == [ObjectRecord(key="a", last_modified=modified, size=None)]

    def test_delete_failure(self):
        """Test a rejected deletion raises DeletionError with key and reason."""
        client = Mock()
        client.delete_object.side_effect = client_error(
            "AccessDenied", "Access Denied", "DeleteObject"
        )

        with pytest.raises(DeletionError) as exc_info:
            self.make_store(client).delete_object("test-bucket", "locked.txt")

        assert exc_info.value.key == "locked.txt"
        assert exc_info.value.reason == "AccessDenied: Access Denied"
        client.delete_object.assert_called_once_with(
            Bucket="test-bucket", Key="locked.txt"
        )
