"""Test configuration and fixtures for s3-tidy."""

from datetime import datetime, timedelta, timezone

import pytest

from s3_tidy.core.exceptions import DeletionError, ListingError
from s3_tidy.objectstorage.store import ObjectRecord

GIB = 1024**3

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeObjectStore:
    """In-memory ObjectStore that records every deletion attempt."""

    def __init__(self, pages, failing_keys=(), fail_on_page=None):
        self.pages = pages
        self.failing_keys = set(failing_keys)
        self.fail_on_page = fail_on_page
        self.delete_calls = []
        self.deleted = []

    def iter_objects(self, bucket):
        for index, page in enumerate(self.pages):
            if index == self.fail_on_page:
                raise ListingError("Failed to list objects: AccessDenied")
            yield from page

    def delete_object(self, bucket, key):
        self.delete_calls.append(key)
        if key in self.failing_keys:
            raise DeletionError(key, "AccessDenied: Access Denied")
        self.deleted.append(key)


class EchoRecorder:
    """Collects report lines the way typer.echo would print them."""

    def __init__(self):
        self.lines = []
        self.errors = []

    def __call__(self, message="", err=False):
        if err:
            self.errors.append(message)
        else:
            self.lines.append(message)

    @property
    def text(self):
        return "\n".join(self.lines)


def make_record(key, age_days, size=GIB):
    return ObjectRecord(
        key=key, last_modified=NOW - timedelta(days=age_days), size=size
    )


@pytest.fixture
def echo():
    """Recorder for scan output."""
    return EchoRecorder()


@pytest.fixture
def example_store():
    """A is 40 days old (1 GiB), B is 5 days old (2 GiB)."""
    return FakeObjectStore(
        [[make_record("A", 40, GIB), make_record("B", 5, 2 * GIB)]]
    )


@pytest.fixture
def aws_credentials(monkeypatch):
    """Mocked AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
