"""Pytest configuration and fixtures."""

import hashlib

import boto3
import pytest
from moto import mock_aws

BUCKET = "s3etag-test-bucket"

MB = 1024 * 1024


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep the user's environment and config files out of tests."""
    monkeypatch.delenv("S3ETAG_THRESHOLD", raising=False)
    monkeypatch.delenv("S3ETAG_CHUNKSIZE", raising=False)
    monkeypatch.setattr("s3etag.config.DEFAULT_CONFIG_PATHS", [])


@pytest.fixture
def make_file(tmp_path):
    """Factory writing a file with the given content under tmp_path."""

    def _make(name: str, data: bytes):
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _make


@pytest.fixture
def mock_s3():
    """Provide a mocked S3 environment."""
    with mock_aws():
        client = boto3.client("s3", region_name="us-east-1")
        client.create_bucket(Bucket=BUCKET)
        yield client


def expected_multipart_etag(data: bytes, chunk_size: int) -> str:
    """Independent reference: MD5 of concatenated part MD5s, plus part count."""
    parts = [data[i : i + chunk_size] for i in range(0, len(data), chunk_size)]
    digests = b"".join(hashlib.md5(part).digest() for part in parts)
    return f"{hashlib.md5(digests).hexdigest()}-{len(parts)}"
