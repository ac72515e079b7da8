"""Shared fixtures for integration tests against mocked S3."""

from __future__ import annotations

from collections.abc import Callable

import boto3
import pytest
from moto import mock_aws


BUCKET = "packages"


@pytest.fixture
def s3_client():
    """Create a mocked S3 client with a package bucket."""
    with mock_aws():
        client = boto3.client("s3", region_name="us-east-1")
        client.create_bucket(Bucket=BUCKET)
        yield client


@pytest.fixture
def upload_package(s3_client, package_bytes) -> Callable[..., str]:
    """Upload a valid package and return its s3:// URI.

    Usage: upload_package("System/Core.u", names=["Core"]).
    """

    def _upload(key: str, **kwargs: object) -> str:
        s3_client.put_object(
            Bucket=BUCKET,
            Key=key,
            Body=package_bytes(**kwargs),  # type: ignore[arg-type]
        )
        return f"s3://{BUCKET}/{key}"

    return _upload
