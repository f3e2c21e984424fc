"""S3 client configuration and management.

This module provides S3 client configuration and management functionality
for the scan. Credentials always come from boto3's own resolution: either a
named AWS CLI profile or the default credential chain (environment
variables, shared credentials file, SSO, instance roles).

S3-Compatible Services:
    Supports custom endpoints for services like MinIO, Ceph RGW, and other
    S3-compatible object storage providers via endpoint_url.
"""

from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError
from pydantic import BaseModel, ConfigDict, Field

from s3_tidy.core import get_logger
from s3_tidy.core.exceptions import StorageConnectionError

logger = get_logger(__name__)


class S3ClientConfig(BaseModel):
    """Configuration for S3 client connections.

    Example:
        # Default credential chain
        config = S3ClientConfig()

        # AWS profile
        config = S3ClientConfig(aws_profile="my-profile")

        # MinIO endpoint
        config = S3ClientConfig(endpoint_url="http://localhost:9000")
    """

    model_config = ConfigDict(extra="forbid")

    region_name: Optional[str] = Field(None, description="AWS region name")
    endpoint_url: Optional[str] = Field(
        None, description="Custom S3 endpoint URL for S3-compatible services"
    )
    aws_profile: Optional[str] = Field(
        None, description="AWS CLI profile name to use for credentials"
    )


class S3ClientManager:
    """Manages the S3 client connection used by a scan."""

    def __init__(self, config: S3ClientConfig):
        """Initialize S3 client manager.

        Args:
            config: S3 client configuration
        """
        self.config = config
        self._client = None
        logger.info("S3 client manager initialized", region=config.region_name)

    @property
    def client(self):
        """Get or create S3 client instance."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        """Create boto3 S3 client with the configured settings.

        Raises:
            StorageConnectionError: If the session cannot be created or no
                credentials can be resolved
        """
        kwargs = {}
        if self.config.region_name:
            kwargs["region_name"] = self.config.region_name

        # Add endpoint URL for S3-compatible services
        if self.config.endpoint_url:
            kwargs["endpoint_url"] = self.config.endpoint_url

        try:
            session = boto3.Session(profile_name=self.config.aws_profile)
            credentials = session.get_credentials()
            client = session.client("s3", **kwargs)
        except BotoCoreError as e:
            error_msg = f"Unable to load SDK config: {e}"
            logger.error(error_msg, profile=self.config.aws_profile)
            raise StorageConnectionError(error_msg) from e

        if credentials is None:
            error_msg = "Unable to load SDK config: no AWS credentials found"
            logger.error(error_msg, profile=self.config.aws_profile)
            raise StorageConnectionError(error_msg)

        if self.config.aws_profile:
            logger.info(
                "S3 client created with profile", profile=self.config.aws_profile
            )
        else:
            logger.info("S3 client created with default credential chain")

        return client
