"""CodeDeploy revision and request data models.

This module provides immutable value objects describing where a revision
lives in S3 and the requests built around it.
"""

from dataclasses import dataclass, field
from enum import Enum

from codedeploy_steps.config import config


class BundleType(Enum):
    """Archive format of a revision bundle."""
    ZIP = "zip"


class RevisionType(Enum):
    """Storage backend holding a revision."""
    S3 = "S3"


@dataclass(frozen=True)
class RevisionLocation:
    """Pointer to an application revision stored in S3.

    Bundle type and revision type are fixed; a location is fully
    determined by its bucket and key.

    Attributes:
        bucket: S3 bucket holding the bundle
        key: S3 object key of the bundle
        bundle_type: Archive format (always zip)
        revision_type: Storage backend (always S3)
    """
    bucket: str
    key: str
    bundle_type: BundleType = field(default=BundleType(config.bundle_type), init=False)
    revision_type: RevisionType = field(default=RevisionType(config.revision_type), init=False)

    @property
    def uri(self) -> str:
        """S3 URI in format: s3://{bucket}/{key}"""
        return f"s3://{self.bucket}/{self.key}"

    def to_request(self) -> dict:
        """Convert to the boto3 ``revision`` parameter format."""
        return {
            "revisionType": self.revision_type.value,
            "s3Location": {
                "bucket": self.bucket,
                "key": self.key,
                "bundleType": self.bundle_type.value,
            },
        }


def build_revision_location(bucket: str, key: str) -> RevisionLocation:
    """Build the revision pointer for a zip bundle in S3.

    Args:
        bucket: S3 bucket name
        key: S3 object key

    Returns:
        RevisionLocation with bundle type zip and revision type S3
    """
    return RevisionLocation(bucket=bucket, key=key)


@dataclass(frozen=True)
class RevisionRegistration:
    """Request to register a revision with an application."""
    application_name: str
    revision: RevisionLocation

    def to_request(self) -> dict:
        """Keyword arguments for ``register_application_revision``."""
        return {
            "applicationName": self.application_name,
            "revision": self.revision.to_request(),
        }


@dataclass(frozen=True)
class DeploymentRequest:
    """Request to deploy a revision to a deployment group.

    Attributes:
        application_name: Name of an existing CodeDeploy application
        deployment_group_name: Name of a deployment group under the application
        revision: Location of the revision to deploy
        deployment_config_name: Rollout policy (one host at a time by default)
    """
    application_name: str
    deployment_group_name: str
    revision: RevisionLocation
    deployment_config_name: str = config.deployment_config_name

    def to_request(self) -> dict:
        """Keyword arguments for ``create_deployment``."""
        return {
            "applicationName": self.application_name,
            "deploymentGroupName": self.deployment_group_name,
            "deploymentConfigName": self.deployment_config_name,
            "revision": self.revision.to_request(),
        }
