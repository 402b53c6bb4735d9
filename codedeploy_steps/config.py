"""Configuration and constants for CodeDeploy pipeline steps."""

from dataclasses import dataclass


@dataclass
class Config:
    """Application configuration settings."""

    # Rollout policy used for every deployment created by this tool
    deployment_config_name: str = "CodeDeployDefault.OneAtATime"

    # Revision pointer constants (artifacts are always zip bundles in S3)
    bundle_type: str = "zip"
    revision_type: str = "S3"

    # Region used when the environment does not name one
    default_region: str = "us-east-1"

    # Environment variable names read by the client factory
    env_region: str = "AWS_REGION"
    env_default_region: str = "AWS_DEFAULT_REGION"
    env_profile: str = "AWS_PROFILE"
    env_endpoint_url: str = "CODEDEPLOY_ENDPOINT_URL"
    env_dry_run: str = "CODEDEPLOY_DRY_RUN"


# Values of CODEDEPLOY_DRY_RUN that switch the factory to the in-memory client
TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})

# IAM role ARN grammar
# source: https://docs.aws.amazon.com/IAM/latest/UserGuide/reference_iam-quotas.html
IAM_ROLE_ARN_PATTERN = (
    r'arn:(aws|aws-cn|aws-us-gov):iam::[0-9]{12}:role/'
    r'([\w+=,.@/-]{1,512}/)?[\w+=,.@-]{1,64}'
)

# Global config instance
config = Config()
