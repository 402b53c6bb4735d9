"""IAM role ARN validation and region partition lookup."""

import re
from functools import lru_cache

import botocore.session

from codedeploy_steps.config import IAM_ROLE_ARN_PATTERN
from codedeploy_steps.services.errors import UnknownRegionError


IAM_ROLE_PATTERN = re.compile(IAM_ROLE_ARN_PATTERN, re.ASCII)


@lru_cache(maxsize=1)
def region_partitions() -> dict[str, str]:
    """Map of region name to partition name.

    Built from the regions explicitly listed in botocore's bundled
    ``endpoints`` data; partition region regexes are not consulted.
    """
    loader = botocore.session.get_session().get_component("data_loader")
    endpoints = loader.load_data("endpoints")
    return {
        region: partition["partition"]
        for partition in endpoints["partitions"]
        for region in partition.get("regions", {})
    }


def is_valid_role_arn(arn) -> bool:
    """Check whether a string is a well-formed IAM role ARN.

    Matches ``arn:<partition>:iam::<12-digit account>:role/[<path>/]<name>``
    where partition is aws, aws-cn or aws-us-gov. Never raises.
    """
    if not isinstance(arn, str):
        return False
    return IAM_ROLE_PATTERN.fullmatch(arn) is not None


def partition_for_region(region: str) -> str:
    """Look up the partition owning a region.

    Args:
        region: Region identifier such as ``us-east-1`` or ``cn-north-1``

    Returns:
        Partition name, e.g. ``aws``, ``aws-cn`` or ``aws-us-gov``

    Raises:
        UnknownRegionError: If no partition lists the region
    """
    try:
        return region_partitions()[region]
    except (KeyError, TypeError):
        raise UnknownRegionError(region) from None
