"""Argument validation shared by the steps."""

from codedeploy_steps.services.errors import InvalidArgumentError


def require(value: str | None, field: str) -> str:
    """Validate that a required parameter is present and non-empty.

    Args:
        value: The parameter value
        field: Parameter name used in the error

    Returns:
        The validated value

    Raises:
        InvalidArgumentError: If the value is None or an empty string
    """
    if value is None or value == "":
        raise InvalidArgumentError(field)
    return value
