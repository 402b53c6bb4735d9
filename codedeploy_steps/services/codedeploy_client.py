"""CodeDeploy client layer.

This module provides:
- Interface for the four CodeDeploy operations the steps rely on
- A boto3-backed implementation
- An in-memory implementation used for dry runs
- A factory resolving region, profile and endpoint from the environment
"""

import logging
import os
import uuid
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from codedeploy_steps.config import TRUTHY_VALUES, config
from codedeploy_steps.models.revision import DeploymentRequest, RevisionRegistration
from codedeploy_steps.services.errors import RemoteServiceError


logger = logging.getLogger(__name__)


class CodeDeployClientInterface(ABC):
    """Abstract interface for the CodeDeploy operations used by the steps."""

    @abstractmethod
    def list_applications(self) -> set[str]:
        """Return the names of all applications."""
        pass

    @abstractmethod
    def list_deployment_groups(self, application_name: str) -> set[str]:
        """Return the names of all deployment groups under an application.

        Args:
            application_name: The application to list groups for
        """
        pass

    @abstractmethod
    def register_application_revision(self, registration: RevisionRegistration) -> dict:
        """Register a revision with an application.

        Returns:
            The raw service response
        """
        pass

    @abstractmethod
    def create_deployment(self, request: DeploymentRequest) -> dict:
        """Create a deployment.

        Returns:
            The raw service response, containing ``deploymentId``
        """
        pass


class CodeDeployClient(CodeDeployClientInterface):
    """boto3-backed CodeDeploy client.

    Listing operations follow ``nextToken`` through boto3 paginators so
    callers always see the full inventory. botocore errors are re-raised
    as ``RemoteServiceError``.
    """

    def __init__(
        self,
        region: Optional[str] = None,
        profile: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        client=None,
    ):
        """Initialize CodeDeploy client.

        Args:
            region: AWS region. Defaults to the configured default region.
            profile: Optional named AWS profile for credentials.
            endpoint_url: Optional endpoint override (e.g. a local emulator).
            client: Optional pre-built boto3 codedeploy client.
        """
        self.region = region or config.default_region
        self.profile = profile
        self.endpoint_url = endpoint_url
        self._client = client

    @property
    def client(self):
        """Lazy initialization of boto3 CodeDeploy client."""
        if self._client is None:
            session = boto3.session.Session(
                profile_name=self.profile,
                region_name=self.region,
            )
            self._client = session.client("codedeploy", endpoint_url=self.endpoint_url)
        return self._client

    def list_applications(self) -> set[str]:
        try:
            paginator = self.client.get_paginator("list_applications")
            names: set[str] = set()
            for page in paginator.paginate():
                names.update(page.get("applications", []))
        except (ClientError, BotoCoreError) as e:
            raise RemoteServiceError("ListApplications", e) from e
        logger.debug("Found %d CodeDeploy applications", len(names))
        return names

    def list_deployment_groups(self, application_name: str) -> set[str]:
        try:
            paginator = self.client.get_paginator("list_deployment_groups")
            names: set[str] = set()
            for page in paginator.paginate(applicationName=application_name):
                names.update(page.get("deploymentGroups", []))
        except (ClientError, BotoCoreError) as e:
            raise RemoteServiceError("ListDeploymentGroups", e) from e
        logger.debug(
            "Found %d deployment groups for %s", len(names), application_name
        )
        return names

    def register_application_revision(self, registration: RevisionRegistration) -> dict:
        try:
            return self.client.register_application_revision(**registration.to_request())
        except (ClientError, BotoCoreError) as e:
            raise RemoteServiceError("RegisterApplicationRevision", e) from e

    def create_deployment(self, request: DeploymentRequest) -> dict:
        try:
            return self.client.create_deployment(**request.to_request())
        except (ClientError, BotoCoreError) as e:
            raise RemoteServiceError("CreateDeployment", e) from e


class InMemoryCodeDeployClient(CodeDeployClientInterface):
    """In-memory CodeDeploy client.

    Holds a map of application names to deployment group names and records
    every call in ``calls``. Unknown applications or groups fail the way the
    service does, with a ``RemoteServiceError`` wrapping a ``ClientError``.
    Every ``create_deployment`` call yields a new deployment id.
    """

    def __init__(self, applications: Optional[Mapping[str, set[str]]] = None):
        """Initialize in-memory client.

        Args:
            applications: Application name to deployment group names
        """
        self.applications: dict[str, set[str]] = {
            name: set(groups) for name, groups in (applications or {}).items()
        }
        self.revisions: dict[str, list[dict]] = {}
        self.deployments: dict[str, DeploymentRequest] = {}
        self.calls: list[tuple] = []

    def list_applications(self) -> set[str]:
        self.calls.append(("list_applications",))
        return set(self.applications)

    def list_deployment_groups(self, application_name: str) -> set[str]:
        self.calls.append(("list_deployment_groups", application_name))
        if application_name not in self.applications:
            raise self._missing("ListDeploymentGroups", "ApplicationDoesNotExistException",
                                f"No application found for name: {application_name}")
        return set(self.applications[application_name])

    def register_application_revision(self, registration: RevisionRegistration) -> dict:
        self.calls.append(("register_application_revision", registration))
        if registration.application_name not in self.applications:
            raise self._missing("RegisterApplicationRevision", "ApplicationDoesNotExistException",
                                f"No application found for name: {registration.application_name}")
        self.revisions.setdefault(registration.application_name, []).append(
            registration.revision.to_request()
        )
        return {"ResponseMetadata": self._metadata()}

    def create_deployment(self, request: DeploymentRequest) -> dict:
        self.calls.append(("create_deployment", request))
        groups = self.applications.get(request.application_name)
        if groups is None:
            raise self._missing("CreateDeployment", "ApplicationDoesNotExistException",
                                f"No application found for name: {request.application_name}")
        if request.deployment_group_name not in groups:
            raise self._missing("CreateDeployment", "DeploymentGroupDoesNotExistException",
                                f"No Deployment Group found for name: {request.deployment_group_name}")
        deployment_id = f"d-{uuid.uuid4().hex[:9].upper()}"
        self.deployments[deployment_id] = request
        return {"deploymentId": deployment_id, "ResponseMetadata": self._metadata()}

    def call_count(self, operation: str) -> int:
        """Number of recorded calls to an operation."""
        return sum(1 for call in self.calls if call[0] == operation)

    @staticmethod
    def _metadata() -> dict:
        return {"RequestId": str(uuid.uuid4()), "HTTPStatusCode": 200}

    @staticmethod
    def _missing(operation: str, code: str, message: str) -> RemoteServiceError:
        error = ClientError({"Error": {"Code": code, "Message": message}}, operation)
        return RemoteServiceError(operation, error)


def get_codedeploy_client(env: Optional[Mapping[str, str]] = None) -> CodeDeployClientInterface:
    """Factory function to get a CodeDeploy client for an environment.

    Reads AWS_REGION (falling back to AWS_DEFAULT_REGION and then the
    configured default), AWS_PROFILE and CODEDEPLOY_ENDPOINT_URL. When
    CODEDEPLOY_DRY_RUN is set to a truthy value an empty
    InMemoryCodeDeployClient is returned instead.

    Args:
        env: Environment mapping. Defaults to ``os.environ``.

    Returns:
        CodeDeployClientInterface implementation
    """
    env = os.environ if env is None else env

    if env.get(config.env_dry_run, "").strip().lower() in TRUTHY_VALUES:
        logger.info("CodeDeploy dry run enabled, using in-memory client")
        return InMemoryCodeDeployClient()

    region = (
        env.get(config.env_region)
        or env.get(config.env_default_region)
        or config.default_region
    )
    return CodeDeployClient(
        region=region,
        profile=env.get(config.env_profile) or None,
        endpoint_url=env.get(config.env_endpoint_url) or None,
    )
