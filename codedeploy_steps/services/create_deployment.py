"""DeploymentCreator for CodeDeploy deployments of S3 revisions.

This module provides the DeploymentCreator class which checks that the
target application and deployment group exist and then creates a
deployment of a zip bundle stored in S3.
"""

import logging

from codedeploy_steps.config import config
from codedeploy_steps.models.revision import DeploymentRequest, build_revision_location
from codedeploy_steps.services.codedeploy_client import CodeDeployClientInterface
from codedeploy_steps.services.errors import RemoteServiceError, TargetKind, ValidationError
from codedeploy_steps.services.progress import ProgressSink
from codedeploy_steps.services.validation import require


logger = logging.getLogger(__name__)


class DeploymentCreator:
    """Creates CodeDeploy deployments.

    Existence of the application and deployment group is always verified
    before the deployment is created, so a ValidationError guarantees that
    nothing was deployed. Identical calls are not deduplicated: each one
    creates a new deployment.
    """

    def __init__(self, client: CodeDeployClientInterface, sink: ProgressSink):
        self.client = client
        self.sink = sink

    def verify_application(self, application_name: str, deployment_group_name: str) -> None:
        """Check that an application and one of its deployment groups exist.

        Args:
            application_name: Name of the CodeDeploy application
            deployment_group_name: Name of the deployment group

        Raises:
            ValidationError: If the application or deployment group is missing
            RemoteServiceError: If listing fails
        """
        if application_name not in self.client.list_applications():
            raise ValidationError(TargetKind.APPLICATION, application_name)

        if deployment_group_name not in self.client.list_deployment_groups(application_name):
            raise ValidationError(TargetKind.DEPLOYMENT_GROUP, deployment_group_name)

    def create_deployment(
        self,
        application_name: str | None,
        deployment_group_name: str | None,
        bucket_name: str | None,
        key: str | None,
    ) -> str:
        """Deploy ``s3://{bucket_name}/{key}`` to a deployment group.

        Args:
            application_name: Name of the CodeDeploy application
            deployment_group_name: Name of the target deployment group
            bucket_name: S3 bucket holding the zip bundle
            key: S3 key of the zip bundle

        Returns:
            The id of the created deployment

        Raises:
            InvalidArgumentError: If a parameter is None or empty
            ValidationError: If the application or deployment group is missing
            RemoteServiceError: If a CodeDeploy call fails
        """
        require(application_name, "applicationName")
        require(deployment_group_name, "deploymentGroupName")
        require(bucket_name, "bucketName")
        require(key, "key")

        self.verify_application(application_name, deployment_group_name)

        revision = build_revision_location(bucket_name, key)
        self.sink.write(
            f"Create deployment of {application_name} to {deployment_group_name} "
            f"from revision {revision.uri}"
        )

        request = DeploymentRequest(
            application_name=application_name,
            deployment_group_name=deployment_group_name,
            revision=revision,
            deployment_config_name=config.deployment_config_name,
        )
        response = self.client.create_deployment(request)
        deployment_id = response.get("deploymentId")
        if not deployment_id:
            raise RemoteServiceError("CreateDeployment", ValueError("response has no deploymentId"))
        deployment_id = str(deployment_id)
        logger.info(
            "Created deployment %s of %s to %s", deployment_id, application_name, deployment_group_name
        )

        self.sink.write("Create deployment submitted.")
        return deployment_id
