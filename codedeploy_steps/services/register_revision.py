"""RevisionRegistrar for registering S3 bundles as application revisions.

Registration does not check that the application exists beforehand;
CodeDeploy rejects unknown applications itself and that error is passed
through as a RemoteServiceError.
"""

import logging

from codedeploy_steps.models.revision import RevisionRegistration, build_revision_location
from codedeploy_steps.services.codedeploy_client import CodeDeployClientInterface
from codedeploy_steps.services.progress import ProgressSink
from codedeploy_steps.services.validation import require


logger = logging.getLogger(__name__)


class RevisionRegistrar:
    """Registers a revision stored in S3 with a CodeDeploy application."""

    def __init__(self, client: CodeDeployClientInterface, sink: ProgressSink):
        self.client = client
        self.sink = sink

    def register(self, application_name: str | None, bucket_name: str | None, key: str | None) -> str:
        """Register ``s3://{bucket_name}/{key}`` as a revision of an application.

        Args:
            application_name: Name of the CodeDeploy application
            bucket_name: S3 bucket holding the zip bundle
            key: S3 key of the zip bundle

        Returns:
            String rendering of the service response

        Raises:
            InvalidArgumentError: If a parameter is None or empty
            RemoteServiceError: If the CodeDeploy call fails
        """
        require(application_name, "applicationName")
        require(bucket_name, "bucketName")
        require(key, "key")

        revision = build_revision_location(bucket_name, key)
        self.sink.write(f"Register revision for {application_name} from revision {revision.uri}")

        registration = RevisionRegistration(application_name=application_name, revision=revision)
        result = self.client.register_application_revision(registration)
        logger.debug("Registered %s for %s", revision.uri, application_name)

        self.sink.write("Register revision done.")
        return str(result)
