"""Tests for DeploymentCreator.

Covers argument checks, application / deployment group verification before
any mutating call, and the deployment id returned on success.
"""

from unittest.mock import MagicMock

import pytest
from hypothesis import given, settings, strategies as st

from codedeploy_steps.models.revision import BundleType, RevisionType
from codedeploy_steps.services.codedeploy_client import (
    CodeDeployClientInterface,
    InMemoryCodeDeployClient,
)
from codedeploy_steps.services.create_deployment import DeploymentCreator
from codedeploy_steps.services.errors import (
    InvalidArgumentError,
    RemoteServiceError,
    TargetKind,
    ValidationError,
)
from codedeploy_steps.services.progress import CollectingProgressSink


FIELDS = ["applicationName", "deploymentGroupName", "bucketName", "key"]

VALID_ARGS = {
    "applicationName": "my-app",
    "deploymentGroupName": "my-group",
    "bucketName": "my-bucket",
    "key": "build.zip",
}


def make_client(applications=None, groups=None, deployment_id="d-123"):
    """Build a mock CodeDeploy client."""
    client = MagicMock(spec=CodeDeployClientInterface)
    client.list_applications.return_value = set(applications or [])
    client.list_deployment_groups.return_value = set(groups or [])
    client.create_deployment.return_value = {"deploymentId": deployment_id}
    return client


def create(client, sink, args=None):
    args = args or VALID_ARGS
    return DeploymentCreator(client, sink).create_deployment(
        args["applicationName"], args["deploymentGroupName"], args["bucketName"], args["key"]
    )


class TestCreateDeploymentArguments:
    """Missing or empty parameters fail before any CodeDeploy call."""

    @pytest.mark.parametrize("field", FIELDS)
    @pytest.mark.parametrize("bad_value", [None, ""])
    def test_missing_parameter_names_field(self, field, bad_value):
        client = make_client(["my-app"], ["my-group"])
        sink = CollectingProgressSink()
        args = dict(VALID_ARGS, **{field: bad_value})

        with pytest.raises(InvalidArgumentError) as exc_info:
            create(client, sink, args)

        assert exc_info.value.field == field
        assert client.mock_calls == []
        assert sink.lines == []

    def test_first_missing_parameter_is_reported(self):
        client = make_client()
        with pytest.raises(InvalidArgumentError) as exc_info:
            DeploymentCreator(client, CollectingProgressSink()).create_deployment(None, "", None, "")

        assert exc_info.value.field == "applicationName"


class TestVerifyApplication:
    """Application and deployment group must exist before a deployment is created."""

    def test_missing_application(self):
        client = make_client(applications=["other-app"], groups=["my-group"])
        sink = CollectingProgressSink()

        with pytest.raises(ValidationError) as exc_info:
            create(client, sink)

        assert exc_info.value.kind is TargetKind.APPLICATION
        assert exc_info.value.name == "my-app"
        assert "Cannot find application named 'my-app'" in str(exc_info.value)
        client.list_deployment_groups.assert_not_called()
        client.create_deployment.assert_not_called()
        assert sink.lines == []

    def test_missing_deployment_group(self):
        client = make_client(applications=["my-app"], groups=["other-group"])
        sink = CollectingProgressSink()

        with pytest.raises(ValidationError) as exc_info:
            create(client, sink)

        assert exc_info.value.kind is TargetKind.DEPLOYMENT_GROUP
        assert exc_info.value.name == "my-group"
        client.list_deployment_groups.assert_called_once_with("my-app")
        client.create_deployment.assert_not_called()
        assert sink.lines == []

    def test_validation_error_is_distinct_from_remote_error(self):
        client = make_client(applications=[])

        with pytest.raises(ValueError) as exc_info:
            create(client, CollectingProgressSink())

        assert not isinstance(exc_info.value, RemoteServiceError)

    def test_listing_failure_propagates_before_create(self):
        client = make_client()
        client.list_applications.side_effect = RemoteServiceError("ListApplications")

        with pytest.raises(RemoteServiceError):
            create(client, CollectingProgressSink())

        client.create_deployment.assert_not_called()

    @given(
        applications=st.sets(st.text(min_size=1, max_size=20), max_size=10),
        app=st.text(min_size=1, max_size=20),
    )
    @settings(max_examples=100)
    def test_deployment_only_created_for_known_application(self, applications, app):
        """For any inventory, CreateDeployment is called only if the application is listed."""
        client = make_client(applications=applications, groups=["my-group"])
        args = dict(VALID_ARGS, applicationName=app)

        try:
            create(client, CollectingProgressSink(), args)
        except ValidationError:
            assert app not in applications
            client.create_deployment.assert_not_called()
        else:
            assert app in applications
            client.create_deployment.assert_called_once()


class TestCreateDeployment:
    """Tests for the happy path."""

    def test_returns_deployment_id(self):
        client = make_client(["my-app"], ["my-group"], deployment_id="d-123")
        sink = CollectingProgressSink()

        deployment_id = create(client, sink)

        assert deployment_id == "d-123"
        request = client.create_deployment.call_args[0][0]
        assert request.application_name == "my-app"
        assert request.deployment_group_name == "my-group"
        assert request.deployment_config_name == "CodeDeployDefault.OneAtATime"
        assert request.revision.bucket == "my-bucket"
        assert request.revision.key == "build.zip"
        assert request.revision.bundle_type is BundleType.ZIP
        assert request.revision.revision_type is RevisionType.S3

    def test_writes_exactly_two_progress_lines(self):
        client = make_client(["my-app"], ["my-group"])
        sink = CollectingProgressSink()

        create(client, sink)

        assert sink.lines == [
            "Create deployment of my-app to my-group from revision s3://my-bucket/build.zip",
            "Create deployment submitted.",
        ]

    def test_verification_precedes_create(self):
        client = make_client(["my-app"], ["my-group"])

        create(client, CollectingProgressSink())

        names = [call[0] for call in client.mock_calls]
        assert names == ["list_applications", "list_deployment_groups", "create_deployment"]

    def test_repeated_calls_are_not_deduplicated(self):
        client = InMemoryCodeDeployClient({"my-app": {"my-group"}})
        creator = DeploymentCreator(client, CollectingProgressSink())

        first = creator.create_deployment("my-app", "my-group", "my-bucket", "build.zip")
        second = creator.create_deployment("my-app", "my-group", "my-bucket", "build.zip")

        assert first != second
        assert first.startswith("d-") and second.startswith("d-")
        assert client.call_count("create_deployment") == 2
        assert set(client.deployments) == {first, second}

    def test_create_failure_propagates(self):
        client = make_client(["my-app"], ["my-group"])
        client.create_deployment.side_effect = RemoteServiceError("CreateDeployment")
        sink = CollectingProgressSink()

        with pytest.raises(RemoteServiceError):
            create(client, sink)

        assert sink.lines == [
            "Create deployment of my-app to my-group from revision s3://my-bucket/build.zip"
        ]

    def test_response_without_deployment_id(self):
        client = make_client(["my-app"], ["my-group"])
        client.create_deployment.return_value = {}

        with pytest.raises(RemoteServiceError):
            create(client, CollectingProgressSink())

    def test_rollout_policy_is_fixed(self):
        client = make_client(["my-app"], ["my-group"])

        with pytest.raises(TypeError):
            DeploymentCreator(
                client, CollectingProgressSink(), deployment_config_name="CodeDeployDefault.AllAtOnce"
            )

        create(client, CollectingProgressSink())
        request = client.create_deployment.call_args[0][0]
        assert request.to_request()["deploymentConfigName"] == "CodeDeployDefault.OneAtATime"
