"""
Unit tests for app.py (Lambda handler entry point).

The TagClient is injected as a MagicMock, except where the default boto3
wiring itself is under test.
"""

import pytest
from unittest.mock import patch, MagicMock

from botocore.exceptions import ClientError

from nodegroup_tags.app import on_event
from nodegroup_tags.core.errors import DecodeError, ReconciliationFailed, ResolutionError
from tests.helpers import (
    create_event,
    create_mock_lambda_context,
    create_mock_tag_client,
    delete_event,
    update_event,
)


class TestOnEvent:
    """Tests for the provider onEvent handler"""

    def test_create_returns_provider_response(self):
        client = create_mock_tag_client(["asg-123"])

        response = on_event(create_event({"a": "1"}), create_mock_lambda_context(), client=client)

        assert response == {"PhysicalResourceId": "asg-123:tags", "Data": {}}

    def test_update_returns_provider_response(self):
        client = create_mock_tag_client(["asg-456"])

        response = on_event(update_event({"a": "1"}, {"b": "2"}), create_mock_lambda_context(), client=client)

        assert response == {"PhysicalResourceId": "asg-456:tags", "Data": {}}
        client.create_or_update_tags.assert_called_once()
        client.delete_tags.assert_called_once()

    def test_delete_echoes_physical_resource_id(self):
        client = create_mock_tag_client(["asg-123"])

        response = on_event(
            delete_event({"a": "1"}, physical_resource_id="original-id"),
            create_mock_lambda_context(),
            client=client
        )

        assert response == {"PhysicalResourceId": "original-id", "Data": {}}

    def test_context_is_optional(self):
        client = create_mock_tag_client(["asg-123"])

        response = on_event(create_event({"a": "1"}), client=client)

        assert response["PhysicalResourceId"] == "asg-123:tags"

    @patch('nodegroup_tags.app.AwsTagClient')
    def test_builds_aws_client_from_environment(self, mock_client_class, monkeypatch):
        monkeypatch.setenv('AWS_REGION', 'eu-west-1')
        mock_client_class.return_value = create_mock_tag_client(["asg-123"])

        response = on_event(create_event({"a": "1"}), create_mock_lambda_context())

        assert response["PhysicalResourceId"] == "asg-123:tags"
        mock_client_class.assert_called_once_with(region='eu-west-1', endpoint_url=None)


class TestOnEventFailures:
    """Every failure surfaces as the same opaque ReconciliationFailed"""

    @pytest.fixture
    def mock_log_error(self):
        with patch('nodegroup_tags.app.log_error') as mock:
            yield mock

    def _assert_opaque_failure(self, event, client, mock_log_error):
        with pytest.raises(ReconciliationFailed) as exc_info:
            on_event(event, create_mock_lambda_context(request_id="req-42"), client=client)

        assert str(exc_info.value) == "Failed"
        assert exc_info.value.__cause__ is None
        assert exc_info.value.__suppress_context__ is True

        mock_log_error.assert_called_once()
        args, kwargs = mock_log_error.call_args
        assert args[2] == "Unhandled error, failing"
        assert kwargs == {"request_id": "req-42"}
        return args[1]

    def test_decode_failure(self, mock_log_error):
        client = create_mock_tag_client()

        error = self._assert_opaque_failure({"RequestType": "Create"}, client, mock_log_error)

        assert isinstance(error, DecodeError)
        assert "no ResourceProperties set" in str(error)
        assert client.mock_calls == []

    def test_empty_nodegroup_name_never_reaches_aws(self, mock_log_error):
        client = create_mock_tag_client()

        error = self._assert_opaque_failure(create_event({"a": "1"}, nodegroup=""), client, mock_log_error)

        assert isinstance(error, DecodeError)
        assert client.mock_calls == []

    def test_unknown_request_type(self, mock_log_error):
        event = create_event()
        event["RequestType"] = "Rollback"

        error = self._assert_opaque_failure(event, create_mock_tag_client(), mock_log_error)

        assert isinstance(error, DecodeError)

    def test_resolution_failure(self, mock_log_error):
        client = create_mock_tag_client([])

        error = self._assert_opaque_failure(create_event({"a": "1"}), client, mock_log_error)

        assert isinstance(error, ResolutionError)
        client.create_or_update_tags.assert_not_called()

    def test_transport_failure(self, mock_log_error):
        client = create_mock_tag_client()
        client.create_or_update_tags.side_effect = ClientError(
            {"Error": {"Code": "Throttling", "Message": "Rate exceeded"}},
            "CreateOrUpdateTags"
        )

        error = self._assert_opaque_failure(create_event({"a": "1"}), client, mock_log_error)

        assert isinstance(error, ClientError)
        assert error.response["Error"]["Code"] == "Throttling"

    def test_unexpected_failure(self, mock_log_error):
        client = MagicMock()
        client.describe_nodegroup_asgs.side_effect = KeyError("nodegroup")

        error = self._assert_opaque_failure(create_event({"a": "1"}), client, mock_log_error)

        assert isinstance(error, KeyError)

    def test_configuration_failure(self, mock_log_error, monkeypatch):
        monkeypatch.setenv('AWS_ENDPOINT_URL', 'not-a-url')

        with pytest.raises(ReconciliationFailed):
            on_event(create_event({"a": "1"}), create_mock_lambda_context())

        mock_log_error.assert_called_once()

    def test_failure_logs_original_error_record(self):
        client = create_mock_tag_client([])

        with patch('nodegroup_tags.app.logger') as mock_logger:
            with pytest.raises(ReconciliationFailed):
                on_event(create_event({"a": "1"}), create_mock_lambda_context(request_id="req-7"), client=client)

        message = mock_logger.error.call_args.args[0]
        extra = mock_logger.error.call_args.kwargs["extra"]
        assert message == "Unhandled error, failing"
        assert extra["request_id"] == "req-7"
        assert extra["error"]["name"] == "ResolutionError"
        assert extra["error"]["message"] == "Unable to determine ASG name for nodegroup workers in cluster prod"
        assert any("locate_asg" in line for line in extra["error"]["stack"])
