"""
Test helper utilities.

Common fakes and event builders for testing.
"""

import json
from unittest.mock import MagicMock

from nodegroup_tags.aws.clients import TagClient


def create_mock_lambda_context(
    function_name="nodegroup-tags-on-event",
    request_id="test-request-123",
):
    """
    Create a mock Lambda context object with proper attributes.

    Attributes are set to real values instead of MagicMock objects so
    they serialize cleanly into log lines.
    """
    context = MagicMock()
    context.function_name = function_name
    context.aws_request_id = request_id
    context.invoked_function_arn = (
        f"arn:aws:lambda:ap-southeast-1:123456789012:function:{function_name}"
    )

    return context


def create_mock_tag_client(asg_names=("asg-123",)):
    """
    Create a MagicMock TagClient whose nodegroup lists the given ASGs.

    All calls are recorded on the mock, in order, via mock_calls.
    """
    client = MagicMock(spec=TagClient)
    client.describe_nodegroup_asgs.return_value = list(asg_names)
    return client


def resource_properties(tags=None, nodegroup="workers", cluster="prod"):
    """Build the raw ResourceProperties dict of a custom resource event."""
    return {
        "ServiceToken": "arn:aws:lambda:ap-southeast-1:123456789012:function:provider",
        "NodegroupName": nodegroup,
        "ClusterName": cluster,
        "TagsJson": json.dumps(tags if tags is not None else {}),
    }


def create_event(tags=None, **kwargs):
    return {
        "RequestType": "Create",
        "ResourceProperties": resource_properties(tags, **kwargs),
    }


def update_event(tags=None, old_tags=None, physical_resource_id="asg-123:tags", **kwargs):
    return {
        "RequestType": "Update",
        "PhysicalResourceId": physical_resource_id,
        "ResourceProperties": resource_properties(tags, **kwargs),
        "OldResourceProperties": resource_properties(old_tags, **kwargs),
    }


def delete_event(tags=None, physical_resource_id="asg-123:tags", **kwargs):
    return {
        "RequestType": "Delete",
        "PhysicalResourceId": physical_resource_id,
        "ResourceProperties": resource_properties(tags, **kwargs),
    }
