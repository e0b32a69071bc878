"""
AWS Lambda handler for the nodegroup ASG tags custom resource.

This module is the onEvent entry point used by the CloudFormation custom
resource provider. It decodes the event, reconciles tags onto the
nodegroup's auto scaling group and returns the provider response.
"""

from typing import Any, Dict, Optional

from .aws.clients import AwsTagClient, TagClient
from .core.codec import decode_event
from .core.config import get_config
from .core.errors import ReconciliationFailed
from .core.reconciler import Reconciler
from .utils.logger import log_error, setup_logger


# Module logger
logger = setup_logger(__name__)


def on_event(event: Any, context: Any = None, client: Optional[TagClient] = None) -> Dict[str, Any]:
    """
    Lambda handler function for the custom resource provider.

    Args:
        event: Custom resource event containing:
            - RequestType: "Create", "Update" or "Delete"
            - PhysicalResourceId: required for Update and Delete
            - ResourceProperties: NodegroupName, ClusterName, TagsJson
            - OldResourceProperties: required for Update
        context: Lambda context object
        client: TagClient to use instead of building one from the environment

    Returns:
        Dictionary with:
            - PhysicalResourceId: "<asg-name>:tags", or the incoming id on Delete
            - Data: empty dict

    Raises:
        ReconciliationFailed: On any error. Details are logged, not raised.

    Example event:
        {
            "RequestType": "Create",
            "ResourceProperties": {
                "NodegroupName": "workers",
                "ClusterName": "prod",
                "TagsJson": "{\"k8s.io/cluster-autoscaler/node-template/label/role\": \"worker\"}"
            }
        }

    Example response:
        {
            "PhysicalResourceId": "eks-workers-1234abcd:tags",
            "Data": {}
        }
    """
    request_id = getattr(context, 'aws_request_id', 'local-test')

    try:
        logger.info("Handling event", extra={"event": event, "request_id": request_id})

        if client is None:
            config = get_config()
            client = AwsTagClient(region=config.region, endpoint_url=config.endpoint_url)

        result = Reconciler(client).handle(decode_event(event))

        logger.info(
            "Reconciliation completed",
            extra={
                "physical_resource_id": result.physical_resource_id,
                "request_id": request_id
            }
        )

        return result.to_response()

    except Exception as e:
        log_error(logger, e, "Unhandled error, failing", request_id=request_id)
        raise ReconciliationFailed() from None
