"""
Clients for the EKS and AutoScaling calls made during reconciliation.

Defines the interface the reconciler depends on and its boto3
implementation. Tests substitute their own TagClient.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import boto3

from ..core.models import TagOperation
from ..utils.logger import setup_logger


# Module logger
logger = setup_logger(__name__)


class TagClient(ABC):
    """
    Abstract client for the three downstream calls.

    Subclasses must implement:
        - describe_nodegroup_asgs(): List ASG names backing a nodegroup
        - create_or_update_tags(): Apply tags to an ASG
        - delete_tags(): Remove tags from an ASG

    Errors from the underlying service are raised unchanged.
    """

    @abstractmethod
    def describe_nodegroup_asgs(self, cluster_name: str, nodegroup_name: str) -> List[Optional[str]]:
        """
        Return the names of the auto scaling groups backing a nodegroup.

        Returns:
            ASG names in the order EKS reports them; empty if none are listed
        """
        raise NotImplementedError

    @abstractmethod
    def create_or_update_tags(self, asg_name: str, operations: List[TagOperation]) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_tags(self, asg_name: str, operations: List[TagOperation]) -> None:
        raise NotImplementedError


class AwsTagClient(TagClient):
    """
    boto3-backed TagClient.

    Uses eks:DescribeNodegroup, autoscaling:CreateOrUpdateTags and
    autoscaling:DeleteTags.
    """

    def __init__(
        self,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        eks_client: Any = None,
        autoscaling_client: Any = None,
    ):
        """
        Initialize the AWS clients.

        Args:
            region: AWS region; boto3's default resolution applies if None
            endpoint_url: Optional endpoint override (e.g. LocalStack)
            eks_client: Pre-built EKS client, mainly for tests
            autoscaling_client: Pre-built AutoScaling client, mainly for tests
        """
        client_kwargs: Dict[str, Any] = {}
        if region:
            client_kwargs['region_name'] = region
        if endpoint_url:
            client_kwargs['endpoint_url'] = endpoint_url

        self.eks_client = eks_client or boto3.client('eks', **client_kwargs)
        self.autoscaling_client = autoscaling_client or boto3.client('autoscaling', **client_kwargs)

    def describe_nodegroup_asgs(self, cluster_name: str, nodegroup_name: str) -> List[Optional[str]]:
        response = self.eks_client.describe_nodegroup(
            clusterName=cluster_name,
            nodegroupName=nodegroup_name
        )

        asgs = (
            response.get('nodegroup', {})
            .get('resources', {})
            .get('autoScalingGroups', [])
        )

        logger.debug(
            "Described nodegroup",
            extra={
                "cluster": cluster_name,
                "nodegroup": nodegroup_name,
                "auto_scaling_groups": asgs
            }
        )

        return [asg.get('name') for asg in asgs]

    def create_or_update_tags(self, asg_name: str, operations: List[TagOperation]) -> None:
        self.autoscaling_client.create_or_update_tags(
            Tags=[op.to_api(asg_name) for op in operations]
        )

    def delete_tags(self, asg_name: str, operations: List[TagOperation]) -> None:
        self.autoscaling_client.delete_tags(
            Tags=[op.to_api(asg_name) for op in operations]
        )
