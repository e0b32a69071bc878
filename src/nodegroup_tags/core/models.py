"""Data structures for custom resource events and reconciliation results."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

# Tag key -> tag value
TagSet = Dict[str, str]

ASG_RESOURCE_TYPE = "auto-scaling-group"


class RequestType(str, Enum):
    """CloudFormation custom resource lifecycle phases."""
    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"


@dataclass(frozen=True)
class ResourceProperties:
    """
    Properties of the Custom::NodegroupAsgTags resource.

    Attributes:
        nodegroup_name: EKS managed nodegroup name
        cluster_name: EKS cluster name
        tags_json: JSON object of tags to place on the nodegroup's ASG
    """
    nodegroup_name: str
    cluster_name: str
    tags_json: str


@dataclass(frozen=True)
class CreateEvent:
    resource_properties: ResourceProperties
    request_type: RequestType = field(default=RequestType.CREATE, init=False)


@dataclass(frozen=True)
class UpdateEvent:
    physical_resource_id: str
    resource_properties: ResourceProperties
    old_resource_properties: ResourceProperties
    request_type: RequestType = field(default=RequestType.UPDATE, init=False)


@dataclass(frozen=True)
class DeleteEvent:
    physical_resource_id: str
    resource_properties: ResourceProperties
    request_type: RequestType = field(default=RequestType.DELETE, init=False)


LifecycleEvent = Union[CreateEvent, UpdateEvent, DeleteEvent]


@dataclass(frozen=True)
class TagOperation:
    """
    A single tag mutation against an auto scaling group.

    Removal operations carry only a key; apply operations carry a value
    and propagate_at_launch.
    """
    key: str
    value: Optional[str] = None
    propagate_at_launch: Optional[bool] = None

    def to_api(self, asg_name: str) -> Dict[str, Any]:
        """Render as an element of the AutoScaling ``Tags`` request list."""
        tag: Dict[str, Any] = {"Key": self.key}
        if self.value is not None:
            tag["Value"] = self.value
        if self.propagate_at_launch is not None:
            tag["PropagateAtLaunch"] = self.propagate_at_launch
        tag["ResourceId"] = asg_name
        tag["ResourceType"] = ASG_RESOURCE_TYPE
        return tag


@dataclass(frozen=True)
class ReconciliationResult:
    """
    Outcome of a successful reconciliation.

    Attributes:
        physical_resource_id: "<asg-name>:tags" for create/update, the
            incoming id for delete
        data: Attributes exposed to Fn::GetAtt (always empty)
    """
    physical_resource_id: str
    data: Dict[str, Any] = field(default_factory=dict)

    def to_response(self) -> Dict[str, Any]:
        """Render as the provider framework's onEvent response."""
        return {
            "PhysicalResourceId": self.physical_resource_id,
            "Data": dict(self.data),
        }
