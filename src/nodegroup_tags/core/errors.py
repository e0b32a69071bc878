"""Exceptions raised while reconciling nodegroup ASG tags."""
from typing import Optional


class NodegroupTagsError(Exception):
    """Base class for reconciliation errors."""
    pass


class DecodeError(NodegroupTagsError):
    """Exception raised for malformed custom resource events or tag JSON.

    Attributes:
        key: The offending payload key, when the error concerns a single field
        context: Caller-supplied description of the payload being decoded
    """

    def __init__(self, message: str, key: Optional[str] = None, context: Optional[str] = None):
        super().__init__(message)
        self.key = key
        self.context = context


class ResolutionError(NodegroupTagsError):
    """Exception raised when a nodegroup has no backing auto scaling group."""

    def __init__(self, cluster_name: str, nodegroup_name: str):
        super().__init__(
            f"Unable to determine ASG name for nodegroup {nodegroup_name} "
            f"in cluster {cluster_name}"
        )
        self.cluster_name = cluster_name
        self.nodegroup_name = nodegroup_name


class ConfigurationError(NodegroupTagsError):
    """Exception raised for invalid handler configuration."""
    pass


class ReconciliationFailed(Exception):
    """Opaque failure surfaced to CloudFormation.

    Carries no detail about the underlying error; that is written to the
    log stream only.
    """

    def __init__(self, message: str = "Failed"):
        super().__init__(message)
