"""Resolution of an EKS managed nodegroup to its backing auto scaling group."""
from .errors import ResolutionError
from ..aws.clients import TagClient


def locate_asg(client: TagClient, cluster_name: str, nodegroup_name: str) -> str:
    """
    Find the name of the auto scaling group backing a managed nodegroup.

    Makes a single DescribeNodegroup call and takes the first ASG listed.
    Nodegroups report no ASG while being created from some launch
    templates or after deletion; that is not retried here.

    Args:
        client: Client for the EKS and AutoScaling calls
        cluster_name: EKS cluster name
        nodegroup_name: Managed nodegroup name

    Returns:
        The ASG name

    Raises:
        ResolutionError: If the nodegroup lists no auto scaling group
    """
    asg_names = client.describe_nodegroup_asgs(cluster_name, nodegroup_name)

    if asg_names and isinstance(asg_names[0], str):
        return asg_names[0]

    raise ResolutionError(cluster_name, nodegroup_name)
