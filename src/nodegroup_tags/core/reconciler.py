from .locator import locate_asg
from .models import (
    CreateEvent,
    DeleteEvent,
    LifecycleEvent,
    ReconciliationResult,
    UpdateEvent,
)
from .tags import parse_tag_set, stale_tag_keys, tags_to_apply, tags_to_remove
from ..aws.clients import TagClient
from ..utils.logger import setup_logger


# Module logger
logger = setup_logger(__name__)


class Reconciler:
    """
    Reconciles nodegroup tags onto the backing auto scaling group.

    Handles one lifecycle event per call. Each phase locates the ASG once
    and issues at most one apply and one remove call, in that order, so an
    interrupted update leaves a stale tag behind rather than dropping a
    desired one. All state is derived from the event; re-running a phase
    is safe.
    """

    def __init__(self, client: TagClient):
        self.client = client

    def handle(self, event: LifecycleEvent) -> ReconciliationResult:
        if isinstance(event, CreateEvent):
            return self.handle_create(event)
        if isinstance(event, UpdateEvent):
            return self.handle_update(event)
        if isinstance(event, DeleteEvent):
            return self.handle_delete(event)
        raise TypeError(f"Unsupported event: {type(event).__name__}")

    def handle_create(self, event: CreateEvent) -> ReconciliationResult:
        props = event.resource_properties
        tags = parse_tag_set(props.tags_json)
        asg_name = locate_asg(self.client, props.cluster_name, props.nodegroup_name)

        self._tag_asg(asg_name, tags)

        return ReconciliationResult(physical_resource_id=f"{asg_name}:tags")

    def handle_update(self, event: UpdateEvent) -> ReconciliationResult:
        props = event.resource_properties
        tags = parse_tag_set(props.tags_json)
        old_tags = parse_tag_set(event.old_resource_properties.tags_json)
        # Always the current cluster/nodegroup, even if they changed
        asg_name = locate_asg(self.client, props.cluster_name, props.nodegroup_name)

        self._tag_asg(asg_name, tags)
        self._untag_asg(asg_name, stale_tag_keys(old_tags, tags))

        return ReconciliationResult(physical_resource_id=f"{asg_name}:tags")

    def handle_delete(self, event: DeleteEvent) -> ReconciliationResult:
        props = event.resource_properties
        tags = parse_tag_set(props.tags_json)
        asg_name = locate_asg(self.client, props.cluster_name, props.nodegroup_name)

        self._untag_asg(asg_name, list(tags))

        return ReconciliationResult(physical_resource_id=event.physical_resource_id)

    def _tag_asg(self, asg_name: str, tags: dict) -> None:
        logger.info("Tagging ASG", extra={"asg_name": asg_name, "tags": tags})

        operations = tags_to_apply(tags)
        if not operations:
            return

        self.client.create_or_update_tags(asg_name, operations)

    def _untag_asg(self, asg_name: str, tag_keys: list) -> None:
        logger.info(
            "Untagging ASG",
            extra={"asg_name": asg_name, "tag_keys_to_remove": tag_keys}
        )

        operations = tags_to_remove(tag_keys)
        if not operations:
            return

        self.client.delete_tags(asg_name, operations)
