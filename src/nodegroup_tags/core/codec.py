"""
Decoding of raw CloudFormation custom resource events.

Each field is checked explicitly so that a malformed event is rejected
before any part of it is used. Error messages name the offending key and
the part of the payload being decoded, and distinguish a missing key
("no X set") from a key of the wrong type ("X is not a string") and,
for the nodegroup and cluster names, from an empty value ("X is empty").
"""
from typing import Any, Callable, Mapping

from .errors import DecodeError
from .models import (
    CreateEvent,
    DeleteEvent,
    LifecycleEvent,
    RequestType,
    ResourceProperties,
    UpdateEvent,
)


def has_key(key: str, obj: Any) -> bool:
    """Return True if obj is a mapping containing key."""
    return isinstance(obj, Mapping) and key in obj


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def get_untyped_key_or_error(key: str, obj: Any, context: str) -> Any:
    """
    Fetch obj[key] without checking its type.

    Raises:
        DecodeError: If obj is not a mapping or has no such key
    """
    if not has_key(key, obj):
        raise DecodeError(f"{context}: no {key} set", key=key, context=context)
    return obj[key]


def get_typed_key_or_error(
    key: str,
    obj: Any,
    context: str,
    type_name: str,
    type_check: Callable[[Any], bool],
) -> Any:
    """
    Fetch obj[key] and verify it with type_check.

    Raises:
        DecodeError: If the key is missing or its value fails type_check
    """
    value = get_untyped_key_or_error(key, obj, context)
    if not type_check(value):
        raise DecodeError(f"{context}: {key} is not a {type_name}", key=key, context=context)
    return value


def get_string_key_or_error(key: str, obj: Any, context: str) -> str:
    return get_typed_key_or_error(key, obj, context, "string", is_string)


def get_non_empty_string_key_or_error(key: str, obj: Any, context: str) -> str:
    """
    Fetch a string obj[key] that must not be empty.

    Raises:
        DecodeError: If the key is missing, not a string, or empty
    """
    value = get_string_key_or_error(key, obj, context)
    if not value:
        raise DecodeError(f"{context}: {key} is empty", key=key, context=context)
    return value


def decode_resource_properties(properties: Any) -> ResourceProperties:
    """
    Decode the resource property bag.

    Args:
        properties: ResourceProperties or OldResourceProperties from the event

    Returns:
        ResourceProperties with all three fields validated
    """
    context = "Invalid resourceProperties"
    nodegroup_name = get_non_empty_string_key_or_error("NodegroupName", properties, context)
    cluster_name = get_non_empty_string_key_or_error("ClusterName", properties, context)
    tags_json = get_string_key_or_error("TagsJson", properties, context)

    return ResourceProperties(
        nodegroup_name=nodegroup_name,
        cluster_name=cluster_name,
        tags_json=tags_json,
    )


def decode_event(event: Any) -> LifecycleEvent:
    """
    Decode a raw custom resource event into a typed lifecycle event.

    Keys the handler does not use (ServiceToken, StackId, RequestId,
    LogicalResourceId, ResourceType, ...) are ignored.

    Args:
        event: The event dict passed to the Lambda handler

    Returns:
        CreateEvent, UpdateEvent or DeleteEvent

    Raises:
        DecodeError: On a missing or mistyped field, or an unknown RequestType
    """
    request_type = get_string_key_or_error("RequestType", event, "Invalid event")

    if request_type == RequestType.CREATE.value:
        context = "Invalid create event"
        properties = decode_resource_properties(
            get_untyped_key_or_error("ResourceProperties", event, context)
        )
        return CreateEvent(resource_properties=properties)

    if request_type == RequestType.UPDATE.value:
        context = "Invalid update event"
        physical_resource_id = get_string_key_or_error("PhysicalResourceId", event, context)
        properties = decode_resource_properties(
            get_untyped_key_or_error("ResourceProperties", event, context)
        )
        old_properties = decode_resource_properties(
            get_untyped_key_or_error("OldResourceProperties", event, context)
        )
        return UpdateEvent(
            physical_resource_id=physical_resource_id,
            resource_properties=properties,
            old_resource_properties=old_properties,
        )

    if request_type == RequestType.DELETE.value:
        context = "Invalid delete event"
        physical_resource_id = get_string_key_or_error("PhysicalResourceId", event, context)
        properties = decode_resource_properties(
            get_untyped_key_or_error("ResourceProperties", event, context)
        )
        return DeleteEvent(
            physical_resource_id=physical_resource_id,
            resource_properties=properties,
        )

    raise DecodeError(f"Unknown event type: {request_type}", key="RequestType", context="Invalid event")
