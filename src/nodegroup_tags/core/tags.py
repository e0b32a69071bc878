"""Tag set parsing and tag diff computation."""
import json
from typing import Iterable, List

from .errors import DecodeError
from .models import TagOperation, TagSet


def parse_tag_set(tags_json: str) -> TagSet:
    """
    Parse the TagsJson property into a tag set.

    Entries whose key or value is not a string are dropped silently, so
    producers may embed extra structured metadata alongside the tags.

    Args:
        tags_json: Serialized JSON object, e.g. '{"k8s.io/...": "true"}'

    Returns:
        Dictionary of string tag keys to string tag values

    Raises:
        DecodeError: If tags_json is not valid JSON or not a JSON object
    """
    try:
        obj = json.loads(tags_json)
    except (TypeError, ValueError) as e:
        raise DecodeError("Unable to parse TagsJson", key="TagsJson") from e

    if not isinstance(obj, dict):
        raise DecodeError("Unable to parse TagsJson", key="TagsJson")

    return {
        key: value
        for key, value in obj.items()
        if isinstance(key, str) and isinstance(value, str)
    }


def tags_to_apply(tags: TagSet) -> List[TagOperation]:
    """Build create-or-update operations for every tag, propagated at launch."""
    return [
        TagOperation(key=key, value=value, propagate_at_launch=True)
        for key, value in tags.items()
    ]


def tags_to_remove(keys: Iterable[str]) -> List[TagOperation]:
    """Build delete operations for the given tag keys."""
    return [TagOperation(key=key) for key in keys]


def stale_tag_keys(previous: TagSet, desired: TagSet) -> List[str]:
    """
    Keys present in the previous tag set but absent from the desired one.

    Only keys are compared. A changed value is handled by re-applying the
    desired tag, never by removing it.
    """
    return [key for key in previous if key not in desired]
