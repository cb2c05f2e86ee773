"""Attribute-set helpers: merging, mandatory attributes and projection."""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from infrastructure.directory.models import QueryOptions

ALL_ATTRIBUTES = "*"

# Attributes a User entity cannot be built without
REQUIRED_USER_ATTRIBUTES = ["dn", "cn", "objectCategory"]


def includes_all_attributes(attributes: Optional[Sequence[str]]) -> bool:
    """An explicit empty list or a '*' entry means "every attribute"."""
    if attributes is None:
        return False
    return len(attributes) == 0 or ALL_ATTRIBUTES in attributes


def join_attributes(*attribute_sets: Optional[Sequence[str]]) -> List[str]:
    """Ordered union of attribute sets, first-seen order preserved.

    Returns ``[]`` (every attribute) as soon as one set asks for all
    attributes. ``None`` sets are skipped. Duplicates are detected
    case-insensitively, as LDAP attribute names are.
    """
    present = [s for s in attribute_sets if s is not None]
    if any(includes_all_attributes(s) for s in present):
        return []

    joined: List[str] = []
    seen = set()
    for attribute_set in present:
        for attribute in attribute_set:
            key = attribute.lower()
            if key not in seen:
                seen.add(key)
                joined.append(attribute)
    return joined


def include_membership_for(options: Optional[QueryOptions], kind: str) -> bool:
    """True if ``options`` ask for memberships of ``kind`` (or of 'all')."""
    if options is None:
        return False
    kinds = {k.lower() for k in options.include_membership}
    return "all" in kinds or kind.lower() in kinds


def required_user_attributes(options: Optional[QueryOptions]) -> List[str]:
    """Attributes that must be fetched to build a User."""
    if options is not None and includes_all_attributes(options.attributes):
        return []
    required = list(REQUIRED_USER_ATTRIBUTES)
    if include_membership_for(options, "user"):
        required.append("memberOf")
    return required


def requested_attributes(
    options: Optional[QueryOptions], defaults: Sequence[str]
) -> List[str]:
    """Attributes the caller asked for, or the configured defaults."""
    if options is not None and options.attributes is not None:
        return list(options.attributes)
    return list(defaults)


def pick_attributes(
    record: Mapping[str, Any], attributes: Iterable[str]
) -> Dict[str, Any]:
    """Project ``record`` onto ``attributes``.

    Names are matched case-insensitively and keyed by the requested
    spelling; attributes missing from the record are left out.
    """
    wanted = list(attributes)
    if includes_all_attributes(wanted):
        return dict(record)

    lookup = {key.lower(): key for key in record}
    picked: Dict[str, Any] = {}
    for attribute in wanted:
        key = lookup.get(attribute.lower())
        if key is not None:
            picked[attribute] = record[key]
    return picked
