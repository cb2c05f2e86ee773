"""Call-shape normalization for ``find_user``.

``find_user`` accepts the positional forms::

    find_user(identifier)
    find_user(identifier, callback)
    find_user(identifier, include_membership)
    find_user(identifier, include_membership, callback)
    find_user(options, identifier)
    find_user(options, identifier, callback)
    find_user(options, identifier, include_membership)
    find_user(options, identifier, include_membership, callback)

The arguments are resolved by type inspection only, in this order:

1. a trailing callable is the completion callback;
2. a trailing ``bool`` (after removing the callback) is ``include_membership``;
3. a leading ``str`` is the identifier and there are no options;
4. otherwise, with two or more arguments left, the first is the options
   and the second the identifier.

Nothing is rejected. Option fields that fail validation are dropped, and
shapes outside the list above degrade to whatever the rules produce (for
instance a lone options mapping yields no identifier).
"""

from enum import Enum
from typing import Any, Callable, Mapping, NamedTuple, Optional, Set

from pydantic import ValidationError

from infrastructure.directory.models import QueryOptions
from infrastructure.logging import get_module_logger

logger = get_module_logger()


Callback = Callable[[Optional[BaseException], Any], Any]


class CallShape(str, Enum):
    """Which supported call form an invocation matched."""

    IDENTIFIER = "identifier"
    IDENTIFIER_CALLBACK = "identifier_callback"
    IDENTIFIER_FLAG = "identifier_flag"
    IDENTIFIER_FLAG_CALLBACK = "identifier_flag_callback"
    OPTIONS_IDENTIFIER = "options_identifier"
    OPTIONS_IDENTIFIER_CALLBACK = "options_identifier_callback"
    OPTIONS_IDENTIFIER_FLAG = "options_identifier_flag"
    OPTIONS_IDENTIFIER_FLAG_CALLBACK = "options_identifier_flag_callback"
    UNRECOGNIZED = "unrecognized"


_SHAPES = {
    (False, False, False): CallShape.IDENTIFIER,
    (False, False, True): CallShape.IDENTIFIER_CALLBACK,
    (False, True, False): CallShape.IDENTIFIER_FLAG,
    (False, True, True): CallShape.IDENTIFIER_FLAG_CALLBACK,
    (True, False, False): CallShape.OPTIONS_IDENTIFIER,
    (True, False, True): CallShape.OPTIONS_IDENTIFIER_CALLBACK,
    (True, True, False): CallShape.OPTIONS_IDENTIFIER_FLAG,
    (True, True, True): CallShape.OPTIONS_IDENTIFIER_FLAG_CALLBACK,
}


class FindUserCall(NamedTuple):
    """Canonical form of a ``find_user`` invocation."""

    options: Optional[QueryOptions]
    identifier: Optional[str]
    include_membership: bool
    callback: Optional[Callback]
    shape: CallShape = CallShape.UNRECOGNIZED

    def canonical(self) -> tuple:
        """The call without its shape tag, for comparing equivalent calls."""
        return (self.options, self.identifier, self.include_membership, self.callback)


def _field_keys(loc: Any) -> Set[str]:
    """Input keys (field name and alias) naming the field at ``loc``."""
    name = str(loc)
    for field_name, info in QueryOptions.model_fields.items():
        if name in (field_name, info.alias):
            return {field_name, info.alias or field_name}
    return {name}


def coerce_options(value: Any) -> Optional[QueryOptions]:
    """Turn whatever sits in the options slot into QueryOptions or None.

    Fields that fail validation are dropped and the rest are kept, so
    loosely typed options never fail the call.
    """
    if value is None or isinstance(value, QueryOptions):
        return value
    if not isinstance(value, Mapping):
        logger.debug("ignoring_options_argument", value_type=type(value).__name__)
        return None

    data = dict(value)
    try:
        return QueryOptions.model_validate(data)
    except ValidationError as e:
        invalid: Set[str] = set()
        for error in e.errors():
            if error["loc"]:
                invalid |= _field_keys(error["loc"][0])
        logger.warning(
            "dropping_invalid_options",
            fields=sorted(k for k in data if k in invalid),
            error_count=e.error_count(),
        )
        kept = {k: v for k, v in data.items() if k not in invalid}

    try:
        return QueryOptions.model_validate(kept)
    except ValidationError as e:
        logger.warning("ignoring_options_argument", error_count=e.error_count())
        return None


def normalize_find_user_args(*args: Any) -> FindUserCall:
    """Resolve positional ``find_user`` arguments into a FindUserCall."""
    remaining = list(args[:4])
    callback: Optional[Callback] = None
    include_membership: Optional[bool] = None
    options: Any = None
    identifier: Optional[str] = None
    has_options = False
    resolved = False

    if remaining and callable(remaining[-1]):
        callback = remaining.pop()

    if remaining and isinstance(remaining[-1], bool):
        include_membership = remaining.pop()

    if remaining and isinstance(remaining[0], str):
        identifier = remaining[0]
        resolved = True

    if not resolved and len(remaining) >= 2:
        options, identifier = remaining[0], remaining[1]
        has_options = True
        resolved = True

    if resolved:
        shape = _SHAPES[(has_options, include_membership is not None, callback is not None)]
    else:
        shape = CallShape.UNRECOGNIZED
        if remaining:
            options = remaining[0]

    call = FindUserCall(
        options=coerce_options(options),
        identifier=identifier if identifier is None else str(identifier),
        include_membership=bool(include_membership),
        callback=callback,
        shape=shape,
    )
    logger.debug(
        "normalized_find_user_call",
        shape=call.shape.value,
        identifier=call.identifier,
        include_membership=call.include_membership,
        has_callback=call.callback is not None,
    )
    return call
