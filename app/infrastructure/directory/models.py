"""Directory query and entity models.

Defines the caller-facing query options, the fully resolved query sent to
the search transport, and the normalized user/group entities projected
from raw directory records.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SearchScope(str, Enum):
    """LDAP search scope."""

    BASE = "base"
    ONE = "one"
    SUB = "sub"


_SCOPE_ALIASES = {
    "base": SearchScope.BASE,
    "baseobject": SearchScope.BASE,
    "one": SearchScope.ONE,
    "onelevel": SearchScope.ONE,
    "one-level": SearchScope.ONE,
    "level": SearchScope.ONE,
    "sub": SearchScope.SUB,
    "subtree": SearchScope.SUB,
    "wholesubtree": SearchScope.SUB,
}


class QueryOptions(BaseModel):
    """Caller-supplied query options. Every field is optional.

    camelCase aliases (``sizeLimit``, ``timeLimit``, ``includeMembership``)
    are accepted so plain dictionaries validate as-is.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    scope: Optional[SearchScope] = Field(default=None, description="Search scope")
    filter: Optional[str] = Field(default=None, description="Raw LDAP filter")
    attributes: Optional[List[str]] = Field(
        default=None, description="Attributes to return; '*' or [] for all"
    )
    size_limit: Optional[int] = Field(default=None, alias="sizeLimit")
    time_limit: Optional[int] = Field(default=None, alias="timeLimit")
    include_membership: List[str] = Field(
        default_factory=list,
        alias="includeMembership",
        description="Entity kinds ('user', 'group', 'all') to enrich with memberships",
    )

    @field_validator("scope", mode="before")
    @classmethod
    def _parse_scope(cls, v: Any) -> Any:
        if isinstance(v, str):
            return _SCOPE_ALIASES.get(v.strip().lower(), v)
        return v

    @field_validator("attributes", mode="before")
    @classmethod
    def _parse_attributes(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @field_validator("include_membership", mode="before")
    @classmethod
    def _parse_include_membership(cls, v: Any) -> Any:
        if v is None or v is False:
            return []
        if v is True:
            return ["all"]
        if isinstance(v, str):
            return [v]
        return v


class EffectiveQuery(BaseModel):
    """Fully defaulted query handed to the search transport."""

    model_config = ConfigDict(frozen=True)

    base_dn: str
    filter: str
    scope: SearchScope = SearchScope.SUB
    attributes: List[str] = Field(default_factory=list)
    size_limit: Optional[int] = None
    time_limit: Optional[int] = None


class Group(BaseModel):
    """A directory group the user is a member of."""

    model_config = ConfigDict(extra="allow")

    dn: Optional[str] = None
    cn: Optional[Any] = None
    description: Optional[Any] = None


class User(BaseModel):
    """Normalized directory user.

    Carries the distinguished name plus exactly the attributes that were
    requested for projection; extra attributes are stored as pydantic
    extras and read with ``user.mail`` or ``user.get("mail")``. A user
    built from no record (``User()``) is the empty entity returned when
    nothing matched.
    """

    model_config = ConfigDict(extra="allow")

    dn: Optional[str] = None
    groups: Optional[List[Group]] = None

    @property
    def attributes(self) -> Dict[str, Any]:
        """Projected directory attributes, excluding ``dn`` and ``groups``."""
        return dict(self.model_extra or {})

    @property
    def is_empty(self) -> bool:
        """True when no directory record backs this entity."""
        return self.dn is None and not self.model_extra and self.groups is None

    def get(self, name: str, default: Any = None) -> Any:
        """Return attribute ``name`` or ``default``."""
        if name == "dn":
            return self.dn if self.dn is not None else default
        return (self.model_extra or {}).get(name, default)

    def is_member_of(self, group: str) -> bool:
        """Check membership by group common name or DN (case-insensitive)."""
        wanted = group.lower()
        for member_of in self.groups or []:
            names = [member_of.dn, member_of.cn]
            if any(isinstance(n, str) and n.lower() == wanted for n in names):
                return True
        return False
