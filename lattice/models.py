# =============================================================================
# lattice/models.py  —  Data Models (the "nouns" of the Lattice API)
# =============================================================================
#
# These dataclasses define the shape of every record the server hands to an
# agent.  They carry no behavior beyond converting to and from the JSON the
# Lattice API speaks.
#
# NAMING:
#   The API uses camelCase keys ("firstName", "managerId").  Python attributes
#   are snake_case.  from_dict()/to_dict() translate between the two, so the
#   JSON an agent sees is exactly what the API would have sent.
#
# PASS-THROUGH:
#   A record parsed from the API keeps the mapping it came from in `source`.
#   to_dict() starts from that mapping, so fields we don't model (and an
#   explicit "managerId": null) reach the agent unchanged and in API order.
#   `source` takes no part in equality.
#
# IMMUTABILITY:
#   Every record is a read-only snapshot of the system of record, fetched per
#   request.  frozen=True makes that explicit: nothing downstream can edit a
#   fixture or a fetched record in place.
#
# DEPARTMENTS & UPDATES:
#   The API never documented a stable shape for these two, so they stay open
#   mappings (dict[str, Any]) and are passed through untouched.
# =============================================================================

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Mapping, Optional

# Loosely typed records: id/name/description and id/title/content/authorId/
# createdDate in practice, but nothing is enforced.
Department = dict[str, Any]
Update = dict[str, Any]


def _camel(name: str) -> str:
    """snake_case attribute name -> camelCase JSON key ("is_active" -> "isActive")."""
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _source_field() -> Any:
    return field(default_factory=dict, compare=False, repr=False, kw_only=True)


class _Record:
    """Shared camelCase (de)serialization for the typed records below."""

    @classmethod
    def _api_fields(cls):
        return [f for f in fields(cls) if f.name != "source"]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        """Build a record from an API mapping.

        Keys we don't model are not parsed but stay in `source`, so the API
        can grow fields without breaking us or hiding them from the agent.
        Missing keys become None.
        """
        values = {f.name: data.get(_camel(f.name)) for f in cls._api_fields()}
        return cls(**values, source=dict(data))

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a camelCase mapping ready for json.dumps().

        Keys come out in API order: first everything in `source`, then any
        modelled field it lacks.  Optional fields that are unset and absent
        from `source` are left out entirely, the same way the API omits them.
        """
        result: dict[str, Any] = dict(self.source)
        for f in self._api_fields():
            key = _camel(f.name)
            value = getattr(self, f.name)
            if value is None and f.default is None and key not in result:
                continue
            result[key] = value
        return result


# -----------------------------------------------------------------------------
# User — a person in the organization
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class User(_Record):
    """One employee record."""

    id: str
    email: str
    first_name: str
    last_name: str
    title: str                         # "Senior Software Engineer"
    department: str                    # Department *name*, not an id
    # Weak reference to User.id; None at the top.  Keyword-only so it can sit
    # before is_active, where the API puts it.
    manager_id: Optional[str] = field(default=None, kw_only=True)
    is_active: bool
    source: dict[str, Any] = _source_field()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


# -----------------------------------------------------------------------------
# Goal — an objective owned by one user
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Goal(_Record):
    id: str
    title: str
    description: str
    user_id: str                       # Weak reference to User.id
    status: str                        # "In Progress", "Completed", ...
    progress: float                    # 0-100
    due_date: str                      # ISO date
    created_date: str                  # ISO date
    source: dict[str, Any] = _source_field()


@dataclass(frozen=True)
class ReviewCycle(_Record):
    id: str
    name: str                          # "Q1 2024 Performance Review"
    status: str                        # "Active", "Upcoming", ...
    start_date: str
    end_date: str
    type: str                          # "Performance", "Mid-Year", ...
    source: dict[str, Any] = _source_field()


@dataclass(frozen=True)
class Feedback(_Record):
    id: str
    content: str
    author_id: str                     # Weak reference to User.id
    recipient_id: str                  # Weak reference to User.id
    type: str
    created_date: str
    source: dict[str, Any] = _source_field()


def to_payload(value: Any) -> Any:
    """Convert a record, a mapping, or a list of either into plain JSON data.

    This is the single place where client results become something
    json.dumps() understands.  Typed records go through to_dict(); open
    mappings and scalars pass through.
    """
    if isinstance(value, _Record) and is_dataclass(value):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [to_payload(item) for item in value]
    if isinstance(value, Mapping):
        return {key: to_payload(item) for key, item in value.items()}
    return value
