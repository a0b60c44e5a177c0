"""Entry domain entity: one planned event of a day (time, category, description, outcome)."""
from typing import Any, Dict, Optional
from uuid import uuid4


class Outcome:
    PENDING = "pending"
    POSITIVE = "positive"
    NEGATIVE = "negative"
    VOIDED = "voided"

    ALL = (PENDING, POSITIVE, NEGATIVE, VOIDED)

    # Backups written by the browser version use the betting names
    _SYNONYMS = {"win": POSITIVE, "loss": NEGATIVE, "void": VOIDED}
    _WIRE = {POSITIVE: "win", NEGATIVE: "loss", VOIDED: "void"}

    @classmethod
    def normalize(cls, value: Any) -> str:
        """Map a wire or domain outcome name to its domain name.

        Unknown strings are kept as they are (imports are not validated);
        empty or non-string values fall back to pending.
        """
        if not isinstance(value, str) or not value.strip():
            return cls.PENDING
        v = value.strip().lower()
        return cls._SYNONYMS.get(v, v)

    @classmethod
    def to_wire(cls, value: str) -> str:
        return cls._WIRE.get(value, value)


def new_entry_id() -> str:
    """Opaque id, unique for the lifetime of the process."""
    return uuid4().hex


EDITABLE_FIELDS = ("time", "category", "description", "outcome")


class Entry:
    __slots__ = ("id", "time", "category", "description", "outcome")

    def __init__(self, id: str, time: str = "", category: str = "", description: str = "",
                 outcome: str = Outcome.PENDING):
        object.__setattr__(self, "id", id)
        object.__setattr__(self, "time", time)
        object.__setattr__(self, "category", category)
        object.__setattr__(self, "description", description)
        object.__setattr__(self, "outcome", outcome)

    def __setattr__(self, name, value):
        raise AttributeError("Entry is immutable; use with_field()")

    @classmethod
    def blank(cls) -> "Entry":
        return cls(new_entry_id())

    @property
    def is_active(self) -> bool:
        return bool(self.description)

    def with_field(self, field: str, value: Any) -> "Entry":
        '''Return a copy with one editable field replaced.'''
        if field not in EDITABLE_FIELDS:
            raise KeyError(field)
        values = {name: getattr(self, name) for name in self.__slots__}
        values[field] = Outcome.normalize(value) if field == "outcome" else value
        return Entry(**values)

    def __eq__(self, other):
        if not isinstance(other, Entry):
            return NotImplemented
        return all(getattr(self, n) == getattr(other, n) for n in self.__slots__)

    def __hash__(self):
        return hash(tuple(getattr(self, n) for n in self.__slots__))

    def __str__(self) -> str:
        parts = [self.time or "--:--", self.description or "(empty)"]
        if self.category:
            parts.append(f"[{self.category}]")
        parts.append(self.outcome)
        return " - ".join(parts)

    __repr__ = __str__

    @staticmethod
    def from_dict(data: Optional[Dict[str, Any]]) -> "Entry":
        '''Creates an Entry from a backup dictionary. Ignores unknown keys.

        Accepts the wire names (league, match, status) and the domain names
        (category, description, outcome). A missing id gets a fresh one.
        '''
        d = dict(data) if isinstance(data, dict) else {}
        category = d.get("category", d.get("league"))
        description = d.get("description", d.get("match"))
        return Entry(
            id=str(d.get("id") or new_entry_id()),
            time=d["time"] if d.get("time") is not None else "",
            category=category if category is not None else "",
            description=description if description is not None else "",
            outcome=Outcome.normalize(d.get("outcome", d.get("status"))),
        )

    def to_dict(self) -> Dict[str, Any]:
        '''Converts the Entry to its backup (wire) dictionary.'''
        return {
            "id": self.id,
            "time": self.time,
            "league": self.category,
            "match": self.description,
            "status": Outcome.to_wire(self.outcome),
        }

    def to_api_dict(self) -> Dict[str, Any]:
        '''Entry fields under their own names, as the HTTP API reports them.'''
        return {name: getattr(self, name) for name in self.__slots__}
