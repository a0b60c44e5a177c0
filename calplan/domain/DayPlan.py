"""DayPlan domain entity: the ordered entries of one calendar date."""
from threading import Lock
from typing import Any, Dict, Iterable, Optional, Tuple
from uuid import uuid4

from calplan.domain.Entry import Entry

# date key -> token of the placeholder currently offered for that date
_placeholder_tokens: Dict[str, str] = {}
_placeholder_lock = Lock()


def placeholder_entry_id(date_key: str) -> str:
    """Id of the placeholder entry offered for date_key.

    Stable across reads until retire_placeholder_id() is called, so edits
    addressed to a placeholder shown earlier still find it.
    """
    with _placeholder_lock:
        token = _placeholder_tokens.setdefault(date_key, uuid4().hex[:12])
    return f"draft-{date_key}-{token}"


def retire_placeholder_id(date_key: str) -> None:
    """Stop offering the current placeholder id once it has been stored."""
    with _placeholder_lock:
        _placeholder_tokens[date_key] = uuid4().hex[:12]


class DayPlan:
    __slots__ = ("date_key", "entries")

    def __init__(self, date_key: str, entries: Optional[Iterable[Entry]] = None):
        object.__setattr__(self, "date_key", date_key)
        object.__setattr__(self, "entries", tuple(entries) if entries else ())

    def __setattr__(self, name, value):
        raise AttributeError("DayPlan is immutable; use with_entries()")

    @classmethod
    def blank(cls, date_key: str) -> "DayPlan":
        """One freshly generated blank entry."""
        return cls(date_key, [Entry.blank()])

    @classmethod
    def placeholder(cls, date_key: str) -> "DayPlan":
        """Read-time editing placeholder for a date with nothing stored."""
        return cls(date_key, [Entry(placeholder_entry_id(date_key))])

    def with_entries(self, entries: Iterable[Entry]) -> "DayPlan":
        return DayPlan(self.date_key, entries)

    def find(self, entry_id: str) -> Optional[Entry]:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def active_entries(self) -> Tuple[Entry, ...]:
        return tuple(e for e in self.entries if e.is_active)

    def __len__(self):
        return len(self.entries)

    def __eq__(self, other):
        if not isinstance(other, DayPlan):
            return NotImplemented
        return self.date_key == other.date_key and self.entries == other.entries

    def __hash__(self):
        return hash((self.date_key, self.entries))

    def __str__(self) -> str:
        entries_str = ",\n\t".join(str(e) for e in self.entries)
        return f"{self.date_key}:\n\t{entries_str}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data: Any, date_key: str) -> "DayPlan":
        '''Creates a DayPlan from a backup value stored under date_key.

        The mapping key wins over the embedded "date" field. Values that are
        not mappings, or carry no list of entries, give a day with zero entries.
        '''
        d = data if isinstance(data, dict) else {}
        raw_entries = d.get("games", d.get("entries"))
        if not isinstance(raw_entries, list):
            raw_entries = []
        return DayPlan(date_key, [Entry.from_dict(e) for e in raw_entries])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date_key,
            "games": [e.to_dict() for e in self.entries],
        }
