"""
Input validation schemas using Pydantic for the HTTP surface.
"""
from pydantic import BaseModel, Field, field_validator

from calplan.domain.Entry import Outcome


class EntryFieldUpdate(BaseModel):
    """Schema for a single-field entry edit."""
    field: str = Field(..., pattern=r'^(time|category|description|outcome)$')
    value: str = Field("", max_length=500)

    @field_validator('value')
    @classmethod
    def strip_time(cls, v, info):
        """Times are short labels; surrounding whitespace is noise."""
        if info.data.get('field') == 'time':
            return v.strip()
        return v


class OutcomeToggle(BaseModel):
    """Schema for an outcome toggle."""
    outcome: str = Field(..., min_length=1)

    @field_validator('outcome')
    @classmethod
    def validate_outcome(cls, v):
        normalized = Outcome.normalize(v)
        if normalized not in Outcome.ALL:
            raise ValueError(f"Outcome must be one of {', '.join(Outcome.ALL)}")
        return normalized


__all__ = ['EntryFieldUpdate', 'OutcomeToggle']
