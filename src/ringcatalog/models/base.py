from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for documents decoded from remote JSON sources.

    Incoming keys are matched to field aliases case-insensitively
    (``DeveloperName``, ``developername`` and ``developerName`` are the same
    field). ``null`` values are dropped so field defaults apply, and unknown
    keys are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _normalise_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        lookup: dict[str, str] = {}
        for name, field in cls.model_fields.items():
            lookup[name.lower()] = name
            if field.alias:
                lookup[field.alias.lower()] = name
        normalised: dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                continue
            name = lookup.get(key.lower()) if isinstance(key, str) else None
            if name is None:
                continue
            # First spelling wins when a document repeats a key in two casings
            normalised.setdefault(name, value)
        return normalised
