"""Base models for chatsync records and backend responses.

Every model inherits from :class:`ChatSyncBaseModel` which provides a
frozen, alias-aware configuration: fields are snake_case in Python and
mapped to the backend's JSON keys through explicit aliases (or
``to_camel`` where no explicit alias is given).

Backend response models inherit from :class:`ResponseModel`, which
additionally drops ``null`` values so field defaults apply and stashes
the original payload in ``raw``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ChatSyncBaseModel(BaseModel):
    """Frozen base for all chatsync models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class ResponseModel(ChatSyncBaseModel):
    """Base for models parsed from backend responses."""

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original response dict."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        """Drop ``null`` values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned = {key: value for key, value in values.items() if value is not None}
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
