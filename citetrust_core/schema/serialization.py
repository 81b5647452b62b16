# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, ValidatorFunctionWrapHandler
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="SchemaModel")


class SchemaModel(BaseModel):
    """
    Canonical base for schema models (Pydantic v2).

    - Ignores extra fields for forward compatibility with newer producers.
    - Accepts both snake_case field names and the camelCase wire names.
    - Provides `to_dict()` / `from_dict()` for consistent serialization.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_dict(self) -> dict[str, Any]:
        return dump_schema(self)

    @classmethod
    def from_dict(cls: type[T], data: Mapping[str, Any]) -> T:
        return load_schema(cls, data)


def dump_schema(model: Any) -> dict[str, Any]:
    """
    Dump a schema model to a JSON-safe dict.

    For Pydantic v2 models, uses `model_dump(mode="json")`.
    """
    if isinstance(model, BaseModel):
        return model.model_dump(mode="json", exclude_none=True)
    raise TypeError(f"Unsupported schema type for dump: {type(model)!r}")


def load_schema(model_cls: type[T], data: Mapping[str, Any]) -> T:
    """
    Load a schema model from a mapping.

    For Pydantic v2 models, uses `model_validate`.
    """
    if not isinstance(data, Mapping):
        raise TypeError(f"Schema input must be a mapping, got: {type(data)!r}")
    if inspect.isclass(model_cls) and issubclass(model_cls, BaseModel):
        return model_cls.model_validate(dict(data))
    raise TypeError(f"Unsupported schema type for load: {model_cls!r}")


def drop_invalid(value: Any, handler: ValidatorFunctionWrapHandler, default: Any = None) -> Any:
    """
    Wrap-validator body for optional fields: a malformed value becomes
    `default` instead of failing the enclosing record.
    """
    try:
        return handler(value)
    except ValidationError:
        return default


def valid_items(model_cls: type[T], value: Any) -> list[T]:
    """Entries of `value` that validate as `model_cls`; malformed entries are dropped."""
    if not isinstance(value, (list, tuple)):
        return []
    items: list[T] = []
    for i, item in enumerate(value):
        if isinstance(item, model_cls):
            items.append(item)
            continue
        try:
            items.append(model_cls.model_validate(item))
        except ValidationError as e:
            logger.debug("[Schema] Dropped malformed %s at index %d (%d error(s))", model_cls.__name__, i, e.error_count())
    return items
