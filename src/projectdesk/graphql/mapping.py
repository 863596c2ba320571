"""
Input mapping: turns GraphQL input objects into create/update intents.

A ``Create`` never carries a client-supplied id; an ``Update`` always names the
entity it targets. The payload holds only fields the client actually sent
that are mapped columns of the target model.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

import strawberry

from ..database.gateway import PROTECTED_FIELDS
from ..dbmodels import Base


@dataclass(frozen=True)
class Create:
    payload: dict[str, Any]


@dataclass(frozen=True)
class Update:
    entity_id: int | None
    payload: dict[str, Any]


def input_payload(
    data: Any,
    model: type[Base],
    exclude: frozenset[str] = PROTECTED_FIELDS,
) -> dict[str, Any]:
    """
    Collect the sent fields of a strawberry input that map onto ``model`` columns.

    UNSET fields are dropped. So is an explicit null for a non-nullable
    column, which leaves the stored value (or the column default) in place.
    """
    columns = model.__table__.columns
    payload: dict[str, Any] = {}
    for field in dataclasses.fields(data):
        name = field.name
        if name in exclude or name not in columns:
            continue
        value = getattr(data, name)
        if value is strawberry.UNSET:
            continue
        if value is None and not columns[name].nullable:
            continue
        payload[name] = value
    return payload


def as_create(
    data: Any,
    model: type[Base],
    exclude: frozenset[str] = PROTECTED_FIELDS,
) -> Create:
    """Map an input onto a create intent; ``id`` is always discarded."""
    return Create(payload=input_payload(data, model, exclude | {"id"}))


def as_update(
    data: Any,
    model: type[Base],
    exclude: frozenset[str] = PROTECTED_FIELDS,
) -> Update:
    """Map an input onto an update of the entity named by its ``id``."""
    return Update(entity_id=data.id, payload=input_payload(data, model, exclude | {"id"}))
