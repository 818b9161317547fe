"""Predicate model shared by every account data provider.

A query is a conjunction of conditions over an entity's attributes. Providers
translate it into their own dialect (GAQL for the live provider) or evaluate it
directly against snapshot models.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Tuple, Type

from pydantic import BaseModel, Field


class Operator(str, Enum):
    EQ = "EQ"
    IN = "IN"
    LTE = "LTE"
    GTE = "GTE"
    CONTAINS = "CONTAINS"
    NOT_CONTAINS = "NOT_CONTAINS"


class Condition(BaseModel):
    field: str
    op: Operator
    value: Any

    def matches(self, entity: BaseModel) -> bool:
        actual = getattr(entity, self.field)
        # Null attributes never satisfy a predicate.
        if actual is None:
            return False
        if self.op == Operator.EQ:
            return actual == self.value
        if self.op == Operator.IN:
            return actual in tuple(self.value)
        if self.op == Operator.LTE:
            return actual <= self.value
        if self.op == Operator.GTE:
            return actual >= self.value
        if self.op == Operator.CONTAINS:
            return _text(self.value) in _text(actual)
        if self.op == Operator.NOT_CONTAINS:
            return _text(self.value) not in _text(actual)
        raise ValueError(f"Unsupported operator: {self.op}")


class EntityQuery(BaseModel):
    conditions: Tuple[Condition, ...] = Field(default_factory=tuple)

    def and_(self, *conditions: Condition) -> "EntityQuery":
        return EntityQuery(conditions=self.conditions + tuple(conditions))

    def matches(self, entity: BaseModel) -> bool:
        return all(cond.matches(entity) for cond in self.conditions)

    def validate_for(self, entity_type: Type[BaseModel]) -> None:
        known = set(entity_type.model_fields)
        for cond in self.conditions:
            if cond.field not in known:
                raise ValueError(f"{entity_type.__name__} has no attribute '{cond.field}'")


def where(*conditions: Condition) -> EntityQuery:
    return EntityQuery(conditions=tuple(conditions))


def eq(field: str, value: Any) -> Condition:
    return Condition(field=field, op=Operator.EQ, value=value)


def in_(field: str, values: Iterable[Any]) -> Condition:
    return Condition(field=field, op=Operator.IN, value=tuple(values))


def lte(field: str, value: Any) -> Condition:
    return Condition(field=field, op=Operator.LTE, value=value)


def gte(field: str, value: Any) -> Condition:
    return Condition(field=field, op=Operator.GTE, value=value)


def contains(field: str, value: str) -> Condition:
    return Condition(field=field, op=Operator.CONTAINS, value=value)


def not_contains(field: str, value: str) -> Condition:
    return Condition(field=field, op=Operator.NOT_CONTAINS, value=value)


def _text(value: Any) -> str:
    # str() of a str-mixin enum is "Class.MEMBER", not its value.
    if isinstance(value, Enum):
        value = value.value
    return str(value)
