"""
Equality filter builder used by the repositories.

Predicates are accumulated by field name, each one optional, and compiled once
into a single AND clause. Field names may be the model attribute
(``user_id``) or the column/wire name (``userId``).
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from sqlalchemy import and_, inspect, true
from sqlalchemy.sql.elements import ColumnElement


class EqualityFilter:
    def __init__(self, model) -> None:
        self.model = model
        self._fields = self._field_map(model)
        self._predicates: dict[str, Any] = {}

    @staticmethod
    def _field_map(model) -> dict[str, str]:
        fields: dict[str, str] = {}
        for prop in inspect(model).column_attrs:
            fields[prop.key] = prop.key
            for column in prop.columns:
                fields.setdefault(column.name, prop.key)
        return fields

    def resolve(self, field: str) -> str:
        try:
            return self._fields[field]
        except KeyError:
            raise ValueError(f"Campo de filtro desconhecido: {field!r}") from None

    def add(self, field: str, value: Any) -> "EqualityFilter":
        # a repeated field replaces the earlier predicate
        self._predicates[self.resolve(field)] = value
        return self

    def add_if(self, field: str, value: Any, condition: bool | None = None) -> "EqualityFilter":
        """Add the predicate only when `condition` holds (defaults to `value` being truthy)."""
        if (bool(value) if condition is None else condition):
            self.add(field, value)
        return self

    @classmethod
    def from_parameters(cls, model, parameters: Iterable[Mapping[str, Any]]) -> "EqualityFilter":
        """Build from a list of ``{"field": ..., "value": ...}`` pairs."""
        built = cls(model)
        for parameter in parameters:
            built.add(parameter["field"], parameter["value"])
        return built

    def __len__(self) -> int:
        return len(self._predicates)

    def compile(self) -> ColumnElement[bool]:
        if not self._predicates:
            return true()
        return and_(*(getattr(self.model, key) == value for key, value in self._predicates.items()))
