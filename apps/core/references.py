"""
Entity References

A policy points at its agent, insurance provider and vehicle class by id.
At the read boundary a reference is either still an id (Unresolved) or the
loaded entity (Resolved). Callers must handle both cases explicitly; there is
no "id or object" duck typing.
"""
from dataclasses import dataclass
from typing import Any
from uuid import UUID


@dataclass(frozen=True)
class Unresolved:
    id: UUID

    def as_dict(self) -> dict:
        return {'id': str(self.id)}


@dataclass(frozen=True)
class Resolved:
    entity: Any
    fields: tuple[str, ...] = ('name',)

    @property
    def id(self) -> UUID:
        return self.entity.id

    def as_dict(self) -> dict:
        data = {'id': str(self.entity.id)}
        for field in self.fields:
            data[field] = getattr(self.entity, field, None)
        return data


Reference = Unresolved | Resolved


def reference_for(instance, field: str, *, resolve: bool, fields: tuple[str, ...] = ('name',)) -> Reference:
    """
    Build the reference stored in `instance.<field>`.

    With resolve=False the related row is never loaded.
    """
    if not resolve:
        return Unresolved(getattr(instance, f'{field}_id'))
    return Resolved(getattr(instance, field), fields)
