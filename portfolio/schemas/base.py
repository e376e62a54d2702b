# portfolio/schemas/base.py
from __future__ import annotations
from datetime import datetime
from typing import ClassVar, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class DomainModel(BaseModel):
    """
    Base de todos los objetos de dominio: atributos snake_case en Python,
    camelCase en JSON. Acepta ambas formas como entrada.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Entity(DomainModel):
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PatchModel(DomainModel):
    """
    Partial update. Omitted fields are left alone; an explicit ``null`` is only
    accepted for the fields listed in ``NULLABLE`` (the ones that are optional
    on the domain object), so a PUT can clear ``end_date`` but never blank a
    required ``name``.
    """
    # updates parciales: los campos desconocidos se ignoran en vez de 422
    model_config = ConfigDict(extra="ignore")

    NULLABLE: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_null_on_required(self):
        bad = sorted(
            name for name in self.model_fields_set
            if getattr(self, name) is None and name not in self.NULLABLE
        )
        if bad:
            raise ValueError(f"null is not allowed for: {', '.join(to_camel(n) for n in bad)}")
        return self
