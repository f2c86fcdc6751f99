"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta en el borde con el directorio (alias camelCase de Graph)
  sin acoplar el Core a httpx.
- Serialización estable para el reporte JSON de auditoría.

Nota:
- Estos modelos describen *qué* es la política, no *cómo* se lee o escribe.
"""

from __future__ import annotations

from typing import Annotated, Iterable, Literal, Union

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.errors import WriteOperation


class PasswordList(BaseModel):
    """Conjunto de contraseñas prohibidas, siempre ordenado y sin duplicados.

    Invariante:
    - `values` está ordenado (ordinal) y no tiene duplicados, así que dos
      listas son iguales si y solo si sus conjuntos de valores lo son.
    """

    model_config = ConfigDict(frozen=True)

    values: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Valores únicos en orden ordinal.",
    )

    @field_validator("values", mode="before")
    @classmethod
    def _normalize(cls, value: object) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            raise TypeError("PasswordList values must be an iterable of strings, not a string")
        return tuple(sorted(set(value)))  # type: ignore[arg-type]

    @classmethod
    def of(cls, values: Iterable[str] = ()) -> "PasswordList":
        return cls(values=tuple(values))

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, item: object) -> bool:
        return item in self.values


class ValidationRejected(BaseModel):
    """Entrada candidata descartada por el validador (no es fatal)."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., description="Valor original tal como llegó.")
    reason: Literal["length"] = Field(default="length")
    length: int = Field(..., ge=0, description="Longitud evaluada.")


class PolicySetting(BaseModel):
    """Par nombre/valor dentro de un objeto de política."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    value: str | None = Field(default=None)


class PolicyObject(BaseModel):
    """Objeto de política del directorio (Graph `groupSetting`).

    `id` es opaco y solo existe una vez creado en el servidor.
    `settings` mantiene el orden en que el directorio lo devolvió.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str | None = Field(default=None)
    template_id: str = Field(..., alias="templateId")
    display_name: str | None = Field(default=None, alias="displayName")
    settings: list[PolicySetting] = Field(default_factory=list, alias="values")

    def setting_value(self, name: str) -> str | None:
        for setting in self.settings:
            if setting.name == name:
                return setting.value
        return None


class CreateIntent(BaseModel):
    """Crear la política: no existe ninguna para el template."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[WriteOperation.CREATE] = WriteOperation.CREATE
    template_id: str
    settings: tuple[PolicySetting, ...]


class UpdateIntent(BaseModel):
    """Actualizar la política existente con la colección completa de settings."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[WriteOperation.UPDATE] = WriteOperation.UPDATE
    policy_id: str
    settings: tuple[PolicySetting, ...]


WriteIntent = Annotated[Union[CreateIntent, UpdateIntent], Field(discriminator="kind")]
