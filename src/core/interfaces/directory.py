"""Contrato del cliente de directorio.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir Graph por un cliente en memoria en tests sin acoplar el
  Core a httpx ni a la sesión autenticada.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import PolicyObject, PolicySetting


@runtime_checkable
class DirectoryClient(Protocol):
    """Operaciones remotas que consume el Core.

    Reglas de diseño:
    - Síncrono: una ejecución, una llamada a la vez.
    - Lecturas fallidas -> `DirectoryReadError`; escrituras -> `DirectoryWriteError`.
    """

    def lookup_policy_by_template(self, template_id: str) -> PolicyObject | None:
        """Devuelve la política del template o `None` si no existe."""

        ...

    def create_policy(self, template_id: str, settings: Sequence[PolicySetting]) -> PolicyObject:
        """Crea la política; el id devuelto pasa a ser el autoritativo."""

        ...

    def update_policy(self, policy_id: str, settings: Sequence[PolicySetting]) -> None:
        """Reemplaza la colección completa de settings."""

        ...

    def fetch_policy(self, policy_id: str) -> PolicyObject:
        ...
