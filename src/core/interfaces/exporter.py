"""Contrato del exportador de auditoría."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from core.domain.models import PasswordList


@runtime_checkable
class AuditExporter(Protocol):
    def export(self, password_list: PasswordList, destination: Path) -> Path:
        """Persiste la lista final para revisión humana y devuelve la ruta escrita."""

        ...
