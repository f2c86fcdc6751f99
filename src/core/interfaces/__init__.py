"""Interfaces/abstracciones del Core.

Por qué:
- Contratos (Protocol) para el directorio remoto y el exportador de auditoría.
- El Core depende de abstracciones; Graph y el disco son detalles de adapters.
"""

from core.interfaces.directory import DirectoryClient
from core.interfaces.exporter import AuditExporter

__all__ = ["AuditExporter", "DirectoryClient"]
