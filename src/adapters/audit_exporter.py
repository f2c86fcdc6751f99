"""Exportación de auditoría.

Por qué texto plano:
- Una contraseña por línea, ordenada: se revisa y se compara con `diff`.
- El reporte JSON complementa con el contexto de la ejecución.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from core.domain.models import PasswordList
from core.services.sync_pipeline import SyncResult


class TextAuditExporter:
    """Implementación de `AuditExporter` en UTF-8, un valor por línea."""

    def export(self, password_list: PasswordList, destination: Path) -> Path:
        destination.parent.mkdir(parents=True, exist_ok=True)
        values = sorted(set(password_list.values))
        body = "".join(f"{value}\n" for value in values)
        destination.write_text(body, encoding="utf-8", newline="\n")
        return destination


def export_sync_report_json(*, result: SyncResult, output_path: Path) -> Path:
    """Exporta un resumen de la ejecución a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "generated_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "operation": result.intent.kind.value,
        "policy_id": result.policy_id,
        "dry_run": result.dry_run,
        "written": result.written,
        "counts": {
            "existing": len(result.existing),
            "accepted": len(result.accepted),
            "rejected": len(result.rejected),
            "added": len(result.added),
            "evicted": len(result.evicted),
            "merged": len(result.merged),
        },
        "rejected": [r.model_dump(mode="json") for r in result.rejected],
        "evicted": result.evicted,
        "export_path": str(result.export_path) if result.export_path else None,
        "warnings": result.warnings,
    }
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
