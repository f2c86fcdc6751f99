"""Carga de candidatas desde CSV.

Soporta:
- Separador detectado (`,` `;` `\\t` `|`), coma por defecto.
- UTF-8 con o sin BOM (exportaciones de Excel).
- Nombre de columna configurable, comparado sin distinguir mayúsculas.
"""

from __future__ import annotations

import csv
from pathlib import Path

from core.domain.errors import CandidateSourceError

_DELIMITERS = ",;\t|"


def _sniff_dialect(sample: str) -> type[csv.Dialect] | csv.Dialect:
    try:
        return csv.Sniffer().sniff(sample, delimiters=_DELIMITERS)
    except csv.Error:
        return csv.excel


def load_candidates(path: Path, *, column: str = "Password") -> list[str]:
    """Devuelve los valores crudos de la columna `column`, en orden de fichero.

    Las celdas vacías se omiten; recortar y validar es trabajo del Core.
    """

    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise CandidateSourceError(f"Cannot read {path}: {exc}") from exc

    lines = text.splitlines()
    if not lines:
        raise CandidateSourceError(f"{path} is empty")

    dialect = _sniff_dialect("\n".join(lines[:20]))
    reader = csv.DictReader(lines, dialect=dialect)
    fieldnames = reader.fieldnames or []

    wanted = column.strip().lower()
    match = next((name for name in fieldnames if name and name.strip().lower() == wanted), None)
    if match is None:
        found = ", ".join(name for name in fieldnames if name) or "none"
        raise CandidateSourceError(f"{path} has no '{column}' column (found: {found})")

    values: list[str] = []
    for row in reader:
        value = row.get(match)
        if value:
            values.append(value)
    return values
