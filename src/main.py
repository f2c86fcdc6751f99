"""Script de ejecución.

Por qué existe:
- Permite ejecutar la CLI con `python -m main` desde `src/` durante desarrollo.
- Mantiene un entrypoint simple además del script `banlist-sync`.
"""

from __future__ import annotations

import sys

# Windows consoles default to cp1252; password lists are UTF-8.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
