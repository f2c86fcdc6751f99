"""Constantes de la política de contraseñas prohibidas.

Por qué aquí:
- El template y los settings fijos son parte del contrato con el directorio,
  no configuración por ejecución.
- Core y adapters comparten una única fuente de verdad.
"""

from __future__ import annotations

# "Password Rule Settings" directory setting template.
BANNED_PASSWORD_TEMPLATE_ID = "5cf42378-d67d-4f36-ba46-e8b86229381d"

BANNED_PASSWORD_LIST_SETTING = "BannedPasswordList"

MIN_LEN = 4
MAX_LEN = 16
MAX_LIST_SIZE = 1000

LIST_SEPARATOR = "\t"

# Orden declarado = orden de envío en la creación.
FIXED_SETTINGS: dict[str, str] = {
    "BannedPasswordCheck": "True",
    "EnableBannedPasswordCheck": "True",
    "EnableBannedPasswordCheckOnPremises": "False",
    "BannedPasswordCheckOnPremisesMode": "Enforce",
    "LockoutDurationInSeconds": "60",
    "LockoutThreshold": "10",
}
