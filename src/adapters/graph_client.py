"""Cliente de directorio sobre Microsoft Graph (`/groupSettings`).

Responsabilidad:
- Obtener un token (estático o client-credentials).
- Leer/crear/actualizar el `groupSetting` del template de contraseñas.
- Traducir fallos de transporte/HTTP a la taxonomía del Core.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx
from pydantic import ValidationError

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.errors import (
    DirectoryAuthError,
    DirectoryReadError,
    DirectoryWriteError,
    WriteOperation,
)
from core.domain.models import PolicyObject, PolicySetting

logger = logging.getLogger(__name__)

GRAPH_SCOPE = "https://graph.microsoft.com/.default"

# Límite de páginas al enumerar groupSettings (un tenant tiene pocas).
_MAX_PAGES = 20


def _describe_http_error(exc: httpx.HTTPError) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        detail = ""
        try:
            payload = response.json()
            error = payload.get("error") if isinstance(payload, dict) else None
            if isinstance(error, dict):
                detail = str(error.get("message") or error.get("code") or "")
            elif isinstance(payload, dict):
                detail = str(payload.get("error_description") or payload.get("error") or "")
        except ValueError:
            detail = response.text[:200]
        return f"HTTP {response.status_code} {detail}".strip()
    return f"{exc.__class__.__name__}: {exc}"


def _settings_payload(settings: Sequence[PolicySetting]) -> list[dict[str, Any]]:
    return [{"name": s.name, "value": s.value} for s in settings]


class GraphDirectoryClient:
    """Implementación de `DirectoryClient` contra Microsoft Graph v1.0."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._http = http_client or build_client(self._settings)
        self._owns_http = http_client is None
        self._token: str | None = self._settings.access_token or None
        self._base_url = self._settings.graph_base_url.rstrip("/")

    def __enter__(self) -> "GraphDirectoryClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    # -- auth -----------------------------------------------------------

    def _acquire_token(self) -> str:
        s = self._settings
        if not (s.tenant_id and s.client_id and s.client_secret):
            raise DirectoryAuthError(
                "Missing credentials: set BANLIST_SYNC_ACCESS_TOKEN or "
                "BANLIST_SYNC_TENANT_ID/CLIENT_ID/CLIENT_SECRET"
            )

        url = f"{s.authority_url.rstrip('/')}/{s.tenant_id}/oauth2/v2.0/token"
        try:
            response = self._http.post(
                url,
                data={
                    "grant_type": "client_credentials",
                    "client_id": s.client_id,
                    "client_secret": s.client_secret,
                    "scope": GRAPH_SCOPE,
                },
            )
            response.raise_for_status()
            token = response.json().get("access_token")
        except httpx.HTTPError as exc:
            raise DirectoryAuthError(f"Token request failed: {_describe_http_error(exc)}") from exc
        except ValueError as exc:
            raise DirectoryAuthError("Token endpoint returned invalid JSON") from exc

        if not isinstance(token, str) or not token:
            raise DirectoryAuthError("Token endpoint returned no access_token")
        logger.debug("Access token acquired for tenant %s", s.tenant_id)
        return token

    def _headers(self) -> dict[str, str]:
        if self._token is None:
            self._token = self._acquire_token()
        return {"Authorization": f"Bearer {self._token}"}

    # -- reads ----------------------------------------------------------

    def _get_json(self, url: str) -> dict[str, Any]:
        headers = self._headers()
        try:
            response = self._http.get(url, headers=headers)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise DirectoryReadError(f"GET {url} failed: {_describe_http_error(exc)}") from exc
        except ValueError as exc:
            raise DirectoryReadError(f"GET {url} returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise DirectoryReadError(f"GET {url} returned unexpected payload")
        return payload

    def _parse_policy(self, payload: dict[str, Any]) -> PolicyObject:
        try:
            return PolicyObject.model_validate(payload)
        except ValidationError as exc:
            raise DirectoryReadError(f"Malformed groupSetting: {exc}") from exc

    def list_policies(self) -> list[PolicyObject]:
        url: str | None = f"{self._base_url}/groupSettings"
        policies: list[PolicyObject] = []
        pages = 0
        while url and pages < _MAX_PAGES:
            pages += 1
            payload = self._get_json(url)
            entries = payload.get("value", [])
            if isinstance(entries, list):
                for entry in entries:
                    if isinstance(entry, dict):
                        policies.append(self._parse_policy(entry))
            next_link = payload.get("@odata.nextLink")
            url = next_link if isinstance(next_link, str) and next_link else None
        if url:
            raise DirectoryReadError(
                f"groupSettings still paging after {_MAX_PAGES} pages; refusing a partial lookup"
            )
        return policies

    def lookup_policy_by_template(self, template_id: str) -> PolicyObject | None:
        for policy in self.list_policies():
            if policy.template_id.lower() == template_id.lower():
                logger.debug("Found groupSetting %s for template %s", policy.id, template_id)
                return policy
        return None

    def fetch_policy(self, policy_id: str) -> PolicyObject:
        payload = self._get_json(f"{self._base_url}/groupSettings/{policy_id}")
        return self._parse_policy(payload)

    # -- writes ---------------------------------------------------------

    def create_policy(self, template_id: str, settings: Sequence[PolicySetting]) -> PolicyObject:
        body = {"templateId": template_id, "values": _settings_payload(settings)}
        try:
            response = self._http.post(
                f"{self._base_url}/groupSettings",
                json=body,
                headers=self._headers(),
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise DirectoryWriteError(WriteOperation.CREATE, _describe_http_error(exc)) from exc
        except ValueError as exc:
            raise DirectoryWriteError(WriteOperation.CREATE, "invalid JSON in response") from exc

        try:
            return PolicyObject.model_validate(payload)
        except ValidationError as exc:
            raise DirectoryWriteError(WriteOperation.CREATE, exc) from exc

    def update_policy(self, policy_id: str, settings: Sequence[PolicySetting]) -> None:
        body = {"values": _settings_payload(settings)}
        try:
            response = self._http.patch(
                f"{self._base_url}/groupSettings/{policy_id}",
                json=body,
                headers=self._headers(),
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise DirectoryWriteError(WriteOperation.UPDATE, _describe_http_error(exc)) from exc
