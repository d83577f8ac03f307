"""Cliente PipeRun.

Responsabilidad:
- Mantener la configuración (`ClientSettings`) de una instancia.
- Exponer los recursos (`pipelines`, `persons`, `companies`, `deals`,
  `notes`, `cities`) sobre un único `HttpExecutor`.

Nota:
- Una instancia tiene un solo dueño: los setters reemplazan el valor de
  configuración y no es seguro llamarlos desde varios hilos. Para
  concurrencia, una instancia por hilo (`with_settings`).
"""

from __future__ import annotations

from typing import Any

import httpx

from piperun.adapters.http_client import HttpExecutor, build_default_headers
from piperun.adapters.resources import (
    CitiesResource,
    CompaniesResource,
    DealsResource,
    NotesResource,
    PersonsResource,
    PipelinesResource,
)
from piperun.core.config import ClientSettings
from piperun.core.interfaces.executor import Headers


class PiperunClient:
    """Punto de entrada del SDK.

    Ejemplo::

        with PiperunClient(ClientSettings(token="...")) as client:
            client.persons.find_by_email("ana@example.com")
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._transport = transport
        self._executor = HttpExecutor(settings or ClientSettings(), transport=transport)

        self.pipelines = PipelinesResource(self._executor)
        self.persons = PersonsResource(self._executor)
        self.companies = CompaniesResource(self._executor)
        self.deals = DealsResource(self._executor, self.settings.account_custom_field_id)
        self.notes = NotesResource(self._executor)
        self.cities = CitiesResource(self._executor)

    @property
    def settings(self) -> ClientSettings:
        return self._executor.settings

    @property
    def executor(self) -> HttpExecutor:
        return self._executor

    def _update(self, **changes: Any) -> PiperunClient:
        self._executor.settings = self.settings.model_copy(update=changes)
        return self

    def set_token(self, token: str) -> PiperunClient:
        return self._update(token=token)

    def set_debug(self, debug: bool) -> PiperunClient:
        return self._update(debug=debug)

    def set_upload(self, upload: bool) -> PiperunClient:
        return self._update(upload=upload)

    def set_decode(self, decode: bool) -> PiperunClient:
        return self._update(decode=decode)

    @property
    def token(self) -> str:
        return self.settings.token

    @property
    def debug(self) -> bool:
        return self.settings.debug

    @property
    def upload(self) -> bool:
        return self.settings.upload

    @property
    def decode(self) -> bool:
        return self.settings.decode

    def default_headers(self, extra: Headers | None = None) -> list[tuple[str, str]]:
        return build_default_headers(self.settings, extra)

    def with_settings(self, **changes: Any) -> PiperunClient:
        """Nuevo cliente independiente con la configuración modificada."""

        return PiperunClient(self.settings.model_copy(update=changes), transport=self._transport)

    def close(self) -> None:
        self._executor.close()

    def __enter__(self) -> PiperunClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
