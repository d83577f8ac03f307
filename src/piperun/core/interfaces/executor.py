"""Contrato del executor HTTP.

Por qué Protocol:
- Los recursos (persons, deals, ...) dependen de esta forma, no de httpx.
- Permite sustituir el executor por un doble en tests sin herencia.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Protocol, Sequence, runtime_checkable

from piperun.core.domain.models import ParamLike, ResponseEnvelope

Headers = Sequence[tuple[str, str]]


@runtime_checkable
class RequestExecutor(Protocol):
    """Verbos HTTP que devuelven siempre un `ResponseEnvelope`.

    Reglas de diseño:
    - Síncrono: un request a la vez.
    - No interpreta éxito/fracaso de negocio; eso es tarea de cada recurso.
    """

    def get(
        self, path: str, params: Iterable[ParamLike] | None = None, headers: Headers | None = None
    ) -> ResponseEnvelope:
        ...

    def post(
        self,
        path: str,
        body: Mapping[str, Any] | None = None,
        params: Iterable[ParamLike] | None = None,
        headers: Headers | None = None,
    ) -> ResponseEnvelope:
        ...

    def put(
        self,
        path: str,
        body: Mapping[str, Any] | None = None,
        params: Iterable[ParamLike] | None = None,
        headers: Headers | None = None,
    ) -> ResponseEnvelope:
        ...

    def patch(
        self,
        path: str,
        body: Mapping[str, Any] | None = None,
        params: Iterable[ParamLike] | None = None,
        headers: Headers | None = None,
    ) -> ResponseEnvelope:
        ...

    def delete(
        self, path: str, params: Iterable[ParamLike] | None = None, headers: Headers | None = None
    ) -> ResponseEnvelope:
        ...

    def options(
        self, path: str, params: Iterable[ParamLike] | None = None, headers: Headers | None = None
    ) -> ResponseEnvelope:
        ...
