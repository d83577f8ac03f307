"""Base común de los recursos PipeRun.

Cada operación sigue el mismo ciclo: validar -> request -> unwrap.
`unwrap` aplica la política uniforme de éxito/error.
"""

from __future__ import annotations

from piperun.core.domain.errors import ApiError
from piperun.core.domain.models import ResponseEnvelope
from piperun.core.interfaces.executor import RequestExecutor


def unwrap(envelope: ResponseEnvelope, *, succeeded: bool | None = None) -> ResponseEnvelope:
    """Devuelve el envelope si hubo éxito; si no, lanza `ApiError`.

    `succeeded` por defecto es el flag `success` del body; algunos endpoints
    se juzgan por el código HTTP y lo pasan explícitamente.
    """

    ok = envelope.succeeded if succeeded is None else succeeded
    if ok:
        return envelope
    message = envelope.message
    if message is not None:
        raise ApiError(message, envelope)
    raise ApiError(envelope.to_json(), envelope)


class Resource:
    """Recurso REST con un executor inyectado."""

    path: str = ""

    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    def _item_path(self, item_id: int) -> str:
        return f"{self.path}/{item_id}"
