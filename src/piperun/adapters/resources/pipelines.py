"""Embudos de venta (pipelines)."""

from __future__ import annotations

from typing import Iterable

from piperun.adapters.resources.base import Resource, unwrap
from piperun.core.domain.models import ParamLike, ResponseEnvelope


class PipelinesResource(Resource):
    path = "pipelines"

    def list(self, params: Iterable[ParamLike] | None = None) -> ResponseEnvelope:
        """Lista los embudos. Éxito = HTTP 200 (este endpoint no se juzga por `success`)."""

        envelope = self._executor.get(self.path, params)
        return unwrap(envelope, succeeded=envelope.http_code == 200)
