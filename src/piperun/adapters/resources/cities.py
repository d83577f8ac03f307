"""Ciudades: lookup del id a partir de nombre + UF."""

from __future__ import annotations

from typing import Iterable

from piperun.adapters.resources.base import Resource, unwrap
from piperun.core.domain.models import ParamLike, QueryParam, ResponseEnvelope, replace_params
from piperun.core.validation import ensure_valid


class CitiesResource(Resource):
    path = "cities"

    def find(self, name: str, uf: str, params: Iterable[ParamLike] | None = None) -> ResponseEnvelope:
        ensure_valid("cities.find", {"name": name, "uf": uf})
        query = replace_params(
            params,
            drop=["cidade", "name", "uf"],
            append=[QueryParam(name="name", value=name), QueryParam(name="uf", value=uf)],
        )
        return unwrap(self._executor.get(self.path, query))
