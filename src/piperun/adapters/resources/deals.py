"""Oportunidades (deals).

Nota:
- La búsqueda por cuenta usa un custom field configurable
  (`ClientSettings.account_custom_field_id`); el valor viaja entre comillas
  simples porque así lo compara PipeRun.
- `delete` se juzga por HTTP 204: la API no devuelve body.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from piperun.adapters.resources.base import Resource, unwrap
from piperun.core.config import DEFAULT_ACCOUNT_FIELD_ID
from piperun.core.domain.models import ParamLike, QueryParam, ResponseEnvelope, replace_params
from piperun.core.interfaces.executor import RequestExecutor
from piperun.core.validation import ensure_valid


class DealsResource(Resource):
    path = "deals"

    def __init__(self, executor: RequestExecutor, account_field_id: int = DEFAULT_ACCOUNT_FIELD_ID) -> None:
        super().__init__(executor)
        self.account_field_id = account_field_id

    def find_by_account(self, account_id: int, params: Iterable[ParamLike] | None = None) -> ResponseEnvelope:
        ensure_valid("deals.find_by_account", {"account_id": account_id})
        field_name = f"custom_fields[{self.account_field_id}]"
        query = replace_params(
            params,
            drop=["conta_id", field_name, "with"],
            append=[
                QueryParam(name=field_name, value=f"'{account_id}'"),
                QueryParam(name="with", value="customFields"),
            ],
        )
        return unwrap(self._executor.get(self.path, query))

    def create(self, data: Mapping[str, Any], params: Iterable[ParamLike] | None = None) -> ResponseEnvelope:
        ensure_valid("deals.create", data)
        return unwrap(self._executor.post(self.path, data, params))

    def update(
        self,
        deal_id: int,
        data: Mapping[str, Any],
        params: Iterable[ParamLike] | None = None,
    ) -> ResponseEnvelope:
        ensure_valid("deals.update", {"deal_id": deal_id})
        return unwrap(self._executor.put(self._item_path(deal_id), data, params))

    def delete(self, deal_id: int, params: Iterable[ParamLike] | None = None) -> ResponseEnvelope:
        ensure_valid("deals.delete", {"deal_id": deal_id})
        envelope = self._executor.delete(self._item_path(deal_id), params)
        return unwrap(envelope, succeeded=envelope.http_code == 204)
