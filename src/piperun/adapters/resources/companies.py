"""Empresas."""

from __future__ import annotations

from typing import Any, Iterable, Mapping
from urllib.parse import quote

from piperun.adapters.resources.base import Resource, unwrap
from piperun.core.domain.models import ParamLike, QueryParam, ResponseEnvelope, replace_params
from piperun.core.validation import ensure_valid


class CompaniesResource(Resource):
    path = "companies"

    def find_by_cnpj(self, cnpj: str, params: Iterable[ParamLike] | None = None) -> ResponseEnvelope:
        ensure_valid("companies.find_by_cnpj", {"cnpj": cnpj})
        query = replace_params(params, drop=["cnpj"], append=[QueryParam(name="cnpj", value=cnpj)])
        return unwrap(self._executor.get(self.path, query))

    def find_by_phone(self, phone: str, params: Iterable[ParamLike] | None = None) -> ResponseEnvelope:
        ensure_valid("companies.find_by_phone", {"phone": phone})
        path = f"{self.path}?with=deals&phone={quote(str(phone), safe='')}"
        return unwrap(self._executor.get(path, params))

    def create(self, data: Mapping[str, Any], params: Iterable[ParamLike] | None = None) -> ResponseEnvelope:
        ensure_valid("companies.create", data)
        return unwrap(self._executor.post(self.path, data, params))

    def update(
        self,
        company_id: int,
        data: Mapping[str, Any],
        params: Iterable[ParamLike] | None = None,
    ) -> ResponseEnvelope:
        ensure_valid("companies.update", {"company_id": company_id})
        return unwrap(self._executor.put(self._item_path(company_id), data, params))

    def delete(self, company_id: int, params: Iterable[ParamLike] | None = None) -> ResponseEnvelope:
        ensure_valid("companies.delete", {"company_id": company_id})
        return unwrap(self._executor.delete(self._item_path(company_id), params))
