"""Personas (contactos).

Por qué un módulo por recurso:
- Cada recurso concentra sus paths y sus reglas de búsqueda.
- El ciclo validar -> request -> unwrap es siempre el mismo (`base.unwrap`).
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping
from urllib.parse import quote

from piperun.adapters.resources.base import Resource, unwrap
from piperun.core.domain.models import ParamLike, QueryParam, ResponseEnvelope, replace_params
from piperun.core.validation import ensure_valid


class PersonsResource(Resource):
    path = "persons"

    def find_by_phone(self, phone: str, params: Iterable[ParamLike] | None = None) -> ResponseEnvelope:
        """Busca personas por teléfono, incluyendo sus oportunidades."""

        ensure_valid("persons.find_by_phone", {"phone": phone})
        path = f"{self.path}?with=deals&phone={quote(str(phone), safe='')}"
        return unwrap(self._executor.get(path, params))

    def find_by_email(self, email: str, params: Iterable[ParamLike] | None = None) -> ResponseEnvelope:
        ensure_valid("persons.find_by_email", {"email": email})
        query = replace_params(params, drop=["email"], append=[QueryParam(name="email", value=email)])
        return unwrap(self._executor.get(self.path, query))

    def create(self, data: Mapping[str, Any], params: Iterable[ParamLike] | None = None) -> ResponseEnvelope:
        ensure_valid("persons.create", data)
        return unwrap(self._executor.post(self.path, data, params))

    def update(
        self,
        person_id: int,
        data: Mapping[str, Any],
        params: Iterable[ParamLike] | None = None,
    ) -> ResponseEnvelope:
        ensure_valid("persons.update", {"person_id": person_id})
        return unwrap(self._executor.put(self._item_path(person_id), data, params))

    def delete(self, person_id: int, params: Iterable[ParamLike] | None = None) -> ResponseEnvelope:
        ensure_valid("persons.delete", {"person_id": person_id})
        return unwrap(self._executor.delete(self._item_path(person_id), params))
