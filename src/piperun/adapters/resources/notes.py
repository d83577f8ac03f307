"""Notas vinculadas a una oportunidad y a una persona o empresa."""

from __future__ import annotations

from typing import Iterable

from piperun.adapters.resources.base import Resource, unwrap
from piperun.core.domain.models import ParamLike, ResponseEnvelope
from piperun.core.validation import ensure_valid


class NotesResource(Resource):
    path = "notes"

    def create_for_person(
        self,
        person_id: int,
        deal_id: int,
        text: str,
        params: Iterable[ParamLike] | None = None,
    ) -> ResponseEnvelope:
        body = {"text": text, "person_id": person_id, "deal_id": deal_id}
        ensure_valid("notes.create_for_person", body)
        return unwrap(self._executor.post(self.path, body, params))

    def create_for_company(
        self,
        company_id: int,
        deal_id: int,
        text: str,
        params: Iterable[ParamLike] | None = None,
    ) -> ResponseEnvelope:
        body = {"text": text, "company_id": company_id, "deal_id": deal_id}
        ensure_valid("notes.create_for_company", body)
        return unwrap(self._executor.post(self.path, body, params))

    def delete(self, note_id: int, params: Iterable[ParamLike] | None = None) -> ResponseEnvelope:
        ensure_valid("notes.delete", {"note_id": note_id})
        return unwrap(self._executor.delete(self._item_path(note_id), params))
