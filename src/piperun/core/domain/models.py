"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Los bodies de PipeRun son JSON sueltos; los registros tipados se validan
  contra un esquema en vez de revisar claves a mano.
- `ResponseEnvelope` es la única estructura que viaja entre el executor, los
  recursos y el caller.

Nota:
- Los registros usan `extra="allow"`: PipeRun devuelve muchos campos y
  custom fields que no modelamos uno a uno.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping, TypeVar, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class QueryParam(BaseModel):
    """Par `name=value` para la query string de un request."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Nombre del parámetro.")
    value: str = Field(default="", description="Valor (se codifica al enviar).")


ParamLike = Union[QueryParam, Mapping[str, Any], tuple]


def normalize_params(params: Iterable[ParamLike] | None) -> list[QueryParam]:
    """Acepta `QueryParam`, dicts `{"name", "value"}` o tuplas `(name, value)`."""

    out: list[QueryParam] = []
    for item in params or []:
        if isinstance(item, QueryParam):
            out.append(item)
        elif isinstance(item, Mapping):
            value = item.get("value")
            out.append(QueryParam(name=str(item.get("name") or ""), value="" if value is None else str(value)))
        else:
            name, value = item
            out.append(QueryParam(name=str(name or ""), value="" if value is None else str(value)))
    return out


def replace_params(
    params: Iterable[ParamLike] | None,
    *,
    drop: Iterable[str],
    append: Iterable[QueryParam],
) -> list[QueryParam]:
    """Quita los params con nombre en `drop` y añade `append` al final.

    Semántica last-write-wins: el valor de la llamada reemplaza al del caller.
    """

    dropped = set(drop)
    kept = [p for p in normalize_params(params) if p.name not in dropped]
    return kept + list(append)


RecordT = TypeVar("RecordT", bound=BaseModel)


class ResponseEnvelope(BaseModel):
    """Resultado uniforme de cada request: `{body, httpCode, info?}`."""

    model_config = ConfigDict(populate_by_name=True)

    body: Any = Field(default=None, description="JSON decodificado o texto crudo.")
    http_code: int = Field(..., alias="httpCode", description="Código HTTP de la respuesta.")
    info: dict[str, Any] | None = Field(
        default=None,
        description="Diagnóstico del request (solo en modo debug).",
    )

    @property
    def succeeded(self) -> bool:
        if isinstance(self.body, Mapping):
            return bool(self.body.get("success"))
        return False

    @property
    def message(self) -> str | None:
        if isinstance(self.body, Mapping) and self.body.get("message") is not None:
            return str(self.body["message"])
        return None

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True)
        if data.get("info") is None:
            data.pop("info", None)
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def data_as(self, model: type[RecordT]) -> RecordT | list[RecordT] | None:
        """Valida `body["data"]` contra `model` (uno o lista)."""

        if not isinstance(self.body, Mapping):
            return None
        data = self.body.get("data")
        if data is None:
            return None
        if isinstance(data, list):
            return [model.model_validate(item) for item in data]
        return model.model_validate(data)


class _Record(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | None = Field(default=None, description="Id en PipeRun.")


class Pipeline(_Record):
    """Embudo de ventas."""

    name: str | None = None


class Person(_Record):
    name: str | None = None
    email: str | None = None
    company_id: int | None = None
    city_id: int | None = None


class Company(_Record):
    name: str | None = None
    cnpj: str | None = None
    city_id: int | None = None


class Deal(_Record):
    """Oportunidad."""

    title: str | None = None
    pipeline_id: int | None = None
    stage_id: int | None = None
    person_id: int | None = None
    company_id: int | None = None


class Note(_Record):
    text: str | None = None
    deal_id: int | None = None
    person_id: int | None = None
    company_id: int | None = None


class City(_Record):
    name: str | None = None
    uf: str | None = None
