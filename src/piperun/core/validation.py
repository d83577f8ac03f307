"""Reglas declarativas de campos obligatorios por operación.

Por qué declarativo:
- Cada operación de escritura tiene su set de reglas en un solo lugar
  (`RULES`), en vez de `if` dispersos por método.
- Se recolectan *todas* las violaciones antes de fallar.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from piperun.core.domain.errors import ValidationError


@dataclass(frozen=True)
class Rule:
    field: str
    message: str


def is_empty(value: Any) -> bool:
    # Vacío: None, False, "", "0", 0 o colección sin elementos.
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value.strip() in ("", "0")
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


RULES: dict[str, tuple[Rule, ...]] = {
    "persons.find_by_phone": (Rule("phone", "A valid phone number is required"),),
    "persons.find_by_email": (Rule("email", "The person's email is required"),),
    "persons.create": (Rule("name", "The contact name is required"),),
    "persons.update": (Rule("person_id", "The id of the person to update is required"),),
    "persons.delete": (Rule("person_id", "The id of the person to delete is required"),),
    "companies.find_by_cnpj": (Rule("cnpj", "The company's CNPJ is required"),),
    "companies.find_by_phone": (Rule("phone", "A valid phone number is required"),),
    "companies.create": (Rule("name", "The company name is required"),),
    "companies.update": (Rule("company_id", "The id of the company to update is required"),),
    "companies.delete": (Rule("company_id", "The id of the company to delete is required"),),
    "deals.find_by_account": (Rule("account_id", "The account id is required"),),
    "deals.create": (
        Rule("pipeline_id", "The id of the pipeline for the deal is required"),
        Rule("stage_id", "The id of the stage for the deal is required"),
        Rule("title", "The deal title is required"),
    ),
    "deals.update": (Rule("deal_id", "The id of the deal to update is required"),),
    "deals.delete": (Rule("deal_id", "The id of the deal to delete is required"),),
    "notes.create_for_person": (
        Rule("person_id", "The person id is required"),
        Rule("deal_id", "The deal id is required"),
        Rule("text", "The note text is required"),
    ),
    "notes.create_for_company": (
        Rule("company_id", "The company id is required"),
        Rule("deal_id", "The deal id is required"),
        Rule("text", "The note text is required"),
    ),
    "notes.delete": (Rule("note_id", "The note id is required"),),
    "cities.find": (
        Rule("name", "The city name is required"),
        Rule("uf", "The state (UF) is required"),
    ),
}


def collect_violations(rules: tuple[Rule, ...], data: Mapping[str, Any] | None) -> list[str]:
    data = data or {}
    return [rule.message for rule in rules if is_empty(data.get(rule.field))]


def ensure_valid(operation: str, data: Mapping[str, Any] | None) -> None:
    """Lanza `ValidationError` con todas las violaciones de `operation`."""

    violations = collect_violations(RULES[operation], data)
    if violations:
        raise ValidationError(violations)
