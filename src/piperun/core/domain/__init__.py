"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2) y los errores.
- El dominio no conoce HTTP ni CLI: solo conceptos de PipeRun.
"""

from piperun.core.domain.errors import ApiError, PiperunError, TransportError, ValidationError
from piperun.core.domain.models import (
    City,
    Company,
    Deal,
    Note,
    Person,
    Pipeline,
    QueryParam,
    ResponseEnvelope,
)

__all__ = [
    "ApiError",
    "City",
    "Company",
    "Deal",
    "Note",
    "Person",
    "Pipeline",
    "PiperunError",
    "QueryParam",
    "ResponseEnvelope",
    "TransportError",
    "ValidationError",
]
