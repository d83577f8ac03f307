"""SDK síncrono para la API REST de PipeRun CRM."""

from piperun.client import PiperunClient
from piperun.core.config import ClientSettings
from piperun.core.domain import (
    ApiError,
    City,
    Company,
    Deal,
    Note,
    Person,
    Pipeline,
    PiperunError,
    QueryParam,
    ResponseEnvelope,
    TransportError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "City",
    "ClientSettings",
    "Company",
    "Deal",
    "Note",
    "Person",
    "Pipeline",
    "PiperunClient",
    "PiperunError",
    "QueryParam",
    "ResponseEnvelope",
    "TransportError",
    "ValidationError",
]
