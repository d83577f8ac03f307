"""Errores del SDK.

Tres familias, todas bajo `PiperunError`:
- `ValidationError`: faltan campos obligatorios; se lanza antes de cualquier I/O.
- `ApiError`: la API respondió pero no señaló éxito.
- `TransportError`: fallo de red/HTTP por debajo de la API (httpx).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from piperun.core.domain.models import ResponseEnvelope


class PiperunError(Exception):
    """Base de todos los errores del cliente."""


class ValidationError(PiperunError):
    """Una o más reglas de campos obligatorios no se cumplen.

    El mensaje es la lista completa de violaciones unida por saltos de línea.
    """

    def __init__(self, violations: Sequence[str]) -> None:
        self.violations = list(violations)
        super().__init__("\n".join(self.violations))


class ApiError(PiperunError):
    """La API no señaló éxito para la operación."""

    def __init__(self, message: str, envelope: ResponseEnvelope | None = None) -> None:
        super().__init__(message)
        self.envelope = envelope

    @property
    def http_code(self) -> int | None:
        return self.envelope.http_code if self.envelope is not None else None


class TransportError(PiperunError):
    """Fallo de transporte (conexión, timeout, protocolo)."""
