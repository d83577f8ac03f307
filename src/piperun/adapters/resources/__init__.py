"""Recursos PipeRun (adaptadores concretos).

Por qué un paquete:
- Agrupa módulos por recurso REST (pipelines, persons, companies, ...).
- Cada recurso depende de `core.interfaces.RequestExecutor`, no de httpx.
"""

from piperun.adapters.resources.base import unwrap
from piperun.adapters.resources.cities import CitiesResource
from piperun.adapters.resources.companies import CompaniesResource
from piperun.adapters.resources.deals import DealsResource
from piperun.adapters.resources.notes import NotesResource
from piperun.adapters.resources.persons import PersonsResource
from piperun.adapters.resources.pipelines import PipelinesResource

__all__ = [
    "CitiesResource",
    "CompaniesResource",
    "DealsResource",
    "NotesResource",
    "PersonsResource",
    "PipelinesResource",
    "unwrap",
]
