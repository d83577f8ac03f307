"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: los recursos dependen de abstracciones.
"""

from piperun.core.interfaces.executor import Headers, RequestExecutor

__all__ = ["Headers", "RequestExecutor"]
