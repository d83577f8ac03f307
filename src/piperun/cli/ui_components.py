"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from piperun.core.domain.models import ResponseEnvelope


def build_records_table(records: list[dict[str, Any]], *, title: str, columns: list[str]) -> Table:
    """Tabla Rich con las columnas pedidas de cada registro de `data`."""

    table = Table(title=title)
    table.add_column("id", style="cyan", no_wrap=True)
    for column in columns:
        table.add_column(column, style="white")
    for record in records:
        row = [str(record.get("id", ""))]
        row.extend("" if record.get(c) is None else str(record.get(c)) for c in columns)
        table.add_row(*row)
    return table


def build_envelope_panel(envelope: ResponseEnvelope) -> Panel:
    """Panel con el envelope completo (body + httpCode + info)."""

    if isinstance(envelope.body, str):
        content: Any = Text(envelope.body)
    else:
        content = Syntax(
            json.dumps(envelope.to_dict(), ensure_ascii=False, indent=2, default=str),
            "json",
            word_wrap=True,
        )
    style = "green" if 200 <= envelope.http_code < 300 else "red"
    return Panel(content, title=f"HTTP {envelope.http_code}", border_style=style)


def print_envelope(console: Console, envelope: ResponseEnvelope, *, title: str, columns: list[str]) -> None:
    """Tabla si `body.data` es una lista de registros; si no, el panel crudo."""

    body = envelope.body
    data = body.get("data") if isinstance(body, dict) else None
    if isinstance(data, list) and all(isinstance(item, dict) for item in data) and not envelope.info:
        console.print(build_records_table(data, title=title, columns=columns))
        return
    console.print(build_envelope_panel(envelope))
