"""CLI (Typer) sobre el SDK."""
