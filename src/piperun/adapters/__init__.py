"""Adaptadores de I/O: HTTP, recursos REST y exportación."""
