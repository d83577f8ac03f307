"""Core del SDK: configuración, dominio, validación y contratos."""
