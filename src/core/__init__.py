"""Core: configuración, errores, modelos del dominio y contratos."""
