"""Modelos y entidades del dominio.

Aquí viven las estructuras de datos puras (Pydantic v2) que devuelven y
reciben los clientes de servicio. El dominio no conoce HTTP ni la CLI.
"""
