"""Adaptadores de I/O: cliente HTTP, peticiones REST y clientes de servicio Watson."""
