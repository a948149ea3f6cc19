"""Interfaces/abstracciones del Core.

Contratos (Protocol) que implementan los clientes de servicio concretos en
`adapters/`. La CLI depende de estos contratos, no de las clases concretas.
"""
