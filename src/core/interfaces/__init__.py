"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- El servicio de consulta depende del contrato, no de httpx.
"""
