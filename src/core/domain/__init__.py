"""Modelos del dominio.

Por qué:
- Estructuras de datos puras (Pydantic v2) para los envelopes GraphQL y el
  paquete Move decodificado.
- El dominio no conoce HTTP ni la CLI: solo conceptos del problema.
"""
