"""Adaptadores de I/O: cliente httpx, GraphQL de Sui y exportación JSON."""
