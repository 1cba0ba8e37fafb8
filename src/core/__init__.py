"""Core: dominio, configuración, errores y el servicio de consulta."""
