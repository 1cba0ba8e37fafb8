"""Capa CLI: comandos Typer, render Rich y configuración de logging.

Es la capa más externa y el único borde que imprime errores.
"""
