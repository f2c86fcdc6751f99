"""Modelos, constantes y errores del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni CSV: solo conceptos del problema.
"""
