"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2): el modelo genérico
  de contenedor y el formato de cable del daemon de virtualización.
- El dominio no conoce HTTP ni CLI: solo conceptos del problema.
"""
