"""Modelos y entidades del dominio.

Por qué:
- Aquí viven el plan de ejecución (Pydantic v2) y la taxonomía de errores.
- El dominio no conoce descriptores, procesos ni la CLI: solo conceptos del
  intérprete.
"""
