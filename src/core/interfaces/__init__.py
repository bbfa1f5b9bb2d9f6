"""Interfaces/abstracciones del Core.

Por qué:
- `ProcessSpawner`/`ProcessHandle` (Protocol) separan el orquestador de la
  forma concreta de lanzar procesos.
- Permite invertir dependencias: el Core depende de abstracciones y los tests
  pueden inyectar un spawner falso.
"""
