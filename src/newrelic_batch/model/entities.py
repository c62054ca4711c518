# src/newrelic_batch/model/entities.py
"""Entidades monitoradas (aplicações, hosts) usadas para resolver filtros."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Entity:
    """Entidade remota identificada por nome e id (ex.: aplicação APM)."""

    name: str
    id: Optional[int] = None
