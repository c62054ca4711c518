# src/newrelic_batch/schema/registry.py
"""
TemplateRegistry v1 — catálogo determinístico de templates tabulares.

Leitores e escritores não descobrem templates por conta própria: recebem um
registry por injeção e consultam o template pelo seu `kind`.

Decisões arquiteturais:
    - Registro explícito, sem discovery automático
    - Template registrado é congelado (não aceita novas colunas)
    - `default_registry()` é construído uma única vez por processo e é
      somente-leitura depois disso

Invariantes:
    - `get(kind)` é idempotente
    - Tipo desconhecido é erro fatal (`not a valid template type`)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Sequence

from ..core.exceptions import SchemaError
from .instance import SchemaInstance
from .template import SchemaTemplate
from .templates import TEMPLATE_FACTORIES


class TemplateRegistry:
    """Registry determinístico de SchemaTemplate indexado por tipo."""

    def __init__(self, templates: Optional[Iterable[SchemaTemplate]] = None):
        self._templates: Dict[str, SchemaTemplate] = {}
        if templates:
            for t in templates:
                self.register(t)

    @classmethod
    def v1(cls) -> "TemplateRegistry":
        """Factory do catálogo v1 (políticas, canais e condições)."""
        return cls(templates=[factory() for factory in TEMPLATE_FACTORIES.values()])

    def register(self, template: SchemaTemplate) -> None:
        if not isinstance(template, SchemaTemplate):
            raise TypeError("template must be a SchemaTemplate")
        if template.type in self._templates:
            raise SchemaError(
                f"template already registered: {template.type}",
                details={"kind": template.type},
            )
        template.freeze()
        self._templates[template.type] = template

    def kinds(self) -> List[str]:
        return sorted(self._templates.keys())

    def __contains__(self, kind: object) -> bool:
        return kind in self._templates

    def get(self, kind: str) -> SchemaTemplate:
        if kind not in self._templates:
            raise SchemaError(
                f"not a valid template type: {kind}",
                details={"kind": kind, "known": self.kinds()},
            )
        return self._templates[kind]

    def bind(self, kind: str, headers: Sequence[object]) -> SchemaInstance:
        return self.get(kind).bind(headers)


def build_default_registry() -> TemplateRegistry:
    """Constrói um registry novo com todos os templates v1."""
    return TemplateRegistry.v1()


@lru_cache(maxsize=1)
def default_registry() -> TemplateRegistry:
    """Registry compartilhado do processo (construído uma única vez)."""
    return build_default_registry()
