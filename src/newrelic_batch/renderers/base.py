# src/newrelic_batch/renderers/base.py
"""
RecordWriter — ciclo canônico de escrita tabular.

    1. primeira linha = cabeçalhos das colunas de saída, na ordem do template
    2. para cada entidade: `values()` devolve {nome da coluna: valor}
    3. cada linha é montada na ordem do template; valor ausente vira o
       default declarado da coluna, ou "" quando não há default
    4. a coluna `Type` é sempre a constante do template

Referências cruzadas são re-resolvidas para nomes dentro de `values()`,
com as mesmas falhas fatais da leitura.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, Iterable, List, Optional, TypeVar

from ..core.context import BatchContext
from ..schema.column import TEMPLATE_TYPE, FieldDefinition
from ..schema.registry import TemplateRegistry, default_registry

E = TypeVar("E")


def cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _value_or_default(values: Dict[str, Any], column: FieldDefinition) -> Any:
    value = values.get(column.name)
    return column.default if value is None else value


class RecordWriter(Generic[E]):
    """Base dos escritores tabulares; subclasses definem `kind` e `values()`."""

    kind: str = ""

    def __init__(
        self,
        *,
        registry: Optional[TemplateRegistry] = None,
        ctx: Optional[BatchContext] = None,
    ):
        self._registry = registry if registry is not None else default_registry()
        self._ctx = ctx if ctx is not None else BatchContext.new()

    @property
    def ctx(self) -> BatchContext:
        return self._ctx

    def prepare(self, **refs: Any) -> Dict[str, Any]:
        return refs

    def values(self, entity: E, **refs: Any) -> Dict[str, Any]:
        raise NotImplementedError

    def render(self, entities: Iterable[E], **refs: Any) -> List[List[str]]:
        entities = list(entities)
        template = self._registry.get(self.kind)
        columns = template.output_columns()
        prepared = self.prepare(**refs)

        self._ctx.log(kind=self.kind, level="info", message=f"Writing {len(entities)} {self.kind} records")

        rows: List[List[str]] = [template.output_headers()]
        for entity in entities:
            values = self.values(entity, **prepared)
            values[TEMPLATE_TYPE.name] = template.type
            rows.append([cell(_value_or_default(values, c)) for c in columns])
        return rows
