# src/newrelic_batch/parsers/base.py
"""
RecordReader — ciclo canônico de leitura de um arquivo tabular.

Máquina de estados por chamada (terminal ao fim de uma passada):
    1. bind do template aos cabeçalhos observados
    2. `check_required()` — coluna obrigatória ausente aborta antes do loop
    3. para cada linha:
        - tipo diferente do template → evento RECORD_TYPE_MISMATCH e skip
        - caso contrário → `create()` (construção + resolução de referências)
    4. retorna a lista (vazia é resultado válido)

Decisões arquiteturais:
    - Linha de outro tipo NUNCA aborta; qualquer outra falha aborta a chamada
    - Não existe resultado parcial: exceções propagam sem lista
    - Referências (políticas, canais, aplicações) chegam como listas e são
      indexadas por chamada em `prepare()`

Limites explícitos:
    - Não abre arquivos (recebe cabeçalhos e linhas já lidos)
    - Não chama o serviço remoto
"""

from __future__ import annotations

from typing import Any, Dict, Generic, Iterable, List, Optional, Sequence, TypeVar

from ..core.context import BatchContext
from ..core.errors import record_type_mismatch
from ..schema.instance import SchemaInstance
from ..schema.registry import TemplateRegistry, default_registry

E = TypeVar("E")

Row = Sequence[Any]


class RecordReader(Generic[E]):
    """Base dos leitores tabulares; subclasses definem `kind` e `create()`."""

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

    @property
    def registry(self) -> TemplateRegistry:
        return self._registry

    def prepare(self, **refs: Any) -> Dict[str, Any]:
        return refs

    def create(self, instance: SchemaInstance, row: Row, **refs: Any) -> E:
        raise NotImplementedError

    def read(self, headers: Sequence[Any], rows: Iterable[Row], **refs: Any) -> List[E]:
        rows = list(rows)
        instance = self._registry.bind(self.kind, headers)
        prepared = self.prepare(**refs)

        self._ctx.log(
            kind=self.kind,
            level="info",
            message=f"Processing {self.kind} file: headers={len(headers)} lines={len(rows)}",
        )

        instance.check_required()

        out: List[E] = []
        for i, row in enumerate(rows):
            if not instance.matches(row):
                payload = record_type_mismatch(kind=self.kind, observed=instance.type_of(row), row_index=i)
                self._ctx.log(kind=self.kind, level="warning", message=payload.message, error=payload.to_dict())
                self._ctx.add_warning(kind=self.kind, message=payload.message)
                continue
            out.append(self.create(instance, row, **prepared))

        self._ctx.log(kind=self.kind, level="info", message=f"Read {len(out)} {self.kind} records")
        return out
