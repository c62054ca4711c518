# src/newrelic_batch/schema/template.py
"""
SchemaTemplate — descrição declarativa de um tipo de registro tabular.

Um template é:
    - uma constante discriminadora (`type`), usada para marcar linhas de saída
      e para filtrar linhas de entrada em arquivos com tipos misturados
    - um mapeamento ordenado nome → FieldDefinition, sempre iniciado pela
      coluna reservada `Type`

Decisões arquiteturais:
    - A ordem de declaração define a ordem das colunas na saída
    - Nome duplicado é erro de configuração, levantado no registro da coluna
    - Após o registro no TemplateRegistry o template é congelado

Limites explícitos:
    - Não lê linhas (ver SchemaInstance)
    - Não conhece entidades nem regras de validação de domínio
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from ..core.exceptions import SchemaError
from .column import TEMPLATE_TYPE, FieldDefinition
from .instance import SchemaInstance


class SchemaTemplate:
    """Conjunto ordenado de colunas associado a uma constante de tipo."""

    def __init__(self, type: str, columns: Iterable[FieldDefinition] = ()):
        if not isinstance(type, str) or not type.strip():
            raise SchemaError("template type must be a non-empty string")
        self._type = type
        self._columns: Dict[str, FieldDefinition] = {}
        self._frozen = False

        self.add_column(TEMPLATE_TYPE)
        for column in columns:
            self.add_column(column)

    @property
    def type(self) -> str:
        return self._type

    def add_column(self, column: FieldDefinition) -> None:
        if self._frozen:
            raise SchemaError(
                f"template is frozen: {self._type}",
                details={"kind": self._type, "column": column.name},
            )
        if column.name in self._columns:
            raise SchemaError(
                f"column already exists: {column.name}",
                details={"kind": self._type, "column": column.name},
            )
        self._columns[column.name] = column

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def column(self, name: str) -> Optional[FieldDefinition]:
        return self._columns.get(name)

    def columns(self) -> List[FieldDefinition]:
        return list(self._columns.values())

    def output_columns(self) -> List[FieldDefinition]:
        return [c for c in self._columns.values() if c.output]

    def output_headers(self) -> List[str]:
        return [c.header for c in self.output_columns()]

    def bind(self, headers: Sequence[object]) -> SchemaInstance:
        return SchemaInstance(self, headers)

    def __repr__(self) -> str:
        return f"SchemaTemplate(type={self._type!r}, columns={list(self._columns)!r})"
