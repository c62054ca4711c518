# src/newrelic_batch/schema/column.py
"""
FieldDefinition — declaração de uma coluna de template.

Uma coluna associa um nome estável (usado pelo código) a um cabeçalho
externo (usado na planilha). Colunas são obrigatórias e incluídas na saída,
salvo declaração explícita em contrário.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FieldDefinition:
    """Coluna declarada de um template tabular."""

    name: str
    header: str
    mandatory: bool = True
    default: Optional[str] = None
    output: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("column name must be a non-empty string")
        if not isinstance(self.header, str) or not self.header.strip():
            raise ValueError(f"column header must be a non-empty string: {self.name}")

    @classmethod
    def optional(
        cls,
        name: str,
        header: str,
        default: Optional[str] = None,
        *,
        output: bool = True,
    ) -> "FieldDefinition":
        return cls(name=name, header=header, mandatory=False, default=default, output=output)


# Coluna discriminadora reservada, presente em todo template tabular.
TEMPLATE_TYPE = FieldDefinition(name="template_type", header="Type")
