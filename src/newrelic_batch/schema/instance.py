# src/newrelic_batch/schema/instance.py
"""
SchemaInstance — template ligado aos cabeçalhos observados de um arquivo.

Uma instância é criada por chamada de leitura e guarda a posição de cada
cabeçalho observado (comparação case-insensitive, sem espaços nas bordas).
Ela expõe acessores tipados por nome de coluna, com fallback para o
default declarado quando a célula está vazia ou fora da linha.

Decisões arquiteturais:
    - `check_required` valida presença de COLUNAS, nunca valores por linha
    - Célula vazia e célula ausente são equivalentes (default ou None)
    - Valores são sempre convertidos para `str` e aparados antes da coerção
    - Coerção inválida é erro fatal (`TypeCoercionError`), nunca None silencioso

Invariantes:
    - A instância não muta o template
    - O mesmo (template, cabeçalhos, linha) produz sempre os mesmos valores
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence

from ..core.exceptions import SchemaError, TypeCoercionError
from .column import TEMPLATE_TYPE, FieldDefinition

if TYPE_CHECKING:  # pragma: no cover
    from .template import SchemaTemplate


def _fold(header: Any) -> str:
    return str(header).strip().lower()


def _is_blank(v: Any) -> bool:
    if v is None:
        return True
    if isinstance(v, str) and v.strip() == "":
        return True
    return False


class SchemaInstance:
    """Acesso posicional, por nome de coluna, às linhas de um arquivo."""

    def __init__(self, template: "SchemaTemplate", headers: Sequence[Any]):
        self._template = template
        self._headers = [_fold(h) for h in headers]
        self._positions: Dict[str, int] = {}
        for i, h in enumerate(self._headers):
            # primeira ocorrência vence
            self._positions.setdefault(h, i)

    @property
    def type(self) -> str:
        return self._template.type

    @property
    def template(self) -> "SchemaTemplate":
        return self._template

    @property
    def headers(self) -> list:
        return list(self._headers)

    # -----------------------------
    # Validação de cabeçalho
    # -----------------------------
    def position(self, header: str) -> int:
        return self._positions.get(_fold(header), -1)

    def has_column(self, name: str) -> bool:
        column = self._template.column(name)
        return column is not None and self.position(column.header) >= 0

    def check_required(self) -> None:
        for column in self._template.columns():
            if column.mandatory and self.position(column.header) < 0:
                raise SchemaError(
                    f"missing mandatory column: {column.name}",
                    details={"kind": self.type, "column": column.name, "header": column.header},
                )

    # -----------------------------
    # Acessores tipados
    # -----------------------------
    def _column(self, name: str) -> FieldDefinition:
        column = self._template.column(name)
        if column is None:
            raise SchemaError(
                f"missing column: {name}",
                details={"kind": self.type, "column": name},
            )
        return column

    def get_string(self, name: str, row: Sequence[Any]) -> Optional[str]:
        column = self._column(name)
        pos = self.position(column.header)

        value: Optional[str] = None
        if 0 <= pos < len(row) and not _is_blank(row[pos]):
            value = str(row[pos]).strip()

        if value is None:
            return column.default
        return value

    def get_integer(self, name: str, row: Sequence[Any]) -> Optional[int]:
        value = self.get_string(name, row)
        if _is_blank(value):
            return None
        try:
            return int(value)
        except ValueError:
            raise TypeCoercionError(
                f"{name}: expected integer but was '{value}'",
                details={"kind": self.type, "column": name, "value": value},
            ) from None

    def get_boolean(self, name: str, row: Sequence[Any]) -> Optional[bool]:
        value = self.get_string(name, row)
        if _is_blank(value):
            return None
        s = value.lower()
        if s == "true":
            return True
        if s == "false":
            return False
        raise TypeCoercionError(
            f"{name}: expected boolean but was '{value}'",
            details={"kind": self.type, "column": name, "value": value},
        )

    def get_list(self, name: str, row: Sequence[Any], *, sep: str = ",") -> list:
        """Lista separada por vírgula; itens vazios são descartados."""
        value = self.get_string(name, row)
        if _is_blank(value):
            return []
        return [item.strip() for item in value.split(sep) if item.strip()]

    # -----------------------------
    # Discriminador
    # -----------------------------
    def type_of(self, row: Sequence[Any]) -> Optional[str]:
        pos = self.position(TEMPLATE_TYPE.header)
        if 0 <= pos < len(row) and not _is_blank(row[pos]):
            return str(row[pos]).strip()
        return None

    def matches(self, row: Sequence[Any]) -> bool:
        return self.type_of(row) == self.type
