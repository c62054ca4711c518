# src/newrelic_batch/core/exceptions.py
"""
newrelic-batch — Canonical Exceptions (v1)

Este módulo define as exceções tipadas levantadas por leitores, escritores,
registry de templates e pela orquestração de batch.

Objetivo:
- Permitir que cada camada levante falhas semânticas tipadas
- Facilitar o mapeamento determinístico para BatchErrorPayload
- Evitar ValueError/RuntimeError genéricos nos guardrails do binding

Taxonomia (todas fatais para a chamada corrente):
- SchemaError: coluna duplicada, coluna obrigatória ausente, template desconhecido
- UnknownDiscriminatorValue: tipo de condição não reconhecido
- ValidationError: métrica inválida, zero termos, zero estados, campo obrigatório ausente
- CrossReferenceError: referência não encontrada ou sem identificador resolvido
- TypeCoercionError: valor não conversível para o tipo declarado
- RemoteServiceError: entidade criada remotamente voltou sem identificador

Linha de tipo incompatível (RECORD_TYPE_MISMATCH) NÃO é exceção: é evento
não fatal registrado no contexto, e a linha é ignorada.

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- A mensagem é curta, em inglês, e estável para uso em testes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class BatchException(Exception):
    """Base class para exceções internas do newrelic-batch.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Schema / Templates
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SchemaError(BatchException):
    """Template mal declarado, coluna obrigatória ausente ou template não registrado."""


# ---------------------------------------------------------------------------
# Dispatch / Validação
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UnknownDiscriminatorValue(BatchException):
    """Valor de discriminador sem estratégia de construção registrada."""


@dataclass(frozen=True)
class ValidationError(BatchException):
    """Registro estruturalmente válido, mas semanticamente incompleto ou inválido."""


@dataclass(frozen=True)
class TypeCoercionError(BatchException):
    """Valor textual (ou nó de documento) incompatível com o tipo esperado."""


# ---------------------------------------------------------------------------
# Referências cruzadas / Serviço remoto
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CrossReferenceError(BatchException):
    """Referência por nome não resolvida para um identificador válido."""


@dataclass(frozen=True)
class RemoteServiceError(BatchException):
    """Resposta do serviço remoto viola o contrato mínimo (ex.: id ausente)."""
