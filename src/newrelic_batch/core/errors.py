"""
newrelic-batch — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros reportados pela orquestração
de batch e pelos eventos não fatais dos leitores.

Erros são artefatos do resultado de um batch e devem ser:
- explícitos
- serializáveis
- rastreáveis
- acionáveis

Nenhuma decisão implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .exceptions import (
    BatchException,
    CrossReferenceError,
    RemoteServiceError,
    SchemaError,
    TypeCoercionError,
    UnknownDiscriminatorValue,
    ValidationError,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BatchErrorPayload:
    """
    Payload canônico de erro do newrelic-batch.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Schema / binding
SCHEMA_ERROR = "SCHEMA_ERROR"
RECORD_TYPE_MISMATCH = "RECORD_TYPE_MISMATCH"
TYPE_COERCION_ERROR = "TYPE_COERCION_ERROR"

# Dispatch / validação
UNKNOWN_DISCRIMINATOR = "UNKNOWN_DISCRIMINATOR"
VALIDATION_ERROR = "VALIDATION_ERROR"

# Referências cruzadas
CROSS_REFERENCE_ERROR = "CROSS_REFERENCE_ERROR"

# Serviço remoto / execução
REMOTE_SERVICE_ERROR = "REMOTE_SERVICE_ERROR"
INTERNAL_ERROR = "INTERNAL_ERROR"


_TYPE_BY_EXCEPTION = (
    (SchemaError, SCHEMA_ERROR),
    (UnknownDiscriminatorValue, UNKNOWN_DISCRIMINATOR),
    (ValidationError, VALIDATION_ERROR),
    (CrossReferenceError, CROSS_REFERENCE_ERROR),
    (TypeCoercionError, TYPE_COERCION_ERROR),
    (RemoteServiceError, REMOTE_SERVICE_ERROR),
)

_HINT_BY_TYPE = {
    SCHEMA_ERROR: "Verifique o cabeçalho do arquivo contra as colunas obrigatórias do template.",
    UNKNOWN_DISCRIMINATOR: "Use um dos valores de tipo suportados para esta família de entidades.",
    VALIDATION_ERROR: "Corrija o registro indicado; nenhum valor default é aplicado automaticamente.",
    CROSS_REFERENCE_ERROR: "Crie (ou carregue) a entidade referenciada antes das entidades dependentes.",
    TYPE_COERCION_ERROR: "Ajuste o valor da célula/nó para o tipo esperado.",
    REMOTE_SERVICE_ERROR: "Verifique a resposta do serviço remoto; a entidade deve voltar com id.",
}


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def record_type_mismatch(
    *,
    kind: str,
    observed: Optional[str],
    row_index: int,
) -> BatchErrorPayload:
    return BatchErrorPayload(
        type=RECORD_TYPE_MISMATCH,
        message=f"found illegal line in {kind} file: {observed}",
        details={"kind": kind, "observed": observed, "row_index": row_index},
        hint="Linhas de outros tipos são ignoradas; use o leitor do tipo correspondente.",
    )


def payload_from_exception(exc: BaseException, *, stage: Optional[str] = None) -> BatchErrorPayload:
    """Converte uma exceção em payload canônico (mapeamento determinístico)."""
    if isinstance(exc, BatchException):
        error_type = INTERNAL_ERROR
        for exc_cls, code in _TYPE_BY_EXCEPTION:
            if isinstance(exc, exc_cls):
                error_type = code
                break
        details = dict(exc.details)
        if stage is not None:
            details["stage"] = stage
        return BatchErrorPayload(
            type=error_type,
            message=exc.message,
            details=details,
            hint=exc.hint or _HINT_BY_TYPE.get(error_type),
        )

    return BatchErrorPayload(
        type=INTERNAL_ERROR,
        message=str(exc),
        details={"stage": stage, "exc_type": type(exc).__name__},
        hint="Verifique o stacktrace; nenhum fallback é aplicado automaticamente.",
    )
