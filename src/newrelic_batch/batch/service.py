# src/newrelic_batch/batch/service.py
"""
Contrato do serviço remoto de entidades.

O batch não conhece HTTP nem credenciais: recebe um objeto que cria, lista
e remove entidades por tipo (`kind` = constante de template, ou
`APPLICATION`/`dashboard`). Entidades criadas devem voltar com `id`.
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, runtime_checkable

APPLICATION = "application"


@runtime_checkable
class RemoteEntityService(Protocol):

    def create(self, kind: str, entity: Any) -> Any:
        ...

    def list(self, kind: str, name: Optional[str] = None) -> List[Any]:
        ...

    def delete(self, kind: str, entity_id: int) -> None:
        ...
