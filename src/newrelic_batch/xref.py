# src/newrelic_batch/xref.py
"""
Resolução de referências cruzadas (nome ↔ identificador).

Leitores e escritores recebem listas de entidades já conhecidas (políticas,
canais, aplicações) e constroem, por chamada, um CrossReferenceIndex.
O índice nunca é reaproveitado entre chamadas: se a lista mudar, um novo
índice deve ser construído.

Decisões arquiteturais:
    - Busca por nome é exata e case-sensitive
    - Nomes repetidos: a última ocorrência vence (mesma semântica de dict)
    - Identificador ausente (None) ou zero significa "ainda não criado"
    - Filtros de entidade usam glob (`fnmatch.fnmatchcase`)

Invariantes:
    - Falha de resolução de política é sempre fatal (CrossReferenceError)
    - Canais desconhecidos são ignorados com warning (não fatais)
"""

from __future__ import annotations

from fnmatch import fnmatchcase
from typing import Any, Dict, Generic, Iterable, List, Optional, Tuple, TypeVar

from .core.context import BatchContext
from .core.exceptions import CrossReferenceError, TypeCoercionError

E = TypeVar("E")


class CrossReferenceIndex(Generic[E]):
    """Índice em memória de entidades por nome e por id."""

    def __init__(self, entities: Iterable[E] = ()):
        self._entities: List[E] = list(entities)
        self._by_name: Dict[str, E] = {}
        self._by_id: Dict[int, E] = {}
        for entity in self._entities:
            name = getattr(entity, "name", None)
            if name is not None:
                self._by_name[name] = entity
            entity_id = getattr(entity, "id", None)
            if entity_id:
                self._by_id[entity_id] = entity

    def __len__(self) -> int:
        return len(self._entities)

    def by_name(self, name: Optional[str]) -> Optional[E]:
        if name is None:
            return None
        return self._by_name.get(name)

    def by_id(self, entity_id: Optional[int]) -> Optional[E]:
        if not entity_id:
            return None
        return self._by_id.get(entity_id)

    def select(self, pattern: str) -> List[E]:
        """Entidades cujo nome casa com o padrão glob, na ordem original."""
        return [
            e for e in self._entities
            if getattr(e, "name", None) is not None and fnmatchcase(e.name, pattern)
        ]


def build_index(entities: Iterable[E]) -> CrossReferenceIndex[E]:
    return CrossReferenceIndex(entities)


# -----------------------------
# Políticas
# -----------------------------

def resolve_policy_id(condition_name: str, policy_name: Optional[str], index: CrossReferenceIndex) -> int:
    policy = index.by_name(policy_name)
    if policy is None:
        raise CrossReferenceError(
            f'unable to find policy "{policy_name}" for alert condition: {condition_name}',
            details={"condition": condition_name, "policy": policy_name},
        )
    if not policy.id:
        raise CrossReferenceError(
            f"missing policy_id: {policy.name}",
            details={"condition": condition_name, "policy": policy.name},
        )
    return policy.id


def resolve_policy_name(condition_name: str, policy_id: Optional[int], index: CrossReferenceIndex) -> str:
    if not policy_id:
        raise CrossReferenceError(
            f"missing policy_id for alert condition: {condition_name}",
            details={"condition": condition_name, "policy_id": policy_id},
        )
    policy = index.by_id(policy_id)
    if policy is None:
        raise CrossReferenceError(
            f'unable to find policy "{policy_id}" for alert condition: {condition_name}',
            details={"condition": condition_name, "policy_id": policy_id},
        )
    return policy.name


# -----------------------------
# Canais
# -----------------------------

def resolve_channel_ids(
    names: Iterable[str],
    index: CrossReferenceIndex,
    *,
    kind: str,
    ctx: Optional[BatchContext] = None,
) -> Tuple[int, ...]:
    ids: List[int] = []
    for name in names:
        channel = index.by_name(name)
        if channel is None or not channel.id:
            if ctx is not None:
                message = f"unable to find channel: {name}"
                ctx.log(kind=kind, level="warning", message=message, channel=name)
                ctx.add_warning(kind=kind, message=message)
            continue
        ids.append(channel.id)
    return tuple(ids)


def channel_names_for(policy: Any, channels: Iterable[Any]) -> List[str]:
    """Nomes dos canais ligados à política (pelo lado da política ou do canal)."""
    linked = set(policy.channel_ids or ())
    names: List[str] = []
    for channel in channels:
        if not channel.id:
            continue
        if channel.id in linked or (policy.id and policy.id in (channel.policy_ids or ())):
            names.append(channel.name)
    return names


# -----------------------------
# Entidades (filtros)
# -----------------------------

def resolve_entity_ids(
    entity_filter: Optional[str],
    explicit: Optional[str],
    index: CrossReferenceIndex,
    *,
    column: str = "entities",
) -> Tuple[int, ...]:
    """Ids a partir do filtro (prioritário) ou da lista explícita `1,2,3`."""
    if entity_filter:
        return tuple(e.id for e in index.select(entity_filter) if e.id)

    if not explicit:
        return ()

    ids: List[int] = []
    for item in explicit.split(","):
        item = item.strip()
        if not item:
            continue
        try:
            ids.append(int(item))
        except ValueError:
            raise TypeCoercionError(
                f"{column}: expected integer but was '{item}'",
                details={"column": column, "value": item},
            ) from None
    return tuple(ids)
