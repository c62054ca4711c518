# src/newrelic_batch/batch/runner.py
"""
BatchRunner — execução de batches de alertas e dashboards.

Ordem dos estágios (alertas):
    1. channels.<kind>    (um estágio por tipo de canal informado)
    2. policies           (canais resolvidos pelos canais recém-criados)
    3. conditions.<kind>  (políticas resolvidas pelas políticas recém-criadas)

Cada estágio:
    - lê as entidades com os índices construídos a partir do que já foi criado
    - opcionalmente remove entidades remotas de mesmo nome (batch.replace_existing)
    - cria cada entidade e exige que a resposta traga um id válido

Falhas:
    - exceção em um estágio → StageResult FAILED com payload["error"]
    - fail-fast: estágios seguintes são marcados SKIPPED
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..core.config.loader import DEFAULT_CONFIG
from ..core.context import BatchContext
from ..core.errors import payload_from_exception
from ..core.exceptions import RemoteServiceError, SchemaError
from ..model.entities import Entity
from ..parsers.channels import CHANNEL_READERS, parse_channels
from ..parsers.conditions import CONDITION_READERS, parse_conditions
from ..parsers.dashboards import KIND as DASHBOARD, parse_dashboards
from ..parsers.policies import parse_alert_policies
from ..schema import templates as t
from ..schema.registry import TemplateRegistry, default_registry
from .service import APPLICATION, RemoteEntityService
from .types import BatchResult, StageResult, StageStatus

KIND = "batch"

TableLike = Tuple[Sequence[Any], Sequence[Sequence[Any]]]


class BatchRunner:
    """Orquestrador canônico (leitura → remoção opcional → criação)."""

    def __init__(
        self,
        service: RemoteEntityService,
        *,
        registry: Optional[TemplateRegistry] = None,
        ctx: Optional[BatchContext] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        if config is None:
            config = ctx.config if ctx is not None and ctx.config else copy.deepcopy(DEFAULT_CONFIG)
        self.service = service
        self.registry = registry if registry is not None else default_registry()
        self.ctx = ctx if ctx is not None else BatchContext.new(config)
        self.config = config

    def _replace_existing(self) -> bool:
        batch_cfg = (self.config or {}).get("batch", {}) or {}
        return bool(batch_cfg.get("replace_existing", False))

    # -----------------------------
    # Serviço remoto
    # -----------------------------

    @staticmethod
    def _label(entity: Any) -> str:
        return getattr(entity, "name", None) or getattr(entity, "title", None) or ""

    def _delete_existing(self, kind: str, name: str) -> int:
        deleted = 0
        for existing in self.service.list(kind, name=name) or []:
            entity_id = getattr(existing, "id", None)
            if entity_id:
                self.service.delete(kind, entity_id)
                deleted += 1
        return deleted

    def _create_all(self, kind: str, entities: Iterable[Any]) -> Tuple[List[Any], int]:
        created: List[Any] = []
        deleted = 0
        for entity in entities:
            label = self._label(entity)
            if self._replace_existing():
                deleted += self._delete_existing(kind, label)
            result = self.service.create(kind, entity)
            if result is None or not getattr(result, "id", None):
                raise RemoteServiceError(
                    f"{kind} created without id: {label}",
                    details={"kind": kind, "name": label},
                )
            self.ctx.log(kind=kind, level="info", message=f"Created {kind}: {label}", id=result.id)
            created.append(result)
        return created, deleted

    # -----------------------------
    # Estágios
    # -----------------------------

    def _run_stage(self, stage_id: str, kind: str, fn: Callable[[], Tuple[int, List[Any], int]]) -> Tuple[StageResult, List[Any]]:
        warnings_before = len(self.ctx.warnings.get(kind, []))
        try:
            read, created, deleted = fn()
        except Exception as e:
            error = payload_from_exception(e, stage=stage_id)
            self.ctx.log(
                kind=KIND,
                level="error",
                message=f"{stage_id} failed",
                error_type=error.type,
                error_message=error.message,
            )
            return StageResult(
                stage_id=stage_id,
                status=StageStatus.FAILED,
                summary=error.message,
                warnings=list(self.ctx.warnings.get(kind, [])[warnings_before:]),
                payload={"error": error.to_dict()},
            ), []

        return StageResult(
            stage_id=stage_id,
            status=StageStatus.SUCCESS,
            summary=f"{len(created)} {kind} created",
            metrics={"read": read, "created": len(created), "deleted": deleted},
            warnings=list(self.ctx.warnings.get(kind, [])[warnings_before:]),
        ), created

    def _execute(self, plan: List[Tuple[str, str, Callable[[], Tuple[int, List[Any], int]]]]) -> BatchResult:
        stages: Dict[str, StageResult] = {}
        created: Dict[str, List[Any]] = {}
        failed = False
        for stage_id, kind, fn in plan:
            if failed:
                stages[stage_id] = StageResult(
                    stage_id=stage_id,
                    status=StageStatus.SKIPPED,
                    summary="skipped due to failed stage",
                )
                continue
            result, entities = self._run_stage(stage_id, kind, fn)
            stages[stage_id] = result
            created.setdefault(kind, []).extend(entities)
            failed = result.status == StageStatus.FAILED

        self.ctx.log(
            kind=KIND,
            level="info",
            message="batch finished",
            stages={sid: s.status.value for sid, s in stages.items()},
        )
        return BatchResult(stages=stages, created=created)

    # -----------------------------
    # API pública
    # -----------------------------

    def run_alerts(
        self,
        *,
        channels: Optional[Mapping[str, TableLike]] = None,
        policies: Optional[TableLike] = None,
        conditions: Optional[Mapping[str, TableLike]] = None,
        applications: Optional[Iterable[Entity]] = None,
    ) -> BatchResult:
        """
        Executa um batch de alertas.

        `applications` alimenta os filtros de entidade das condições; quando
        omitido e houver condições, é obtido de `service.list("application")`.
        """
        created_channels: List[Any] = []
        created_policies: List[Any] = []
        apps: List[Entity] = list(applications) if applications is not None else []
        need_apps = applications is None and bool(conditions)

        def channel_stage(kind: str, table: TableLike):
            def run():
                if kind not in CHANNEL_READERS:
                    raise SchemaError(f"not a valid template type: {kind}", details={"kind": kind})
                headers, rows = table
                entities = parse_channels(kind, headers, rows, registry=self.registry, ctx=self.ctx)
                out, deleted = self._create_all(kind, entities)
                created_channels.extend(out)
                return len(entities), out, deleted
            return run

        def policy_stage(table: TableLike):
            def run():
                headers, rows = table
                entities = parse_alert_policies(
                    headers, rows, created_channels, registry=self.registry, ctx=self.ctx,
                )
                out, deleted = self._create_all(t.ALERT_POLICY, entities)
                created_policies.extend(out)
                return len(entities), out, deleted
            return run

        def condition_stage(kind: str, table: TableLike):
            def run():
                if kind not in CONDITION_READERS:
                    raise SchemaError(f"not a valid template type: {kind}", details={"kind": kind})
                if need_apps and not apps:
                    apps.extend(self.service.list(APPLICATION) or [])
                headers, rows = table
                entities = parse_conditions(
                    kind, headers, rows, created_policies, apps, registry=self.registry, ctx=self.ctx,
                )
                out, deleted = self._create_all(kind, entities)
                return len(entities), out, deleted
            return run

        plan: List[Tuple[str, str, Callable[[], Tuple[int, List[Any], int]]]] = []
        for kind, table in (channels or {}).items():
            plan.append((f"channels.{kind}", kind, channel_stage(kind, table)))
        if policies is not None:
            plan.append(("policies", t.ALERT_POLICY, policy_stage(policies)))
        for kind, table in (conditions or {}).items():
            plan.append((f"conditions.{kind}", kind, condition_stage(kind, table)))

        return self._execute(plan)

    def run_dashboards(self, document: Any) -> BatchResult:
        """Executa um batch de dashboards a partir da árvore de documento."""

        def run():
            entities = parse_dashboards(document, ctx=self.ctx)
            out, deleted = self._create_all(DASHBOARD, entities)
            return len(entities), out, deleted

        return self._execute([("dashboards", DASHBOARD, run)])
