# tests/conftest.py
"""
Fixtures compartilhados para testes do newrelic-batch.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações YAML mínimas e determinísticas (defaults + local)
- tabelas de entrada (cabeçalhos + linhas) no formato das planilhas
- listas de entidades já "criadas" (com id) para resolução de referências
- contexto de execução controlado (BatchContext)
- um serviço remoto em memória para a orquestração de batch

Decisões arquiteturais:
    - Tabelas são listas de strings, exatamente como chegam do leitor CSV
    - O serviço remoto é um fake explícito (sem mocks mágicos)
    - Imports do pacote são feitos de forma lazy dentro das fixtures

Invariantes:
    - Nenhuma fixture realiza I/O de rede
    - Dados retornados são determinísticos e isolados por teste
"""

from dataclasses import replace

import pytest


# =====================================================
# Config
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de defaults semelhante ao `config.defaults.yaml` de um projeto.

    Returns:
        str: Conteúdo YAML representando configuração padrão (defaults).
    """
    return """\
tabular:
  encoding: utf-8
  delimiter: ","
dashboards:
  banner: false
batch:
  replace_existing: false
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """YAML de overrides locais (apenas as chaves alteradas)."""
    return """\
tabular:
  delimiter: ";"
batch:
  replace_existing: true
"""


# =====================================================
# Contexto
# =====================================================

@pytest.fixture
def ctx():
    """BatchContext isolado, com id fixo para facilitar asserts de eventos."""
    from newrelic_batch.core.context import BatchContext

    return BatchContext(batch_id="batch-test-001", created_at="2026-01-16T00:00:00+00:00")


@pytest.fixture
def registry():
    from newrelic_batch.schema.registry import build_default_registry

    return build_default_registry()


# =====================================================
# Tabelas de entrada
# =====================================================

@pytest.fixture
def scenario_headers() -> list:
    return [
        "Alert Policy", "Name", "Type", "Condition Type", "Condition Scope", "Metric",
        "Operator", "Warning", "Critical", "Duration", "Time Function",
        "Violation Close Timer", "Application Filter",
    ]


@pytest.fixture
def scenario_rows() -> list:
    return [
        ["MyPolicy", "HighCPU", "alert-condition", "apm_app_metric", "application", "ApdexScore",
         "below", "0.8", "0.5", "5", "all", "", ""],
    ]


@pytest.fixture
def policies() -> list:
    """Políticas já criadas no serviço remoto (com id)."""
    from newrelic_batch.model.policies import AlertPolicy

    return [AlertPolicy(name="MyPolicy", id=100)]


@pytest.fixture
def applications() -> list:
    from newrelic_batch.model.entities import Entity

    return [
        Entity(name="checkout-api", id=11),
        Entity(name="checkout-worker", id=12),
        Entity(name="billing-api", id=21),
    ]


@pytest.fixture
def channel_tables() -> dict:
    return {
        "email-channel": (
            ["Type", "Name", "Recipients", "Include JSON Attachment"],
            [["email-channel", "ops-mail", "ops@example.com", ""]],
        ),
        "slack-channel": (
            ["Type", "Name", "URL", "Channel"],
            [["slack-channel", "ops-slack", "https://hooks.slack.com/services/T000/B000/XXX", "#ops"]],
        ),
    }


@pytest.fixture
def policy_table() -> tuple:
    return (
        ["Type", "Name", "Incident Preference", "Channels"],
        [["alert-policy", "MyPolicy", "PER_CONDITION", "ops-mail,ops-slack"]],
    )


# =====================================================
# Serviço remoto (fake)
# =====================================================

class FakeRemoteService:
    """
    Serviço remoto em memória.

    - `create` atribui ids sequenciais (a partir de `start_id`)
    - `fail_on` força uma resposta sem id para o tipo indicado
    - todas as chamadas ficam registradas em `calls`
    """

    def __init__(self, *, start_id: int = 1000, fail_on=None, existing=None):
        self._next_id = start_id
        self.fail_on = fail_on
        self.store = {}
        self.calls = []
        for kind, entities in (existing or {}).items():
            self.store[kind] = list(entities)

    def create(self, kind, entity):
        self.calls.append(("create", kind, getattr(entity, "name", None) or getattr(entity, "title", None)))
        if kind == self.fail_on:
            return entity
        created = replace(entity, id=self._next_id)
        self._next_id += 1
        self.store.setdefault(kind, []).append(created)
        return created

    def list(self, kind, name=None):
        self.calls.append(("list", kind, name))
        items = self.store.get(kind, [])
        if name is None:
            return list(items)
        return [e for e in items if getattr(e, "name", None) == name or getattr(e, "title", None) == name]

    def delete(self, kind, entity_id):
        self.calls.append(("delete", kind, entity_id))
        self.store[kind] = [e for e in self.store.get(kind, []) if e.id != entity_id]


@pytest.fixture
def fake_service_cls():
    return FakeRemoteService


@pytest.fixture
def fake_service(applications):
    return FakeRemoteService(existing={"application": applications})
