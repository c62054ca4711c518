# tests/core/xref/test_cross_references.py
"""
Testes da resolução de referências cruzadas (nome ↔ id).

Os testes asseguram que:
- política inexistente é erro "unable to find policy"
- política sem id (None ou 0) é erro "missing policy_id"
- política com id devolve exatamente esse id
- canais desconhecidos são ignorados com warning
- filtros de entidade usam glob sobre o nome
"""

import pytest

from newrelic_batch.core.exceptions import CrossReferenceError, TypeCoercionError
from newrelic_batch.model.channels import SlackChannel
from newrelic_batch.model.policies import AlertPolicy
from newrelic_batch.xref import (
    build_index,
    channel_names_for,
    resolve_channel_ids,
    resolve_entity_ids,
    resolve_policy_id,
    resolve_policy_name,
)


def test_unknown_policy_raises():
    index = build_index([AlertPolicy(name="Other", id=1)])
    with pytest.raises(CrossReferenceError, match='unable to find policy "P" for alert condition: C'):
        resolve_policy_id("C", "P", index)


@pytest.mark.parametrize("policy_id", [None, 0])
def test_policy_without_id_raises(policy_id):
    index = build_index([AlertPolicy(name="P", id=policy_id)])
    with pytest.raises(CrossReferenceError, match="missing policy_id: P"):
        resolve_policy_id("C", "P", index)


def test_policy_with_id_resolves():
    index = build_index([AlertPolicy(name="P", id=42)])
    assert resolve_policy_id("C", "P", index) == 42


def test_duplicate_names_last_wins():
    index = build_index([AlertPolicy(name="P", id=1), AlertPolicy(name="P", id=2)])
    assert resolve_policy_id("C", "P", index) == 2
    assert len(index) == 2


def test_reverse_resolution():
    index = build_index([AlertPolicy(name="P", id=42)])
    assert resolve_policy_name("C", 42, index) == "P"
    with pytest.raises(CrossReferenceError, match="missing policy_id for alert condition: C"):
        resolve_policy_name("C", None, index)
    with pytest.raises(CrossReferenceError, match='unable to find policy "7"'):
        resolve_policy_name("C", 7, index)


def test_unknown_channels_are_skipped_with_warning(ctx):
    index = build_index([SlackChannel(name="ops", id=5), SlackChannel(name="draft")])
    ids = resolve_channel_ids(["ops", "draft", "ghost"], index, kind="alert-policy", ctx=ctx)
    assert ids == (5,)
    assert ctx.warnings["alert-policy"] == [
        "unable to find channel: draft",
        "unable to find channel: ghost",
    ]


def test_channel_names_for_policy():
    policy = AlertPolicy(name="P", id=9, channel_ids=(5,))
    channels = [
        SlackChannel(name="ops", id=5),
        SlackChannel(name="dev", id=6, policy_ids=(9,)),
        SlackChannel(name="other", id=7),
    ]
    assert channel_names_for(policy, channels) == ["ops", "dev"]


def test_entity_filter_uses_glob(applications):
    index = build_index(applications)
    assert resolve_entity_ids("checkout-*", None, index) == (11, 12)
    # filtro tem prioridade sobre a lista explícita
    assert resolve_entity_ids("billing-*", "1,2", index) == (21,)


def test_explicit_entities():
    index = build_index([])
    assert resolve_entity_ids(None, "1, 2,,3", index) == (1, 2, 3)
    assert resolve_entity_ids(None, None, index) == ()
    with pytest.raises(TypeCoercionError, match="entities: expected integer but was 'x'"):
        resolve_entity_ids(None, "1,x", index)
