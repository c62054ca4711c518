# tests/core/batch/test_runner.py
"""
Testes do BatchRunner (orquestração de alertas e dashboards).

Os testes asseguram que:
- canais → políticas → condições são criados nessa ordem
- ids devolvidos pelo serviço alimentam a resolução dos estágios seguintes
- resposta sem id é erro fatal do estágio (fail-fast)
- estágios posteriores a uma falha são marcados como SKIPPED
- `batch.replace_existing` remove entidades de mesmo nome antes de criar
- warnings não fatais ficam no resultado do estágio
"""

import yaml

from newrelic_batch.batch import BatchRunner, StageStatus
from newrelic_batch.core.errors import REMOTE_SERVICE_ERROR, SCHEMA_ERROR
from newrelic_batch.model.channels import EmailChannel


def _conditions(scenario_headers, scenario_rows, application_filter=""):
    row = list(scenario_rows[0])
    row[12] = application_filter
    return {"alert-condition": (scenario_headers, [row])}


def test_alerts_flow_resolves_created_ids(fake_service, ctx, channel_tables, policy_table,
                                          scenario_headers, scenario_rows):
    runner = BatchRunner(fake_service, ctx=ctx)
    result = runner.run_alerts(
        channels=channel_tables,
        policies=policy_table,
        conditions=_conditions(scenario_headers, scenario_rows, "checkout-*"),
    )

    assert result.ok
    assert list(result.stages) == [
        "channels.email-channel",
        "channels.slack-channel",
        "policies",
        "conditions.alert-condition",
    ]

    email = result.created["email-channel"][0]
    slack = result.created["slack-channel"][0]
    policy = result.created["alert-policy"][0]
    condition = result.created["alert-condition"][0]

    assert (email.id, slack.id, policy.id, condition.id) == (1000, 1001, 1002, 1003)
    assert email.include_json_attachment is True
    assert policy.channel_ids == (1000, 1001)
    assert condition.policy_id == 1002
    assert condition.entities == (11, 12)

    creates = [c[1] for c in fake_service.calls if c[0] == "create"]
    assert creates == ["email-channel", "slack-channel", "alert-policy", "alert-condition"]
    assert ("list", "application", None) in fake_service.calls

    stage = result.stages["policies"]
    assert stage.summary == "1 alert-policy created"
    assert stage.metrics == {"read": 1, "created": 1, "deleted": 0}


def test_explicit_applications_skip_remote_listing(fake_service, scenario_headers, scenario_rows,
                                                   policy_table, applications):
    runner = BatchRunner(fake_service)
    result = runner.run_alerts(
        policies=policy_table,
        conditions=_conditions(scenario_headers, scenario_rows, "billing-*"),
        applications=applications,
    )
    assert result.created["alert-condition"][0].entities == (21,)
    assert not [c for c in fake_service.calls if c[0] == "list"]


def test_missing_id_fails_stage_and_skips_the_rest(fake_service_cls, applications, ctx, channel_tables,
                                                   policy_table, scenario_headers, scenario_rows):
    service = fake_service_cls(fail_on="alert-policy", existing={"application": applications})
    result = BatchRunner(service, ctx=ctx).run_alerts(
        channels=channel_tables,
        policies=policy_table,
        conditions=_conditions(scenario_headers, scenario_rows),
    )

    assert not result.ok
    assert result.stages["channels.slack-channel"].status == StageStatus.SUCCESS

    failed = result.stages["policies"]
    assert failed.status == StageStatus.FAILED
    assert result.failed() == [failed]
    error = failed.payload["error"]
    assert error["type"] == REMOTE_SERVICE_ERROR
    assert error["message"] == "alert-policy created without id: MyPolicy"
    assert error["details"]["stage"] == "policies"

    skipped = result.stages["conditions.alert-condition"]
    assert skipped.status == StageStatus.SKIPPED
    assert "alert-condition" not in [c[1] for c in service.calls if c[0] == "create"]

    assert ctx.events_for("batch", level="error")[0]["message"] == "policies failed"


def test_unknown_condition_kind_is_fatal(fake_service, scenario_headers, scenario_rows):
    result = BatchRunner(fake_service).run_alerts(
        conditions={"bogus-condition": (scenario_headers, scenario_rows)},
    )
    stage = result.stages["conditions.bogus-condition"]
    assert stage.status == StageStatus.FAILED
    assert stage.payload["error"]["type"] == SCHEMA_ERROR
    assert stage.summary == "not a valid template type: bogus-condition"


def test_unknown_channel_becomes_stage_warning(fake_service, channel_tables):
    headers = ["Type", "Name", "Incident Preference", "Channels"]
    rows = [["alert-policy", "MyPolicy", "", "ops-mail,ops-pager"]]
    result = BatchRunner(fake_service).run_alerts(
        channels={"email-channel": channel_tables["email-channel"]},
        policies=(headers, rows),
    )
    stage = result.stages["policies"]
    assert stage.status == StageStatus.SUCCESS
    assert stage.warnings == ["unable to find channel: ops-pager"]
    assert result.created["alert-policy"][0].channel_ids == (1000,)
    assert result.created["alert-policy"][0].incident_preference == "PER_POLICY"


def test_replace_existing_deletes_same_name(fake_service_cls, channel_tables):
    old = EmailChannel(name="ops-mail", id=7, recipients="old@example.com")
    service = fake_service_cls(existing={"email-channel": [old]})
    runner = BatchRunner(service, config={"batch": {"replace_existing": True}})

    result = runner.run_alerts(channels={"email-channel": channel_tables["email-channel"]})

    assert ("delete", "email-channel", 7) in service.calls
    assert result.stages["channels.email-channel"].metrics["deleted"] == 1
    assert [c.id for c in service.store["email-channel"]] == [1000]


def test_existing_entities_are_kept_by_default(fake_service_cls, channel_tables):
    old = EmailChannel(name="ops-mail", id=7, recipients="old@example.com")
    service = fake_service_cls(existing={"email-channel": [old]})
    BatchRunner(service).run_alerts(channels={"email-channel": channel_tables["email-channel"]})
    assert not [c for c in service.calls if c[0] == "delete"]
    assert len(service.store["email-channel"]) == 2


def test_run_dashboards(fake_service, ctx):
    document = yaml.safe_load("""\
Ops:
  version: 1
  visibility: all
  editable: editable_by_all
  widgets:
    Readme:
      visualization: markdown
      account_id: 1
      data:
        source: hello
""")
    result = BatchRunner(fake_service, ctx=ctx).run_dashboards(document)

    assert result.ok
    dashboard = result.created["dashboard"][0]
    assert dashboard.id == 1000
    assert dashboard.title == "Ops"
    assert result.stages["dashboards"].summary == "1 dashboard created"
    assert any(e["message"] == "Created dashboard: Ops" for e in ctx.events_for("dashboard"))
