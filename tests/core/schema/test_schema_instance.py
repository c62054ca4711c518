# tests/core/schema/test_schema_instance.py
"""
Testes do SchemaInstance (template ligado aos cabeçalhos observados).

Os testes asseguram que:
- cabeçalhos são comparados sem diferenciar maiúsculas/minúsculas
- colunas obrigatórias ausentes são detectadas antes de qualquer linha
- células vazias ou ausentes caem no default declarado
- coerções inválidas são erros fatais
"""

import pytest

from newrelic_batch.core.exceptions import SchemaError, TypeCoercionError
from newrelic_batch.schema import templates as t


def test_headers_are_case_insensitive(registry):
    instance = registry.bind(t.SLACK_CHANNEL, ["TYPE", " name ", "url"])
    instance.check_required()
    row = ["slack-channel", "ops", "https://hooks.example.com"]
    assert instance.get_string(t.NAME, row) == "ops"
    assert instance.get_string(t.URL, row) == "https://hooks.example.com"


def test_missing_mandatory_column_raises(registry):
    """
    Um arquivo sem a coluna obrigatória `Service Key` é rejeitado por
    inteiro, antes de qualquer linha ser lida.
    """
    instance = registry.bind(t.PAGERDUTY_CHANNEL, ["Type", "Name"])
    with pytest.raises(SchemaError, match="missing mandatory column: service_key"):
        instance.check_required()


def test_optional_columns_may_be_absent(registry):
    instance = registry.bind(t.ALERT_POLICY, ["Type", "Name"])
    instance.check_required()
    row = ["alert-policy", "MyPolicy"]
    assert instance.get_string(t.INCIDENT_PREFERENCE, row) == "PER_POLICY"
    assert instance.get_list(t.CHANNELS, row) == []


def test_blank_cell_falls_back_to_default(registry):
    headers = ["Type", "Name", "Incident Preference"]
    instance = registry.bind(t.ALERT_POLICY, headers)
    assert instance.get_string(t.INCIDENT_PREFERENCE, ["alert-policy", "P", "   "]) == "PER_POLICY"
    # linha mais curta que o cabeçalho
    assert instance.get_string(t.INCIDENT_PREFERENCE, ["alert-policy", "P"]) == "PER_POLICY"


def test_unknown_column_name_raises(registry):
    instance = registry.bind(t.ALERT_POLICY, ["Type", "Name"])
    with pytest.raises(SchemaError, match="missing column: not_a_column"):
        instance.get_string("not_a_column", ["alert-policy", "P"])


def test_integer_coercion(registry):
    instance = registry.bind(t.USER_CHANNEL, ["Type", "Name", "User ID"])
    assert instance.get_integer(t.USER_ID, ["user-channel", "me", " 42 "]) == 42
    assert instance.get_integer(t.USER_ID, ["user-channel", "me", ""]) is None
    with pytest.raises(TypeCoercionError, match="user_id: expected integer but was 'abc'"):
        instance.get_integer(t.USER_ID, ["user-channel", "me", "abc"])


def test_boolean_coercion(registry):
    instance = registry.bind(t.EMAIL_CHANNEL, ["Type", "Name", "Recipients", "Include JSON Attachment"])
    assert instance.get_boolean(t.INCLUDE_JSON_ATTACHMENT, ["email-channel", "m", "a@b", "FALSE"]) is False
    # vazio → default declarado ("true")
    assert instance.get_boolean(t.INCLUDE_JSON_ATTACHMENT, ["email-channel", "m", "a@b", ""]) is True
    with pytest.raises(TypeCoercionError):
        instance.get_boolean(t.INCLUDE_JSON_ATTACHMENT, ["email-channel", "m", "a@b", "yes"])


def test_discriminator(registry):
    instance = registry.bind(t.ALERT_POLICY, ["Name", "Type"])
    assert instance.type_of(["P", "alert-policy"]) == "alert-policy"
    assert instance.matches(["P", "alert-policy"])
    assert not instance.matches(["P", "slack-channel"])
    assert instance.type_of(["P", ""]) is None
