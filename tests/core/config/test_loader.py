# tests/core/config/test_loader.py
"""
Testes do carregador de configuração (load_config).

Os testes asseguram que:
- sem arquivos, a configuração efetiva é `DEFAULT_CONFIG`
- o arquivo defaults, quando informado, é obrigatório
- o arquivo local é opcional e tem prioridade
- formatos e tipos raiz inválidos são rejeitados

Invariantes:
    - A configuração final é sempre um dicionário
    - `DEFAULT_CONFIG` nunca é mutado pelo loader
"""

import json
from pathlib import Path

import pytest

try:
    from newrelic_batch.core.config.loader import DEFAULT_CONFIG, load_config
    from newrelic_batch.core.config.errors import (
        DefaultsNotFoundError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_config = None
    DEFAULT_CONFIG = None
    DefaultsNotFoundError = None
    InvalidConfigRootTypeError = None
    UnsupportedConfigFormatError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Falha imediatamente, com mensagem orientada, quando o loader ou suas
    exceções tipadas não podem ser importados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loader/errors modules. Implement:\n"
            "- src/newrelic_batch/core/config/loader.py (load_config)\n"
            "- src/newrelic_batch/core/config/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_no_files_returns_builtin_defaults():
    """
    Sem `defaults_path` nem `local_path` a configuração efetiva é uma
    cópia de `DEFAULT_CONFIG` (e não o próprio objeto).
    """
    _require_imports()
    out = load_config()
    assert out == DEFAULT_CONFIG
    out["batch"]["replace_existing"] = True
    assert DEFAULT_CONFIG["batch"]["replace_existing"] is False


def test_missing_defaults_raises(tmp_path: Path):
    """
    Verifica que um arquivo defaults informado e inexistente é erro fatal.

    Decisões arquiteturais:
        - Informar `defaults_path` torna o arquivo obrigatório
        - A falha ocorre antes de qualquer merge
    """
    _require_imports()
    missing = tmp_path / "defaults.yaml"
    with pytest.raises(DefaultsNotFoundError):
        load_config(defaults_path=str(missing), local_path=None)


def test_missing_local_is_ok(tmp_path: Path, project_like_config_defaults_yaml):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(project_like_config_defaults_yaml, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(tmp_path / "local.yaml"))
    assert out["tabular"]["delimiter"] == ","
    assert out["batch"]["replace_existing"] is False
    # chaves não declaradas no arquivo continuam vindo do default embutido
    assert out["dashboards"]["default_flow_style"] is False


def test_load_defaults_and_local(tmp_path: Path, project_like_config_defaults_yaml, project_like_config_local_yaml):
    """
    Verifica o merge defaults + local.

    Invariantes:
        - Overrides locais têm precedência
        - Chaves não sobrescritas permanecem inalteradas
    """
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    local = tmp_path / "local.yml"
    defaults.write_text(project_like_config_defaults_yaml, encoding="utf-8")
    local.write_text(project_like_config_local_yaml, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(local))
    assert out["tabular"]["delimiter"] == ";"
    assert out["tabular"]["encoding"] == "utf-8"
    assert out["batch"]["replace_existing"] is True
    assert out["dashboards"]["banner"] is False


def test_local_json_is_supported(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.json"
    local.write_text(json.dumps({"dashboards": {"title": "Prod dashboards"}}), encoding="utf-8")

    out = load_config(local_path=str(local))
    assert out["dashboards"]["title"] == "Prod dashboards"


def test_empty_file_is_empty_config(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("", encoding="utf-8")

    assert load_config(defaults_path=str(defaults)) == DEFAULT_CONFIG


def test_invalid_root_type_raises(tmp_path: Path):
    """Configurações com raiz não-dict levantam `InvalidConfigRootTypeError`."""
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("- just\n- a\n- list\n", encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError):
        load_config(defaults_path=str(defaults), local_path=None)


def test_unsupported_extension_raises(tmp_path: Path):
    """
    Verifica que formatos não suportados são rejeitados pela extensão,
    antes de qualquer tentativa de parse.
    """
    _require_imports()
    defaults = tmp_path / "defaults.toml"
    defaults.write_text("batch = { replace_existing = true }\n", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_config(defaults_path=str(defaults), local_path=None)
