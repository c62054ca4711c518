# src/newrelic_batch/core/config/errors.py
"""
Exceções canônicas da camada de configuração do newrelic-batch.

As exceções aqui definidas representam violações estruturais explícitas
no carregamento e na resolução da configuração, e não erros de binding
de registros.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de template, entidade ou batch
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração.

    Esta hierarquia permite captura genérica de erros de configuração,
    separada das exceções de domínio (`core.exceptions`).
    """


class DefaultsNotFoundError(ConfigError):
    """
    Arquivo de defaults informado explicitamente não existe.

    Decisões arquiteturais:
        - Quando um caminho de defaults é informado, ele é obrigatório
        - Não há fallback silencioso para os defaults embutidos
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo de configuração não suportada.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz da configuração não é um dicionário (`dict`)."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"tabular": {"delimiter": ","}}
        - override: {"tabular": ";"}
    """
