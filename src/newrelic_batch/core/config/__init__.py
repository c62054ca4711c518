# src/newrelic_batch/core/config/__init__.py

"""
Camada de configuração do newrelic-batch.

A configuração controla apenas aspectos de adaptação e apresentação:
    - dialeto tabular (encoding, delimitador)
    - renderização de dashboards (banner, título, estilo YAML)
    - política do batch (substituir entidades existentes)

Princípios fundamentais:
    - Configuração não contém lógica de domínio
    - Nenhuma heurística implícita durante merge
    - Overrides são sempre explícitos

Limites explícitos:
    - Não altera templates nem regras de validação
    - Não interage com o serviço remoto
"""

from .loader import DEFAULT_CONFIG, load_config
from .merge import deep_merge

__all__ = ["DEFAULT_CONFIG", "deep_merge", "load_config"]
