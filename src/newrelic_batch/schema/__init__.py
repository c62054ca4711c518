# src/newrelic_batch/schema/__init__.py
"""
Camada de schema: descrição declarativa das colunas de cada tipo de registro.

Componentes:
    - FieldDefinition: uma coluna (nome estável, cabeçalho, obrigatoriedade, default)
    - SchemaTemplate: conjunto ordenado de colunas + constante discriminadora
    - SchemaInstance: template ligado aos cabeçalhos observados de um arquivo
    - TemplateRegistry: registro por tipo, construído uma vez e injetado

Invariantes:
    - Nomes de coluna são únicos por template
    - Templates registrados não aceitam novas colunas
    - Instâncias são efêmeras (uma por chamada de leitura/escrita)
"""

from .column import TEMPLATE_TYPE, FieldDefinition
from .instance import SchemaInstance
from .registry import TemplateRegistry, build_default_registry, default_registry
from .template import SchemaTemplate

__all__ = [
    "FieldDefinition",
    "SchemaInstance",
    "SchemaTemplate",
    "TEMPLATE_TYPE",
    "TemplateRegistry",
    "build_default_registry",
    "default_registry",
]
