# src/newrelic_batch/__init__.py
"""
newrelic-batch — mapeamento declarativo entre planilhas/YAML e entidades de
configuração do New Relic (políticas, canais, condições de alerta e dashboards).

O pacote é organizado em camadas, da folha para o topo:
    - schema:    definições de colunas, templates e o registry de templates
    - model:     entidades imutáveis (dataclasses congeladas)
    - xref:      índices de referência cruzada (nome ↔ id)
    - dispatch:  tabelas de despacho por discriminador (condições, widgets)
    - parsers:   leitores (linhas/árvore → entidades)
    - renderers: escritores (entidades → linhas/árvore)
    - io:        adaptadores de stream (CSV via pandas, YAML via PyYAML)
    - batch:     orquestração fail-fast sobre o serviço remoto

Limites explícitos:
    - Não implementa cliente HTTP
    - Não abre nem fecha arquivos
    - Não expõe CLI
"""

__version__ = "0.1.0"
