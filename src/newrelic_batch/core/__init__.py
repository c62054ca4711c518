# src/newrelic_batch/core/__init__.py
"""
Núcleo transversal do newrelic-batch.

Contém apenas preocupações de ambiente compartilhadas por todas as camadas:
    - exceções tipadas (`exceptions`)
    - payloads canônicos de erro (`errors`)
    - contexto de execução com log estruturado (`context`)
    - carregamento de configuração (`config`)

Nenhum módulo deste pacote conhece templates, entidades ou o serviço remoto.
"""
