# src/newrelic_batch/dispatch/__init__.py
"""
Tabelas de despacho por discriminador.

    - conditions: tipo de condição → classe concreta (+ validação de métrica)
    - widgets:    visualização → tipo de widget (ordem fixa de prioridade)

O conjunto permitido de cada tabela é fechado: valores desconhecidos caem
num único ramo verificado (erro para condições, None para widgets).
"""
