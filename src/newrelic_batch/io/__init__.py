# src/newrelic_batch/io/__init__.py
"""
Adaptadores de fluxo (streams) para os formatos externos.

O núcleo (parsers/renderers) trabalha com cabeçalhos + linhas e com árvores
de documento; abrir e fechar arquivos é responsabilidade de quem chama.
"""

from .documents import dump_document, load_document
from .tabular import Table, read_table, table_from_dataframe, write_table
