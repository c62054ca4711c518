# src/newrelic_batch/io/tabular.py
"""
Leitura e escrita tabular (CSV) via pandas.

Regras:
    - todas as células são lidas como texto (dtype=str)
    - células vazias continuam "" (keep_default_na=False), nunca NaN
    - encoding e delimitador vêm da seção `tabular` da configuração
    - arquivo vazio → Table sem cabeçalhos e sem linhas
"""

from __future__ import annotations

from typing import Any, Dict, List, NamedTuple, Optional, Sequence, TextIO

import pandas as pd

from ..core.config.loader import DEFAULT_CONFIG
from ..core.context import BatchContext


class Table(NamedTuple):
    headers: List[str]
    rows: List[List[str]]


def _tabular_options(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    options = dict(DEFAULT_CONFIG["tabular"])
    section = (config or {}).get("tabular") if isinstance(config, dict) else None
    if isinstance(section, dict):
        options.update({k: v for k, v in section.items() if v is not None})
    return options


def table_from_dataframe(df: pd.DataFrame) -> Table:
    headers = [str(c) for c in df.columns]
    rows = [[str(v) for v in row] for row in df.itertuples(index=False, name=None)]
    return Table(headers=headers, rows=rows)


def read_table(
    stream: Any,
    *,
    label: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
    ctx: Optional[BatchContext] = None,
) -> Table:
    """Lê um CSV (caminho ou stream de texto) e devolve cabeçalhos + linhas."""
    options = _tabular_options(config)
    try:
        df = pd.read_csv(
            stream,
            sep=options["delimiter"],
            encoding=options["encoding"],
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        df = pd.DataFrame()

    table = table_from_dataframe(df)
    if ctx is not None:
        ctx.log(
            kind=label or "tabular",
            level="info",
            message="table loaded",
            headers=len(table.headers),
            rows=len(table.rows),
        )
    return table


def write_table(
    rows: Sequence[Sequence[str]],
    stream: TextIO,
    *,
    config: Optional[Dict[str, Any]] = None,
) -> None:
    """Escreve linhas renderizadas (a primeira linha são os cabeçalhos)."""
    if not rows:
        return
    options = _tabular_options(config)
    df = pd.DataFrame([list(r) for r in rows[1:]], columns=list(rows[0]))
    df.to_csv(stream, sep=options["delimiter"], index=False, lineterminator="\n")
