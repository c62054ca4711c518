# src/newrelic_batch/io/documents.py
"""Documentos YAML (dashboards) via PyYAML: somente safe_load / safe_dump."""

from __future__ import annotations

from typing import Any, Optional, TextIO, Union

import yaml


def load_document(source: Union[str, TextIO]) -> Any:
    """Aceita texto YAML ou um stream aberto. Documento vazio → None."""
    return yaml.safe_load(source)


def dump_document(document: Any, stream: Optional[TextIO] = None, *, default_flow_style: bool = False) -> str:
    text = yaml.safe_dump(document, sort_keys=False, default_flow_style=default_flow_style, allow_unicode=True)
    if stream is not None:
        stream.write(text)
    return text
