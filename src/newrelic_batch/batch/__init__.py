# src/newrelic_batch/batch/__init__.py
"""
Orquestração de batch: lê tabelas/documentos, cria entidades no serviço
remoto e encadeia as referências (canais → políticas → condições).
"""

from .runner import BatchRunner
from .service import APPLICATION, RemoteEntityService
from .types import BatchResult, StageResult, StageStatus
