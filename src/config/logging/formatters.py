"""Formatters de logging estruturado (python-json-logger)."""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem fixa dos campos na linha JSON
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-02-02 10:30:00,123",
            "level": "INFO",
            "logger": "app.services.fanout_dispatcher",
            "message": "fanout_completed",
            "correlation_id": "9f0c...",
            "service": "sigfox_callback",
            "targets": 3
        }

    Valores não serializáveis em `extra` (ex: datetime) viram str.
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
        json_default=str,
    )
