"""Agregador de settings do Sigfox Callback.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Infrastructure settings
from config.settings.infra import (
    QueueBackend,
    QueueSettings,
    TracingSettings,
    get_queue_settings,
    get_tracing_settings,
)

# Channel-specific settings
from config.settings.sigfox import (
    DEFAULT_DOWNLINK_DATA,
    DEFAULT_MAX_MESSAGE_AGE_MS,
    FanoutMode,
    SigfoxSettings,
    get_sigfox_settings,
)

__all__ = [
    # Constants
    "DEFAULT_DOWNLINK_DATA",
    "DEFAULT_MAX_MESSAGE_AGE_MS",
    # Base
    "BaseSettings",
    "Environment",
    "FanoutMode",
    # Infrastructure
    "QueueBackend",
    "QueueSettings",
    # Sigfox
    "SigfoxSettings",
    "TracingSettings",
    "get_base_settings",
    "get_queue_settings",
    "get_sigfox_settings",
    "get_tracing_settings",
]
