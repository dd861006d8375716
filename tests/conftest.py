"""Configuração do pytest para o projeto Sigfox Callback."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def clear_settings_cache():
    """Limpa os singletons de settings antes e depois do teste."""
    from config.settings import (
        get_base_settings,
        get_queue_settings,
        get_sigfox_settings,
        get_tracing_settings,
    )

    getters = (get_base_settings, get_queue_settings, get_sigfox_settings, get_tracing_settings)
    for getter in getters:
        getter.cache_clear()
    yield
    for getter in getters:
        getter.cache_clear()
