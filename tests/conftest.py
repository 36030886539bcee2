"""Configuração do pytest para o serviço de validação de e-mail."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from config.settings import (  # noqa: E402
    get_base_settings,
    get_email_validation_settings,
    get_hubspot_settings,
    get_storage_settings,
)

_SETTINGS_GETTERS = (
    get_base_settings,
    get_email_validation_settings,
    get_hubspot_settings,
    get_storage_settings,
)


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings são lru_cache: cada teste relê as variáveis de ambiente."""
    for getter in _SETTINGS_GETTERS:
        getter.cache_clear()
    yield
    for getter in _SETTINGS_GETTERS:
        getter.cache_clear()
