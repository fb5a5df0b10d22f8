# src/chainflow/core/config/__init__.py

"""
Camada de configuração do ChainFlow.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Geração de hash canônico para rastreabilidade
    - Interpretação da seção `engine` em `EngineSettings`

Limites explícitos:
    - Não executa pipeline
    - Não contém lógica de Steps
"""

from .errors import (
    ConfigError,
    ConfigParseError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import canonical_config_bytes, compute_config_hash
from .loader import load_config, read_config_file
from .merge import deep_merge
from .settings import (
    AbortPolicy,
    DEFAULT_ENGINE_CONFIG,
    DEFAULT_MAX_CHAIN_LENGTH,
    EngineSettings,
    load_settings,
    settings_from_config,
)

__all__ = [
    "AbortPolicy",
    "ConfigError",
    "ConfigParseError",
    "ConfigTypeConflictError",
    "DEFAULT_ENGINE_CONFIG",
    "DEFAULT_MAX_CHAIN_LENGTH",
    "DefaultsNotFoundError",
    "EngineSettings",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "canonical_config_bytes",
    "compute_config_hash",
    "deep_merge",
    "load_config",
    "load_settings",
    "read_config_file",
    "settings_from_config",
]
