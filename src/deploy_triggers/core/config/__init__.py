# src/deploy_triggers/core/config/__init__.py

"""
Camada de configuração do deploy-triggers.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Geração de hash canônico da configuração efetiva
    - Validação e materialização de `Settings`

Invariantes:
    - A configuração final é um dicionário puro (dict)
    - Conflitos estruturais são tratados como erro
"""

from .errors import (  # noqa: F401
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSettingsError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash  # noqa: F401
from .loader import default_config_path, load_config  # noqa: F401
from .merge import deep_merge  # noqa: F401
from .settings import Settings, resolve_settings  # noqa: F401
