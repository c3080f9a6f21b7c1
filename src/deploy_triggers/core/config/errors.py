# src/deploy_triggers/core/config/errors.py
"""
Exceções canônicas da camada de configuração do deploy-triggers.

As exceções aqui definidas representam violações estruturais da
configuração, e não falhas de avaliação de fingerprint.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de serialização ou de estado

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende de evaluator, planner ou state store
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração.

    Todas as exceções levantadas durante carregamento, merge ou
    resolução de settings devem herdar desta classe.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de defaults não é encontrado.

    O arquivo de defaults é obrigatório: sem ele não existe
    configuração efetiva válida.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz da configuração não é um dicionário (`dict`)."""


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"hazards": {"volatile_inputs": "warn"}}
        - override: {"hazards": "error"}

    Nenhum merge parcial é produzido em caso de conflito.
    """


class InvalidSettingsError(ConfigError):
    """
    Exceção levantada quando a configuração efetiva não pode ser
    materializada em `Settings` (valor ausente, tipo errado ou opção
    fora do domínio permitido).
    """
