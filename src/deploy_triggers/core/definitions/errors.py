"""Erros canônicos do domínio de Definitions.

As definições declaram os recursos conhecidos e os recursos derivados com
seus triggers. Falhas de carregamento/validação produzem erros explícitos.
"""


class DefinitionsError(Exception):
    """Erro base do domínio de definições."""


class DefinitionsFileNotFoundError(DefinitionsError):
    """Arquivo de definições não existe no caminho informado."""


class UnsupportedDefinitionsFormatError(DefinitionsError):
    """Formato não suportado (v1: YAML/JSON)."""


class DefinitionsParseError(DefinitionsError):
    """Falha ao parsear YAML/JSON."""


class DefinitionsValidationError(DefinitionsError):
    """Definições não são estruturalmente válidas."""
