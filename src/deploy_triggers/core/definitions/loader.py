"""Loader canônico de definições (YAML/JSON).

Notas:
- YAML é preferencial, JSON é alternativo.
- O formato é inferido pela extensão do arquivo.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .errors import (
    DefinitionsFileNotFoundError,
    DefinitionsParseError,
    UnsupportedDefinitionsFormatError,
)
from .schema import Definitions, validate_definitions


def read_definitions(path: Union[str, Path]) -> Dict[str, Any]:
    """Lê o documento bruto de definições.

    Raises:
        DefinitionsFileNotFoundError: se arquivo não existir.
        UnsupportedDefinitionsFormatError: se extensão não suportada.
        DefinitionsParseError: se parsing falhar.
    """
    p = Path(path)
    if not p.exists():
        raise DefinitionsFileNotFoundError(f"definitions file not found: {p}")

    suffix = p.suffix.lower()
    if suffix not in {".yml", ".yaml", ".json"}:
        raise UnsupportedDefinitionsFormatError(f"unsupported definitions format: {suffix}")

    raw = p.read_text(encoding="utf-8")
    try:
        if suffix == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw)
    except (ValueError, yaml.YAMLError) as e:
        raise DefinitionsParseError(str(e) or "failed to parse definitions") from e

    if data is None:
        raise DefinitionsParseError("definitions file is empty")

    if not isinstance(data, dict):
        raise DefinitionsParseError("definitions root must be a mapping/dict")

    return data


def load_definitions(path: Union[str, Path]) -> Definitions:
    """Carrega e valida as definições a partir de YAML/JSON."""
    return validate_definitions(read_definitions(path))
