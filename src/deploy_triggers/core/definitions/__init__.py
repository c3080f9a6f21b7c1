"""deploy-triggers — Definitions (core).

Componentes canônicos das definições declarativas:
 - parsing (YAML/JSON)
 - validação estrutural
 - materialização em ResourceCatalog + DerivedResource
"""

from .errors import (  # noqa: F401
    DefinitionsError,
    DefinitionsFileNotFoundError,
    DefinitionsParseError,
    DefinitionsValidationError,
    UnsupportedDefinitionsFormatError,
)
from .loader import load_definitions, read_definitions  # noqa: F401
from .schema import Definitions, parse_ref, validate_definitions  # noqa: F401
