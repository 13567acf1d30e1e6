"""metaconfig — Schemas (core).

Componentes canônicos de classificação e validação de documentos:
 - fontes de schemas injetáveis (filesystem candi / memória)
 - validação estrutural com diagnóstico por caminho de campo
 - registro versionado (SchemaStore)
"""

from .source import (  # noqa: F401
    BUILTIN_CANDI_DIR,
    PROVIDER_SCHEMA_FILENAME_SUFFIX,
    FilesystemSchemaSource,
    InMemorySchemaSource,
    SchemaSource,
)
from .store import SchemaStore, decode_document  # noqa: F401
from .validator import apply_defaults, validate_structure  # noqa: F401
