"""Fontes de schemas injetáveis no SchemaStore.

Um `SchemaSource` expõe apenas duas operações: listar os schemas
disponíveis e carregar um schema pelo nome. O SchemaStore não conhece
layout de diretórios.

Layout do diretório candi (`FilesystemSchemaSource`):
    - `<root>/openapi/*.yaml` → schemas gerais
    - `<root>/cloud-providers/<provider>/openapi/*_configuration.yaml`
      → schemas específicos de provider; os demais arquivos desses
      diretórios (ex.: `cloud_discovery_data.yaml`) não são configuração
"""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, runtime_checkable

import yaml

from metaconfig.core.config.errors import SchemaLoadError

PROVIDER_SCHEMA_FILENAME_SUFFIX = "_configuration.yaml"

BUILTIN_CANDI_DIR = Path(__file__).resolve().parents[2] / "candi"


@runtime_checkable
class SchemaSource(Protocol):
    """Contrato mínimo de uma fonte de schemas."""

    def list_schemas(self) -> List[str]:
        ...

    def load_schema(self, name: str) -> Dict[str, Any]:
        ...


class FilesystemSchemaSource:
    """Schemas lidos de um diretório com layout candi."""

    def __init__(self, root: Optional[Path] = None) -> None:
        self.root = Path(root) if root is not None else BUILTIN_CANDI_DIR

    def list_schemas(self) -> List[str]:
        if not self.root.is_dir():
            raise SchemaLoadError(f"schema root not found: {self.root}")

        general = sorted(self.root.glob("openapi/*.yaml"))
        providers = sorted(
            self.root.glob(f"cloud-providers/*/openapi/*{PROVIDER_SCHEMA_FILENAME_SUFFIX}")
        )
        return [p.relative_to(self.root).as_posix() for p in [*general, *providers]]

    def load_schema(self, name: str) -> Dict[str, Any]:
        path = self.root / name
        if not path.is_file():
            raise SchemaLoadError(f"schema file not found: {path}")

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise SchemaLoadError(f"failed to read schema {path}: {e}") from e

        if not isinstance(data, dict):
            raise SchemaLoadError(f"schema root must be a mapping: {path}")
        return data

    def __repr__(self) -> str:
        return f"FilesystemSchemaSource(root={str(self.root)!r})"


class InMemorySchemaSource:
    """Schemas mantidos em memória (nome → documento de schema)."""

    def __init__(self, schemas: Mapping[str, Dict[str, Any]]) -> None:
        self._schemas = {name: deepcopy(schema) for name, schema in schemas.items()}

    def list_schemas(self) -> List[str]:
        return sorted(self._schemas)

    def load_schema(self, name: str) -> Dict[str, Any]:
        if name not in self._schemas:
            raise SchemaLoadError(f"schema not found: {name}")
        return deepcopy(self._schemas[name])
