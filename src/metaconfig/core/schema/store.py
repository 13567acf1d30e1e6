# src/metaconfig/core/schema/store.py
"""
Registro de schemas estruturais versionados.

Este módulo define o `SchemaStore`, responsável por carregar uma única vez
os schemas de uma `SchemaSource` e, a partir daí, classificar e validar
documentos de configuração cujo tipo só é conhecido após inspeção.

Formato de um arquivo de schema:

    kind: ClusterConfiguration
    apiVersions:
    - apiVersion: deckhouse.io/v1
      openAPISpec:
        type: object
        required: [apiVersion, kind, clusterType]
        properties: ...

Responsabilidades do módulo:
    - Registrar cada par (kind, apiVersion) com unicidade garantida
    - Decodificar o documento (YAML) e ler o discriminador
    - Executar a validação estrutural do schema correspondente
    - Aplicar os `default` declarados no schema sobre documentos válidos

Invariantes:
    - Cada (kind, apiVersion) é registrado no máximo uma vez
    - Após a construção, o store não possui estado mutável por chamada
      e pode ser compartilhado entre chamadores concorrentes

Limites explícitos:
    - Não roteia documentos para slots (ver ConfigAssembler)
    - Não lê arquivos de configuração do usuário
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from metaconfig.core.config.errors import (
    DuplicateSchemaError,
    SchemaLoadError,
    UnknownKindError,
    UnmarshalError,
    ValidationError,
)
from metaconfig.core.config.types import SchemaIndex

from .source import FilesystemSchemaSource, SchemaSource
from .validator import apply_defaults, validate_structure

Document = Union[str, bytes]


def decode_document(document: Document) -> Dict[str, Any]:
    """Decodifica um documento YAML cuja raiz deve ser um mapeamento."""
    if isinstance(document, bytes):
        try:
            document = document.decode("utf-8")
        except UnicodeDecodeError as e:
            raise UnmarshalError(f"document is not valid UTF-8: {e}") from e

    try:
        data = yaml.safe_load(document)
    except yaml.YAMLError as e:
        raise UnmarshalError(f"document is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise UnmarshalError(
            f"document root must be a mapping, got: {type(data).__name__}"
        )
    return data


class SchemaStore:
    """
    Registro canônico de schemas para classificação e validação de documentos.

    O store é construído a partir de uma `SchemaSource` (por padrão, o
    diretório candi embarcado no pacote) e expõe:
        - `validate(document)` → `SchemaIndex`
        - `parse(document)` → (`SchemaIndex`, mapeamento decodificado)
        - `apply_defaults(index, data)` → cópia com defaults do schema

    Decisões arquiteturais:
        - Todos os schemas são carregados na construção; nenhuma I/O ocorre
          durante a validação
        - Todas as violações estruturais são reportadas de uma vez

    Invariantes:
        - Cada `SchemaIndex` registrado é único
        - Documentos sem `kind`/`apiVersion` nunca são aceitos
    """

    def __init__(self, source: Optional[SchemaSource] = None) -> None:
        self._schemas: Dict[SchemaIndex, Dict[str, Any]] = {}
        self._order: List[SchemaIndex] = []

        self.source = source if source is not None else FilesystemSchemaSource()
        for name in self.source.list_schemas():
            self._register_file(name, self.source.load_schema(name))

    def _register_file(self, name: str, schema: Dict[str, Any]) -> None:
        kind = schema.get("kind")
        if not isinstance(kind, str) or not kind.strip():
            raise SchemaLoadError(f"schema {name}: 'kind' must be a non-empty string")

        versions = schema.get("apiVersions")
        if not isinstance(versions, list) or not versions:
            raise SchemaLoadError(f"schema {name}: 'apiVersions' must be a non-empty list")

        for i, entry in enumerate(versions):
            if not isinstance(entry, dict):
                raise SchemaLoadError(f"schema {name}: apiVersions[{i}] must be a mapping")
            version = entry.get("apiVersion")
            spec = entry.get("openAPISpec")
            if not isinstance(version, str) or not version.strip():
                raise SchemaLoadError(f"schema {name}: apiVersions[{i}].apiVersion is required")
            if not isinstance(spec, dict):
                raise SchemaLoadError(f"schema {name}: apiVersions[{i}].openAPISpec must be a mapping")
            self.add(SchemaIndex(kind=kind, version=version), spec)

    def add(self, index: SchemaIndex, spec: Dict[str, Any]) -> None:
        if not index.is_valid():
            raise SchemaLoadError(f"invalid schema index: {index}")
        if index in self._schemas:
            raise DuplicateSchemaError(f"duplicate schema: {index}")
        self._schemas[index] = spec
        self._order.append(index)

    def kinds(self) -> List[SchemaIndex]:
        return list(self._order)

    def get(self, index: SchemaIndex) -> Dict[str, Any]:
        return self._schemas[index]

    def validate(self, document: Document) -> SchemaIndex:
        index, _ = self.parse(document)
        return index

    def parse(self, document: Document) -> Tuple[SchemaIndex, Dict[str, Any]]:
        data = decode_document(document)
        index = self._classify(data)

        issues = validate_structure(data, self._schemas[index])
        if issues:
            raise ValidationError(index.kind, issues)

        return index, data

    def _classify(self, data: Dict[str, Any]) -> SchemaIndex:
        kind = data.get("kind")
        version = data.get("apiVersion")

        if not isinstance(kind, str) or not kind.strip():
            raise UnknownKindError("document has no 'kind' field")
        if not isinstance(version, str) or not version.strip():
            raise UnknownKindError(
                f"document of kind {kind!r} has no 'apiVersion' field", kind=kind
            )

        index = SchemaIndex(kind=kind, version=version)
        if index not in self._schemas:
            raise UnknownKindError(
                f"schema for {index} wasn't found", kind=kind, version=version
            )
        return index

    def apply_defaults(self, index: SchemaIndex, data: Dict[str, Any]) -> Dict[str, Any]:
        return apply_defaults(data, self._schemas[index])
