# src/metaconfig/core/config/loader.py
"""
Loader canônico de configuração do cluster (caminho textual).

Este módulo converte um arquivo (ou texto) YAML multi-documento escrito
pelo usuário no `MetaConfig` consumido pelas etapas seguintes do instalador.

Fluxo:
    texto → split_documents → (por documento) SchemaStore.parse
          → ConfigAssembler.route → ConfigAssembler.finalize

Princípios fundamentais:
    - Erros de documento nunca são repetidos: são devolvidos imediatamente
    - Todo erro de documento carrega o documento numerado linha a linha
    - A mesma entrada sempre produz o mesmo agregado

Invariantes:
    - Nenhum agregado parcial é retornado em caso de erro
    - Cada chamada usa seu próprio ConfigAssembler

Limites explícitos:
    - Não acessa o cluster (ver `metaconfig.core.remote`)
    - Não interpreta argumentos de linha de comando
"""

from pathlib import Path
from typing import Optional, Union

from metaconfig.core.schema.source import FilesystemSchemaSource
from metaconfig.core.schema.store import SchemaStore
from metaconfig.core.settings import Settings, load_settings

from .assembler import ConfigAssembler
from .errors import DocumentError, ReadError
from .splitter import split_documents
from .types import MetaConfig


def parse_config(
    path: Union[str, Path],
    *,
    schema_store: Optional[SchemaStore] = None,
    strict: Optional[bool] = None,
    settings: Optional[Settings] = None,
) -> MetaConfig:
    """
    Lê um arquivo de configuração e produz o `MetaConfig` finalizado.

    Args:
        path: caminho do arquivo YAML multi-documento.
        schema_store: store a reutilizar; por padrão, um store construído
            sobre os schemas embarcados.
        strict: rejeita documentos repetidos para o mesmo slot; None usa
            `settings.strict_slots`.
        settings: settings do core (raiz de schemas, modo estrito); None
            resolve `settings.defaults.yaml` via `load_settings()`.

    Raises:
        ReadError: se o arquivo não existir ou não puder ser lido.
        UnknownKindError, ValidationError, UnmarshalError: documento inválido.
        PrepareError: slots ausentes ou inconsistentes.
    """
    p = Path(path)
    try:
        content = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"loading config file {p}: {e}") from e

    return parse_config_from_data(
        content, schema_store=schema_store, strict=strict, settings=settings
    )


def parse_config_from_data(
    config_data: str,
    *,
    schema_store: Optional[SchemaStore] = None,
    strict: Optional[bool] = None,
    settings: Optional[Settings] = None,
) -> MetaConfig:
    """
    Produz o `MetaConfig` a partir de um texto YAML multi-documento.

    Documentos cujo `kind` é aceito pelo SchemaStore mas não corresponde
    a nenhum slot são ignorados silenciosamente.
    """
    settings = settings if settings is not None else load_settings()
    store = schema_store
    if store is None:
        store = SchemaStore(FilesystemSchemaSource(settings.schemas_root))
    if strict is None:
        strict = settings.strict_slots

    assembler = ConfigAssembler(schema_store=store, strict=strict)

    for doc in split_documents(config_data):
        try:
            index, data = store.parse(doc)
        except DocumentError as e:
            e.attach_document(doc)
            raise

        assembler.route(index, data)

    return assembler.finalize()
