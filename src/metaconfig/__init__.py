# src/metaconfig/__init__.py
"""
metaconfig — ingestão de configuração de cluster para o instalador.

Converte um arquivo YAML multi-documento escrito pelo usuário, ou o
estado equivalente já persistido em um cluster em execução, em um único
`MetaConfig` validado, consumido pelas etapas seguintes do instalador.

Entradas públicas:
    - parse_config / parse_config_from_data → caminho textual
    - parse_config_from_cluster / parse_config_in_cluster → caminho remoto
    - load_settings → settings do próprio core

Limites explícitos:
    - Não altera estado do cluster
    - Não provisiona rede nem decide especificidades de provider
"""

from .core.config.errors import (  # noqa: F401
    ConfigError,
    DocumentError,
    DuplicateSlotError,
    PrepareError,
    ReadError,
    RemoteFetchError,
    RetryCancelledError,
    RetryExhaustedError,
    UnknownKindError,
    UnmarshalError,
    ValidationError,
)
from .core.config.loader import parse_config, parse_config_from_data  # noqa: F401
from .core.config.types import MetaConfig, SchemaIndex, Slot  # noqa: F401
from .core.remote import (  # noqa: F401
    KubernetesSecretReader,
    parse_config_from_cluster,
    parse_config_in_cluster,
)
from .core.schema import SchemaStore  # noqa: F401
from .core.settings import Settings, load_settings  # noqa: F401
