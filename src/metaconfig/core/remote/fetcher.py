# src/metaconfig/core/remote/fetcher.py
"""
Reconstrução do MetaConfig a partir do estado persistido no cluster.

Quando o cluster já existe, a fonte de verdade da configuração são dois
Secrets em `kube-system`:
    - `d8-cluster-configuration` / `cluster-configuration.yaml`
    - `d8-provider-cluster-configuration` / `cloud-provider-cluster-configuration.yaml`

Fluxo de `RemoteConfigFetcher.fetch`:
    1. Lê o registro de configuração do cluster
    2. Valida/classifica via SchemaStore e coloca no slot `cluster`
    3. Se `clusterType == "Cloud"`, lê o registro do provider
    4. Valida/classifica e coloca no slot `provider`
    5. Delega a finalização ao ConfigAssembler

Se o cluster não é Cloud, ocorre exatamente uma leitura remota.

Entradas públicas:
    - `parse_config_from_cluster` → loop ruidoso (10 x 5s)
    - `parse_config_in_cluster`   → loop silencioso (5 x 5s)

Invariantes:
    - Nenhuma escrita no cluster
    - Cada tentativa usa seu próprio ConfigAssembler

Limites explícitos:
    - Não cria clientes Kubernetes (ver `KubernetesSecretReader`)
    - Não decide especificidades de provider
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from metaconfig.core.config.assembler import ConfigAssembler
from metaconfig.core.config.errors import DocumentError, PrepareError, RemoteFetchError, UnmarshalError
from metaconfig.core.config.types import CLOUD_CLUSTER_TYPE, MetaConfig, Slot
from metaconfig.core.retry.loop import retry_all, start_loop, start_silent_loop
from metaconfig.core.schema.source import FilesystemSchemaSource
from metaconfig.core.schema.store import SchemaStore
from metaconfig.core.settings import Settings, load_settings

from .secrets import SecretReader

logger = logging.getLogger(__name__)

KUBE_SYSTEM_NAMESPACE = "kube-system"


@dataclass(frozen=True)
class SecretRef:
    """Coordenadas de um registro persistido: (namespace, name, key)."""

    namespace: str
    name: str
    key: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}[{self.key}]"


CLUSTER_CONFIGURATION_SECRET = SecretRef(
    namespace=KUBE_SYSTEM_NAMESPACE,
    name="d8-cluster-configuration",
    key="cluster-configuration.yaml",
)
PROVIDER_CLUSTER_CONFIGURATION_SECRET = SecretRef(
    namespace=KUBE_SYSTEM_NAMESPACE,
    name="d8-provider-cluster-configuration",
    key="cloud-provider-cluster-configuration.yaml",
)

FROM_CLUSTER_LOOP_NAME = "Get Cluster configuration from Kubernetes cluster"
IN_CLUSTER_LOOP_NAME = "Get Cluster configuration from inside Kubernetes cluster"


class RemoteConfigFetcher:
    """Monta o `MetaConfig` a partir dos Secrets do cluster."""

    def __init__(
        self,
        reader: SecretReader,
        *,
        schema_store: Optional[SchemaStore] = None,
        strict: bool = False,
    ) -> None:
        self.reader = reader
        self.schema_store = schema_store if schema_store is not None else SchemaStore()
        self.strict = strict

    def read_record(self, ref: SecretRef) -> bytes:
        logger.debug("reading %s", ref)
        data = self.reader.get_secret(ref.namespace, ref.name)
        if data is None:
            raise RemoteFetchError(
                f"secret {ref.namespace}/{ref.name} not found",
                namespace=ref.namespace,
                name=ref.name,
                key=ref.key,
            )
        if ref.key not in data:
            raise RemoteFetchError(
                f"secret {ref.namespace}/{ref.name} has no key {ref.key!r}",
                namespace=ref.namespace,
                name=ref.name,
                key=ref.key,
            )
        return data[ref.key]

    def _place(self, assembler: ConfigAssembler, ref: SecretRef, expected: Slot) -> Dict[str, Any]:
        index, data = self.schema_store.parse(self.read_record(ref))
        doc = assembler.route(index, data)
        if doc is None or doc.slot is not expected:
            raise PrepareError(
                f"record {ref} holds {index.kind}, expected a {expected.value} configuration"
            )
        return data

    def fetch(self) -> MetaConfig:
        assembler = ConfigAssembler(schema_store=self.schema_store, strict=self.strict)

        cluster = self._place(assembler, CLUSTER_CONFIGURATION_SECRET, Slot.CLUSTER)

        cluster_type = cluster.get("clusterType")
        if not isinstance(cluster_type, str):
            raise UnmarshalError(
                f"clusterType must be a string, got: {type(cluster_type).__name__}"
            )

        if cluster_type == CLOUD_CLUSTER_TYPE:
            self._place(assembler, PROVIDER_CLUSTER_CONFIGURATION_SECRET, Slot.PROVIDER)

        return assembler.finalize()


def _classifier(settings: Settings) -> Callable[[Exception], bool]:
    if not settings.terminal_document_errors:
        return retry_all

    def is_retryable(exc: Exception) -> bool:
        return not isinstance(exc, (DocumentError, PrepareError))

    return is_retryable


def _fetcher(
    reader: SecretReader,
    schema_store: Optional[SchemaStore],
    settings: Settings,
) -> RemoteConfigFetcher:
    store = schema_store
    if store is None:
        store = SchemaStore(FilesystemSchemaSource(settings.schemas_root))
    return RemoteConfigFetcher(reader, schema_store=store, strict=settings.strict_slots)


def parse_config_from_cluster(
    reader: SecretReader,
    *,
    schema_store: Optional[SchemaStore] = None,
    settings: Optional[Settings] = None,
    cancel: Optional[threading.Event] = None,
    deadline: Optional[float] = None,
) -> MetaConfig:
    """
    Lê o MetaConfig do cluster sob o loop ruidoso.

    Raises:
        RetryExhaustedError: tentativas esgotadas (encapsula o último erro).
        RetryCancelledError: `cancel` sinalizado durante a espera.
        DocumentError, PrepareError: apenas com `terminal_document_errors`
            ligado; por padrão são repetidos como qualquer outra falha.
    """
    settings = settings if settings is not None else load_settings()
    fetcher = _fetcher(reader, schema_store, settings)
    return start_loop(
        FROM_CLUSTER_LOOP_NAME,
        fetcher.fetch,
        attempts=settings.loud_retry.attempts,
        delay=settings.loud_retry.delay,
        is_retryable=_classifier(settings),
        cancel=cancel,
        deadline=deadline,
    )


def parse_config_in_cluster(
    reader: SecretReader,
    *,
    schema_store: Optional[SchemaStore] = None,
    settings: Optional[Settings] = None,
    cancel: Optional[threading.Event] = None,
    deadline: Optional[float] = None,
) -> MetaConfig:
    """Lê o MetaConfig de dentro do cluster, sob o loop silencioso."""
    settings = settings if settings is not None else load_settings()
    fetcher = _fetcher(reader, schema_store, settings)
    return start_silent_loop(
        IN_CLUSTER_LOOP_NAME,
        fetcher.fetch,
        attempts=settings.silent_retry.attempts,
        delay=settings.silent_retry.delay,
        is_retryable=_classifier(settings),
        cancel=cancel,
        deadline=deadline,
    )
