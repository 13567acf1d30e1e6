# src/metaconfig/core/config/assembler.py
"""
Montagem do agregado de configuração (MetaConfig).

Este módulo define o `ConfigAssembler`, responsável por rotear documentos
já classificados para os slots nomeados do agregado e por finalizar o
agregado com normalização e verificações entre slots.

Regra de roteamento (por `kind`):
    - `InitConfiguration`          → init
    - `ClusterConfiguration`       → cluster
    - `StaticClusterConfiguration` → static
    - outro `*ClusterConfiguration` → provider
    - qualquer outro kind          → ignorado (variante `UNRECOGNIZED`)

Decisões arquiteturais:
    - Correspondência exata vence o sufixo: `ClusterConfiguration` nunca
      vai para `provider`
    - Documento repetido para o mesmo slot sobrescreve o anterior e gera
      warning; em modo estrito gera `DuplicateSlotError`
    - Defaults de schema são aplicados apenas na finalização

Invariantes:
    - Cada slot contém no máximo um documento
    - `provider` só sobrevive à finalização quando `clusterType == "Cloud"`

Limites explícitos:
    - Não valida documentos (responsabilidade do SchemaStore)
    - Não lê arquivos nem acessa o cluster
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .errors import DuplicateSlotError, PrepareError
from .types import (
    CLOUD_CLUSTER_TYPE,
    STATIC_CLUSTER_TYPE,
    ConfigDocument,
    MetaConfig,
    SchemaIndex,
    Slot,
)

if TYPE_CHECKING:
    from metaconfig.core.schema.store import SchemaStore

PROVIDER_KIND_SUFFIX = "ClusterConfiguration"

_EXACT_KINDS = {
    "InitConfiguration": Slot.INIT,
    "ClusterConfiguration": Slot.CLUSTER,
    "StaticClusterConfiguration": Slot.STATIC,
}


def classify_slot(kind: str) -> Slot:
    if kind in _EXACT_KINDS:
        return _EXACT_KINDS[kind]
    if kind.endswith(PROVIDER_KIND_SUFFIX):
        return Slot.PROVIDER
    return Slot.UNRECOGNIZED


class ConfigAssembler:
    """
    Acumula documentos classificados e produz o `MetaConfig` final.

    Uso típico:

        assembler = ConfigAssembler(schema_store=store)
        for doc in documents:
            index, data = store.parse(doc)
            assembler.route(index, data)
        meta = assembler.finalize()

    Args:
        schema_store: quando presente, os `default` dos schemas são
            aplicados a cada slot na finalização.
        strict: quando True, um segundo documento para o mesmo slot é erro.
    """

    def __init__(self, *, schema_store: Optional["SchemaStore"] = None, strict: bool = False) -> None:
        self.schema_store = schema_store
        self.strict = strict
        self.warnings: List[str] = []
        self._slots: Dict[Slot, ConfigDocument] = {}

    def route(self, index: SchemaIndex, data: Dict[str, Any]) -> Optional[ConfigDocument]:
        """Roteia um documento para seu slot; retorna None quando ignorado."""
        doc = ConfigDocument(
            slot=classify_slot(index.kind),
            kind=index.kind,
            api_version=index.version,
            data=data,
        )
        if doc.slot is Slot.UNRECOGNIZED:
            return None

        previous = self._slots.get(doc.slot)
        if previous is not None:
            message = (
                f"slot '{doc.slot.value}' already holds {previous.kind}; "
                f"replaced by {doc.kind}"
            )
            if self.strict:
                raise DuplicateSlotError(message)
            self.warnings.append(message)

        self._slots[doc.slot] = doc
        return doc

    def document(self, slot: Slot) -> Optional[ConfigDocument]:
        return self._slots.get(slot)

    def _slot_data(self, slot: Slot) -> Optional[Dict[str, Any]]:
        doc = self._slots.get(slot)
        if doc is None:
            return None
        if self.schema_store is None:
            return dict(doc.data)
        return self.schema_store.apply_defaults(doc.index, doc.data)

    def finalize(self) -> MetaConfig:
        """
        Normaliza os slots e produz o agregado imutável.

        Raises:
            PrepareError: slots exigidos ausentes ou conteúdo inconsistente.
        """
        init = self._slot_data(Slot.INIT)
        cluster = self._slot_data(Slot.CLUSTER)
        static = self._slot_data(Slot.STATIC)
        provider = self._slot_data(Slot.PROVIDER)

        if cluster is None:
            if provider is not None:
                raise PrepareError(
                    f"{self._slots[Slot.PROVIDER].kind} requires a ClusterConfiguration document"
                )
            if static is not None:
                raise PrepareError("StaticClusterConfiguration requires a ClusterConfiguration document")
            return MetaConfig(init_cluster_config=init)

        cluster_type = cluster.get("clusterType")
        if cluster_type == CLOUD_CLUSTER_TYPE:
            return self._finalize_cloud(init, cluster, static, provider)
        if cluster_type == STATIC_CLUSTER_TYPE:
            if provider is not None:
                raise PrepareError(
                    f"clusterType is {STATIC_CLUSTER_TYPE!r} but "
                    f"{self._slots[Slot.PROVIDER].kind} was provided"
                )
            return MetaConfig(
                init_cluster_config=init,
                cluster_config=cluster,
                static_cluster_config=static,
                cluster_type=STATIC_CLUSTER_TYPE,
            )

        raise PrepareError(
            f"clusterType must be {CLOUD_CLUSTER_TYPE!r} or {STATIC_CLUSTER_TYPE!r}, got {cluster_type!r}"
        )

    def _finalize_cloud(
        self,
        init: Optional[Dict[str, Any]],
        cluster: Dict[str, Any],
        static: Optional[Dict[str, Any]],
        provider: Optional[Dict[str, Any]],
    ) -> MetaConfig:
        if provider is None:
            raise PrepareError(
                f"clusterType is {CLOUD_CLUSTER_TYPE!r} but no provider cluster configuration was provided"
            )

        cloud = cluster.get("cloud")
        if not isinstance(cloud, dict):
            raise PrepareError("cloud section is required when clusterType is 'Cloud'")

        provider_name = cloud.get("provider")
        if not isinstance(provider_name, str) or not provider_name.strip():
            raise PrepareError("cloud.provider is required when clusterType is 'Cloud'")

        provider_kind = self._slots[Slot.PROVIDER].kind
        expected_kind = f"{provider_name}{PROVIDER_KIND_SUFFIX}"
        if provider_kind.lower() != expected_kind.lower():
            raise PrepareError(
                f"cloud.provider is {provider_name!r} but provider document kind is {provider_kind!r}"
            )

        prefix = cloud.get("prefix")
        layout = provider.get("layout")

        return MetaConfig(
            init_cluster_config=init,
            cluster_config=cluster,
            static_cluster_config=static,
            provider_cluster_config=provider,
            cluster_type=CLOUD_CLUSTER_TYPE,
            provider_name=provider_name.lower(),
            cluster_prefix=prefix if isinstance(prefix, str) else None,
            layout=layout if isinstance(layout, str) else None,
        )
