# src/metaconfig/core/config/types.py
"""
Tipos canônicos da ingestão de configuração.

Este módulo define as estruturas que circulam entre SchemaStore,
ConfigAssembler e os consumidores do agregado final.

Componentes principais:
    - Slot          → enum dos slots do agregado (+ variante não reconhecida)
    - SchemaIndex   → resultado da classificação de um documento
    - ConfigDocument → documento classificado (união etiquetada por `slot`)
    - MetaConfig    → agregado finalizado e imutável

Invariantes:
    - Enums possuem valores textuais canônicos
    - SchemaIndex, ConfigDocument e MetaConfig são imutáveis (frozen)
    - Nenhuma lógica de validação vive neste módulo

Limites explícitos:
    - Não valida documentos
    - Não decide roteamento (ver `assembler.classify_slot`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .hashing import compute_config_hash

CLOUD_CLUSTER_TYPE = "Cloud"
STATIC_CLUSTER_TYPE = "Static"


class Slot(str, Enum):
    """
    Slots nomeados do agregado de configuração.

    Os valores são strings para facilitar serialização e inspeção.

    Tipos definidos:
        - INIT: `InitConfiguration`
        - CLUSTER: `ClusterConfiguration`
        - STATIC: `StaticClusterConfiguration`
        - PROVIDER: qualquer outro `*ClusterConfiguration` (ex.: `AWSClusterConfiguration`)
        - UNRECOGNIZED: documento válido segundo o schema, mas sem slot no agregado
    """

    INIT = "init"
    CLUSTER = "cluster"
    STATIC = "static"
    PROVIDER = "provider"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class SchemaIndex:
    """Identidade do schema que validou um documento: `kind` + `apiVersion`."""

    kind: str
    version: str

    def is_valid(self) -> bool:
        return bool(self.kind) and bool(self.version)

    def __str__(self) -> str:
        return f"{self.kind}, {self.version}"


@dataclass(frozen=True)
class ConfigDocument:
    """
    Documento classificado, pronto para roteamento.

    O campo `slot` é a etiqueta da união: consumidores tratam cada
    variante explicitamente, e a variante `UNRECOGNIZED` carrega
    documentos aceitos pelo SchemaStore que não pertencem a nenhum slot.
    """

    slot: Slot
    kind: str
    api_version: str
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def index(self) -> SchemaIndex:
        return SchemaIndex(kind=self.kind, version=self.api_version)


_SLOT_FIELDS = (
    "init_cluster_config",
    "cluster_config",
    "static_cluster_config",
    "provider_cluster_config",
)


def freeze_value(value: Any) -> Any:
    """Cópia somente leitura: mapeamentos viram `MappingProxyType`, listas viram tuplas."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze_value(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze_value(item) for item in value)
    return value


def thaw_value(value: Any) -> Any:
    """Inverso de `freeze_value`: devolve dicts e listas novos."""
    if isinstance(value, Mapping):
        return {key: thaw_value(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw_value(item) for item in value]
    return value


@dataclass(frozen=True)
class MetaConfig:
    """
    Agregado de configuração finalizado.

    Campos canônicos:
        - init_cluster_config: slot `init` (ou None)
        - cluster_config: slot `cluster` (ou None)
        - static_cluster_config: slot `static` (ou None)
        - provider_cluster_config: slot `provider` (ou None)

    Campos derivados na finalização:
        - cluster_type: `Cloud` | `Static` (None se não houver slot `cluster`)
        - provider_name: nome do provider em minúsculas (apenas Cloud)
        - cluster_prefix: `cloud.prefix` (apenas Cloud)
        - layout: `layout` do documento do provider (apenas Cloud)

    Os slots são congelados na construção (mapeamentos somente leitura,
    listas como tuplas); `to_dict()` devolve cópias mutáveis. O hash da
    instância considera apenas os campos derivados.

    Invariantes:
        - `provider_cluster_config` só está presente quando `cluster_type == "Cloud"`
        - A instância nunca é alterada após a finalização, nem pelos slots
    """

    init_cluster_config: Optional[Mapping[str, Any]] = field(default=None, hash=False)
    cluster_config: Optional[Mapping[str, Any]] = field(default=None, hash=False)
    static_cluster_config: Optional[Mapping[str, Any]] = field(default=None, hash=False)
    provider_cluster_config: Optional[Mapping[str, Any]] = field(default=None, hash=False)

    cluster_type: Optional[str] = None
    provider_name: Optional[str] = None
    cluster_prefix: Optional[str] = None
    layout: Optional[str] = None

    def __post_init__(self) -> None:
        for name in _SLOT_FIELDS:
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, freeze_value(value))

    @property
    def is_cloud(self) -> bool:
        return self.cluster_type == CLOUD_CLUSTER_TYPE

    def slot(self, slot: Slot) -> Optional[Mapping[str, Any]]:
        if slot is Slot.INIT:
            return self.init_cluster_config
        if slot is Slot.CLUSTER:
            return self.cluster_config
        if slot is Slot.STATIC:
            return self.static_cluster_config
        if slot is Slot.PROVIDER:
            return self.provider_cluster_config
        raise KeyError(slot)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "init": thaw_value(self.init_cluster_config),
            "cluster": thaw_value(self.cluster_config),
            "static": thaw_value(self.static_cluster_config),
            "provider": thaw_value(self.provider_cluster_config),
            "derived": {
                "cluster_type": self.cluster_type,
                "provider_name": self.provider_name,
                "cluster_prefix": self.cluster_prefix,
                "layout": self.layout,
            },
        }

    def config_hash(self) -> str:
        return compute_config_hash(self.to_dict())
