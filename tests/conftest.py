# tests/conftest.py
"""
Fixtures compartilhados para testes do metaconfig.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos YAML realistas (Init, Cluster, Static, AWS provider)
- um SchemaStore sobre os schemas embarcados (construído uma vez por sessão)
- um SchemaStore em memória com kinds mínimos (ex.: `AwsClusterConfiguration`)

Decisões arquiteturais:
    - Documentos são fornecidos como strings para evitar I/O
    - O SchemaStore embarcado é somente leitura e pode ser compartilhado
    - Schemas em memória mantêm testes de roteamento independentes do candi

Invariantes:
    - Nenhuma fixture acessa rede ou cluster
    - Todos os documentos fornecidos são válidos para seus schemas

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica condicional complexa
"""

import pytest


INIT_CONFIGURATION_YAML = """\
apiVersion: deckhouse.io/v1
kind: InitConfiguration
deckhouse:
  releaseChannel: Stable
  configOverrides:
    global:
      modules:
        publicDomainTemplate: "%s.example.com"
"""

STATIC_CLUSTER_YAML = """\
apiVersion: deckhouse.io/v1
kind: ClusterConfiguration
clusterType: Static
podSubnetCIDR: 10.111.0.0/16
serviceSubnetCIDR: 10.222.0.0/16
kubernetesVersion: "1.23"
"""

CLOUD_CLUSTER_YAML = """\
apiVersion: deckhouse.io/v1
kind: ClusterConfiguration
clusterType: Cloud
cloud:
  provider: AWS
  prefix: demo
podSubnetCIDR: 10.111.0.0/16
serviceSubnetCIDR: 10.222.0.0/16
kubernetesVersion: "1.23"
"""

STATIC_CLUSTER_CONFIGURATION_YAML = """\
apiVersion: deckhouse.io/v1
kind: StaticClusterConfiguration
internalNetworkCIDRs:
- 192.168.199.0/24
"""

AWS_CLUSTER_CONFIGURATION_YAML = """\
apiVersion: deckhouse.io/v1
kind: AWSClusterConfiguration
layout: WithoutNAT
sshPublicKey: ssh-rsa AAAAB3NzaC1yc2EAAAADAQABAAABAQ demo
vpcNetworkCIDR: 10.241.0.0/16
nodeNetworkCIDR: 10.241.32.0/20
provider:
  providerAccessKeyId: AKIAEXAMPLE
  providerSecretAccessKey: secret
  region: eu-central-1
masterNodeGroup:
  replicas: 1
  instanceClass:
    instanceType: c5.large
    ami: ami-0fee04b212b7499e2
"""


@pytest.fixture
def init_configuration_yaml() -> str:
    return INIT_CONFIGURATION_YAML


@pytest.fixture
def static_cluster_yaml() -> str:
    """ClusterConfiguration com `clusterType: Static` (sem provider)."""
    return STATIC_CLUSTER_YAML


@pytest.fixture
def cloud_cluster_yaml() -> str:
    """ClusterConfiguration com `clusterType: Cloud` e `cloud.provider: AWS`."""
    return CLOUD_CLUSTER_YAML


@pytest.fixture
def static_cluster_configuration_yaml() -> str:
    return STATIC_CLUSTER_CONFIGURATION_YAML


@pytest.fixture
def aws_cluster_configuration_yaml() -> str:
    return AWS_CLUSTER_CONFIGURATION_YAML


@pytest.fixture(scope="session")
def builtin_store():
    """
    SchemaStore sobre o diretório candi embarcado no pacote.

    O import é feito de forma lazy para que falhas de import apareçam
    como erro do teste, e não da coleta.
    """
    from metaconfig.core.schema.store import SchemaStore

    return SchemaStore()


def _minimal_schema(kind: str, **properties) -> dict:
    spec = {
        "type": "object",
        "required": ["apiVersion", "kind"],
        "properties": {
            "apiVersion": {"type": "string"},
            "kind": {"type": "string", "enum": [kind]},
            **properties,
        },
    }
    return {"kind": kind, "apiVersions": [{"apiVersion": "test.io/v1", "openAPISpec": spec}]}


@pytest.fixture
def minimal_schemas() -> dict:
    """Schemas em memória com os kinds mínimos de cada slot (+ um kind sem slot)."""
    return {
        "init.yaml": _minimal_schema("InitConfiguration"),
        "cluster.yaml": _minimal_schema(
            "ClusterConfiguration",
            clusterType={"type": "string", "enum": ["Cloud", "Static"]},
            cloud={
                "type": "object",
                "properties": {
                    "provider": {"type": "string"},
                    "prefix": {"type": "string", "default": "cluster"},
                },
            },
        ),
        "static.yaml": _minimal_schema("StaticClusterConfiguration"),
        "aws.yaml": _minimal_schema(
            "AwsClusterConfiguration",
            layout={"type": "string", "default": "Standard"},
        ),
        "module.yaml": _minimal_schema("ModuleConfig"),
    }


@pytest.fixture
def minimal_store(minimal_schemas):
    from metaconfig.core.schema.source import InMemorySchemaSource
    from metaconfig.core.schema.store import SchemaStore

    return SchemaStore(InMemorySchemaSource(minimal_schemas))
