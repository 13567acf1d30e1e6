"""Leitura de Secrets do control plane.

`SecretReader` é o único ponto de contato do core com o cluster: uma
leitura idempotente de `(namespace, name)` que devolve os dados já
decodificados, ou None quando o Secret não existe.

`KubernetesSecretReader` adapta um objeto com a interface de
`kubernetes.client.CoreV1Api` (`read_namespaced_secret`). O pacote
`kubernetes` só é importado pelos construtores `from_kubeconfig` e
`from_in_cluster` (extra `kube`).
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

from metaconfig.core.config.errors import RemoteFetchError

HTTP_NOT_FOUND = 404


@runtime_checkable
class SecretReader(Protocol):
    """Contrato mínimo de leitura de Secrets."""

    def get_secret(self, namespace: str, name: str) -> Optional[Mapping[str, bytes]]:
        ...


class KubernetesSecretReader:
    """SecretReader sobre a API CoreV1 do Kubernetes."""

    def __init__(self, core_v1: Any) -> None:
        self.core_v1 = core_v1

    @classmethod
    def from_kubeconfig(
        cls,
        *,
        config_file: Optional[str] = None,
        context: Optional[str] = None,
    ) -> "KubernetesSecretReader":
        from kubernetes import client, config

        config.load_kube_config(config_file=config_file, context=context)
        return cls(client.CoreV1Api())

    @classmethod
    def from_in_cluster(cls) -> "KubernetesSecretReader":
        from kubernetes import client, config

        config.load_incluster_config()
        return cls(client.CoreV1Api())

    def get_secret(self, namespace: str, name: str) -> Optional[Dict[str, bytes]]:
        try:
            secret = self.core_v1.read_namespaced_secret(name=name, namespace=namespace)
        except Exception as e:
            # ApiException expõe o código HTTP em `status`
            if getattr(e, "status", None) == HTTP_NOT_FOUND:
                return None
            raise RemoteFetchError(
                f"reading secret {namespace}/{name}: {e}", namespace=namespace, name=name
            ) from e

        data = getattr(secret, "data", None) or {}
        try:
            return {key: base64.b64decode(value) for key, value in data.items()}
        except (binascii.Error, TypeError, ValueError) as e:
            raise RemoteFetchError(
                f"secret {namespace}/{name} holds data that is not valid base64: {e}",
                namespace=namespace,
                name=name,
            ) from e
