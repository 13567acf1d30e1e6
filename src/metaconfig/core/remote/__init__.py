"""metaconfig — leitura remota do MetaConfig (Secrets em kube-system)."""

from .fetcher import (  # noqa: F401
    CLUSTER_CONFIGURATION_SECRET,
    PROVIDER_CLUSTER_CONFIGURATION_SECRET,
    RemoteConfigFetcher,
    SecretRef,
    parse_config_from_cluster,
    parse_config_in_cluster,
)
from .secrets import KubernetesSecretReader, SecretReader  # noqa: F401
