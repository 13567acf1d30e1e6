# src/metaconfig/core/config/hashing.py
"""
Hashing canônico do MetaConfig.

O hash representa a **identidade estrutural** de um agregado finalizado:
duas ingestões do mesmo texto (ou do mesmo par de Secrets) produzem o
mesmo valor, independentemente da ordem original das chaves.

Política de hashing:
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256

Limites explícitos:
    - Não valida nem normaliza a configuração
    - Não persiste o hash
"""


import json
import hashlib
from typing import Dict, Any


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico de uma estrutura de configuração.

    Valores que não são nativamente serializáveis em JSON (ex.: datas
    decodificadas pelo YAML) são convertidos via `str`.

    Args:
        config (Dict[str, Any]): Representação em dicionário do agregado.

    Returns:
        str: Hash SHA-256 hexadecimal (64 caracteres).

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """

    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
