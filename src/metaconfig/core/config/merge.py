# src/metaconfig/core/config/merge.py
"""
Utilitários de merge de estruturas de configuração.

Política de `deep_merge` para resolução das settings do core
(defaults + override local):
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - conflito de tipos → erro estrutural explícito
      (int e float são compatíveis; None na base aceita qualquer tipo)

Invariantes:
    - Nenhum input é mutado
    - A mesma entrada sempre produz a mesma saída

Limites explícitos:
    - Não carrega arquivos
    - Não realiza coerção de tipos
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois dicionários.

    Política:
        - dict + dict → merge recursivo por chave
        - list        → sobrescrita total
        - escalar     → sobrescrita direta pelo override
        - conflito de tipos → `ConfigTypeConflictError`

    Args:
        base (Dict[str, Any]): Estrutura base (ex.: settings defaults).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Nova estrutura resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se ocorrer conflito de tipo entre base e override.
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        if isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        # None no defaults significa "sem valor"; qualquer tipo pode sobrescrevê-lo
        if (
            base_value is not None
            and type(base_value) is not type(override_value)
            and not (_is_number(base_value) and _is_number(override_value))
        ):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[key] = deepcopy(override_value)

    return result

