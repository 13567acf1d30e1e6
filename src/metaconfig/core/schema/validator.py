"""
Validação estrutural de documentos contra schemas OpenAPI (subconjunto).

Palavras-chave suportadas:
    - type (object, array, string, integer, number, boolean), nullable
    - required, properties, additionalProperties (bool ou schema), minProperties
    - items, minItems, maxItems
    - enum, pattern, minLength, maxLength, minimum, maximum
    - oneOf, anyOf
    - default (aplicado por `apply_defaults`, nunca durante a validação)

Esta implementação evita dependências externas (ex.: jsonschema) para
manter o core leve; palavras-chave desconhecidas (`x-*`, `description`,
`example`) são ignoradas.

Diferente de uma validação fail-fast, todas as violações são coletadas,
cada uma com o caminho do campo (ex.: `.cloud.provider`, `.zones[0]`).
"""

from __future__ import annotations

import re
from copy import deepcopy
from typing import Any, Callable, Dict, List

from metaconfig.core.config.errors import SchemaIssue

_TYPE_CHECKS: Dict[str, Callable[[Any], bool]] = {
    "object": lambda v: isinstance(v, dict),
    "array": lambda v: isinstance(v, list),
    "string": lambda v: isinstance(v, str),
    "integer": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
}


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_structure(value: Any, schema: Dict[str, Any], path: str = "") -> List[SchemaIssue]:
    """Valida `value` contra `schema` e retorna todas as violações encontradas."""
    issues: List[SchemaIssue] = []
    _walk(value, schema, path, issues)
    return issues


def _walk(value: Any, schema: Any, path: str, issues: List[SchemaIssue]) -> None:
    if not isinstance(schema, dict):
        return

    if value is None and schema.get("nullable") is True:
        return

    stype = schema.get("type")
    if isinstance(stype, str) and stype in _TYPE_CHECKS:
        if not _TYPE_CHECKS[stype](value):
            issues.append(SchemaIssue(path, f"expected {stype}, got {_type_name(value)}"))
            return

    enum = schema.get("enum")
    if isinstance(enum, list) and value not in enum:
        issues.append(SchemaIssue(path, f"must be one of {enum}, got {value!r}"))

    if isinstance(value, str):
        _check_string(value, schema, path, issues)
    elif _is_number(value):
        _check_number(value, schema, path, issues)
    elif isinstance(value, dict):
        _check_object(value, schema, path, issues)
    elif isinstance(value, list):
        _check_array(value, schema, path, issues)

    _check_combinators(value, schema, path, issues)


def _check_string(value: str, schema: Dict[str, Any], path: str, issues: List[SchemaIssue]) -> None:
    pattern = schema.get("pattern")
    if isinstance(pattern, str) and re.search(pattern, value) is None:
        issues.append(SchemaIssue(path, f"does not match pattern {pattern!r}"))

    min_len = schema.get("minLength")
    if isinstance(min_len, int) and len(value) < min_len:
        issues.append(SchemaIssue(path, f"length must be >= {min_len}"))

    max_len = schema.get("maxLength")
    if isinstance(max_len, int) and len(value) > max_len:
        issues.append(SchemaIssue(path, f"length must be <= {max_len}"))


def _check_number(value: Any, schema: Dict[str, Any], path: str, issues: List[SchemaIssue]) -> None:
    minimum = schema.get("minimum")
    if _is_number(minimum) and value < minimum:
        issues.append(SchemaIssue(path, f"must be >= {minimum}"))

    maximum = schema.get("maximum")
    if _is_number(maximum) and value > maximum:
        issues.append(SchemaIssue(path, f"must be <= {maximum}"))


def _check_object(value: Dict[str, Any], schema: Dict[str, Any], path: str, issues: List[SchemaIssue]) -> None:
    min_props = schema.get("minProperties")
    if isinstance(min_props, int) and len(value) < min_props:
        issues.append(SchemaIssue(path, f"must have at least {min_props} field(s)"))

    for name in schema.get("required") or []:
        if name not in value:
            issues.append(SchemaIssue(f"{path}.{name}", "is required"))

    properties = schema.get("properties") or {}
    additional = schema.get("additionalProperties", True)

    for name, item in value.items():
        item_path = f"{path}.{name}"
        if name in properties:
            _walk(item, properties[name], item_path, issues)
        elif additional is False:
            issues.append(SchemaIssue(item_path, "is not a permitted field"))
        elif isinstance(additional, dict):
            _walk(item, additional, item_path, issues)


def _check_array(value: List[Any], schema: Dict[str, Any], path: str, issues: List[SchemaIssue]) -> None:
    min_items = schema.get("minItems")
    if isinstance(min_items, int) and len(value) < min_items:
        issues.append(SchemaIssue(path, f"must have at least {min_items} item(s)"))

    max_items = schema.get("maxItems")
    if isinstance(max_items, int) and len(value) > max_items:
        issues.append(SchemaIssue(path, f"must have at most {max_items} item(s)"))

    items = schema.get("items")
    if isinstance(items, dict):
        for i, item in enumerate(value):
            _walk(item, items, f"{path}[{i}]", issues)


def _check_combinators(value: Any, schema: Dict[str, Any], path: str, issues: List[SchemaIssue]) -> None:
    one_of = schema.get("oneOf")
    if isinstance(one_of, list) and one_of:
        matches = sum(1 for sub in one_of if not validate_structure(value, sub, path))
        if matches != 1:
            issues.append(SchemaIssue(path, f"must match exactly one schema in oneOf, matched {matches}"))

    any_of = schema.get("anyOf")
    if isinstance(any_of, list) and any_of:
        if all(validate_structure(value, sub, path) for sub in any_of):
            issues.append(SchemaIssue(path, "must match at least one schema in anyOf"))


def apply_defaults(value: Dict[str, Any], schema: Dict[str, Any]) -> Dict[str, Any]:
    """Retorna uma cópia de `value` com os `default` do schema preenchidos.

    Apenas propriedades ausentes com `default` explícito são criadas;
    objetos aninhados só são percorridos quando já existem no documento.
    """
    result = deepcopy(value)
    _fill(result, schema)
    return result


def _fill(value: Any, schema: Any) -> None:
    if not isinstance(schema, dict):
        return

    if isinstance(value, dict):
        for name, prop in (schema.get("properties") or {}).items():
            if not isinstance(prop, dict):
                continue
            if name not in value:
                if "default" in prop:
                    value[name] = deepcopy(prop["default"])
                continue
            _fill(value[name], prop)

    elif isinstance(value, list):
        for item in value:
            _fill(item, schema.get("items"))
