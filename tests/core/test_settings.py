# tests/core/test_settings.py
"""
Testes do carregamento das settings do core (defaults + override local).

Este módulo valida `load_settings`, responsável por resolver as settings
efetivas a partir do arquivo de defaults (obrigatório) e de um arquivo
local opcional, aplicando `deep_merge`.

Os testes asseguram que:
- os defaults embarcados produzem os orçamentos 10 x 5s e 5 x 5s
- a ausência do arquivo de defaults é tratada como erro explícito
- a ausência do arquivo local não é erro
- overrides locais têm precedência sobre defaults
- formatos e tipos raiz inválidos são rejeitados explicitamente
- valores fora dos limites resultam em `InvalidSettingsError`

Limites explícitos:
    - Não valida a configuração do cluster
    - Não valida hashing
"""

from pathlib import Path

import pytest

try:
    from metaconfig.core.settings import DEFAULT_SETTINGS_PATH, RetrySettings, Settings, load_settings
    from metaconfig.core.config.errors import (
        ConfigTypeConflictError,
        DefaultsNotFoundError,
        InvalidConfigRootTypeError,
        InvalidSettingsError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_settings = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


DEFAULTS_YAML = """\
schemas:
  root: null
retry:
  loud:
    attempts: 10
    delay: 5
  silent:
    attempts: 5
    delay: 5
assembly:
  strict_slots: false
remote:
  terminal_document_errors: false
"""


def _require_imports():
    """
    Garante que o loader de settings e as exceções canônicas estejam disponíveis.

    Falha explicitamente com mensagem orientada quando os módulos
    `settings` ou `errors` não podem ser importados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing settings modules. Implement:\n"
            "- src/metaconfig/core/settings.py (load_settings, Settings)\n"
            "- src/metaconfig/core/config/errors.py (SettingsError family)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


def test_builtin_defaults():
    """
    Verifica que o arquivo de defaults embarcado resolve para os valores
    padrão de `Settings`.

    Invariantes:
        - loop ruidoso: 10 tentativas, 5s
        - loop silencioso: 5 tentativas, 5s
        - schemas embarcados (root None)
        - erros de documento remotos repetidos (terminal_document_errors False)
    """
    _require_imports()
    assert DEFAULT_SETTINGS_PATH.exists()

    settings = load_settings()

    assert settings == Settings()
    assert settings.loud_retry == RetrySettings(attempts=10, delay=5.0)
    assert settings.silent_retry == RetrySettings(attempts=5, delay=5.0)
    assert settings.schemas_root is None
    assert settings.strict_slots is False
    assert settings.terminal_document_errors is False


def test_missing_defaults_raises(tmp_path: Path):
    _require_imports()
    with pytest.raises(DefaultsNotFoundError):
        load_settings(defaults_path=tmp_path / "missing.yaml")


def test_missing_local_is_ok(tmp_path: Path):
    _require_imports()
    defaults = _write(tmp_path / "defaults.yaml", DEFAULTS_YAML)

    settings = load_settings(defaults_path=defaults, local_path=tmp_path / "local.yaml")

    assert settings == Settings()


def test_local_overrides_defaults(tmp_path: Path):
    """
    Overrides locais substituem apenas as chaves declaradas, preservando
    o restante dos defaults.
    """
    _require_imports()
    defaults = _write(tmp_path / "defaults.yaml", DEFAULTS_YAML)
    local = _write(
        tmp_path / "local.yaml",
        "schemas:\n  root: /opt/candi\nretry:\n  loud:\n    delay: 0.5\nassembly:\n  strict_slots: true\n",
    )

    settings = load_settings(defaults_path=defaults, local_path=local)

    assert settings.schemas_root == Path("/opt/candi")
    assert settings.loud_retry == RetrySettings(attempts=10, delay=0.5)
    assert settings.silent_retry == RetrySettings(attempts=5, delay=5.0)
    assert settings.strict_slots is True
    assert settings.terminal_document_errors is False


def test_json_local_override(tmp_path: Path):
    _require_imports()
    defaults = _write(tmp_path / "defaults.yaml", DEFAULTS_YAML)
    local = _write(tmp_path / "local.json", '{"remote": {"terminal_document_errors": true}}')

    settings = load_settings(defaults_path=defaults, local_path=local)

    assert settings.terminal_document_errors is True


def test_invalid_root_type_raises(tmp_path: Path):
    _require_imports()
    defaults = _write(tmp_path / "defaults.yaml", "- a\n- b\n")

    with pytest.raises(InvalidConfigRootTypeError):
        load_settings(defaults_path=defaults)


def test_unsupported_extension_raises(tmp_path: Path):
    _require_imports()
    defaults = _write(tmp_path / "defaults.toml", "a = 1\n")

    with pytest.raises(UnsupportedConfigFormatError, match="Formato não suportado"):
        load_settings(defaults_path=defaults)


def test_type_conflict_in_override_raises(tmp_path: Path):
    _require_imports()
    defaults = _write(tmp_path / "defaults.yaml", DEFAULTS_YAML)
    local = _write(tmp_path / "local.yaml", "retry: fast\n")

    with pytest.raises(ConfigTypeConflictError):
        load_settings(defaults_path=defaults, local_path=local)


@pytest.mark.parametrize(
    "override",
    [
        "retry:\n  loud:\n    attempts: 0\n",
        "retry:\n  silent:\n    delay: -1\n",
        "assembly:\n  strict_slots: 'yes'\n",
    ],
)
def test_invalid_values_raise(tmp_path: Path, override):
    _require_imports()
    defaults = _write(tmp_path / "defaults.yaml", DEFAULTS_YAML)
    local = _write(tmp_path / "local.yaml", override)

    with pytest.raises((InvalidSettingsError, ConfigTypeConflictError)):
        load_settings(defaults_path=defaults, local_path=local)


def test_missing_retry_section_is_invalid(tmp_path: Path):
    _require_imports()
    defaults = _write(tmp_path / "defaults.yaml", "schemas:\n  root: null\n")

    with pytest.raises(InvalidSettingsError):
        load_settings(defaults_path=defaults)
