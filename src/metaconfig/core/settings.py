# src/metaconfig/core/settings.py
"""
Settings do próprio core de ingestão.

As settings controlam *como* o core trabalha (onde estão os schemas,
orçamento de tentativas do caminho remoto, modo estrito de slots) e
nunca o conteúdo da configuração do cluster.

Resolução:
    - um arquivo de defaults (obrigatório; o pacote embarca
      `settings.defaults.yaml`)
    - um arquivo local de overrides (opcional)
    - override aplicado via `deep_merge` determinístico

Formatos suportados:
    - YAML (.yaml, .yml)
    - JSON (.json)

Invariantes:
    - O resultado é sempre um `Settings` imutável e validado
    - Overrides nunca mutam os defaults

Limites explícitos:
    - Não lê variáveis de ambiente
    - Não valida a configuração do cluster
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # PyYAML

from metaconfig.core.config.errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSettingsError,
    UnsupportedConfigFormatError,
)
from metaconfig.core.config.merge import deep_merge

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parents[1] / "settings.defaults.yaml"


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de settings e valida sua estrutura básica.

    Decisões arquiteturais:
        - O arquivo deve existir no momento do carregamento
        - Arquivos vazios são interpretados como dicionários vazios
        - O conteúdo raiz deve ser um dicionário (`dict`)

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de settings não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Settings root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def _expect(cond: bool, msg: str) -> None:
    if not cond:
        raise InvalidSettingsError(msg)


@dataclass(frozen=True)
class RetrySettings:
    """Orçamento de um loop de tentativas (tentativas e intervalo em segundos)."""

    attempts: int
    delay: float

    @classmethod
    def from_dict(cls, data: Any, section: str) -> "RetrySettings":
        _expect(isinstance(data, dict), f"{section} must be a mapping")
        attempts = data.get("attempts")
        delay = data.get("delay")
        _expect(
            isinstance(attempts, int) and not isinstance(attempts, bool) and attempts >= 1,
            f"{section}.attempts must be an integer >= 1",
        )
        _expect(
            isinstance(delay, (int, float)) and not isinstance(delay, bool) and delay >= 0,
            f"{section}.delay must be a number >= 0",
        )
        return cls(attempts=attempts, delay=float(delay))


@dataclass(frozen=True)
class Settings:
    """
    Settings resolvidas do core.

    Campos:
        - schemas_root: diretório candi; None usa os schemas embarcados
        - loud_retry: orçamento do loop com rótulo visível ao operador
        - silent_retry: orçamento do loop silencioso (dentro do cluster)
        - strict_slots: documento repetido para um slot é erro
        - terminal_document_errors: quando True, erros de documento e de
          montagem no caminho remoto não são repetidos pelo loop
          (padrão False: toda falha consome o orçamento de tentativas)
    """

    schemas_root: Optional[Path] = None
    loud_retry: RetrySettings = field(default_factory=lambda: RetrySettings(attempts=10, delay=5.0))
    silent_retry: RetrySettings = field(default_factory=lambda: RetrySettings(attempts=5, delay=5.0))
    strict_slots: bool = False
    terminal_document_errors: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        schemas = data.get("schemas") or {}
        _expect(isinstance(schemas, dict), "schemas must be a mapping")
        root = schemas.get("root")
        _expect(root is None or isinstance(root, str), "schemas.root must be a string or null")

        retry = data.get("retry") or {}
        _expect(isinstance(retry, dict), "retry must be a mapping")

        assembly = data.get("assembly") or {}
        _expect(isinstance(assembly, dict), "assembly must be a mapping")
        strict = assembly.get("strict_slots", False)
        _expect(isinstance(strict, bool), "assembly.strict_slots must be boolean")

        remote = data.get("remote") or {}
        _expect(isinstance(remote, dict), "remote must be a mapping")
        terminal = remote.get("terminal_document_errors", False)
        _expect(isinstance(terminal, bool), "remote.terminal_document_errors must be boolean")

        return cls(
            schemas_root=Path(root) if root else None,
            loud_retry=RetrySettings.from_dict(retry.get("loud"), "retry.loud"),
            silent_retry=RetrySettings.from_dict(retry.get("silent"), "retry.silent"),
            strict_slots=strict,
            terminal_document_errors=terminal,
        )


def load_settings(
    *,
    defaults_path: Optional[Union[str, Path]] = None,
    local_path: Optional[Union[str, Path]] = None,
) -> Settings:
    """
    Carrega e resolve as settings efetivas do core.

    Política de resolução:
        - O arquivo de defaults é obrigatório (padrão: o embarcado no pacote)
        - O arquivo local é opcional; se o caminho não existir, é ignorado
        - Quando presente, o local sempre tem prioridade sobre defaults

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
        InvalidSettingsError: Se as settings resolvidas forem inválidas.
    """
    defaults_file = Path(defaults_path) if defaults_path is not None else DEFAULT_SETTINGS_PATH
    effective = _load_file(defaults_file)

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return Settings.from_dict(effective)
