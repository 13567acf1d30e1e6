# src/metaconfig/core/config/errors.py
"""
Exceções canônicas da camada de configuração do metaconfig.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a leitura, classificação, validação estrutural, montagem e obtenção
remota da configuração do cluster.

As exceções aqui definidas representam **falhas explícitas de ingestão**,
e não erros genéricos de execução.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros de documento carregam diagnóstico suficiente para correção humana
    - Mensagens de erro são claras e direcionadas ao operador

Responsabilidades do módulo:
    - Expressar falhas de leitura, classificação e validação de documentos
    - Expressar falhas de montagem do agregado (MetaConfig)
    - Expressar falhas de leitura remota e de esgotamento de tentativas
    - Expressar falhas de carregamento das settings do próprio core

Invariantes:
    - Todas as exceções do pacote herdam de `ConfigError`
    - Erros de documento podem anexar o texto numerado do documento

Limites explícitos:
    - Não executa retry ou recovery
    - Não decide quais erros são transitórios
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


def numerate_manifest_lines(manifest: str) -> str:
    """Retorna o documento com cada linha prefixada pelo seu número (1-based)."""
    lines = manifest.split("\n")
    return "".join(f"{index}\t{line}\n" for index, line in enumerate(lines, start=1))


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do cluster.

    Esta hierarquia permite:
        - captura genérica de erros de ingestão
        - distinção clara entre falhas de documento, montagem e leitura remota
    """


class ReadError(ConfigError):
    """Não foi possível obter o texto de origem (arquivo ausente ou ilegível)."""


class DocumentError(ConfigError):
    """
    Base para falhas associadas a um único documento.

    Quando o erro ocorre no caminho textual, o loader anexa o documento
    ofensivo via `attach_document`; a representação textual do erro passa
    a incluir o dump numerado linha a linha.
    """

    def __init__(self, message: str, *, document: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.document = document

    def attach_document(self, document: str) -> None:
        self.document = document

    def __str__(self) -> str:
        if self.document is None:
            return self.message
        return f"{self.message}\ndata: \n{numerate_manifest_lines(self.document)}"


class UnknownKindError(DocumentError):
    """Nenhum schema registrado corresponde ao discriminador do documento."""

    def __init__(
        self,
        message: str,
        *,
        kind: Optional[str] = None,
        version: Optional[str] = None,
        document: Optional[str] = None,
    ) -> None:
        super().__init__(message, document=document)
        self.kind = kind
        self.version = version


@dataclass(frozen=True)
class SchemaIssue:
    """Violação estrutural localizada por caminho de campo (ex.: `.cloud.provider`)."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path or '.'}: {self.message}"


class ValidationError(DocumentError):
    """
    Documento com `kind` reconhecido, mas estrutura inválida segundo o schema.

    Carrega todas as violações encontradas (não apenas a primeira),
    cada uma com o caminho do campo.
    """

    def __init__(
        self,
        kind: str,
        issues: List[SchemaIssue],
        *,
        document: Optional[str] = None,
    ) -> None:
        details = "\n".join(f"  - {issue}" for issue in issues)
        super().__init__(f"document of kind {kind!r} is invalid:\n{details}", document=document)
        self.kind = kind
        self.issues = list(issues)


class UnmarshalError(DocumentError):
    """Documento não pode ser decodificado em uma estrutura de valores."""


class PrepareError(ConfigError):
    """A finalização encontrou slots ausentes ou mutuamente inconsistentes."""


class DuplicateSlotError(PrepareError):
    """Dois documentos foram roteados para o mesmo slot (apenas em modo estrito)."""


class RemoteFetchError(ConfigError):
    """Falha de leitura no control plane: registro ausente ou indisponível."""

    def __init__(
        self,
        message: str,
        *,
        namespace: Optional[str] = None,
        name: Optional[str] = None,
        key: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.namespace = namespace
        self.name = name
        self.key = key


class RetryExhaustedError(ConfigError):
    """Tentativas esgotadas; encapsula o último erro subjacente."""

    def __init__(self, name: str, attempts: int, last_error: Optional[BaseException]) -> None:
        super().__init__(f"{name}: giving up after {attempts} attempt(s): {last_error}")
        self.name = name
        self.attempts = attempts
        self.last_error = last_error


class RetryCancelledError(ConfigError):
    """O loop de tentativas foi interrompido por sinal externo de cancelamento."""

    def __init__(self, name: str, attempts: int, last_error: Optional[BaseException]) -> None:
        super().__init__(f"{name}: cancelled after {attempts} attempt(s)")
        self.name = name
        self.attempts = attempts
        self.last_error = last_error


class SchemaLoadError(ConfigError):
    """Arquivo de schema ausente, ilegível ou com estrutura inesperada."""


class DuplicateSchemaError(ConfigError):
    """O mesmo par (kind, apiVersion) foi registrado mais de uma vez."""


# ---------------------------------------------------------------------------
# Settings do core
# ---------------------------------------------------------------------------


class SettingsError(ConfigError):
    """
    Base para falhas no carregamento das settings do próprio core
    (raiz de schemas, orçamentos de retry, modo estrito).
    """


class DefaultsNotFoundError(SettingsError):
    """
    Exceção levantada quando o arquivo de settings base (defaults)
    não é encontrado no caminho especificado.

    Invariantes:
        - Sem defaults não existe configuração efetiva válida

    Limites explícitos:
        - Não tenta inferir ou criar defaults automaticamente
    """


class UnsupportedConfigFormatError(SettingsError):
    """
    Exceção levantada quando o formato do arquivo de settings
    não é suportado pelo loader.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(SettingsError):
    """O conteúdo raiz do arquivo de settings não é um dicionário (`dict`)."""


class ConfigTypeConflictError(SettingsError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"retry": {"loud": {"attempts": 10}}}
        - override: {"retry": "fast"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidSettingsError(SettingsError):
    """As settings resolvidas violam a estrutura esperada (tipos, limites)."""
