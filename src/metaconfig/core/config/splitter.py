"""Divisão de um texto multi-documento em documentos individuais.

Um documento termina em uma linha cujo conteúdo, sem espaços nas bordas,
é exatamente `---`. O marcador dentro de um valor (`name: a---b`),
seguido de conteúdo (`--- # x`) ou estendido (`----`) não é fronteira.
"""

from __future__ import annotations

from typing import List

DOCUMENT_SEPARATOR = "---"


def is_separator_line(line: str) -> bool:
    return line.strip() == DOCUMENT_SEPARATOR


def split_documents(text: str) -> List[str]:
    """Divide `text` em documentos aparados, na ordem de ocorrência.

    Varredura linha a linha: cada linha é acumulada no documento corrente
    até encontrar um separador, que fecha o documento. Fragmentos vazios
    após o `strip()` são descartados.
    """
    documents: List[str] = []
    current: List[str] = []

    for line in text.strip().splitlines():
        if is_separator_line(line):
            _close(current, documents)
            current = []
            continue
        current.append(line)

    _close(current, documents)
    return documents


def _close(lines: List[str], documents: List[str]) -> None:
    doc = "\n".join(lines).strip()
    if doc:
        documents.append(doc)
