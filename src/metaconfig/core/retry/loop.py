"""Loop de tentativas com intervalo fixo.

Executa uma operação falível até `attempts` vezes, com `delay` segundos
entre tentativas, e devolve o primeiro sucesso ou falha com
`RetryExhaustedError` encapsulando o último erro.

Variantes:
    - `start_loop`: rotulada e visível ao operador (padrão 10 x 5s)
    - `start_silent_loop`: sem rótulo visível, para execução dentro do
      cluster sem camada interativa (padrão 5 x 5s)

Além do orçamento de tentativas, o loop aceita:
    - `is_retryable(exc)`: classificação de erros; False → erro terminal,
      relançado imediatamente sem novas tentativas
    - `cancel` (`threading.Event`): interrompe a espera entre tentativas
    - `deadline` (valor de `time.monotonic()`): encerra o loop quando a
      próxima espera ultrapassaria o prazo

Example:
    >>> meta = start_loop("Get Cluster configuration", lambda: fetch(), attempts=3, delay=1)
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, TypeVar

from metaconfig.core.config.errors import RetryCancelledError, RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

LOUD_DEFAULT_ATTEMPTS = 10
SILENT_DEFAULT_ATTEMPTS = 5
DEFAULT_DELAY = 5.0

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def retry_all(exc: Exception) -> bool:
    """Classificação padrão: todo erro é repetido."""
    return True


@dataclass
class RetryLoop:
    """
    Loop de tentativas com orçamento fixo.

    Campos:
        - name: rótulo da operação (exibido apenas na variante ruidosa)
        - attempts: número máximo de chamadas à operação
        - delay: segundos de espera entre tentativas
        - silent: quando True, tudo é registrado em nível DEBUG
        - is_retryable: hook de classificação (padrão: repetir tudo)
        - cancel: evento externo de cancelamento
        - deadline: prazo absoluto em `time.monotonic()`
        - events: log estruturado das tentativas da última execução
    """

    name: str
    attempts: int = LOUD_DEFAULT_ATTEMPTS
    delay: float = DEFAULT_DELAY
    silent: bool = False
    is_retryable: Callable[[Exception], bool] = retry_all
    cancel: Optional[threading.Event] = None
    deadline: Optional[float] = None
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError(f"attempts must be >= 1, got {self.attempts}")
        if self.delay < 0:
            raise ValueError(f"delay must be >= 0, got {self.delay}")

    def run(self, operation: Callable[[], T]) -> T:
        self.events = []
        self._log("info", f"{self.name}: started")
        last_error: Optional[Exception] = None

        for attempt in range(1, self.attempts + 1):
            if self.cancel is not None and self.cancel.is_set():
                self._log("warning", f"{self.name}: cancelled", attempt=attempt)
                raise RetryCancelledError(self.name, attempt - 1, last_error)

            try:
                result = operation()
            except Exception as e:
                last_error = e
                if not self.is_retryable(e):
                    self._log(
                        "error",
                        f"{self.name}: attempt {attempt}/{self.attempts} failed with terminal error: {e}",
                        attempt=attempt,
                    )
                    raise

                self._log(
                    "warning",
                    f"{self.name}: attempt {attempt}/{self.attempts} failed: {e}",
                    attempt=attempt,
                )
                if attempt < self.attempts:
                    self._wait(attempt, last_error)
                continue

            self._log("info", f"{self.name}: succeeded on attempt {attempt}/{self.attempts}", attempt=attempt)
            return result

        self._log("error", f"{self.name}: giving up after {self.attempts} attempt(s)", attempt=self.attempts)
        raise RetryExhaustedError(self.name, self.attempts, last_error) from last_error

    def _wait(self, attempt: int, last_error: Exception) -> None:
        if self.deadline is not None and time.monotonic() + self.delay > self.deadline:
            self._log("error", f"{self.name}: deadline reached after {attempt} attempt(s)", attempt=attempt)
            raise RetryExhaustedError(self.name, attempt, last_error) from last_error

        self._log("debug", f"{self.name}: retrying in {self.delay:g}s", attempt=attempt)

        if self.cancel is None:
            time.sleep(self.delay)
        elif self.cancel.wait(self.delay):
            self._log("warning", f"{self.name}: cancelled", attempt=attempt)
            raise RetryCancelledError(self.name, attempt, last_error) from last_error

    def _log(self, level: str, message: str, **extra: Any) -> None:
        event = {
            "name": self.name,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

        logger.log(logging.DEBUG if self.silent else _LEVELS[level], message)


def start_loop(
    name: str,
    operation: Callable[[], T],
    *,
    attempts: int = LOUD_DEFAULT_ATTEMPTS,
    delay: float = DEFAULT_DELAY,
    **options: Any,
) -> T:
    """Executa `operation` no loop ruidoso, rotulado por `name`."""
    return RetryLoop(name=name, attempts=attempts, delay=delay, silent=False, **options).run(operation)


def start_silent_loop(
    name: str,
    operation: Callable[[], T],
    *,
    attempts: int = SILENT_DEFAULT_ATTEMPTS,
    delay: float = DEFAULT_DELAY,
    **options: Any,
) -> T:
    """Executa `operation` no loop silencioso."""
    return RetryLoop(name=name, attempts=attempts, delay=delay, silent=True, **options).run(operation)
