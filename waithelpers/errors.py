from enum import Enum
from typing import Iterable, Optional

from selenium.common.exceptions import (
    NoAlertPresentException,
    NoSuchElementException,
    NoSuchFrameException,
    StaleElementReferenceException,
    TimeoutException,
)


class ConfigurationError(ValueError):
    """Неверная конфигурация ожидания: таймаут, интервал, селектор или вид ошибки."""


class ErrorKind(Enum):
    NOT_FOUND = "not_found"
    STALE_REFERENCE = "stale_reference"
    NO_SUCH_FRAME = "no_such_frame"
    NO_ALERT_PRESENT = "no_alert_present"


_EXCEPTIONS = {
    ErrorKind.NOT_FOUND: NoSuchElementException,
    ErrorKind.STALE_REFERENCE: StaleElementReferenceException,
    ErrorKind.NO_SUCH_FRAME: NoSuchFrameException,
    ErrorKind.NO_ALERT_PRESENT: NoAlertPresentException,
}


def kind_of(error: BaseException) -> Optional[ErrorKind]:
    """Вид ошибки из закрытого набора или ``None``, если ошибка вне его."""
    for kind, exc_type in _EXCEPTIONS.items():
        if isinstance(error, exc_type):
            return kind
    return None


def exceptions_for(kinds: Iterable[ErrorKind]) -> tuple:
    return tuple(_EXCEPTIONS[k] for k in kinds)


def parse_kinds(values) -> frozenset:
    """
    Приводит набор видов ошибок к ``frozenset[ErrorKind]``.

    Принимает члены ``ErrorKind`` или их имена/значения строкой
    (регистр не важен), например ``"stale_reference"`` из ``.env``.
    """
    if values is None:
        return frozenset()
    if isinstance(values, (str, ErrorKind)):
        values = [values]

    kinds = set()
    for v in values:
        if isinstance(v, ErrorKind):
            kinds.add(v)
            continue
        if not isinstance(v, str):
            raise ConfigurationError(f"Неизвестный вид ошибки: {v!r}")
        key = v.strip().lower()
        match = next((k for k in ErrorKind if key in (k.value, k.name.lower())), None)
        if match is None:
            raise ConfigurationError(f"Неизвестный вид ошибки: {v!r}")
        kinds.add(match)
    return frozenset(kinds)


class WaitTimeoutError(TimeoutException):
    """
    Таймаут ожидания истёк, а условие так и не выполнилось.

    Хранит последнее наблюдённое состояние для диагностики:
    ``last_result`` — последнее (ложное) значение условия,
    ``last_error`` — последняя проглоченная ошибка, ``attempts`` — число проверок.
    """

    def __init__(self, msg: str = "", *, last_result=None, last_error: Optional[BaseException] = None,
                 attempts: int = 0, elapsed: float = 0.0):
        super().__init__(msg)
        self.last_result = last_result
        self.last_error = last_error
        self.attempts = attempts
        self.elapsed = elapsed

    @property
    def last_error_kind(self) -> Optional[ErrorKind]:
        return kind_of(self.last_error) if self.last_error is not None else None
