import time
import logging
from typing import Callable, Optional, TypeVar

from waithelpers import settings
from waithelpers.errors import WaitTimeoutError, exceptions_for, kind_of
from waithelpers.policy import WaitPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ContextWait:
    """
    Опрос условия над контекстом: драйвером или уже найденным элементом.

    Условие вызывается с контекстом на каждом тике. Истинный результат
    возвращается сразу, ложный (``None``, ``False``, пустой список) означает
    «ещё не готово». Ошибки из ``policy.tolerated`` тоже считаются «ещё не
    готово», любые другие пробрасываются сразу, не дожидаясь таймаута.

    Args:
        context: драйвер или элемент, через который ищутся элементы
        policy: таймаут/интервал/проглатываемые ошибки, по умолчанию из окружения
        clock: источник монотонного времени в секундах
        sleep: функция паузы между тиками
    """

    def __init__(self, context, policy: Optional[WaitPolicy] = None,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        self.context = context
        self.policy = policy or settings.default_policy()
        self._clock = clock
        self._sleep = sleep
        self._tolerated = exceptions_for(self.policy.tolerated)

    def until(self, condition: Callable[..., T], message: str = "") -> T:
        """Ждёт истинного результата условия и возвращает его."""
        policy = self.policy
        start = self._clock()
        attempts = 0
        last_result = None
        last_error = None
        logger.debug(f"Ожидание {_name(condition)}: timeout={policy.timeout}s, poll={policy.poll_interval}s")

        while True:
            attempts += 1
            try:
                value = condition(self.context)
            except self._tolerated as e:
                logger.debug(f"Тик #{attempts}: {kind_of(e).name} — ещё не готово")
                last_error = e
            else:
                if value:
                    logger.debug(f"Условие {_name(condition)} выполнено за {attempts} проверок")
                    return value
                last_result = value

            elapsed = self._clock() - start
            if elapsed >= policy.timeout:
                raise self._timeout(condition, message, attempts, elapsed, last_result, last_error)

            self._sleep(policy.poll_interval)

    def until_not(self, condition: Callable, message: str = ""):
        """
        Ждёт, пока условие станет ложным, и возвращает ``True``.
        Проглатываемая ошибка тоже засчитывается как «ложно».
        """
        policy = self.policy
        start = self._clock()
        attempts = 0
        last_result = None

        while True:
            attempts += 1
            try:
                value = condition(self.context)
            except self._tolerated as e:
                logger.debug(f"Тик #{attempts}: {kind_of(e).name} — условие считаем ложным")
                return True
            if not value:
                return True
            last_result = value

            elapsed = self._clock() - start
            if elapsed >= policy.timeout:
                raise self._timeout(condition, message, attempts, elapsed, last_result, None)

            self._sleep(policy.poll_interval)

    def _timeout(self, condition, message, attempts, elapsed, last_result, last_error) -> WaitTimeoutError:
        text = message or f"Условие {_name(condition)} не выполнилось за {self.policy.timeout}s"
        if last_error is not None:
            text += f"; последняя ошибка: {type(last_error).__name__}"
        if settings.log_timeouts():
            logger.warning(f"{text} (проверок: {attempts})")
        return WaitTimeoutError(text, last_result=last_result, last_error=last_error,
                                attempts=attempts, elapsed=elapsed)


def wait_until(context, condition: Callable[..., T], timeout: Optional[float] = None,
               poll_interval: Optional[float] = None, ignored=(), message: str = "") -> T:
    """Однократное ожидание с политикой по умолчанию и точечными переопределениями."""
    policy = settings.default_policy().with_overrides(timeout, poll_interval, ignored)
    return ContextWait(context, policy).until(condition, message)


def _name(condition) -> str:
    return getattr(condition, "__qualname__", None) or repr(condition)
