import time
import logging
from typing import Optional

from selenium.common.exceptions import StaleElementReferenceException

from waithelpers import conditions, settings
from waithelpers.errors import WaitTimeoutError
from waithelpers.finders import WaitForElement, WaitForElements, find, find_all
from waithelpers.wait import ContextWait

logger = logging.getLogger(__name__)


class Waits:
    """
    Ожидания, привязанные к одному контексту — драйверу или элементу.

    Удобно держать в базовом экране/странице: ``self.waits = Waits(driver, timeout)``.
    ``timeout`` у отдельного вызова перекрывает таймаут экземпляра.
    """

    def __init__(self, context, timeout: Optional[float] = None, poll: Optional[float] = None, ignored=(),
                 clock=time.monotonic, sleep=time.sleep):
        self.context = context
        self.policy = settings.default_policy().with_overrides(timeout, poll, ignored)
        self._clock = clock
        self._sleep = sleep

    @property
    def timeout(self) -> float:
        return self.policy.timeout

    def wait(self, timeout: Optional[float] = None) -> ContextWait:
        policy = self.policy.with_overrides(timeout=timeout)
        return ContextWait(self.context, policy, clock=self._clock, sleep=self._sleep)

    def until(self, condition, timeout=None, message: str = ""):
        return self.wait(timeout).until(condition, message)

    def until_not(self, condition, timeout=None, message: str = ""):
        return self.wait(timeout).until_not(condition, message)

    def find(self, by, value, wait_for: WaitForElement = WaitForElement.EXISTS, timeout=None):
        return find(self.context, (by, value), wait_for, wait=self.wait(timeout))

    def find_all(self, by, value, wait_for: WaitForElements = WaitForElements.EXISTS, timeout=None) -> list:
        return find_all(self.context, (by, value), wait_for, wait=self.wait(timeout))

    def exists(self, by, value, timeout=None):
        return self.find(by, value, WaitForElement.EXISTS, timeout)

    def visible(self, by, value, timeout=None):
        return self.find(by, value, WaitForElement.VISIBLE, timeout)

    def clickable(self, by, value, timeout=None):
        return self.find(by, value, WaitForElement.CLICKABLE, timeout)

    def visible_or_none(self, by, value, timeout=None):
        """Возвращает видимый элемент или ``None``."""
        try:
            return self.visible(by, value, timeout)
        except WaitTimeoutError:
            logger.info(f"Элемент не стал видимым: {by}={value!r}")
            return None

    def clickable_or_none(self, by, value, timeout=None):
        """Возвращает кликабельный элемент или ``None``."""
        try:
            return self.clickable(by, value, timeout)
        except WaitTimeoutError:
            logger.info(f"Элемент не стал кликабельным: {by}={value!r}")
            return None

    def gone(self, element, timeout=None) -> bool:
        """Ждёт, пока элемент протухнет (удалён из DOM) или перестанет отображаться."""

        def _gone(context):
            if conditions.staleness_of(element)(context):
                return True
            try:
                return not element.is_displayed()
            except StaleElementReferenceException:
                return True

        try:
            return self.until(_gone, timeout)
        except WaitTimeoutError:
            return False
