from enum import Enum
from typing import Callable, Optional

from waithelpers import conditions
from waithelpers.errors import ConfigurationError
from waithelpers.policy import WaitPolicy
from waithelpers.wait import ContextWait


class WaitForElement(Enum):
    NONE = "none"
    EXISTS = "exists"
    VISIBLE = "visible"
    CLICKABLE = "clickable"


class WaitForElements(Enum):
    NONE = "none"
    EXISTS = "exists"
    VISIBLE = "visible"


_ELEMENT_CONDITIONS = {
    WaitForElement.NONE: None,
    WaitForElement.EXISTS: conditions.element_exists,
    WaitForElement.VISIBLE: conditions.element_is_visible,
    WaitForElement.CLICKABLE: conditions.element_to_be_clickable,
}

_ELEMENTS_CONDITIONS = {
    WaitForElements.NONE: None,
    WaitForElements.EXISTS: conditions.presence_of_all_elements_located,
    WaitForElements.VISIBLE: conditions.visibility_of_all_elements_located,
}


def element_condition(wait_for: WaitForElement) -> Optional[Callable]:
    """Фабрика условия для ``wait_for``; ``None`` для NONE. Чужое значение — ошибка конфигурации."""
    if not isinstance(wait_for, WaitForElement):
        raise ConfigurationError(f"WaitForElement {wait_for!r} не поддерживается")
    return _ELEMENT_CONDITIONS[wait_for]


def elements_condition(wait_for: WaitForElements) -> Optional[Callable]:
    if not isinstance(wait_for, WaitForElements):
        raise ConfigurationError(f"WaitForElements {wait_for!r} не поддерживается")
    return _ELEMENTS_CONDITIONS[wait_for]


def find(context, locator, wait_for: WaitForElement = WaitForElement.NONE,
         policy: Optional[WaitPolicy] = None, wait: Optional[ContextWait] = None):
    """
    Найти элемент в драйвере или внутри элемента.

    Args:
        context: драйвер или элемент
        locator: кортеж ``(by, value)``
        wait_for: NONE — разовый поиск без ожидания, иначе ждём существования/видимости/кликабельности
        policy: политика ожидания, по умолчанию из окружения
        wait: готовый ``ContextWait`` над тем же контекстом (вместо ``policy``)

    Returns:
        WebElement; при NONE и отсутствии элемента — NoSuchElementException сразу
    """
    factory = element_condition(wait_for)
    if factory is None:
        return context.find_element(*locator)
    return (wait or ContextWait(context, policy)).until(factory(locator))


def find_all(context, locator, wait_for: WaitForElements = WaitForElements.NONE,
             policy: Optional[WaitPolicy] = None, wait: Optional[ContextWait] = None) -> list:
    """Как ``find``, но для списка. NONE может вернуть пустой список."""
    factory = elements_condition(wait_for)
    if factory is None:
        return context.find_elements(*locator)
    return (wait or ContextWait(context, policy)).until(factory(locator))
