"""
Готовые условия ожидания над поисковым контекстом (драйвер или элемент).

Каждая функция возвращает замыкание ``context -> результат``. Ложный
результат (``None``, ``False``, пустой список) означает «ещё не готово».
Локатор — обычный кортеж Selenium ``(By.ID, "foo")``.
"""
import re
from typing import Callable, Optional

from selenium.common.exceptions import NoSuchElementException, StaleElementReferenceException
from selenium.webdriver.remote.webelement import WebElement

CLASS_NAME = re.compile(r"[_a-zA-Z0-9-]+")


def is_locator(target) -> bool:
    return isinstance(target, tuple) and len(target) == 2


def element_exists(locator) -> Callable:
    """Элемент есть в DOM (не обязательно видим). NoSuchElement отдаётся движку ожидания."""

    def _predicate(context):
        return context.find_element(*locator)

    return _predicate


def element_is_visible(locator) -> Callable:
    """Элемент найден, отображается и имеет ненулевые ширину и высоту."""

    def _predicate(context):
        try:
            return _if_visible(context.find_element(*locator))
        except StaleElementReferenceException:
            return None

    return _predicate


def visibility_of_all_elements_located(locator) -> Callable:
    def _predicate(context):
        try:
            return _all_displayed(context.find_elements(*locator))
        except StaleElementReferenceException:
            return None

    return _predicate


def visibility_of_all_elements(elements) -> Callable:
    """То же, что ``visibility_of_all_elements_located``, но для уже найденного списка."""
    elements = list(elements)

    def _predicate(context):
        try:
            return _all_displayed(elements)
        except StaleElementReferenceException:
            return None

    return _predicate


def presence_of_all_elements_located(locator) -> Callable:
    def _predicate(context):
        try:
            elements = context.find_elements(*locator)
            return elements or None
        except StaleElementReferenceException:
            return None

    return _predicate


def text_to_be_present_in_element(element: WebElement, text: str) -> Callable:
    def _predicate(context):
        try:
            return text in element.text
        except StaleElementReferenceException:
            return False

    return _predicate


def text_to_be_present_in_element_located(locator, text: str) -> Callable:
    def _predicate(context):
        try:
            return text in context.find_element(*locator).text
        except StaleElementReferenceException:
            return False

    return _predicate


def text_to_be_present_in_element_value(target, text: str) -> Callable:
    """Атрибут ``value`` содержит подстроку. Нет атрибута — ещё не готово."""

    def _predicate(context):
        try:
            element = _resolve(context, target)
            value = element.get_attribute("value")
            return value is not None and text in value
        except StaleElementReferenceException:
            return False

    return _predicate


def invisibility_of_element_located(locator) -> Callable:
    """
    Элемент не отображается. Отсутствие элемента в DOM и протухшая ссылка
    тоже считаются невидимостью, то есть успехом.
    """

    def _predicate(context):
        try:
            return not context.find_element(*locator).is_displayed()
        except (NoSuchElementException, StaleElementReferenceException):
            return True

    return _predicate


def invisibility_of_element_with_text(locator, text: str) -> Callable:
    """Элемента с таким текстом больше нет: текст пуст или другой, элемент пропал или протух."""

    def _predicate(context):
        try:
            element_text = context.find_element(*locator).text
            if not element_text:
                return True
            return element_text != text
        except (NoSuchElementException, StaleElementReferenceException):
            return True

    return _predicate


def element_to_be_clickable(target) -> Callable:
    """Элемент отображается и доступен (enabled). Возвращает сам элемент."""

    def _predicate(context):
        try:
            element = _if_visible(context.find_element(*target)) if is_locator(target) else target
            if element is not None and element.is_displayed() and element.is_enabled():
                return element
            return None
        except StaleElementReferenceException:
            return None

    return _predicate


def staleness_of(element: Optional[WebElement]) -> Callable:
    """
    Элемент отцепился от DOM. Любое чтение протухшего элемента бросает
    StaleElementReference, это и есть сигнал успеха. Выключенный элемент
    тоже считается ушедшим.
    """

    def _predicate(context):
        try:
            return element is None or not element.is_enabled()
        except StaleElementReferenceException:
            return True

    return _predicate


def element_selection_state_to_be(target, selected: bool) -> Callable:
    # для готового элемента stale не глотается, для локатора — «ещё не готово»
    if not is_locator(target):
        def _predicate(context):
            return target.is_selected() == selected

        return _predicate

    def _predicate_located(context):
        try:
            return context.find_element(*target).is_selected() == selected
        except StaleElementReferenceException:
            return False

    return _predicate_located


def element_to_be_selected(target) -> Callable:
    return element_selection_state_to_be(target, True)


def element_contains_class(target, class_name: str) -> Callable:
    """Среди классов элемента есть ``class_name`` целым токеном: "btn" не совпадёт с "btn-primary"."""

    def _predicate(context):
        try:
            element = _resolve(context, target)
            return element if class_name in class_tokens(element) else None
        except StaleElementReferenceException:
            return None

    return _predicate


def element_not_contains_class(target, class_name: str) -> Callable:
    """Ни один токен класса не равен ``class_name``. Без атрибута class — тоже успех."""

    def _predicate(context):
        try:
            element = _resolve(context, target)
            return element if class_name not in class_tokens(element) else None
        except StaleElementReferenceException:
            return None

    return _predicate


def class_tokens(element: WebElement) -> list[str]:
    return CLASS_NAME.findall(element.get_attribute("class") or "")


def _resolve(context, target):
    return context.find_element(*target) if is_locator(target) else target


def _if_visible(element):
    if not element.is_displayed():
        return None
    size = element.size or {}
    if size.get("width", 0) <= 0 or size.get("height", 0) <= 0:
        return None
    return element


def _all_displayed(elements):
    if any(not el.is_displayed() for el in elements):
        return None
    return elements or None
