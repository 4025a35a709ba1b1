"""Условия, которым нужен именно драйвер: заголовок, URL, фреймы, алерты."""
import re
from typing import Callable

from selenium.common.exceptions import NoAlertPresentException, NoSuchFrameException

from waithelpers.conditions import is_locator


def title_is(title: str) -> Callable:
    def _predicate(driver):
        return driver.title == title

    return _predicate


def title_contains(title: str) -> Callable:
    def _predicate(driver):
        return title in driver.title

    return _predicate


def url_to_be(url: str) -> Callable:
    """Текущий URL совпадает целиком, без учёта регистра."""

    def _predicate(driver):
        return driver.current_url.lower() == url.lower()

    return _predicate


def url_contains(fraction: str) -> Callable:
    def _predicate(driver):
        return fraction.lower() in driver.current_url.lower()

    return _predicate


def url_matches(pattern: str) -> Callable:
    """
    В URL есть совпадение с регулярным выражением (без учёта регистра).
    Кривое выражение бросает ``re.error`` на первом же тике.
    """

    def _predicate(driver):
        return re.search(pattern, driver.current_url, re.IGNORECASE) is not None

    return _predicate


def frame_to_be_available_and_switch_to_it(frame) -> Callable:
    """
    Фрейм доступен — переключаемся в него и возвращаем драйвер.

    ``frame`` — имя/id, индекс или локатор ``(by, value)`` элемента фрейма.
    Переключение фрейма — единственный побочный эффект среди условий.
    """

    def _predicate(driver):
        try:
            ref = driver.find_element(*frame) if is_locator(frame) else frame
            driver.switch_to.frame(ref)
            return driver
        except NoSuchFrameException:
            return None

    return _predicate


def alert_is_present() -> Callable:
    def _predicate(driver):
        try:
            return driver.switch_to.alert
        except NoAlertPresentException:
            return None

    return _predicate


def alert_state(state: bool) -> Callable:
    """Наличие алерта равно ``state``. Отсутствие алерта — это ответ «False», а не повод ждать дальше."""

    def _predicate(driver):
        try:
            driver.switch_to.alert
            present = True
        except NoAlertPresentException:
            present = False
        return present == state

    return _predicate
