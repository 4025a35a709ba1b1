import os

import pytest
from selenium.common.exceptions import (
    NoAlertPresentException,
    NoSuchElementException,
    NoSuchFrameException,
    StaleElementReferenceException,
)
from selenium.webdriver.common.by import By

from waithelpers.policy import WaitPolicy
from waithelpers.wait import ContextWait


class FakeClock:
    """Управляемое время: ``sleep`` двигает часы и запускает запланированные события."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: list[float] = []
        self._events: list = []

    def __call__(self) -> float:
        return self.now

    def at(self, when: float, action):
        self._events.append((when, action))
        self._events.sort(key=lambda e: e[0])

    def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.now += seconds
        while self._events and self._events[0][0] <= self.now + 1e-9:
            _, action = self._events.pop(0)
            action()


class _Searchable:
    def __init__(self):
        self.children: dict[tuple, list] = {}

    def add(self, by, value, *elements):
        self.children.setdefault((by, value), []).extend(elements)
        return elements[0] if len(elements) == 1 else list(elements)

    def remove(self, by, value):
        for el in self.children.pop((by, value), []):
            el.stale = True

    def _check(self):
        pass

    def find_element(self, by=By.ID, value=None):
        self._check()
        found = self.children.get((by, value))
        if not found:
            raise NoSuchElementException(f"no such element: {by}={value}")
        return found[0]

    def find_elements(self, by=By.ID, value=None):
        self._check()
        return list(self.children.get((by, value), []))


class FakeElement(_Searchable):
    def __init__(self, text="", displayed=True, enabled=True, selected=False, attributes=None,
                 size=None):
        super().__init__()
        self._text = text
        self.displayed = displayed
        self.enabled = enabled
        self.selected = selected
        self.attributes = dict(attributes or {})
        self._size = size if size is not None else {"width": 10, "height": 10}
        self.stale = False
        self.reads = 0

    def _check(self):
        self.reads += 1
        if self.stale:
            raise StaleElementReferenceException("stale element reference: element is not attached")

    @property
    def text(self):
        self._check()
        return self._text

    @text.setter
    def text(self, value):
        self._text = value

    @property
    def size(self):
        self._check()
        return self._size

    def is_displayed(self):
        self._check()
        return self.displayed

    def is_enabled(self):
        self._check()
        return self.enabled

    def is_selected(self):
        self._check()
        return self.selected

    def get_attribute(self, name):
        self._check()
        return self.attributes.get(name)


class FakeAlert:
    def __init__(self, text="alert"):
        self.text = text


class FakeSwitchTo:
    def __init__(self, driver: "FakeDriver"):
        self._driver = driver

    def frame(self, ref):
        if ref not in self._driver.frames:
            raise NoSuchFrameException(f"no such frame: {ref!r}")
        self._driver.current_frame = ref

    @property
    def alert(self):
        if self._driver.alert is None:
            raise NoAlertPresentException("no such alert")
        return self._driver.alert


class FakeDriver(_Searchable):
    def __init__(self, title="", url="about:blank"):
        super().__init__()
        self.title = title
        self.current_url = url
        self.frames: list = []
        self.current_frame = None
        self.alert = None
        self.switch_to = FakeSwitchTo(self)


@pytest.fixture(autouse=True)
def clean_wait_env(monkeypatch):
    """Тесты не должны зависеть от WAIT_* в окружении разработчика."""
    for name in list(os.environ):
        if name.startswith("WAIT_"):
            monkeypatch.delenv(name)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def driver():
    return FakeDriver(title="Loading", url="https://example.com/Start")


@pytest.fixture
def make_element():
    return FakeElement


@pytest.fixture
def make_alert():
    return FakeAlert


@pytest.fixture
def waiter(clock):
    """ContextWait на фейковых часах: ``waiter(context, timeout=1.0, poll=0.25, ignored=())``."""

    def _make(context, timeout=1.0, poll=0.25, ignored=()):
        policy = WaitPolicy(timeout=timeout, poll_interval=poll, ignored=ignored)
        return ContextWait(context, policy, clock=clock, sleep=clock.sleep)

    return _make
