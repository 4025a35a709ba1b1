import logging
from dataclasses import dataclass, field, replace
from numbers import Real

from waithelpers.errors import ConfigurationError, ErrorKind, parse_kinds

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_POLL_INTERVAL = 0.05


@dataclass(frozen=True)
class WaitPolicy:
    """Таймаут, интервал опроса (секунды) и виды ошибок, которые глотаются во время опроса."""
    timeout: float = DEFAULT_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    ignored: frozenset = field(default_factory=frozenset)

    def __post_init__(self):
        for name in ("timeout", "poll_interval"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise ConfigurationError(f"{name} должен быть числом, получено {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{name} должен быть > 0, получено {value!r}")

        object.__setattr__(self, "ignored", parse_kinds(self.ignored))

        if self.poll_interval >= self.timeout:
            logger.warning(
                f"Интервал опроса {self.poll_interval}s не меньше таймаута {self.timeout}s: "
                f"условие будет проверено не больше двух раз"
            )

    @property
    def tolerated(self) -> frozenset:
        """Виды ошибок, которые опрос считает «ещё не готово». NOT_FOUND есть всегда."""
        return self.ignored | {ErrorKind.NOT_FOUND}

    def with_overrides(self, timeout=None, poll_interval=None, ignored=None) -> "WaitPolicy":
        changes = {}
        if timeout is not None:
            changes["timeout"] = timeout
        if poll_interval is not None:
            changes["poll_interval"] = poll_interval
        if ignored:
            changes["ignored"] = self.ignored | parse_kinds(ignored)
        return replace(self, **changes) if changes else self
