"""Saga primitives for multi-entity transitions.

The store only offers single-document read-modify-write, so every transition
that touches more than one collection is run as an ordered list of steps. Each
completed step may register an inverse action; if a later step raises, the
inverse actions run newest-first and the transition reports the original error.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from .errors import PreconditionError

T = TypeVar('T')
R = TypeVar('R')

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(UTC)


class AlreadyApplied(Exception):  # noqa: N818
    """Raised inside a saga body when the transition's effect is already in place."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__('Transition already applied')


class GuardOutcome(Enum):
    PROCEED = 'proceed'
    SHORT_CIRCUIT = 'short_circuit'
    FAIL = 'fail'


@dataclass(frozen=True)
class Guard(Generic[T]):
    outcome: GuardOutcome
    value: T | None = None
    error: PreconditionError | None = None

    @classmethod
    def proceed(cls, value: T | None = None) -> 'Guard[T]':
        return cls(GuardOutcome.PROCEED, value=value)

    @classmethod
    def already_applied(cls, value: Any) -> 'Guard[T]':
        return cls(GuardOutcome.SHORT_CIRCUIT, value=value)

    @classmethod
    def fail(cls, error: PreconditionError) -> 'Guard[T]':
        return cls(GuardOutcome.FAIL, error=error)


@dataclass
class Compensation:
    description: str
    action: Callable[[], Any]


@dataclass
class CompensationFailure:
    description: str
    error: Exception


class CompensationLog:
    def __init__(self, saga_name: str) -> None:
        self.saga_name = saga_name
        self._entries: list[Compensation] = []

    def push(self, description: str, action: Callable[[], Any]) -> None:
        self._entries.append(Compensation(description, action))

    def drain(self) -> list[CompensationFailure]:
        """Run every recorded compensation, newest first.

        A failing compensation does not stop the others; failures are logged and
        returned so the caller can flag the transition for manual repair.
        """
        failures: list[CompensationFailure] = []

        while self._entries:
            entry = self._entries.pop()
            try:
                entry.action()
            except Exception as exc:  # noqa: BLE001
                logger.error('Compensation "%s" of saga %s failed: %s', entry.description, self.saga_name, exc)
                failures.append(CompensationFailure(entry.description, exc))
            else:
                logger.info('Compensated "%s" of saga %s', entry.description, self.saga_name)

        return failures

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class TransitionResult(Generic[T]):
    success: bool
    message: str
    data: T | None = None
    error: Exception | None = None
    short_circuited: bool = False
    manual_intervention: bool = False
    compensation_failures: list[CompensationFailure] = field(default_factory=list)

    @classmethod
    def ok(cls, message: str, data: T | None, *, short_circuited: bool = False) -> 'TransitionResult[T]':
        return cls(success=True, message=message, data=data, short_circuited=short_circuited)

    @classmethod
    def failed(cls, error: Exception, failures: list[CompensationFailure] | None = None) -> 'TransitionResult[T]':
        failures = failures or []
        message = str(error) or error.__class__.__name__

        if failures:
            steps = ', '.join(f.description for f in failures)
            message = f'{message}. Manual intervention required: could not undo {steps}'

        return cls(
            success=False,
            message=message,
            error=error,
            manual_intervention=bool(failures),
            compensation_failures=failures,
        )


class Saga:
    def __init__(self, name: str) -> None:
        self.name = name
        self.compensations = CompensationLog(name)
        self.logger = logging.getLogger(f'{self.__class__.__name__}.{name}')

    def guard(self, check: Callable[[], Guard[T]]) -> T:
        result = check()

        if result.outcome is GuardOutcome.SHORT_CIRCUIT:
            raise AlreadyApplied(result.value)

        if result.outcome is GuardOutcome.FAIL:
            raise result.error or PreconditionError(f'Precondition of {self.name} not met')

        return result.value  # type: ignore[return-value]

    def step(
        self,
        description: str,
        action: Callable[[], R],
        compensate: Callable[[R], Any] | None = None,
    ) -> R:
        try:
            value = action()
        except AlreadyApplied:
            raise
        except Exception as exc:
            self.logger.error('Step "%s" failed: %s', description, exc)
            raise

        if compensate is not None:
            self.compensations.push(description, lambda: compensate(value))

        return value

    def run(
        self,
        body: Callable[['Saga'], T],
        *,
        success_message: str,
        already_applied_message: str = 'Nothing to do, transition already applied',
    ) -> TransitionResult[T]:
        try:
            data = body(self)
        except AlreadyApplied as signal:
            # Possibly detected after some steps ran, e.g. losing a race to a concurrent caller
            failures = self.compensations.drain()
            if failures:
                return TransitionResult.failed(signal, failures)

            self.logger.info(already_applied_message)
            return TransitionResult.ok(already_applied_message, signal.value, short_circuited=True)
        except PreconditionError as exc:
            self.logger.info('Rejected: %s', exc)
            return TransitionResult.failed(exc, self.compensations.drain())
        except Exception as exc:  # noqa: BLE001
            return TransitionResult.failed(exc, self.compensations.drain())

        return TransitionResult.ok(success_message, data)
