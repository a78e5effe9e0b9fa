"""
Commit steps — action + compensator, rolled back in reverse.

    first = step(detach_cart, compensate=restore_cart)
    result = await run_chain(first, lambda snapshot: step(create_order(snapshot)))

A step whose action fails records nothing; every step that succeeded before it
is compensated, newest first.
"""

from __future__ import annotations

from collections.abc import Callable, Awaitable
from dataclasses import dataclass

from kungfu import Result, Ok, Error, LazyCoroResult

from checkoutflow.log import get_logger

log = get_logger(__name__)

type Compensator[T] = Callable[[T], Awaitable[None]]
"""Undo function; receives the value its action produced."""

type RecordedCompensator[T] = tuple[T, Compensator[T]]

# ═══════════════════════════════════════════════════════════════════════════════
# Types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CommitStep[T, E]:
    action: LazyCoroResult[T, E]
    compensate: Compensator[T] | None = None


@dataclass(frozen=True, slots=True)
class CommitResult[T]:
    value: T
    steps_executed: int


@dataclass(frozen=True, slots=True)
class CommitError[E]:
    """Failed commit with rollback status."""

    error: E
    step_failed: int
    compensators_run: int
    compensators_failed: int

    @property
    def rollback_complete(self) -> bool:
        return self.compensators_failed == 0


def step[T, E](
    action: LazyCoroResult[T, E],
    compensate: Compensator[T] | None = None,
) -> CommitStep[T, E]:
    return CommitStep(action=action, compensate=compensate)


# ═══════════════════════════════════════════════════════════════════════════════
# Execution
# ═══════════════════════════════════════════════════════════════════════════════


async def _run_step[T, E](
    s: CommitStep[T, E],
    compensators: list[RecordedCompensator[T]],
) -> Result[T, E]:
    match await s.action:
        case Ok(value):
            if s.compensate is not None:
                compensators.append((value, s.compensate))
            return Ok(value)
        case Error(e):
            return Error(e)


async def _rollback(compensators: list[RecordedCompensator[object]]) -> tuple[int, int]:
    """Run compensators newest first. Returns (run, failed)."""
    run, failed = 0, 0
    for value, compensate in reversed(compensators):
        try:
            await compensate(value)
            run += 1
        except Exception:
            log.exception("compensation_failed")
            failed += 1
    return run, failed


async def run_chain[T, U, E](
    first: CommitStep[T, E],
    then: Callable[[T], CommitStep[U, E]],
) -> Result[CommitResult[U], CommitError[E]]:
    """
    Run `first`, then the step built from its value.

    Any failure rolls back whatever already succeeded.
    """
    compensators: list[RecordedCompensator[object]] = []

    match await _run_step(first, compensators):
        case Error(e):
            run, failed = await _rollback(compensators)
            return Error(CommitError(e, 1, run, failed))
        case Ok(value):
            pass

    match await _run_step(then(value), compensators):
        case Ok(final):
            return Ok(CommitResult(value=final, steps_executed=2))
        case Error(e):
            run, failed = await _rollback(compensators)
            return Error(CommitError(e, 2, run, failed))


__all__ = (
    "Compensator",
    "CommitStep",
    "CommitResult",
    "CommitError",
    "step",
    "run_chain",
)
