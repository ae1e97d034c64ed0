"""Oracle call outcomes.

Every oracle call resolves to exactly one of three variants. Callers collapse
the variant into either trusted oracle output or local defaults, never a mix
of both for the same piece of data.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from src.modules.assessment.interface import TextGenerator
from src.shared.exceptions import OracleError, OracleTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class OracleSuccess(Generic[T]):
    """The oracle answered and the answer parsed."""

    value: T
    raw: str


@dataclass(frozen=True)
class OracleUnparseable:
    """The oracle answered but nothing usable could be recovered."""

    raw: str


@dataclass(frozen=True)
class OracleFailure:
    """The oracle did not answer (error or timeout)."""

    error: OracleError


OracleOutcome = Union[OracleSuccess[T], OracleUnparseable, OracleFailure]


async def call_oracle(
    oracle: TextGenerator,
    prompt: str,
    parse: Callable[[str], T | None],
    timeout: float,
) -> "OracleOutcome[T]":
    """Call the oracle with a bounded wait and classify what came back.

    Args:
        oracle: Text generator to call
        prompt: Prompt to send
        parse: Parser returning None when the text is unusable
        timeout: Seconds to wait before treating the call as failed

    Returns:
        One of OracleSuccess, OracleUnparseable or OracleFailure
    """
    try:
        raw = await asyncio.wait_for(oracle.generate(prompt), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("Oracle call timed out after %ss", timeout)
        return OracleFailure(OracleTimeoutError(timeout))
    except OracleError as e:
        logger.warning("Oracle call failed: %s", e.message)
        return OracleFailure(e)
    except Exception as e:
        # Generators outside this package may raise anything
        logger.warning("Oracle call raised %s: %s", type(e).__name__, e)
        error = OracleError(f"{type(e).__name__}: {e}")
        error.__cause__ = e
        return OracleFailure(error)

    parsed = parse(raw)
    if parsed is None:
        logger.warning("Oracle response could not be parsed")
        return OracleUnparseable(raw)
    return OracleSuccess(value=parsed, raw=raw)
