"""
Panic-safe invocation.

Every call into the external parser runs through ``guard`` so that no fault
escapes the fragment loop: faults come back as error values.
"""

import logging
from collections.abc import Callable
from typing import Any, NoReturn

from codegraph_fragments.errors import PanicError

logger = logging.getLogger(__name__)


class Panic(Exception):
    """A fault carrying an arbitrary payload, which need not be an exception."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(value)


def panic(value: Any) -> NoReturn:
    raise Panic(value)


def guard(operation: Callable[[], Exception | None]) -> Exception | None:
    """
    Run an operation, converting any fault it raises into a returned error.

    Args:
        operation: Callable returning an error or None

    Returns:
        None on success; the returned error; the raised exception unchanged;
        the payload of a Panic when it is an exception; otherwise a PanicError
        ("panic: <value>")
    """
    try:
        return operation()
    except Panic as fault:
        logger.debug(f"Recovered panic: {fault.value!r}")
        if isinstance(fault.value, Exception):
            return fault.value
        return PanicError(fault.value)
    except Exception as e:
        logger.debug(f"Recovered {type(e).__name__}: {e}")
        return e


__all__ = ["Panic", "panic", "guard"]
