"""Hoisted temporaries and their dependency ordering.

A temporary is a named sub-expression declared once per stage and referenced
by name afterwards. Dependencies between temporaries are found textually: a
body depends on every registered temp whose name appears in it as an
identifier.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto

from shadergraph.errors import TempCycleError
from shadergraph.types import VarType

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class TempKind(Enum):
    """How a temporary is emitted."""

    VALUE = auto()  # local declared at the top of main(), always evaluated
    FUNCTION = auto()  # global function, evaluated where it is called


@dataclass(frozen=True)
class TempInfo:
    """One hoisted value.

    Attributes:
        type: Value type of the body
        body: Generated GLSL expression
    """

    type: VarType
    body: str

    def identifiers(self) -> set[str]:
        """Identifiers appearing in the body."""
        return set(_IDENTIFIER.findall(self.body))

    def references(self, names: set[str]) -> set[str]:
        """Subset of ``names`` the body refers to."""
        return self.identifiers() & names

    def depends_on(self, names: set[str]) -> bool:
        """Check whether the body refers to any of ``names``."""
        return bool(self.references(names))


TempMap = dict[str, TempInfo]


def order_temps(temps: TempMap) -> list[str]:
    """Sort temporary names so that dependencies come first.

    Stable fixed-point pass: repeatedly takes, in registration order, every
    temp none of whose dependencies is still pending.

    Args:
        temps: Temporaries of one (stage, kind) table

    Returns:
        Temp names in declaration order

    Raises:
        TempCycleError: If some temps can never be declared
    """
    pending = list(temps)
    ordered: list[str] = []

    while pending:
        waiting = set(pending)
        ready = [name for name in pending if not temps[name].depends_on(waiting)]
        if not ready:
            raise TempCycleError(pending)
        ordered.extend(ready)
        pending = [name for name in pending if name not in ready]

    return ordered
