"""Access verdicts returned by the policy engine.

A verdict is a tagged variant: `Allow` carries nothing, `Deny` always carries
a reason and a stable code. Callers branch on `verdict.allowed`.
"""

from typing import Literal, Union

from gate.domain.value import DenyCode
from gate.domain.value.common import ValueObject


class Allow(ValueObject):
    """Access granted."""

    allowed: Literal[True] = True


class Deny(ValueObject):
    """Access refused, with a human-readable reason and a stable code."""

    allowed: Literal[False] = False
    reason: str
    code: DenyCode


Verdict = Union[Allow, Deny]

ALLOW = Allow()
