"""How each external capability reacts when its provider fails."""

from enum import Enum
from typing import Dict


class FailurePolicy(str, Enum):
    FAIL_FAST = "fail_fast"
    DEGRADE = "degrade"


CAPABILITY_POLICY: Dict[str, FailurePolicy] = {
    # Token verification problems are surfaced to the caller
    "identity": FailurePolicy.FAIL_FAST,
    # Generated content falls back to canned defaults
    "ai": FailurePolicy.DEGRADE,
}


def policy_for(capability: str) -> FailurePolicy:
    return CAPABILITY_POLICY[capability]
