from partnerpairing.pairing.partner_pairing import (
    PairingEngine,
    sort_by_rest_priority,
    tie_break_random,
)

__all__ = [
    "PairingEngine",
    "sort_by_rest_priority",
    "tie_break_random",
]
