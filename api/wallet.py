from __future__ import annotations

import base58

SOLANA_ADDRESS_BYTES = 32


def is_valid_solana_address(address: str) -> bool:
    """True when ``address`` is base58 text decoding to a 32-byte public key."""
    try:
        decoded = base58.b58decode(address)
    except ValueError:
        return False
    return len(decoded) == SOLANA_ADDRESS_BYTES
