"""Heurísticas sobre direcciones Sui.

Solo informativas: el cliente no rechaza direcciones "raras", únicamente avisa.
"""

from __future__ import annotations

import re

_SUI_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")


def looks_like_sui_address(value: str) -> bool:
    """`True` si `value` tiene la forma canónica `0x` + 64 hex."""

    return bool(_SUI_ADDRESS_RE.match(value.strip()))
