"""
Postal code (CEP) helpers.

A Brazilian CEP has 8 digits; users type it with or without the dash.
"""
import re
from dataclasses import dataclass
from typing import Optional

CEP_LENGTH = 8
_NON_DIGITS = re.compile(r"\D")


@dataclass(frozen=True)
class AddressFragment:
    street: str
    neighborhood: str
    city: str
    state: str

    def format(self) -> str:
        return f"{self.street}, {self.neighborhood} - {self.city}/{self.state}"


@dataclass(frozen=True)
class AddressLookup:
    found: bool
    postal_code: str
    address: Optional[AddressFragment] = None
    notice: Optional[str] = None

    @property
    def formatted_address(self) -> Optional[str]:
        return self.address.format() if self.address else None


def normalize_postal_code(raw: str) -> Optional[str]:
    """Strip everything but digits. None unless exactly 8 digits remain."""
    digits = _NON_DIGITS.sub("", raw or "")
    if len(digits) != CEP_LENGTH:
        return None
    return digits
