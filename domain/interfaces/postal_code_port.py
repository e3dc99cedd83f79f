from typing_extensions import Protocol
from typing import Optional

from domain.services.postal_code import AddressFragment


class PostalCodePort(Protocol):
    """Protocol for postal code (CEP) lookups."""

    async def lookup(self, postal_code: str) -> Optional[AddressFragment]:
        """
        Resolve an 8-digit postal code.

        Args:
            postal_code: Digits only, already normalized

        Returns:
            The address fragment, or None when the code does not exist

        Raises:
            PostalCodeLookupError: If the remote call fails
        """
        ...
