from typing import Optional

from domain.exceptions import PostalCodeLookupError
from domain.interfaces import PostalCodePort, LoggingPort
from domain.interfaces.logging_port import bind_logger
from domain.services.postal_code import AddressLookup, normalize_postal_code

NOT_FOUND_NOTICE = "postal code not found"
UNAVAILABLE_NOTICE = "postal code lookup unavailable, fill in the address manually"
INVALID_NOTICE = "postal code must have 8 digits"


class AddressLookupService:
    def __init__(self, postal_code_port: Optional[PostalCodePort], logging_port: Optional[LoggingPort] = None):
        self.postal_code_port = postal_code_port
        self.logging_port = logging_port

    async def execute(self, postal_code: str) -> AddressLookup:
        """
        Resolve a postal code for address auto-fill.

        Never raises: a failed lookup comes back as found=False with a notice
        so the user can keep typing the address by hand.
        """
        digits = normalize_postal_code(postal_code)
        if digits is None:
            return AddressLookup(found=False, postal_code=postal_code or "", notice=INVALID_NOTICE)
        if self.postal_code_port is None:
            return AddressLookup(found=False, postal_code=digits, notice=UNAVAILABLE_NOTICE)

        log = bind_logger(self.logging_port, postal_code=digits, step="postal_code_lookup")
        try:
            fragment = await self.postal_code_port.lookup(digits)
        except PostalCodeLookupError as e:
            log.warning("postal_code_lookup_failed", error=str(e))
            return AddressLookup(found=False, postal_code=digits, notice=UNAVAILABLE_NOTICE)

        if fragment is None:
            log.info("postal_code_not_found")
            return AddressLookup(found=False, postal_code=digits, notice=NOT_FOUND_NOTICE)
        log.info("postal_code_resolved", city=fragment.city, state=fragment.state)
        return AddressLookup(found=True, postal_code=digits, address=fragment)
