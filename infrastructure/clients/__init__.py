from .postal_code_client import PostalCodeClient

__all__ = ["PostalCodeClient"]
