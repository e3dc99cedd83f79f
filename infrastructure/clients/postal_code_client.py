"""
Postal code (CEP) client using httpx for async HTTP calls.

Talks to a ViaCEP-compatible API (GET /ws/{cep}/json/). Transport errors
and timeouts are retried with exponential backoff using tenacity; HTTP
error responses are not retried.
"""
import time
from typing import Any, Optional

import httpx
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential, retry_if_exception_type

from domain.exceptions import PostalCodeLookupError
from domain.interfaces import PostalCodePort
from domain.services.postal_code import AddressFragment
from infrastructure.metrics.metrics import postal_code_lookup_failures_total, postal_code_lookup_latency_seconds


class PostalCodeClient(PostalCodePort):
    """
    HTTP client for resolving Brazilian postal codes.

    Uses httpx.AsyncClient with configurable timeouts:
    - connect_timeout: 2 seconds (default)
    - read_timeout: 5 seconds (default)

    On failure, increments postal_code_lookup_failures_total and raises
    PostalCodeLookupError. A code the API does not know is not a failure:
    lookup() returns None.
    """

    def __init__(
        self,
        base_url: str,
        connect_timeout: float = 2.0,
        read_timeout: float = 5.0,
        max_attempts: int = 2,
        backoff_seconds: float = 0.2,
    ):
        """
        Initialize the postal code client.

        Args:
            base_url: Base URL of the API (e.g., "https://viacep.com.br")
            connect_timeout: Connection timeout in seconds (default: 2.0)
            read_timeout: Read timeout in seconds (default: 5.0)
            max_attempts: Total attempts on transport errors (default: 2)
            backoff_seconds: Backoff multiplier between attempts (default: 0.2)
        """
        self.base_url = base_url.rstrip("/")
        self.read_timeout = read_timeout
        self.max_attempts = max(1, max_attempts)
        self.backoff_seconds = backoff_seconds

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                connect=connect_timeout,
                read=read_timeout,
                write=read_timeout,
                pool=connect_timeout,
            ),
        )

    async def _get(self, url: str) -> httpx.Response:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.backoff_seconds, max=2),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                return await self._client.get(url)

    async def lookup(self, postal_code: str) -> Optional[AddressFragment]:
        """
        Fetch the address fragment for an 8-digit postal code.

        Args:
            postal_code: Digits only

        Returns:
            AddressFragment, or None when the API reports the code as unknown

        Raises:
            PostalCodeLookupError: If the API call fails (non-2xx, timeout or network error)
        """
        url = f"{self.base_url}/ws/{postal_code}/json/"
        start_time = time.time()
        try:
            response = await self._get(url)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            postal_code_lookup_failures_total.inc()
            raise PostalCodeLookupError(
                f"Postal code API returned {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.TimeoutException as e:
            postal_code_lookup_failures_total.inc()
            raise PostalCodeLookupError(
                f"Postal code API request timed out after {self.read_timeout}s"
            ) from e
        except httpx.RequestError as e:
            postal_code_lookup_failures_total.inc()
            raise PostalCodeLookupError(f"Postal code API request failed: {str(e)}") from e
        except ValueError as e:
            postal_code_lookup_failures_total.inc()
            raise PostalCodeLookupError(f"Postal code API returned invalid JSON: {str(e)}") from e
        finally:
            postal_code_lookup_latency_seconds.observe(time.time() - start_time)

        return self._map_to_fragment(data)

    @staticmethod
    def _map_to_fragment(data: Any) -> Optional[AddressFragment]:
        if not isinstance(data, dict):
            return None
        # ViaCEP answers unknown codes with 200 and {"erro": true}
        if data.get("erro") in (True, "true"):
            return None
        return AddressFragment(
            street=str(data.get("logradouro") or ""),
            neighborhood=str(data.get("bairro") or ""),
            city=str(data.get("localidade") or ""),
            state=str(data.get("uf") or ""),
        )

    async def close(self):
        """Close the httpx client."""
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
