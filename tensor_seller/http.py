from typing import Any, Optional
import json
import logging
from httpx import AsyncClient, Headers, HTTPError, Response

from .errors import ApiError, MalformedResponseError

TENSOR_API_KEY_HEADER = "x-tensor-api-key"

logger = logging.getLogger(__name__)

class TensorHttpClient:
    """HTTP client for making authenticated requests to the Tensor API.

    Every request carries the API key header. Requests are sent once: there
    are no retries and no backoff, a failed call surfaces as an ``ApiError``.
    """

    def __init__(self, base_url: str, api_key: str, async_client: Optional[AsyncClient] = None):
        """Initialize a new TensorHttpClient.

        Args:
            base_url: The base URL of the Tensor API
            api_key: The Tensor API key sent with every request
            async_client: An optional preconfigured httpx client
        """
        self.async_client = async_client or AsyncClient()
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key

    async def get(self, path: str) -> Any:
        """Make a GET request.

        Args:
            path: The API endpoint path, including its query string

        Returns:
            The parsed JSON response
        """
        return await self.request(path)

    async def request(self, path: str, method: str = "GET", body: Any = None) -> Any:
        """Make a request and return the parsed JSON response.

        Args:
            path: The API endpoint path, including its query string
            method: The HTTP method
            body: An optional JSON-serializable request body

        Returns:
            The parsed JSON response

        Raises:
            ApiError: If the request cannot be sent or the response status is not successful
        """
        url = f"{self.base_url}{path}"
        headers = self._get_headers(with_body=body is not None)
        content = json.dumps(body).encode() if body is not None else None

        logger.info("Making %s request to %s", method, url)
        if body is not None:
            logger.info("Request body: %s", body)

        try:
            response = await self.async_client.request(method, url, headers=headers, content=content)
        except HTTPError as exc:
            raise ApiError(f"Tensor API request failed: {exc}") from exc
        payload = self._handle_response(response)
        logger.debug("Response: %s", payload)
        return payload

    async def aclose(self) -> None:
        await self.async_client.aclose()

    def _get_headers(self, with_body: bool) -> Headers:
        """Get the headers for a request.

        The JSON content type is only attached when a body is sent.
        """
        headers = Headers()
        headers["accept"] = "application/json"
        headers[TENSOR_API_KEY_HEADER] = self.api_key
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _handle_response(self, response: Response) -> Any:
        if not response.is_success:
            raise ApiError(
                f"Tensor API error: {response.status_code} {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(f"Tensor API returned non-JSON body: {response.text[:200]}") from exc
