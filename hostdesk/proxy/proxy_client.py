"""
HTTP client for the authenticated serverless proxies.

Every proxy takes a JSON POST of ``{"action": ..., **params}`` with the
user's bearer token and answers ``{"data": ...}`` on success or
``{"error": ...}`` with a non-2xx status.
"""
from typing import Any, Callable, Optional

import httpx

from ..utils.errors import AuthenticationError, ProxyError
from ..utils.logger import get_logger
from config.settings import proxy_config

USE_CLIENT_DEFAULT = httpx.USE_CLIENT_DEFAULT


class ProxyClient:
    """Posts actions to one proxy function."""

    def __init__(
        self,
        function_name: str,
        token_provider: Callable[[], str],
        http_client: Optional[httpx.Client] = None,
        url: Optional[str] = None,
    ):
        self.function_name = function_name
        self.url = url or proxy_config.endpoint(function_name)
        self.token_provider = token_provider
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.Client()
        self.logger = get_logger("proxy_client")

    def _timeout(self):
        if proxy_config.timeout_seconds is None:
            return USE_CLIENT_DEFAULT
        return proxy_config.timeout_seconds

    def call(self, action: str, **params: Any) -> Any:
        """
        Invoke a proxy action.

        Args:
            action: Proxy action name
            **params: Action parameters, sent at the top level of the body

        Returns:
            The ``data`` member of the response, or the whole body when absent

        Raises:
            AuthenticationError: No session token is available
            ProxyError: The proxy answered with a non-2xx status
        """
        token = self.token_provider()
        if not token:
            raise AuthenticationError()

        self.logger.info("Calling proxy", function=self.function_name, action=action)
        try:
            response = self.http_client.post(
                self.url,
                json={"action": action, **params},
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {token}",
                },
                timeout=self._timeout(),
            )
        except httpx.HTTPError as e:
            self.logger.error("Proxy unreachable", function=self.function_name, action=action, error=str(e))
            raise ProxyError(action, 0, str(e)) from e
        self.logger.debug("Proxy response", function=self.function_name, status=response.status_code)

        body = self._decode(response)
        if not response.is_success:
            upstream = body.get("error") if isinstance(body, dict) else body
            self.logger.error(
                "Error from proxy",
                function=self.function_name,
                action=action,
                status=response.status_code,
                error=upstream,
            )
            if response.status_code == 401:
                raise AuthenticationError(str(upstream or "Unauthorized"))
            raise ProxyError(action, response.status_code, upstream)

        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    def _decode(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return {"error": response.text} if response.text else {}

    def close(self) -> None:
        if self._owns_client:
            self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
