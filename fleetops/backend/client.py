from typing import Any

import httpx
import structlog

from fleetops.exceptions import BackendError, RecordNotFoundError

logger = structlog.get_logger()

_DEFAULT_FAILURE = "请求失败"


class BackendClient:
    """Thin async client for the backend record API.

    Every response is wrapped in a `{success, code, message, data}` envelope;
    `request` returns `data` or raises BackendError.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/v1",
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict | None = None,
        params: dict | None = None,
    ) -> Any:
        clean_params = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            response = await self._client.request(method, path, json=json, params=clean_params)
        except httpx.HTTPError as exc:
            logger.warning("backend_unreachable", method=method, path=path, error=str(exc))
            raise BackendError(f"网络错误: {exc}") from exc

        if response.status_code == 204:
            return None

        body = self._decode(response)
        message = body.get("message") or _DEFAULT_FAILURE

        if response.status_code == 404:
            raise RecordNotFoundError(message)
        if response.is_error:
            logger.warning(
                "backend_request_failed",
                method=method,
                path=path,
                status=response.status_code,
                message=message,
            )
            raise BackendError(message, status_code=response.status_code)
        if not body.get("success"):
            raise BackendError(message, status_code=response.status_code)
        return body.get("data")

    @staticmethod
    def _decode(response: httpx.Response) -> dict:
        try:
            body = response.json()
        except ValueError:
            return {"message": f"HTTP {response.status_code}"} if response.is_error else {}
        return body if isinstance(body, dict) else {}
