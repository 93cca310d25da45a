# porkbun_dns transport
from __future__ import annotations
import sys, uuid
from typing import Optional
import httpx

class ServerError(Exception):
    """Non-2xx HTTP status from the API server."""

    def __init__(self, status_code: int, message: str = ""):
        super().__init__(f"status: {status_code} message: {message}")
        self.status_code = status_code
        self.message = message

def _error_message(resp: httpx.Response) -> str:
    try:
        payload = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return resp.text

class HttpClient:
    """
    - Reusable async HTTP client with:
      - base_url
      - httpx timeouts
      - JSON bodies passed through as pre-encoded bytes
      - non-2xx -> ServerError (no retries)
    """

    def __init__(
        self,
        base_url: str,
        connect_timeout: float,
        read_timeout: float,
        *,
        default_headers: Optional[dict[str, str]] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(
            connect=connect_timeout,
            read=read_timeout,
            write=read_timeout,
            pool=read_timeout,
        )
        self.default_headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            **(default_headers or {}),
        }
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, headers=self.default_headers)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._client is not None:
            await self._client.aclose()

    async def post(self, path: str, body: bytes, **kwargs) -> bytes:
        """
        POST an already-encoded JSON body and return the raw response bytes.
        Each request tagged with X-Request-Id for traceability.
        """
        assert self._client is not None

        req_id = kwargs.pop("req_id", str(uuid.uuid4()))
        headers = kwargs.pop("headers", {})
        headers.setdefault("X-Request-Id", req_id)

        url = self.base_url + path # for logs

        resp = await self._client.request("POST", path, content=body, headers=headers, **kwargs)
        status = resp.status_code
        if not (200 <= status < 300):
            message = _error_message(resp)
            print(f"[req#{req_id}] [fatal] POST {url} returned {status}: {message}", file=sys.stderr)
            raise ServerError(status, message)
        return resp.content
