"""
Async API wrapper around the Porkbun v3 endpoints.

Provides a typed interface for:
- Checking credentials / public IP (`ping`)
- Listing domains with labels (`list_domains`)
- Reading nameservers (`get_name_servers`)
- Reading, creating and deleting DNS records
- Fetching the SSL bundle for a domain (`retrieve_ssl_bundle`)

Every call POSTs the credential pair merged with its payload (see `codec.encode_request`)
and decodes the reply with the matching `codec.decode_*` helper. API-level failures
(status != SUCCESS) are logged to stderr and re-raised as ApiStatusError.
"""
from __future__ import annotations
import sys
from typing import Callable, List, Optional, TypeVar

from http_client import HttpClient

from . import codec
from .errors import ApiStatusError
from .models import Credentials, Domain, Record, RequestPayload, SSLBundle

T = TypeVar("T")

class PorkbunAPI:

    def __init__(self, http: HttpClient, credentials: Credentials):
        self.http = http
        self.credentials = credentials

    async def _call(self, path: str, decode: Callable[[bytes], T], payload: Optional[RequestPayload] = None) -> T:
        body = codec.encode_request(self.credentials, payload)
        raw = await self.http.post(path, body)
        try:
            return decode(raw)
        except ApiStatusError as e:
            print(f"[warn] {path} answered {e.status}: {e.message}", file=sys.stderr)
            raise

    async def ping(self) -> str:
        return await self._call("/ping", codec.decode_ping)

    async def list_domains(self, start: int = 0, include_labels: bool = True) -> List[Domain]:
        # listAll pages by 1000; the offset travels as a string
        payload = {"start": str(start), "includeLabels": "yes" if include_labels else "no"}
        return await self._call("/domain/listAll", codec.decode_domains, payload)

    async def get_name_servers(self, domain: str) -> List[str]:
        return await self._call(f"/domain/getNs/{domain}", codec.decode_name_servers)

    async def retrieve_records(self, domain: str) -> List[Record]:
        return await self._call(f"/dns/retrieve/{domain}", codec.decode_records)

    async def create_record(self, domain: str, record: Record) -> int:
        payload = {k: v for k, v in record.items() if k != "id"}
        return await self._call(f"/dns/create/{domain}", codec.decode_create, payload)

    async def delete_record(self, domain: str, record_id: str) -> None:
        await self._call(f"/dns/delete/{domain}/{record_id}", codec.decode_status_ok)

    async def retrieve_ssl_bundle(self, domain: str) -> SSLBundle:
        return await self._call(f"/ssl/retrieve/{domain}", codec.decode_ssl_bundle)
