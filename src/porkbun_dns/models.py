"""
Request and response models for the Porkbun JSON API (v3).

Includes:
- Credentials: the apikey/secretapikey pair sent with every request
- Status: the uniform {"status", "message"} response envelope
- Record: DNS record as returned by /dns/retrieve
- SSLBundle: certificate material from /ssl/retrieve
- Domain, DomainLabel: decoded entries of /domain/listAll (frozen)

TypedDicts mirror wire shapes that pass through untouched; dataclasses are used
where the decoder normalizes the wire value into something else.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Tuple, TypedDict

RequestPayload = Mapping[str, Any]

@dataclass(frozen=True)
class Credentials:
    api_key: str
    secret_api_key: str

    def to_wire(self) -> Dict[str, str]:
        return {"apikey": self.api_key, "secretapikey": self.secret_api_key}

    def __repr__(self) -> str:
        return "Credentials(api_key='***', secret_api_key='***')"

# every response
class Status(TypedDict, total=False):
    status: str
    message: str

# /dns/retrieve/{domain} (records), /dns/create/{domain} (body)
class Record(TypedDict, total=False):
    id: str
    name: str
    type: str
    content: str
    ttl: str
    prio: str
    notes: str

# /ssl/retrieve/{domain}
class SSLBundle(TypedDict):
    intermediatecertificate: str
    certificatechain: str
    privatekey: str
    publickey: str

@dataclass(frozen=True)
class DomainLabel:
    id: str = ""
    title: str = ""
    color: str = ""

# /domain/listAll (domains)
@dataclass(frozen=True)
class Domain:
    domain: str
    status: str
    tld: str
    create_date: datetime        # epoch when the server omits it
    expire_date: datetime
    security_lock: bool
    whois_privacy: bool
    auto_renew: bool
    not_local: bool
    labels: Tuple[DomainLabel, ...] = field(default_factory=tuple)

