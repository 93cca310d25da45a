"""
JSON encode/decode layer between PorkbunAPI and the wire.

Outgoing: `encode_request` flattens the credential pair and a per-call payload
into one JSON object (payload keys win on collision).

Incoming: `decode_domain` turns a /domain/listAll entry into a frozen `Domain`,
absorbing the API's schema drift:
    • securityLock / whoisPrivacy / autoRenew / notLocal arrive as 0/1 or "0"/"1"
    • createDate may be missing on older servers -> Unix epoch
    • labels may be missing -> ()
The remaining `decode_*` helpers unwrap the other endpoint responses after
checking the status envelope.

Everything here is pure: no I/O, no logging, no shared state.
"""
from __future__ import annotations
import json
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import (
    ApiStatusError, BooleanFieldError, DateFieldError, EncodeError,
    FieldTypeError, MalformedJSONError, MissingFieldError,
)
from .models import Credentials, Domain, DomainLabel, Record, RequestPayload, SSLBundle, Status
from .utils import EPOCH, SUCCESS, parse_api_datetime, parse_int_str

QUASI_BOOL_FIELDS = ("securityLock", "whoisPrivacy", "autoRenew", "notLocal")
RECORD_FIELDS = ("id", "name", "type", "content", "ttl", "prio", "notes")
SSL_FIELDS = ("intermediatecertificate", "certificatechain", "privatekey", "publickey")

# ------------------ encode ------------------

def _to_json(value: Any, what: str) -> str:
    try:
        return json.dumps(value, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise EncodeError(f"{what} is not JSON-encodable: {e}") from e

def encode_request(credentials: Credentials, payload: Optional[RequestPayload] = None) -> bytes:
    """
    Build the flat JSON body for an authenticated request.

    Both sides are encoded independently, read back as plain mappings and merged,
    so the result never depends on how either side was serialized.
    """
    cred_text = _to_json(credentials.to_wire(), "credentials")
    if payload is None:
        return cred_text.encode("utf-8")

    if isinstance(payload, Mapping):
        payload = dict(payload)
    extra = json.loads(_to_json(payload, "payload"))
    if not isinstance(extra, dict):
        raise EncodeError(f"payload must encode to a JSON object, got {type(extra).__name__}")
    if not extra:
        return cred_text.encode("utf-8")

    merged: Dict[str, Any] = json.loads(cred_text)
    merged.update(extra)
    return _to_json(merged, "request").encode("utf-8")

# ------------------ field helpers ------------------

def _load_object(raw: bytes | str) -> Dict[str, Any]:
    try:
        obj = json.loads(raw)
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedJSONError(str(e)) from e
    if not isinstance(obj, dict):
        raise MalformedJSONError(f"expected an object, got {type(obj).__name__}")
    return obj

def _require_str(obj: Mapping[str, Any], field: str) -> str:
    value = obj.get(field)
    if value is None:
        raise MissingFieldError(field)
    if not isinstance(value, str):
        raise FieldTypeError(field, "string")
    return value

def _optional_str(obj: Mapping[str, Any], field: str) -> str:
    value = obj.get(field)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise FieldTypeError(field, "string")
    return value

def _decode_date(field: str, value: Any) -> datetime:
    if not isinstance(value, str):
        raise FieldTypeError(field, "date string")
    parsed = parse_api_datetime(value)
    if parsed is None:
        raise DateFieldError(field, value)
    return parsed

def decode_quasi_bool(field: str, raw: Any) -> bool:
    """
    Decode a 0/1 flag sent either as a JSON integer or as a numeric string.
    Integer form is tried first; JSON true/false, floats and null are rejected.
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        n: Optional[int] = raw
    elif isinstance(raw, str):
        n = parse_int_str(raw)
    else:
        n = None

    if n == 0:
        return False
    if n == 1:
        return True
    raise BooleanFieldError(field)

def _decode_labels(raw: Any) -> Tuple[DomainLabel, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise FieldTypeError("labels", "list")
    labels = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise FieldTypeError(f"labels[{i}]", "object")
        labels.append(DomainLabel(
            id=_optional_str(item, "id"),
            title=_optional_str(item, "title"),
            color=_optional_str(item, "color"),
        ))
    return tuple(labels)

# ------------------ domain ------------------

def domain_from_mapping(obj: Mapping[str, Any]) -> Domain:
    """Decode an already-parsed domain object. All-or-nothing."""
    raw_create = obj.get("createDate")
    create_date = EPOCH if raw_create is None else _decode_date("createDate", raw_create)

    if obj.get("expireDate") is None:
        raise MissingFieldError("expireDate")
    expire_date = _decode_date("expireDate", obj["expireDate"])

    flags: Dict[str, bool] = {}
    for f in QUASI_BOOL_FIELDS:
        if f not in obj:
            raise MissingFieldError(f)
        flags[f] = decode_quasi_bool(f, obj[f])

    return Domain(
        domain=_require_str(obj, "domain"),
        status=_require_str(obj, "status"),
        tld=_require_str(obj, "tld"),
        create_date=create_date,
        expire_date=expire_date,
        security_lock=flags["securityLock"],
        whois_privacy=flags["whoisPrivacy"],
        auto_renew=flags["autoRenew"],
        not_local=flags["notLocal"],
        labels=_decode_labels(obj.get("labels")),
    )

def decode_domain(raw: bytes | str) -> Domain:
    return domain_from_mapping(_load_object(raw))

# ------------------ envelopes ------------------

def decode_status(raw: bytes | str) -> Status:
    obj = _load_object(raw)
    status: Status = {"status": _require_str(obj, "status")}
    message = _optional_str(obj, "message")
    if message:
        status["message"] = message
    return status

def raise_for_status(obj: Mapping[str, Any]) -> None:
    """Raise ApiStatusError unless the envelope reports SUCCESS."""
    status = _require_str(obj, "status")
    if status != SUCCESS:
        raise ApiStatusError(status, _optional_str(obj, "message"))

def _load_envelope(raw: bytes | str) -> Dict[str, Any]:
    obj = _load_object(raw)
    raise_for_status(obj)
    return obj

def decode_status_ok(raw: bytes | str) -> Status:
    """Decode a bare status envelope, raising ApiStatusError on failure."""
    status = decode_status(raw)
    raise_for_status(status)
    return status

def _require_list(obj: Mapping[str, Any], field: str) -> List[Any]:
    value = obj.get(field)
    if value is None:
        raise MissingFieldError(field)
    if not isinstance(value, list):
        raise FieldTypeError(field, "list")
    return value

def decode_ping(raw: bytes | str) -> str:
    return _require_str(_load_envelope(raw), "yourIp")

def decode_create(raw: bytes | str) -> int:
    obj = _load_envelope(raw)
    value = obj.get("id")
    if value is None:
        raise MissingFieldError("id")
    if not isinstance(value, int) or isinstance(value, bool):
        raise FieldTypeError("id", "integer")
    return value

def decode_records(raw: bytes | str) -> List[Record]:
    records: List[Record] = []
    for i, item in enumerate(_require_list(_load_envelope(raw), "records")):
        if not isinstance(item, dict):
            raise FieldTypeError(f"records[{i}]", "object")
        rec: Record = {}
        for f in RECORD_FIELDS:
            value = item.get(f)
            if value is None:
                continue
            if not isinstance(value, str):
                raise FieldTypeError(f"records[{i}].{f}", "string")
            rec[f] = value  # type: ignore[literal-required]
        records.append(rec)
    return records

def decode_ssl_bundle(raw: bytes | str) -> SSLBundle:
    obj = _load_envelope(raw)
    return {f: _require_str(obj, f) for f in SSL_FIELDS}  # type: ignore[return-value]

def decode_domains(raw: bytes | str) -> List[Domain]:
    domains: List[Domain] = []
    for i, item in enumerate(_require_list(_load_envelope(raw), "domains")):
        if not isinstance(item, dict):
            raise FieldTypeError(f"domains[{i}]", "object")
        domains.append(domain_from_mapping(item))
    return domains

def decode_name_servers(raw: bytes | str) -> List[str]:
    ns = _require_list(_load_envelope(raw), "ns")
    for i, item in enumerate(ns):
        if not isinstance(item, str):
            raise FieldTypeError(f"ns[{i}]", "string")
    return list(ns)
