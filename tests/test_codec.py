import json
from datetime import datetime, timezone

import pytest
from porkbun_dns.codec import decode_domain, decode_quasi_bool, encode_request
from porkbun_dns.errors import (
    BooleanFieldError, DateFieldError, DecodeError, EncodeError,
    FieldTypeError, MalformedJSONError, MissingFieldError,
)
from porkbun_dns.models import Credentials, Domain, DomainLabel
from porkbun_dns.utils import EPOCH

CREDS = Credentials(api_key="pk1_abc", secret_api_key="sk1_xyz")
FLAGS = ("securityLock", "whoisPrivacy", "autoRenew", "notLocal")

def sample_domain(**overrides):
    d = {
        "domain": "borseth.ink",
        "status": "ACTIVE",
        "tld": "ink",
        "createDate": "2021-01-02 03:04:05",
        "expireDate": "2023-06-07 18:09:10",
        "securityLock": 1,
        "whoisPrivacy": 0,
        "autoRenew": 1,
        "notLocal": 0,
        "labels": [
            {"id": "27240", "title": "cool", "color": "#ff0000"},
            {"id": "27241", "title": "work", "color": "#00ff00"},
        ],
    }
    d.update(overrides)
    return d

def encode(obj) -> bytes:
    return json.dumps(obj).encode()

# ------------------ encode_request ------------------

def test_encode_merges_flat():
    body = json.loads(encode_request(CREDS, {"name": "www", "type": "A", "ttl": "600"}))
    assert body == {
        "apikey": "pk1_abc",
        "secretapikey": "sk1_xyz",
        "name": "www",
        "type": "A",
        "ttl": "600",
    }
    assert "payload" not in body and "credentials" not in body

def test_encode_without_payload_is_credentials_only():
    expected = {"apikey": "pk1_abc", "secretapikey": "sk1_xyz"}
    assert json.loads(encode_request(CREDS)) == expected
    assert json.loads(encode_request(CREDS, None)) == expected
    assert json.loads(encode_request(CREDS, {})) == expected

def test_encode_payload_wins_on_collision():
    body = json.loads(encode_request(CREDS, {"apikey": "override", "start": "0"}))
    assert body["apikey"] == "override"
    assert body["secretapikey"] == "sk1_xyz"
    assert body["start"] == "0"

def test_encode_keeps_nested_payload_values():
    payload = {"ns": ["ns1.example.com", "ns2.example.com"], "meta": {"a": 1}}
    body = json.loads(encode_request(CREDS, payload))
    assert body["ns"] == payload["ns"]
    assert body["meta"] == {"a": 1}

def test_encode_rejects_unencodable_payload():
    with pytest.raises(EncodeError):
        encode_request(CREDS, {"when": datetime.now()})
    with pytest.raises(EncodeError):
        encode_request(CREDS, {"ttl": float("nan")})

def test_encode_rejects_non_object_payload():
    with pytest.raises(EncodeError):
        encode_request(CREDS, ["not", "an", "object"])

def test_credentials_repr_hides_secrets():
    assert "sk1_xyz" not in repr(CREDS)

# ------------------ decode_domain ------------------

def test_decode_complete_sample():
    d = decode_domain(encode(sample_domain()))
    assert d == Domain(
        domain="borseth.ink",
        status="ACTIVE",
        tld="ink",
        create_date=datetime(2021, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        expire_date=datetime(2023, 6, 7, 18, 9, 10, tzinfo=timezone.utc),
        security_lock=True,
        whois_privacy=False,
        auto_renew=True,
        not_local=False,
        labels=(
            DomainLabel(id="27240", title="cool", color="#ff0000"),
            DomainLabel(id="27241", title="work", color="#00ff00"),
        ),
    )

def test_decoded_domain_is_frozen():
    d = decode_domain(encode(sample_domain()))
    with pytest.raises(AttributeError):
        d.security_lock = False

@pytest.mark.parametrize("field", FLAGS)
@pytest.mark.parametrize("raw,expected", [(0, False), (1, True), ("0", False), ("1", True)])
def test_quasi_bool_accepted_encodings(field, raw, expected):
    d = decode_domain(encode(sample_domain(**{field: raw})))
    attr = {"securityLock": "security_lock", "whoisPrivacy": "whois_privacy",
            "autoRenew": "auto_renew", "notLocal": "not_local"}[field]
    assert getattr(d, attr) is expected

@pytest.mark.parametrize("field", FLAGS)
@pytest.mark.parametrize("raw", [2, "2", "true", None, {"v": 1}, True, 1.0, [1], "", " 1", "1\n", "\u0661", "1" * 5000])
def test_quasi_bool_rejected_encodings(field, raw):
    with pytest.raises(BooleanFieldError) as ei:
        decode_domain(encode(sample_domain(**{field: raw})))
    assert ei.value.field == field
    assert field[1:] in str(ei.value)

def test_quasi_bool_error_message():
    with pytest.raises(BooleanFieldError, match="^SecurityLock response not a boolean$"):
        decode_quasi_bool("securityLock", 7)

def test_mixed_encodings_in_one_object():
    d = decode_domain(encode(sample_domain(securityLock="1", whoisPrivacy=0, autoRenew="0", notLocal=1)))
    assert (d.security_lock, d.whois_privacy, d.auto_renew, d.not_local) == (True, False, False, True)

def test_missing_create_date_defaults_to_epoch():
    raw = sample_domain()
    del raw["createDate"]
    d = decode_domain(encode(raw))
    assert d.create_date == EPOCH
    assert d.create_date.timestamp() == 0

def test_null_create_date_defaults_to_epoch():
    assert decode_domain(encode(sample_domain(createDate=None))).create_date == EPOCH

def test_missing_expire_date_is_an_error():
    raw = sample_domain()
    del raw["expireDate"]
    with pytest.raises(MissingFieldError) as ei:
        decode_domain(encode(raw))
    assert ei.value.field == "expireDate"

def test_missing_labels_is_empty():
    raw = sample_domain()
    del raw["labels"]
    assert decode_domain(encode(raw)).labels == ()

def test_present_empty_labels():
    assert decode_domain(encode(sample_domain(labels=[]))).labels == ()

def test_label_missing_keys_default_to_empty_string():
    d = decode_domain(encode(sample_domain(labels=[{"id": "1"}])))
    assert d.labels == (DomainLabel(id="1", title="", color=""),)

def test_labels_wrong_shape():
    with pytest.raises(FieldTypeError):
        decode_domain(encode(sample_domain(labels="cool")))
    with pytest.raises(FieldTypeError):
        decode_domain(encode(sample_domain(labels=["cool"])))

@pytest.mark.parametrize("field", ["createDate", "expireDate"])
@pytest.mark.parametrize("value", ["2021-13-40 99:99:99", "2021-01-02T03:04:05", "2021-1-2 3:4:5", "2021-01-02 03:04:05.123", "",
                                   "\u0662\u0660\u0662\u0661-01-02 03:04:05", "2021-01-02 03:04:05\n"])
def test_bad_dates(field, value):
    with pytest.raises(DateFieldError) as ei:
        decode_domain(encode(sample_domain(**{field: value})))
    assert ei.value.field == field

def test_non_string_date():
    with pytest.raises(FieldTypeError) as ei:
        decode_domain(encode(sample_domain(expireDate=1609556645)))
    assert ei.value.field == "expireDate"

@pytest.mark.parametrize("field", ["domain", "status", "tld"])
def test_missing_required_strings(field):
    raw = sample_domain()
    del raw[field]
    with pytest.raises(MissingFieldError, match=field):
        decode_domain(encode(raw))

def test_required_string_of_wrong_type():
    with pytest.raises(FieldTypeError) as ei:
        decode_domain(encode(sample_domain(tld=5)))
    assert ei.value.field == "tld"

@pytest.mark.parametrize("field", FLAGS)
def test_missing_flag_is_an_error(field):
    raw = sample_domain()
    del raw[field]
    with pytest.raises(MissingFieldError) as ei:
        decode_domain(encode(raw))
    assert ei.value.field == field

@pytest.mark.parametrize("raw", [b"{not json", b"[1, 2]", b'"domain"', b"\xff\xfe"])
def test_malformed_envelope(raw):
    with pytest.raises(MalformedJSONError):
        decode_domain(raw)

def test_decode_errors_share_a_family():
    for exc in (MalformedJSONError, MissingFieldError, FieldTypeError, BooleanFieldError, DateFieldError):
        assert issubclass(exc, DecodeError)
    assert not issubclass(EncodeError, DecodeError)

def test_decode_accepts_str_input():
    assert decode_domain(json.dumps(sample_domain())).domain == "borseth.ink"
