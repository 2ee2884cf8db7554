"""
Canonical request construction for AWS Signature Version 4.

Every function here is pure. The output format is fixed by the SigV4
protocol, see:
https://docs.aws.amazon.com/IAM/latest/UserGuide/create-signed-request.html
"""

import hashlib
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union
from urllib.parse import quote, unquote_to_bytes

from .headers import HeaderStore

Payload = Union[str, bytes, None]

UNRESERVED = '-_.~'
EMPTY_SHA256_HASH = 'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'

_SPACES = re.compile(' +')


@dataclass(frozen=True)
class QueryParameter:
    key: str
    value: str = ''


def sha256_hex(data: Union[str, bytes]) -> str:
    if isinstance(data, str):
        data = data.encode('utf-8')
    return hashlib.sha256(data).hexdigest()


def uri_encode(text: Union[str, bytes]) -> str:
    # spaces become %20, never '+'
    return quote(text, safe=UNRESERVED)


def parse_query(query: Optional[str]) -> List[QueryParameter]:
    """Split a raw query string into parameters, keeping their order."""
    if not query:
        return []
    params = []
    for token in query.split('&'):
        if not token:
            continue
        key, _, value = token.partition('=')
        params.append(QueryParameter(key, value))
    return params


def canonical_query_string(query: Optional[str]) -> str:
    encoded = [
        (uri_encode(unquote_to_bytes(p.key)), uri_encode(unquote_to_bytes(p.value)))
        for p in parse_query(query)
    ]
    # sort on the key alone so repeated keys keep their relative order
    encoded.sort(key=lambda pair: pair[0])
    return '&'.join(f'{key}={value}' for key, value in encoded)


def canonical_header_value(values: Sequence[str]) -> str:
    canonical = []
    for value in values:
        if value.startswith('"'):
            canonical.append(value)
        else:
            canonical.append(_SPACES.sub(' ', value).strip())
    return ','.join(canonical)


def canonical_headers(headers: HeaderStore) -> str:
    return ''.join(
        f'{name}:{canonical_header_value(values)}\n'
        for name, values in headers.signable()
    )


def signed_headers(headers: HeaderStore) -> str:
    return ';'.join(name for name, _ in headers.signable())


def hashed_payload(payload: Payload) -> str:
    if payload is None:
        return EMPTY_SHA256_HASH
    return sha256_hex(payload)


def canonical_request(
        method: Optional[str],
        path: Optional[str],
        query: Optional[str],
        headers: HeaderStore,
        payload: Payload
) -> str:
    return '\n'.join([
        method or '',
        path or '',
        canonical_query_string(query),
        canonical_headers(headers),
        signed_headers(headers),
        hashed_payload(payload),
    ])


def hashed_canonical_request(
        method: Optional[str],
        path: Optional[str],
        query: Optional[str],
        headers: HeaderStore,
        payload: Payload
) -> str:
    return sha256_hex(canonical_request(method, path, query, headers, payload))
