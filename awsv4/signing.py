import hashlib
import hmac
from datetime import date
from typing import Optional

from .exceptions import MissingCredentialsError

DATE_STAMP_FORMAT = '%Y%m%d'
SCOPE_TERMINATOR = 'aws4_request'


def hmac_sha256(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode('utf-8'), hashlib.sha256).digest()


def derive_signing_key(
        secret_key: Optional[str],
        day: date,
        region: Optional[str],
        service: Optional[str]
) -> bytes:
    """
    Derive the SigV4 signing key by chaining HMAC-SHA256 over the date,
    region, service and the ``aws4_request`` terminator.
    """
    if secret_key is None:
        raise MissingCredentialsError('secret_key')

    k_date = hmac_sha256(f'AWS4{secret_key}'.encode('utf-8'), day.strftime(DATE_STAMP_FORMAT))
    k_region = hmac_sha256(k_date, region or '')
    k_service = hmac_sha256(k_region, service or '')
    return hmac_sha256(k_service, SCOPE_TERMINATOR)
