import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Union

from . import canonical
from .credentials import Credentials
from .exceptions import MissingCredentialsError
from .headers import Header, Headers, HeaderStore
from .signing import DATE_STAMP_FORMAT, SCOPE_TERMINATOR, derive_signing_key, hmac_sha256

logger = logging.getLogger(__name__)

ALGORITHM = 'AWS4-HMAC-SHA256'
AMZ_DATE_FORMAT = '%Y%m%dT%H%M%SZ'
AMZ_DATE_HEADER = 'X-Amz-Date'
AUTHORIZATION_HEADER = 'Authorization'


class Service(str, Enum):
    S3 = 's3'
    DYNAMODB = 'dynamodb'
    LAMBDA = 'lambda'
    IAM = 'iam'
    STS = 'sts'
    EC2 = 'ec2'


def _utc(timestamp: datetime) -> datetime:
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SigningContext:
    """Everything that goes into a single signature."""

    method: Optional[str] = None
    path: Optional[str] = None
    query: Optional[str] = None
    payload: canonical.Payload = None
    headers: HeaderStore = field(default_factory=HeaderStore)
    timestamp: datetime = field(default_factory=_now)
    region: Optional[str] = None
    service: Optional[str] = None
    credentials: Optional[Credentials] = None


class SigV4Signer:
    """
    Fluent AWS Signature Version 4 signer.

    Every configuration method returns a new signer and leaves the receiver
    untouched, so a partially configured signer can be shared as a template::

        signer = (SigV4Signer()
                  .method('POST')
                  .path('/')
                  .header(Header('Host', 'iam.amazonaws.com'))
                  .region('us-east-1')
                  .service(Service.IAM)
                  .credentials(resolve())
                  .date())
        signer.signature()
    """

    def __init__(self, context: Optional[SigningContext] = None):
        self.context = context if context is not None else SigningContext()

    def _with(self, **changes: Any) -> 'SigV4Signer':
        return SigV4Signer(replace(self.context, **changes))

    def _with_header(self, name: str, value: str) -> 'SigV4Signer':
        headers = self.context.headers.copy()
        headers.insert(name, value)
        return self._with(headers=headers)

    def method(self, method: str) -> 'SigV4Signer':
        return self._with(method=method)

    def path(self, path: str) -> 'SigV4Signer':
        return self._with(path=path)

    def query(self, query: str) -> 'SigV4Signer':
        return self._with(query=query)

    def payload(self, payload: Union[str, bytes]) -> 'SigV4Signer':
        return self._with(payload=payload)

    def header(self, header: Header) -> 'SigV4Signer':
        return self._with_header(header.name, header.value)

    def headers(self, headers: Union[Mapping[str, Any], Iterable[Header]]) -> 'SigV4Signer':
        store = self.context.headers.copy()
        store.update(headers)
        return self._with(headers=store)

    def at(self, timestamp: datetime) -> 'SigV4Signer':
        """Sign as of ``timestamp``, refreshing ``X-Amz-Date`` if :meth:`date` already added it."""
        signer = self._with(timestamp=_utc(timestamp))
        if AMZ_DATE_HEADER not in self.context.headers:
            return signer
        headers = self.context.headers.copy()
        headers.replace(AMZ_DATE_HEADER, signer.amz_date)
        return signer._with(headers=headers)

    def region(self, region: str) -> 'SigV4Signer':
        return self._with(region=region)

    def service(self, service: Union[str, Service]) -> 'SigV4Signer':
        service_str = service.value if isinstance(service, Service) else service
        return self._with(service=service_str)

    def credentials(self, credentials: Credentials) -> 'SigV4Signer':
        return self._with(credentials=credentials)

    def date(self) -> 'SigV4Signer':
        """Add the ``X-Amz-Date`` header for the signer's timestamp."""
        return self._with_header(AMZ_DATE_HEADER, self.amz_date)

    @property
    def amz_date(self) -> str:
        return _utc(self.context.timestamp).strftime(AMZ_DATE_FORMAT)

    @property
    def date_stamp(self) -> str:
        return _utc(self.context.timestamp).strftime(DATE_STAMP_FORMAT)

    def canonical_request(self) -> str:
        ctx = self.context
        return canonical.canonical_request(ctx.method, ctx.path, ctx.query, ctx.headers, ctx.payload)

    def hashed_canonical_request(self) -> str:
        return canonical.sha256_hex(self.canonical_request())

    def signed_headers(self) -> str:
        return canonical.signed_headers(self.context.headers)

    def credential_scope(self) -> str:
        return '/'.join([
            self.date_stamp,
            self.context.region or '',
            self.context.service or '',
            SCOPE_TERMINATOR,
        ])

    def signing_string(self) -> str:
        canonical_request = self.canonical_request()
        logger.debug('CanonicalRequest:\n%s', canonical_request)
        string_to_sign = '\n'.join([
            ALGORITHM,
            self.amz_date,
            self.credential_scope(),
            canonical.sha256_hex(canonical_request),
        ])
        logger.debug('StringToSign:\n%s', string_to_sign)
        return string_to_sign

    def derived_signing_key(self) -> bytes:
        creds = self.context.credentials or Credentials()
        return derive_signing_key(
            creds.secret_key,
            _utc(self.context.timestamp).date(),
            self.context.region,
            self.context.service,
        )

    def signature(self) -> str:
        return hmac_sha256(self.derived_signing_key(), self.signing_string()).hex()

    def authorization(self) -> str:
        """Build the value of the ``Authorization`` header."""
        creds = self.context.credentials or Credentials()
        if creds.access_key is None:
            raise MissingCredentialsError('access_key')
        signature = self.signature()
        return (
            f'{ALGORITHM} Credential={creds.access_key}/{self.credential_scope()}, '
            f'SignedHeaders={self.signed_headers()}, Signature={signature}'
        )

    def create_headers(self) -> Headers:
        """
        Headers the caller has to attach to the outgoing request.

        The signer never mutates a transport request itself; merge the
        returned dict into whatever the HTTP client sends.
        """
        return {
            AMZ_DATE_HEADER: self.amz_date,
            AUTHORIZATION_HEADER: self.authorization(),
        }
