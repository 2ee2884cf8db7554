"""
AWS Signature Version 4 - Standalone Implementation

This package computes AWS Signature Version 4 signatures and resolves the
access keys they are made with, without depending on botocore. Sending the
signed request is left to the caller.
"""

from .credentials import Credentials, resolve
from .exceptions import MissingCredentialsError, SigV4Error
from .headers import Header, Headers, HeaderStore
from .sigv4 import SigV4Signer, SigningContext, Service

__version__ = "0.1.0"
__all__ = [
    "SigV4Signer",
    "SigningContext",
    "Service",
    "Headers",
    "Header",
    "HeaderStore",
    "Credentials",
    "resolve",
    "SigV4Error",
    "MissingCredentialsError",
]
