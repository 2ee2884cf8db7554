"""
Read-only resolution of AWS access keys.

Keys come from a shared credentials file and the process environment, with
the environment taking precedence. Resolution never fails: anything that
cannot be found is left as ``None`` and it is up to the signer to complain
when it actually needs the value.
"""

import configparser
import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

ACCESS_KEY_ENV = 'AWS_ACCESS_KEY_ID'
SECRET_KEY_ENV = 'AWS_SECRET_ACCESS_KEY'
PROFILE_ENV = 'AWS_PROFILE'

DEFAULT_PROFILE = 'default'
FALLBACK_HOME = '/root'
NO_DEFAULT_SECTION = '\x00'


@dataclass(frozen=True)
class Credentials:
    access_key: Optional[str] = None
    secret_key: Optional[str] = field(default=None, repr=False)


def default_profile() -> str:
    return os.environ.get(PROFILE_ENV, DEFAULT_PROFILE)


def default_credentials_path() -> str:
    home = os.environ.get('HOME', FALLBACK_HOME)
    return os.path.join(home, '.aws', 'credentials')


def absolute_path(path: str) -> str:
    """Anchor a relative path at the current working directory."""
    if os.path.isabs(path):
        return path
    return os.path.join(os.getcwd(), path)


def _new_parser() -> configparser.RawConfigParser:
    # no section is special and keys keep their case
    parser = configparser.RawConfigParser(default_section=NO_DEFAULT_SECTION)
    parser.optionxform = str
    return parser


def _read_profile(path: str, profile: str) -> Mapping[str, str]:
    parser = _new_parser()
    try:
        found = parser.read(path)
    except (configparser.Error, OSError, UnicodeDecodeError) as e:
        logger.debug("Ignoring unreadable credentials file %s: %s", path, e)
        parser = _new_parser()
    else:
        if not found:
            logger.debug("No credentials file found at %s", path)

    if not parser.has_section(profile):
        logger.debug("Profile %r not present in %s", profile, path)
        return {}
    return parser[profile]


def resolve(path: Optional[str] = None, profile: Optional[str] = None) -> Credentials:
    """
    Resolve credentials for ``profile`` from ``path`` and the environment.

    The file is consulted first; ``AWS_ACCESS_KEY_ID`` and
    ``AWS_SECRET_ACCESS_KEY`` then override whatever it provided, field by
    field. This mirrors the lookup order of boto.
    """
    path = absolute_path(path) if path is not None else default_credentials_path()
    profile = profile if profile is not None else default_profile()

    section = _read_profile(path, profile)
    access_key = section.get('aws_access_key_id')
    secret_key = section.get('aws_secret_access_key')

    if ACCESS_KEY_ENV in os.environ:
        logger.debug("Access key taken from %s", ACCESS_KEY_ENV)
        access_key = os.environ[ACCESS_KEY_ENV]
    if SECRET_KEY_ENV in os.environ:
        logger.debug("Secret key taken from %s", SECRET_KEY_ENV)
        secret_key = os.environ[SECRET_KEY_ENV]

    return Credentials(access_key=access_key, secret_key=secret_key)
