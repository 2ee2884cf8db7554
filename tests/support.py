import os
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Optional
from unittest import mock

FIXTURES = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'fixtures')
CREDENTIALS_FILE = os.path.join(FIXTURES, 'credentials.ini')

AWS_ENV_VARS = ('AWS_ACCESS_KEY_ID', 'AWS_SECRET_ACCESS_KEY', 'AWS_PROFILE')

# The process environment and working directory are global. Tests that read
# or write either one hold this lock, readers included.
ENV_LOCK = threading.RLock()


@contextmanager
def aws_environment(values: Optional[Dict[str, str]] = None) -> Iterator[None]:
    """Run with the AWS_* variables replaced by ``values`` and restore them afterwards."""
    with ENV_LOCK:
        with mock.patch.dict(os.environ):
            for name in AWS_ENV_VARS:
                os.environ.pop(name, None)
            os.environ.update(values or {})
            yield
