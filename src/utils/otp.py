"""One-time passcodes for password resets."""

import secrets
import string
from datetime import datetime, timedelta
from typing import Tuple

import pytz


def generate_otp(length: int = 6, ttl: timedelta = timedelta(minutes=10)) -> Tuple[str, datetime]:
    """Generate a numeric one-time code and its expiry.

    Args:
        length: Number of digits in the code.
        ttl: How long the code stays valid.

    Returns:
        Tuple of (code, expiry as an aware UTC datetime).
    """
    code = "".join(secrets.choice(string.digits) for _ in range(length))
    return code, datetime.now(pytz.utc) + ttl
