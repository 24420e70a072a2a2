"""
Referral code and placeholder position helpers.

Synthesized values are non-authoritative: they stand in for upstream data
when the waitlist upstream is unavailable.
"""

import random
import re
import string
from urllib.parse import urlencode

REFERRAL_CODE_ALPHABET = string.ascii_uppercase + string.digits
REFERRAL_CODE_LENGTH = 6
REFERRAL_CODE_PATTERN = re.compile(r"^[A-Z0-9]{6}$")

# Placeholder positions are drawn from [MIN, MAX)
PLACEHOLDER_POSITION_MIN = 1000
PLACEHOLDER_POSITION_MAX = 6000

_system_random = random.SystemRandom()


def generate_referral_code(rng: random.Random | None = None) -> str:
    rng = rng or _system_random
    return "".join(rng.choice(REFERRAL_CODE_ALPHABET) for _ in range(REFERRAL_CODE_LENGTH))


def placeholder_position(rng: random.Random | None = None) -> int:
    rng = rng or _system_random
    return rng.randrange(PLACEHOLDER_POSITION_MIN, PLACEHOLDER_POSITION_MAX)


def build_referral_link(base_url: str, referral_code: str) -> str:
    """Build `<base-url>?ref=<code>` for sharing."""
    return f"{base_url.rstrip('/')}?{urlencode({'ref': referral_code})}"
