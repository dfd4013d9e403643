"""Mail-id literal parsing.

A mail id typed at the prompt is a signed 32-bit integer literal:
an optional ``+`` or ``-`` followed by ASCII digits, nothing else.
Leading zeros are accepted; whitespace and ``_`` separators are not.
"""

from __future__ import annotations

import re

MAIL_ID_MIN = -(2**31)
MAIL_ID_MAX = 2**31 - 1

_LITERAL = re.compile(r"[+-]?[0-9]+", re.ASCII)


def parse_mail_id(text: str) -> int:
    """Parse *text* as a mail id.

    Raises:
        ValueError: With a short reason (e.g. ``"invalid digit found in string"``)
            when *text* is not a valid literal or does not fit the id range.
    """
    if text == "":
        msg = "cannot parse integer from empty string"
        raise ValueError(msg)
    if _LITERAL.fullmatch(text) is None:
        msg = "invalid digit found in string"
        raise ValueError(msg)

    value = int(text)
    if value > MAIL_ID_MAX:
        msg = "number too large to fit in target type"
        raise ValueError(msg)
    if value < MAIL_ID_MIN:
        msg = "number too small to fit in target type"
        raise ValueError(msg)
    return value
