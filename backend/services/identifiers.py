"""Archive identifier generation."""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from sqlalchemy.ext.asyncio import AsyncSession

from .catalog import identifier_in_use

DISALLOWED_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9_\-.]")
LEADING_DIGITS = re.compile(r"^[0-9]*")


def sanitize(name: str) -> str:
    """Map an arbitrary filename onto the archive's identifier alphabet.

    Characters outside ``[A-Za-z0-9_.-]`` become underscores and any leading
    run of digits is removed.
    """
    return LEADING_DIGITS.sub("", DISALLOWED_IDENTIFIER_CHARS.sub("_", name), count=1)


def identifier_base(filename: str, *, namespace: str) -> str:
    return f"{namespace}_{sanitize(PurePosixPath(filename).stem)}"


def _candidate(base: str, counter: int) -> str:
    return base if counter == 0 else f"{base}_{counter}"


async def get_new_identifier(
    session: AsyncSession,
    filename: str,
    *,
    namespace: str,
) -> str:
    """Return the first of ``base``, ``base_1``, ``base_2``... not yet recorded.

    Candidates are tried sequentially with no upper bound. Two concurrent
    callers with the same base name can both observe a candidate as free.
    """
    base = identifier_base(filename, namespace=namespace)
    counter = 0
    while await identifier_in_use(session, _candidate(base, counter)):
        counter += 1
    return _candidate(base, counter)
