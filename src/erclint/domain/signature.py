"""Textual signature parsing.

Reads the external form of a declaration::

    [error] <Domain><ErrorPrefix><Subject>(<type> [name], ...)[;]

Parsing is pure. Malformed text raises :class:`SignatureError`.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from erclint.domain.declarations import ErrorDeclaration, Parameter, SignatureError

if TYPE_CHECKING:
    from erclint.domain.vocabulary import Vocabulary

_SIGNATURE = re.compile(
    r"""^\s*(?:error\s+)?
        (?P<name>[A-Za-z_][A-Za-z0-9_]*)\s*
        \((?P<params>[^()]*)\)\s*;?\s*$""",
    re.VERBOSE,
)

# Solidity data-location and indexing keywords carry no grammar meaning.
_IGNORED_WORDS = frozenset({"memory", "calldata", "storage", "indexed"})


def parse_params(text: str) -> tuple[Parameter, ...]:
    """Parse a comma-separated parameter list such as ``address sender, uint256 id``."""
    params: list[Parameter] = []
    if not text.strip():
        return ()
    for raw in text.split(","):
        words = [w for w in raw.split() if w not in _IGNORED_WORDS]
        if not words:
            msg = f"Empty parameter in {text!r}"
            raise SignatureError(msg)
        if words[:2] == ["address", "payable"]:
            words = ["address payable", *words[2:]]
        if len(words) > 2:
            msg = f"Cannot read parameter {raw.strip()!r}"
            raise SignatureError(msg)
        abi_type = words[0]
        name = words[1] if len(words) == 2 else None
        params.append(Parameter.from_abi(abi_type, name))
    return tuple(params)


def parse_signature(
    text: str,
    vocabulary: Vocabulary,
    *,
    origin: str | None = None,
) -> ErrorDeclaration:
    """Parse a textual error signature into an :class:`ErrorDeclaration`.

    The name is split with :meth:`Vocabulary.split_name`, so unknown
    domains or prefixes still parse and are left to the validator.
    """
    match = _SIGNATURE.match(text)
    if match is None:
        msg = f"Not an error signature: {text.strip()!r}"
        raise SignatureError(msg)

    domain, prefix, subject = vocabulary.split_name(match.group("name"))
    return ErrorDeclaration(
        domain=domain,
        prefix=prefix,
        subject=subject,
        params=parse_params(match.group("params")),
        origin=origin,
    )
