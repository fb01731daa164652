"""Error declaration and parameter models.

A declaration is the tuple (Domain, Prefix, Subject, params). It renders
to the textual form ``<Domain><Prefix><Subject>(<Arguments>)``.

INVARIANT: Declarations are immutable. Catalogs grow by adding new
declarations, never by editing existing ones.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

from erclint.domain.types import ParamKind

_INT_TYPE = re.compile(r"^u?int(\d{1,3})?$")
_ID_NAME = re.compile(r"^(ids?|.+Ids?)$")
_SHORTHAND_KINDS = frozenset(k.value for k in ParamKind)


class SignatureError(ValueError):
    """Raised when text cannot be read as a grammar declaration."""


def classify_param(abi_type: str, name: str | None = None) -> ParamKind:
    """Map an ABI parameter to its grammar role.

    Examples:
        >>> classify_param("address", "sender")
        <ParamKind.ADDRESS: 'address'>
        >>> classify_param("uint256", "tokenId")
        <ParamKind.ID: 'id'>
        >>> classify_param("uint256", "needed")
        <ParamKind.AMOUNT: 'amount'>
    """
    if abi_type in _SHORTHAND_KINDS:
        return ParamKind(abi_type)
    if abi_type == "address payable":
        return ParamKind.ADDRESS
    if _INT_TYPE.match(abi_type):
        if name and _ID_NAME.match(name):
            return ParamKind.ID
        return ParamKind.AMOUNT
    msg = f"Unsupported parameter type: {abi_type!r}"
    raise SignatureError(msg)


class Parameter(BaseModel):
    """One typed error argument."""

    model_config = {"frozen": True}

    kind: ParamKind
    name: str | None = None
    abi_type: str | None = None

    @classmethod
    def from_abi(cls, abi_type: str, name: str | None = None) -> Parameter:
        kind = classify_param(abi_type, name)
        if abi_type in _SHORTHAND_KINDS and kind is not ParamKind.ADDRESS:
            # "amount" and "id" are roles, not ABI types.
            return cls(kind=kind, name=name)
        return cls(kind=kind, name=name, abi_type=abi_type)

    def render(self) -> str:
        type_text = self.abi_type or _DEFAULT_ABI_TYPES[self.kind]
        return f"{type_text} {self.name}" if self.name else type_text


_DEFAULT_ABI_TYPES: dict[ParamKind, str] = {
    ParamKind.ADDRESS: "address",
    ParamKind.AMOUNT: "uint256",
    ParamKind.ID: "uint256",
}


class ErrorDeclaration(BaseModel):
    """A custom error declaration under the naming grammar.

    Attributes:
        domain: Token-standard namespace, or None when the name omits it.
        prefix: Failure category (e.g. ``Insufficient``).
        subject: Subject term as spelled in the name (e.g. ``Allowance``).
        params: Ordered arguments, ``who [, what [, why...]] [, itemId]``.
        origin: Where the declaration was read from (``path:line``), if known.
    """

    model_config = {"frozen": True}

    domain: str | None = None
    prefix: str
    subject: str
    params: tuple[Parameter, ...] = Field(default_factory=tuple)
    origin: str | None = None

    @property
    def name(self) -> str:
        return f"{self.domain or ''}{self.prefix}{self.subject}"

    @property
    def signature(self) -> str:
        args = ", ".join(p.render() for p in self.params)
        return f"{self.name}({args})"

    @property
    def key(self) -> tuple[str | None, str, str]:
        """Collision key: declarations sharing it must share a shape."""
        return (self.domain, self.prefix, self.subject)

    @property
    def shape(self) -> tuple[ParamKind, ...]:
        return tuple(p.kind for p in self.params)

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "name": self.name,
            "signature": self.signature,
            "domain": self.domain,
            "prefix": self.prefix,
            "subject": self.subject,
            "params": [str(k) for k in self.shape],
        }
        if self.origin:
            data["origin"] = self.origin
        return data
