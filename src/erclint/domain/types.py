"""Grammar axes and verdict codes.

The enums below define the built-in error prefixes, canonical subjects,
parameter kinds, and the closed set of violation codes a verdict can carry.
Domains are plain strings because the recognized set comes from config.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorPrefix(StrEnum):
    """Failure category qualifiers."""

    INVALID = "Invalid"
    INSUFFICIENT = "Insufficient"


class Subject(StrEnum):
    """Canonical nouns describing what an error is about."""

    SENDER = "Sender"
    RECEIVER = "Receiver"
    BALANCE = "Balance"
    APPROVER = "Approver"
    OPERATOR = "Operator"
    APPROVAL = "Approval"


class ParamKind(StrEnum):
    """Role-bearing classification of an error parameter."""

    ADDRESS = "address"
    AMOUNT = "amount"
    ID = "id"


class ViolationCode(StrEnum):
    """Every way a declaration can fail the naming grammar."""

    UNRECOGNIZED_DOMAIN = "UNRECOGNIZED_DOMAIN"
    UNRECOGNIZED_PREFIX = "UNRECOGNIZED_PREFIX"
    INCONSISTENT_PREFIX = "INCONSISTENT_PREFIX"
    UNRECOGNIZED_SUBJECT = "UNRECOGNIZED_SUBJECT"
    MISSING_WHO = "MISSING_WHO"
    ARGUMENT_ORDER = "ARGUMENT_ORDER"
    ITEM_ID_NOT_LAST = "ITEM_ID_NOT_LAST"
    COLLISION = "COLLISION"
    MALFORMED_SIGNATURE = "MALFORMED_SIGNATURE"
