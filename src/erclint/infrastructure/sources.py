"""Declaration sources: Solidity files, YAML catalogs, and signature lists.

Pure parsing lives in :mod:`erclint.domain.signature` (correct dependency
direction: infrastructure -> domain). This module handles file I/O,
file discovery, and origin tracking (``path:line``) for reporting.

Supported inputs:

- ``.sol``: every ``error Name(...);`` statement. Only names that split into a
  recognized domain, a prefix, and a subject claim the grammar; other
  custom errors (``Unauthorized``, ``ERC721NonexistentToken``) are skipped.
- ``.yaml`` / ``.yml``: a list (or an ``errors:`` key) of signature
  strings, ``{signature: ...}`` mappings, or structured
  ``{domain, prefix, subject, params}`` mappings.
- anything else: one signature per line; blank lines and ``#`` comments
  are ignored.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from erclint.domain.declarations import ErrorDeclaration, SignatureError
from erclint.domain.signature import parse_params, parse_signature
from erclint.domain.vocabulary import Vocabulary

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = (".sol", ".yaml", ".yml", ".txt")

# Directories to skip when discovering source files.
_SKIP_DIRS = frozenset({".git", "node_modules", "lib", "out", "cache", "artifacts"})

_SOL_ERROR = re.compile(r"\berror\s+([A-Za-z_][A-Za-z0-9_]*)\s*\(([^()]*)\)\s*;", re.DOTALL)
# Comments and string literals in one left-to-right pass, so a comment
# opener inside a string or another comment is never taken as a comment.
_SOL_COMMENT_OR_STRING = re.compile(
    r"""//[^\n]*|/\*.*?\*/|"(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*'""",
    re.DOTALL,
)


class SourceError(Exception):
    """Raised when a source file cannot be read or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class MalformedEntry:
    """An entry that claims the grammar but cannot be parsed."""

    origin: str
    text: str
    reason: str


@dataclass
class LoadedSource:
    """Everything read from one source file."""

    path: Path
    declarations: list[ErrorDeclaration] = field(default_factory=list)
    malformed: list[MalformedEntry] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def find_sources(
    paths: Iterable[Path],
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> list[Path]:
    """Expand *paths* into source files.

    Files are taken as given. Directories are walked recursively for
    files with a matching suffix, skipping build and vendor directories.
    """
    suffixes = {s.lower() for s in extensions}
    found: list[Path] = []
    for path in paths:
        if path.is_file():
            found.append(path)
            continue
        if not path.is_dir():
            raise SourceError(path, "no such file or directory")
        for candidate in sorted(path.rglob("*")):
            if not candidate.is_file() or candidate.suffix.lower() not in suffixes:
                continue
            if _SKIP_DIRS.intersection(candidate.relative_to(path).parts[:-1]):
                continue
            found.append(candidate)
    return list(dict.fromkeys(found))


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_declarations(path: Path, vocabulary: Vocabulary) -> LoadedSource:
    """Read all declarations from *path*, dispatching on its suffix."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(path, str(exc)) from exc

    suffix = path.suffix.lower()
    if suffix == ".sol":
        loaded = _load_solidity(path, text, vocabulary)
    elif suffix in (".yaml", ".yml"):
        loaded = _load_yaml(path, text, vocabulary)
    else:
        loaded = _load_lines(path, text, vocabulary)

    logger.debug(
        "Loaded %s: %d declarations, %d malformed, %d skipped",
        path,
        len(loaded.declarations),
        len(loaded.malformed),
        len(loaded.skipped),
    )
    return loaded


def _load_solidity(path: Path, text: str, vocabulary: Vocabulary) -> LoadedSource:
    loaded = LoadedSource(path=path)
    for name, params, line in _iter_solidity_errors(text):
        origin = f"{path}:{line}"
        signature = f"{name}({params})"
        if not _claims_grammar(name, vocabulary):
            loaded.skipped.append(origin)
            continue
        _add_signature(loaded, signature, vocabulary, origin)
    return loaded


def _claims_grammar(name: str, vocabulary: Vocabulary) -> bool:
    """A Solidity error joins the grammar when it splits under a recognized domain."""
    try:
        domain, _, _ = vocabulary.split_name(name)
    except SignatureError:
        return False
    return domain is not None and vocabulary.is_domain(domain)


def _iter_solidity_errors(text: str) -> Iterator[tuple[str, str, int]]:
    """Yield ``(name, params, line)`` for each error statement outside comments."""

    def blank(match: re.Match[str]) -> str:
        token = match.group(0)
        if token.startswith(("\"", "'")):
            return token
        # Keep newlines so line numbers survive comment removal.
        return re.sub(r"[^\n]", " ", token)

    stripped = _SOL_COMMENT_OR_STRING.sub(blank, text)
    for match in _SOL_ERROR.finditer(stripped):
        line = stripped.count("\n", 0, match.start()) + 1
        params = " ".join(match.group(2).split())
        yield match.group(1), params, line


def _load_lines(path: Path, text: str, vocabulary: Vocabulary) -> LoadedSource:
    loaded = LoadedSource(path=path)
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        _add_signature(loaded, line, vocabulary, f"{path}:{lineno}")
    return loaded


def _load_yaml(path: Path, text: str, vocabulary: Vocabulary) -> LoadedSource:
    yaml = YAML()
    try:
        data = yaml.load(text)
    except YAMLError as exc:
        raise SourceError(path, f"invalid YAML: {exc}") from exc

    if data is None:
        return LoadedSource(path=path)
    if isinstance(data, dict):
        data = data.get("errors")
    if not isinstance(data, list):
        raise SourceError(path, "expected a list of declarations or an 'errors' list")

    loaded = LoadedSource(path=path)
    for index, entry in enumerate(data):
        origin = f"{path}:{_yaml_line(data, index)}"
        if isinstance(entry, str):
            _add_signature(loaded, entry, vocabulary, origin)
        elif isinstance(entry, dict) and "signature" in entry:
            _add_signature(loaded, str(entry["signature"]), vocabulary, origin)
        elif isinstance(entry, dict):
            _add_structured(loaded, entry, origin)
        else:
            loaded.malformed.append(
                MalformedEntry(origin=origin, text=str(entry), reason="unsupported entry")
            )
    return loaded


def _yaml_line(seq: Any, index: int) -> int:
    """1-based line of a round-trip sequence item (0 when unknown)."""
    lc = getattr(seq, "lc", None)
    if lc is None:
        return 0
    try:
        return int(lc.item(index)[0]) + 1
    except (KeyError, TypeError, IndexError):
        return 0


def _add_signature(
    loaded: LoadedSource,
    signature: str,
    vocabulary: Vocabulary,
    origin: str,
) -> None:
    try:
        loaded.declarations.append(parse_signature(signature, vocabulary, origin=origin))
    except SignatureError as exc:
        loaded.malformed.append(MalformedEntry(origin=origin, text=signature, reason=str(exc)))


def _add_structured(loaded: LoadedSource, entry: dict[str, Any], origin: str) -> None:
    text = str(dict(entry))
    prefix = entry.get("prefix")
    subject = entry.get("subject")
    if not prefix or not subject:
        loaded.malformed.append(
            MalformedEntry(origin=origin, text=text, reason="'prefix' and 'subject' are required")
        )
        return
    raw_params = entry.get("params") or []
    if isinstance(raw_params, str):
        raw_params = [raw_params]
    try:
        params = parse_params(", ".join(str(p) for p in raw_params))
    except SignatureError as exc:
        loaded.malformed.append(MalformedEntry(origin=origin, text=text, reason=str(exc)))
        return
    domain = entry.get("domain")
    loaded.declarations.append(
        ErrorDeclaration(
            domain=str(domain) if domain else None,
            prefix=str(prefix),
            subject=str(subject),
            params=params,
            origin=origin,
        )
    )
