"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from erclint.output.console import create_console, get_output
from erclint.services._helpers import plural

if TYPE_CHECKING:
    from rich.console import Console

    from erclint.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    issues = result.data.get("issues")
    if issues:
        return "\n".join(
            f"{issue.get('origin') or '-'}: {issue['code']} {issue['message']}" for issue in issues
        )

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("signature", "")) for item in items)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="erc.ok")
    op = Text(f"  {result.op}", style="erc.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="erc.key")
    console.print(Text.assemble(k, Text(str(value))))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="erc.error")
    op = Text(f"  {result.op}", style="erc.op")
    console.print(label, op, Text(" — "), Text(msg))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Lint renderers ────────────────────────────────────────────────────


def _render_lint(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render validate/lint results with issues grouped by violation code."""
    data = result.data
    issues: list[dict[str, Any]] = data.get("issues", [])
    count = data.get("count", 0)

    if verbose and data.get("declarations"):
        console.print(_declaration_table(data["declarations"]))
        console.print()

    if not issues:
        console.print(f"[erc.ok]OK[/erc.ok]  {plural(count, 'declaration')} checked, no issues.")
        _render_meta(console, result)
        return

    severity_styles = {"error": "erc.error", "warning": "erc.warning"}

    by_code: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_code.setdefault(str(issue.get("code", "UNKNOWN")), []).append(issue)

    for code, code_issues in by_code.items():
        console.print(f"\n[erc.code]{escape(code)}[/erc.code]")
        for issue in code_issues:
            sev = str(issue.get("severity", "error"))
            style = severity_styles.get(sev, "")
            origin = issue.get("origin")
            name = issue.get("name")
            location = f" [erc.origin]{escape(origin)}[/erc.origin]" if origin else ""
            subject = f" [erc.name]{escape(name)}[/erc.name]" if name else ""
            label = f"[{style}]{sev}[/{style}]" if style else sev
            console.print(f"  {label}{location}{subject}: {escape(issue['message'])}")

    errors = data.get("error_count", 0)
    warnings = data.get("warning_count", 0)
    summary = ", ".join(
        (plural(count, "declaration"), plural(errors, "error"), plural(warnings, "warning"))
    )
    console.print(f"\n{summary}")
    _render_meta(console, result)


def _render_meta(console: Console, result: ServiceResult) -> None:
    if result.meta and "files" in result.meta:
        console.print(Text(f"{plural(result.meta['files'], 'file')} read", style="dim"))


def _declaration_table(declarations: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="erc.name", no_wrap=True)
    table.add_column("Domain", style="erc.domain")
    table.add_column("Prefix", style="erc.prefix")
    table.add_column("Subject", style="erc.subject")
    table.add_column("Arguments")
    table.add_column("Status")
    for decl in declarations:
        status = Text("ok", style="erc.ok") if decl.get("ok") else Text("fail", style="erc.error")
        table.add_row(
            Text(str(decl.get("name", ""))),
            Text(str(decl.get("domain") or "-")),
            Text(str(decl.get("prefix", ""))),
            Text(str(decl.get("subject", ""))),
            Text(", ".join(decl.get("params", []))),
            status,
        )
    return table


# ── Reference renderers ───────────────────────────────────────────────


def _render_catalog(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the reference catalog as a table."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Domain", style="erc.domain", no_wrap=True)
    table.add_column("Signature", style="erc.name")
    for item in items:
        table.add_row(Text(str(item.get("domain") or "-")), Text(str(item.get("signature", ""))))
    console.print(table)
    console.print(f"\n{plural(result.data.get('count', len(items)), 'declaration')}")


def _render_vocabulary(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render grammar axes and the per-domain subject terms."""
    data = result.data
    _status_line(console, result)
    _field(console, "domains", ", ".join(data.get("domains", [])))
    _field(console, "prefixes", ", ".join(data.get("prefixes", [])))
    _field(console, "require_domain", data.get("require_domain", False))

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Domain", style="erc.domain", no_wrap=True)
    table.add_column("Subjects", style="erc.subject")
    table.add_column("Renames")
    renames: dict[str, dict[str, str]] = data.get("renames", {})
    for domain, terms in data.get("terms", {}).items():
        pairs = renames.get(domain, {}).items()
        domain_renames = ", ".join(f"{old} -> {new}" for old, new in pairs)
        table.add_row(Text(domain), Text(", ".join(terms)), Text(domain_renames or "-"))
    console.print()
    console.print(table)

    if verbose:
        console.print()
        for subject, prefixes in data.get("subjects", {}).items():
            _field(console, subject, " | ".join(prefixes))


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "validate": _render_lint,
    "lint": _render_lint,
    "catalog": _render_catalog,
    "vocabulary": _render_vocabulary,
}
