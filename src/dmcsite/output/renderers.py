"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers
are dispatched by ``result.op`` in :func:`render_result`; unknown ops
fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from dmcsite.output.console import create_console, get_output, style_for_severity

if TYPE_CHECKING:
    from rich.console import Console

    from dmcsite.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items") or result.data.get("pages")
    if items and isinstance(items, list):
        return "\n".join(_extract_id(item) for item in items if _extract_id(item))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_id(item: Any) -> str:
    if isinstance(item, dict):
        for key in ("id", "page"):
            val = item.get(key)
            if val is not None:
                return str(val)
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="site.ok"), Text(f"  {result.op}", style="site.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="site.key")
    if key == "page":
        v = Text(str(value), style="site.page")
    elif key.endswith("path") or key.endswith("_dir") or key == "site_root":
        v = Text(str(value), style="site.path")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_span(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    line = Text(" " * indent)
    line.append(f"{span.get('duration_ms', 0.0):>8.2f}ms", style="dim")
    line.append(f"  {span.get('name', '?')}")
    annotations = span.get("annotations")
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Op renderers ─────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_list_pages(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Page", style="site.page", no_wrap=True)
    table.add_column("Body")
    table.add_column("Present")
    for item in result.data.get("items", []):
        present = Text("yes") if item.get("exists") else Text("missing", style="site.missing")
        table.add_row(str(item.get("id", "")), str(item.get("body", "")), present)
    console.print(table)


def _render_build_site(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "output_dir", result.data.get("output_dir", ""))
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Page", style="site.page", no_wrap=True)
    table.add_column("Bytes", justify="right")
    if verbose:
        table.add_column("Path", style="site.path")
    for item in result.data.get("pages", []):
        row = [str(item.get("page", "")), str(item.get("bytes", ""))]
        if verbose:
            row.append(str(item.get("path", "")))
        table.add_row(*row)
    console.print(table)
    if "assets_copied" in result.data:
        _field(console, "assets_copied", result.data["assets_copied"])


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    issues = data.get("issues", [])
    if not issues:
        console.print(Text("  No issues found.", style="site.ok"))
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Severity")
    table.add_column("Category")
    table.add_column("Page", style="site.page")
    table.add_column("Message")
    for issue in issues:
        severity = str(issue.get("severity", ""))
        table.add_row(
            Text(severity, style=style_for_severity(severity)),
            str(issue.get("category", "")),
            str(issue.get("page", issue.get("fragment", ""))),
            str(issue.get("message", "")),
        )
    console.print(table)
    console.print(
        f"  {data.get('error_count', 0)} error(s), {data.get('warning_count', 0)} warning(s)"
    )


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "list_pages": _render_list_pages,
    "build_site": _render_build_site,
    "check": _render_check,
}


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="site.error"), Text(f"  {result.op}", style="site.op"), " — ", msg
    )
    if verbose and err and err.detail:
        for key, value in err.detail.items():
            _field(console, key, value)
