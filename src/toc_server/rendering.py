"""HTML for the read-only shared outline page."""

from __future__ import annotations

from html import escape
from typing import Any

from tocideator.normalizer import normalize_imported_tree
from tocideator.numbering import PreviewRow, number_outline
from toc_server.server_config import PAGE_TITLE

INDENT_PX = 16
EMPTY_PREVIEW = '<div class="pv-empty">(No content)</div>'

_PAGE_STYLE = """
body { font-family: system-ui, sans-serif; margin: 0; background: #f6f7f9; color: #1d2330; }
.wrap { width: min(1440px, calc(100% - 40px)); margin: 24px auto; }
.card { background: #fff; border-radius: 12px; padding: 20px 24px; box-shadow: 0 1px 3px rgba(0,0,0,.08); }
.head { display: flex; justify-content: space-between; align-items: flex-start; margin-bottom: 16px; }
.title { font-weight: 600; font-size: 18px; }
.subtitle { color: #5b6474; font-size: 13px; margin-top: 4px; }
.pv-row { padding: 3px 0; }
.pv-doc-title { font-weight: 700; font-size: 20px; margin-bottom: 6px; }
.pv-num { color: #5b6474; margin-right: 4px; }
.pv-l1 { font-weight: 600; }
.pv-empty { color: #8a93a3; }
"""

_COPY_SCRIPT = """
document.getElementById("btnCopyLink").onclick = async () => {
  try { await navigator.clipboard.writeText(location.href); }
  catch (e) { window.prompt("Share link:", location.href); }
};
"""


def build_preview_html(tree: list[Any]) -> str:
    """Preview rows for a stored tree, numbered exactly like the editor preview."""
    if not tree:
        return EMPTY_PREVIEW
    rows = number_outline(normalize_imported_tree(tree))
    return "".join(_render_row(row) for row in rows)


def _render_row(row: PreviewRow) -> str:
    if row.level == 0:
        return f'<div class="pv-row pv-doc-title"><span class="pv-title">{escape(row.title)}</span></div>'
    return (
        f'<div class="pv-row pv-l{row.level}" style="margin-left:{row.indent * INDENT_PX}px">'
        f'<span class="pv-num">{escape(row.label)}</span> '
        f'<span class="pv-title">{escape(row.title)}</span>'
        "</div>"
    )


def render_share_page(share_id: str, document: dict[str, Any]) -> str:
    """Full HTML page for one stored snapshot."""
    tree = document.get("tree")
    preview = build_preview_html(tree if isinstance(tree, list) else [])
    timestamp = document.get("exportedAt") or document.get("savedAt") or ""
    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{escape(PAGE_TITLE)}</title>
  <style>{_PAGE_STYLE}</style>
</head>
<body>
  <div class="wrap">
    <section class="card">
      <div class="head">
        <div>
          <div class="title">Shared outline (read-only)</div>
          <div class="subtitle">
            Share ID: <span id="shareId">{escape(share_id)}</span><br/>
            Time: <span id="sharedAt">{escape(str(timestamp))}</span>
          </div>
        </div>
        <button id="btnCopyLink" type="button">Copy link</button>
      </div>
      <div class="preview" id="preview">{preview}</div>
    </section>
  </div>
  <script>{_COPY_SCRIPT}</script>
</body>
</html>
"""
