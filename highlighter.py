import argparse
import json
import time
from collections import Counter
from dataclasses import dataclass
from html import escape
from pathlib import Path
from typing import Any, Dict, List, Optional

PALETTE = [
    "#5fa8d3",
    "#72b69d",
    "#bfa75c",
    "#c87f7f",
    "#999ca1",
    "#7fcad3",
    "#cb8b8b",
    "#9b9ea1",
    "#88c39d",
    "#c5ae6d",
]


@dataclass
class Span:
    start: int
    end: int
    dim: str
    body: str
    value: Optional[Dict[str, Any]] = None
    latent: bool = False


def describe_value(value: Optional[Dict[str, Any]]) -> str:
    """Short human-readable form of a resolved value for the hover title."""
    if not value:
        return ""
    if value.get("type") == "interval":
        low = value.get("from", {})
        high = value.get("to", {})
        text = f"{low.get('value', '')} .. {high.get('value', '')}".strip()
        unit = high.get("unit") or low.get("unit")
    else:
        text = str(value.get("value", ""))
        unit = value.get("unit")
    extras = [f"{key}={value[key]}" for key in ("product", "precision", "grain", "domain", "issuer") if key in value]
    return " ".join(part for part in [text, unit or "", *extras] if part)


def highlight_text_byte_aligned(text: str, spans: List[Span]) -> str:
    btext = text.encode("utf-8")
    # entities from the extractor never overlap; keep the first of any repeat
    unique: Dict[tuple, Span] = {}
    for s in spans:
        unique.setdefault((s.start, s.end, s.dim), s)
    result = []
    last = 0
    for s in sorted(unique.values(), key=lambda s: (s.start, s.end)):
        if s.start < last:
            continue
        raw = escape(btext[s.start : s.end].decode("utf-8"))
        if not raw.strip():
            continue
        result.append(escape(btext[last : s.start].decode("utf-8")))
        title = f"{s.dim}: {describe_value(s.value)}"
        if s.latent:
            title += " (latent)"
        safe_title = escape(title, quote=True).replace("\n", " ")
        attrs = f'class="highlight" data-dim="{escape(s.dim, quote=True)}" id="entity-{s.start}"'
        # one span per line so line numbering stays intact
        parts = raw.split("\n")
        for idx, part in enumerate(parts):
            result.append(f'<span {attrs} title="{safe_title}"><span class="inner">{part}</span></span>')
            if idx < len(parts) - 1:
                result.append("\n")
        last = s.end
    result.append(escape(btext[last:].decode("utf-8")))
    return "".join(result)


def dimension_colors(dims) -> Dict[str, str]:
    return {dim: PALETTE[i % len(PALETTE)] for i, dim in enumerate(sorted(dims))}


def generate_css_for_dims(colors: Dict[str, str]) -> str:
    return "\n        ".join(
        f".highlight[data-dim='{dim}'] .inner {{ background-color: {color}; }}"
        for dim, color in colors.items()
    )


def generate_html(highlighted_text: str, dim_counts: Dict[str, int], show_line_numbers: bool = True) -> str:
    lines = highlighted_text.splitlines(keepends=True)
    numbered_text = "".join(
        f"<span class='line'><span class='lineno'>{i:4}</span> {ln}</span>"
        for i, ln in enumerate(lines, start=1)
    )
    colors = dimension_colors(dim_counts)
    toggles = "\n".join(
        f"<label><input type='checkbox' checked style='accent-color: {color}' onchange=\"toggleDim('{dim}')\"> {dim} ({dim_counts[dim]})</label>"
        for dim, color in colors.items()
    )
    dim_styles = generate_css_for_dims(colors)
    return f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset=\"UTF-8\">
    <style>
        body {{ font-family: monospace; background: #121212; color: #e0e0e0; padding: 1em; margin: 0; }}
        .highlight {{ border-bottom: 2px dotted #888; cursor: help; }}
        .line {{ display: block; }}
        .lineno {{ display: inline-block; width: 3em; text-align: right; margin-right: 1em; color: #888; }}
        {dim_styles}
        pre {{ white-space: pre-wrap; word-wrap: break-word; line-height: 1.4; margin-top: 6em; }}
        .controls {{ position: fixed; top: 0; left: 0; right: 0; background: #1e1e1e; padding: 1em; z-index: 1000; border-bottom: 1px solid #444; }}
        .controls-content {{ margin-top: 0.5em; }}
        label {{ margin-right: 1em; }}
    </style>
    <script>
    function toggleControls() {{
        const content = document.getElementById('controls-content');
        const btn = document.getElementById('controls-toggle');
        const expanded = btn.getAttribute('aria-expanded') === 'true';
        content.style.display = expanded ? 'none' : 'block';
        content.setAttribute('aria-hidden', expanded);
        btn.setAttribute('aria-expanded', !expanded);
        btn.textContent = expanded ? 'Show controls' : 'Hide controls';
    }}
    function toggleDim(dim) {{
        document.querySelectorAll(`[data-dim='${{dim}}'] > .inner`).forEach(el => {{
            el.style.backgroundColor = (el.style.backgroundColor === 'transparent') ? '' : 'transparent';
        }});
    }}
    function toggleLineNumbers() {{
        document.querySelectorAll('.lineno').forEach(el => {{
            el.style.display = (el.style.display === 'none') ? 'inline-block' : 'none';
        }});
    }}
    document.addEventListener('DOMContentLoaded', () => {{
        if (!{ 'true' if show_line_numbers else 'false' }) toggleLineNumbers();
    }});
    // n / p step through the highlighted entities
    let entityElements = [], current = -1;
    document.addEventListener('DOMContentLoaded', () => {{
        entityElements = Array.from(document.querySelectorAll('.highlight > .inner'));
        document.addEventListener('keydown', e => {{
            if (e.target.tagName === 'INPUT' || e.target.tagName === 'TEXTAREA') return;
            if (e.key === 'n') step(1);
            else if (e.key === 'p') step(-1);
        }});
    }});
    function step(delta) {{
        if (!entityElements.length) return;
        current = (current + delta + entityElements.length) % entityElements.length;
        const el = entityElements[current];
        el.scrollIntoView({{behavior:'smooth', block:'center'}});
        const orig = el.style.backgroundColor;
        el.style.backgroundColor = 'yellow';
        setTimeout(() => el.style.backgroundColor = orig, 500);
    }}
    </script>
</head>
<body>
<div class="controls">
    <button id="controls-toggle" aria-expanded="true" aria-controls="controls-content" onclick="toggleControls()">Hide controls</button>
    <div id="controls-content" class="controls-content" aria-hidden="false">
        <strong>Toggle dimensions:</strong><br>
        {toggles}
        <br><label><input type='checkbox' { 'checked' if show_line_numbers else '' } onchange="toggleLineNumbers()"> Show line numbers</label>
    </div>
</div>
<pre>{numbered_text}</pre>
</body>
</html>
"""


def load_spans(path: Path) -> List[Span]:
    """Read extract.py output: JSON lines, or the single array written by --pretty-print."""
    content = path.read_text(encoding="utf-8")
    if content.lstrip().startswith("["):
        records = json.loads(content)
    else:
        records = [json.loads(line) for line in content.splitlines() if line.strip()]
    spans = []
    for r in records:
        # --no-resolve records carry offset/length instead of start/end
        start = r["start"] if "start" in r else r["offset"]
        end = r["end"] if "end" in r else r["offset"] + r["length"]
        if end <= start:
            continue
        spans.append(
            Span(
                start=start,
                end=end,
                dim=r["dim"],
                body=r.get("body", r.get("match", "")),
                value=r.get("value"),
                latent=r.get("latent", False),
            )
        )
    return spans


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Highlight extracted entities in a text file based on JSON output from extract.py."
    )
    parser.add_argument("text_file", type=Path, help="Path to the input text file")
    parser.add_argument(
        "json_file",
        type=Path,
        help="Path to the JSON file with entities from extract.py",
    )
    parser.add_argument("output_file", type=Path, help="Path to save the output HTML file")
    parser.add_argument(
        "--no-line-numbers",
        action="store_true",
        help="Disable line numbers by default in the HTML",
    )
    args = parser.parse_args(argv)

    text = args.text_file.read_text(encoding="utf-8")
    spans = load_spans(args.json_file)

    t0 = time.time()
    highlighted = highlight_text_byte_aligned(text, spans)
    t1 = time.time()

    print(f"Rendering: {t1-t0:.3f}s, Total entities: {len(spans)}")
    dim_counts = Counter(s.dim for s in spans)
    html = generate_html(highlighted, dim_counts, show_line_numbers=not args.no_line_numbers)
    args.output_file.write_text(html, encoding="utf-8")
    print(f"HTML file with highlights saved to: {args.output_file}")


if __name__ == "__main__":
    main()
