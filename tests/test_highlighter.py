import json
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import highlighter
from highlighter import Span, describe_value, highlight_text_byte_aligned, load_spans


def test_highlight_uses_byte_offsets():
    text = "Coût: 20 euros"
    spans = [Span(start=7, end=15, dim="amount-of-money", body="20 euros",
                  value={"type": "value", "value": 20.0, "unit": "EUR"})]
    html = highlight_text_byte_aligned(text, spans)
    assert html.startswith("Coût: <span")
    assert 'data-dim="amount-of-money"' in html
    assert 'title="amount-of-money: 20.0 EUR"' in html
    assert '<span class="inner">20 euros</span>' in html


def test_text_is_escaped():
    text = "<b> 3 miles"
    spans = [Span(start=4, end=11, dim="distance", body="3 miles")]
    html = highlight_text_byte_aligned(text, spans)
    assert html.startswith("&lt;b&gt; ")


def test_overlapping_spans_keep_the_first():
    spans = [
        Span(start=0, end=3, dim="amount-of-money", body="$10"),
        Span(start=1, end=3, dim="number", body="10"),
    ]
    html = highlight_text_byte_aligned("$10", spans)
    assert html.count('class="highlight"') == 1


def test_describe_interval():
    value = {
        "type": "interval",
        "to": {"value": 6.0, "unit": "pound"},
        "product": "meat",
    }
    assert describe_value(value) == ".. 6.0 pound product=meat"


def test_load_jsonl_and_array(tmp_path):
    records = [
        {"dim": "distance", "body": "3 miles", "start": 0, "end": 7,
         "value": {"type": "value", "value": 3.0, "unit": "mile"}, "latent": False},
        {"offset": 10, "length": 0, "dim": "number", "match": ""},
    ]
    jsonl = tmp_path / "out.jsonl"
    jsonl.write_text("\n".join(json.dumps(r) for r in records) + "\n", encoding="utf-8")
    array = tmp_path / "out.json"
    array.write_text(json.dumps(records, indent=2), encoding="utf-8")
    for path in (jsonl, array):
        spans = load_spans(path)
        # zero-length records are dropped
        assert [(s.start, s.end, s.dim) for s in spans] == [(0, 7, "distance")]


def test_main_writes_html(tmp_path, capsys):
    text_path = tmp_path / "input.txt"
    text_path.write_text("Pay $10 and walk 3 miles.\n", encoding="utf-8")
    json_path = tmp_path / "out.jsonl"
    json_path.write_text(
        json.dumps({"dim": "amount-of-money", "body": "$10", "start": 4, "end": 7,
                    "value": {"type": "value", "value": 10.0, "unit": "USD"}, "latent": False})
        + "\n"
        + json.dumps({"dim": "distance", "body": "3 miles", "start": 17, "end": 24,
                      "value": {"type": "value", "value": 3.0, "unit": "mile"}, "latent": False})
        + "\n",
        encoding="utf-8",
    )
    html_path = tmp_path / "out.html"
    highlighter.main([str(text_path), str(json_path), str(html_path)])
    html = html_path.read_text(encoding="utf-8")
    assert "toggleDim('amount-of-money')" in html
    assert "toggleDim('distance')" in html
    assert "distance (1)" in html
    assert "Total entities: 2" in capsys.readouterr().out
