from __future__ import annotations

import os

import pytest
from md2html.parser import convert

atheris = pytest.importorskip("atheris")


def test_convert_with_fuzzed_documents():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    converted = 0

    for _ in range(64):
        if provider.remaining_bytes() == 0:
            break
        document = provider.ConsumeUnicodeNoSurrogates(128)
        html = convert(document)
        assert isinstance(html, str)
        converted += 1

    assert converted  # ensure we exercised the loop


def test_convert_with_fuzzed_markdown_lines():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    markers = ["", "# ", "- ", "1. ", "> ", "```", "---", "  - "]
    lines: list[str] = []

    while provider.remaining_bytes() > 0 and len(lines) < 32:
        marker = markers[provider.ConsumeIntInRange(0, len(markers) - 1)]
        text = provider.ConsumeUnicodeNoSurrogates(24).replace("<", "")
        lines.append(f"{marker}{text}\n")

    html = convert("".join(lines))
    assert html.count("<ul>") == html.count("</ul>")
    assert html.count("<blockquote>") == html.count("</blockquote>")
