import io
from unittest import mock

import pytest

from wingman.search import SearchResult, normalize, parse_results, search, search_tool, tools
from wingman.tool import Environment, ToolError

PAGE = "\n".join(
    [
        "<html><body>",
        '<a rel="nofollow" class="result__a" href="https://example.com/a">First <b>Result</b></a>',
        '<a class="result__url" href="https://example.com/a">example.com/a</a>',
        '<a class="result__snippet" href="https://example.com/a">Snippet <b>one</b>   here</a>',
        '<a rel="nofollow" class="result__a" href="https://example.com/b">Second</a>',
        '<a class="result__url" href="https://example.com/b">example.com/b</a>',
        '<a class="result__snippet" href="https://example.com/b">Snippet two</a>',
        "</body></html>",
    ]
)


def test_search_tool_definition():
    tool = search_tool()
    assert tool.name == "search_online"
    assert tool.description
    assert tool.parameters["required"] == ["query"]


def test_missing_query(tmp_path):
    with pytest.raises(ToolError, match="missing query parameter"):
        search_tool()(Environment(root=tmp_path), {})


def test_tools():
    found = tools()
    assert len(found) == 1
    assert found[0].name == "search_online"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("hello world", "hello world"),
        ("hello  world", "hello world"),
        ("  hello world  ", "hello world"),
        ("hello\t\nworld", "hello world"),
        ("", ""),
        ("   ", ""),
    ],
)
def test_normalize(value, expected):
    assert normalize(value) == expected


def test_parse_results():
    assert parse_results(PAGE.splitlines()) == [
        SearchResult(url="https://example.com/a", title="First Result", content="Snippet one here"),
        SearchResult(url="https://example.com/b", title="Second", content="Snippet two"),
    ]


def test_parse_results_without_snippets():
    lines = ['<a class="result__a" href="https://example.com/a">Title</a>']
    assert parse_results(lines) == []


def test_search_builds_request():
    captured = []

    def fake_urlopen(request, timeout=None):
        captured.append(request)
        return io.BytesIO(PAGE.encode("utf-8"))

    with mock.patch("urllib.request.urlopen", side_effect=fake_urlopen):
        results = search("weather forecast")

    assert len(results) == 2
    assert captured[0].full_url == "https://duckduckgo.com/html/?q=weather+forecast"
    assert captured[0].get_header("Referer") == "https://www.duckduckgo.com/"


def test_execute_formats_results(tmp_path):
    with mock.patch("urllib.request.urlopen", return_value=io.BytesIO(PAGE.encode("utf-8"))):
        result = search_tool()(Environment(root=tmp_path), {"query": "anything"})

    assert result == (
        "## 1. First Result\nURL: https://example.com/a\nSnippet one here\n\n"
        "## 2. Second\nURL: https://example.com/b\nSnippet two\n\n"
    )


def test_execute_no_results(tmp_path):
    with mock.patch("urllib.request.urlopen", return_value=io.BytesIO(b"<html></html>")):
        result = search_tool()(Environment(root=tmp_path), {"query": "nothing"})

    assert result == "No results found."


def test_network_failure(tmp_path):
    with mock.patch("urllib.request.urlopen", side_effect=OSError("unreachable")):
        with pytest.raises(ToolError, match="unreachable"):
            search("query")