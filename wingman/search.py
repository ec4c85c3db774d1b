"""The ``search_online`` tool: web search through the DuckDuckGo HTML page."""

from __future__ import annotations

import re
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Any, Iterable

from wingman.tool import Environment, Tool, ToolError

_SEARCH_URL = "https://duckduckgo.com/html/"

_HEADERS = {
    "Referer": "https://www.duckduckgo.com/",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "cross-site",
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
        "(KHTML, like Gecko) Version/18.4 Safari/605.1.15"
    ),
}

_LINK = re.compile(r'href="([^"]+)"')
_TAG = re.compile(r"<[^>]*>")
_SPACE = re.compile(r"\s+")


@dataclass
class SearchResult:
    """One search hit."""

    url: str
    title: str
    content: str


def normalize(s: str) -> str:
    """Collapse runs of whitespace into single spaces and trim."""
    return _SPACE.sub(" ", s).strip()


def parse_results(lines: Iterable[str]) -> list[SearchResult]:
    """Extract results from the lines of a search result page."""
    results: list[SearchResult] = []
    url = title = snippet = ""

    for line in lines:
        if "result__a" in line:
            title = normalize(_TAG.sub("", line))

        if "result__url" in line:
            link = _LINK.search(line)
            if link:
                url = link.group(1)

        if "result__snippet" in line:
            snippet = normalize(_TAG.sub("", line))

        if not snippet:
            continue

        results.append(SearchResult(url=url, title=title, content=snippet))
        url = title = snippet = ""

    return results


def search(query: str) -> list[SearchResult]:
    """Run a web search and return the parsed results."""
    url = _SEARCH_URL + "?" + urllib.parse.urlencode({"q": query})
    request = urllib.request.Request(url, headers=_HEADERS, method="GET")

    try:
        with urllib.request.urlopen(request, timeout=60) as response:
            body = response.read()
    except urllib.error.HTTPError as err:
        body = err.read()
    except OSError as err:
        raise ToolError(f"search failed: {err}") from err

    return parse_results(body.decode("utf-8", errors="replace").splitlines())


def _execute(env: Environment, args: dict[str, Any]) -> str:
    query = args.get("query")
    if not isinstance(query, str):
        raise ToolError("missing query parameter")

    results = search(query)
    if not results:
        return "No results found."

    return "".join(
        f"## {number}. {r.title}\nURL: {r.url}\n{r.content}\n\n"
        for number, r in enumerate(results, start=1)
    )


def search_tool() -> Tool:
    """Create the ``search_online`` tool."""
    return Tool(
        name="search_online",
        description=(
            "Search online if the requested information cannot be found in the language "
            "model or the information could be present in a time after the language "
            "model was trained"
        ),
        parameters={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "the text to search online for"},
            },
            "required": ["query"],
        },
        execute=_execute,
    )


def tools() -> list[Tool]:
    """All search tools."""
    return [search_tool()]