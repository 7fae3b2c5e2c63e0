"""
Google Sheets gviz client with lazy session setup.

Reads a published sheet through the visualization endpoint, which answers
with a JSONP envelope::

    google.visualization.Query.setResponse({...});

Rows come back as lists of cell strings (or None), positionally indexed.
"""

import json
import logging
import re

import requests

from core.config import FEED_REQUEST_TIMEOUT, GVIZ_URL_TEMPLATE, SHEET_ID

logger = logging.getLogger(__name__)

JSONP_PATTERN = re.compile(r"google\.visualization\.Query\.setResponse\(([\s\S]+)\);")

Row = list[str | None]


class FeedError(Exception):
    """The sheet could not be fetched or its response could not be read."""


def cell_to_string(cell: dict | None) -> str | None:
    """Render a gviz cell value as text; integral numbers lose the trailing .0."""
    if not cell:
        return None
    value = cell.get("v")
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_gviz_response(text: str) -> list[Row]:
    """
    Unwrap a gviz JSONP body into rows of cell strings.

    Raises:
        FeedError: body is not a gviz response or the JSON is malformed
    """
    match = JSONP_PATTERN.search(text)
    if not match:
        raise FeedError("Response is not a gviz payload (is the sheet shared publicly?)")

    try:
        data = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        raise FeedError(f"Malformed gviz JSON: {e}") from e

    if data.get("status") == "error":
        messages = [err.get("detailed_message") or err.get("message", "") for err in data.get("errors", [])]
        raise FeedError("gviz query failed: " + "; ".join(m for m in messages if m))

    table = data.get("table") or {}
    return [[cell_to_string(cell) for cell in row.get("c") or []] for row in table.get("rows") or []]


class SheetClient:
    """Fetches named sheets from one spreadsheet."""

    def __init__(
        self,
        sheet_id: str = SHEET_ID,
        session: requests.Session | None = None,
        timeout: int = FEED_REQUEST_TIMEOUT,
    ):
        self.sheet_id = sheet_id
        self.session = session or requests.Session()
        self.timeout = timeout

    def sheet_url(self) -> str:
        return GVIZ_URL_TEMPLATE.format(sheet_id=self.sheet_id)

    def fetch_rows(self, sheet_name: str) -> list[Row]:
        """
        Fetch all rows of a sheet.

        Raises:
            FeedError: network failure, non-2xx status or unreadable body
        """
        params = {"tqx": "out:json", "sheet": sheet_name}
        try:
            response = self.session.get(self.sheet_url(), params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FeedError(f"Could not fetch sheet '{sheet_name}': {e}") from e

        rows = parse_gviz_response(response.text)
        logger.info("Fetched %d rows from sheet '%s'", len(rows), sheet_name)
        return rows


_sheet_client: SheetClient | None = None


def get_sheet_client() -> SheetClient:
    """Get or create the shared sheet client (lazy initialization)."""
    global _sheet_client
    if _sheet_client is None:
        _sheet_client = SheetClient()
    return _sheet_client
