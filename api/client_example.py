"""
Example client for the Quote Stream API.

Demonstrates how to consume the /quotes event stream from another
application.
"""

import json
from typing import Iterator, Optional

import requests

from models import QuoteEvent


def parse_sse_line(line: str) -> Optional[QuoteEvent]:
    """
    Parse one line of an event stream.

    Args:
        line: A decoded line without its trailing newline

    Returns:
        QuoteEvent for `data:` lines, None for blank lines, comments and
        other fields

    Raises:
        ValueError: If a `data:` line does not hold a quote payload
    """
    if not line or line.startswith(":") or not line.startswith("data:"):
        return None

    payload = line[len("data:"):].strip()
    try:
        return QuoteEvent(**json.loads(payload))
    except (json.JSONDecodeError, TypeError) as e:
        raise ValueError(f"Malformed quote payload: {payload!r}") from e


class QuoteStreamClient:
    """
    Client for the Quote Stream API.

    Usage:
        client = QuoteStreamClient("http://localhost:7000")
        for event in client.stream_quotes(max_events=3):
            print(event.quote)
    """

    def __init__(self, api_url: str = "http://localhost:7000"):
        """
        Initialize API client.

        Args:
            api_url: Base URL of the API server
        """
        self.api_url = api_url.rstrip('/')
        self.session = requests.Session()

    # ----------------------------------------------------------------
    # Health
    # ----------------------------------------------------------------

    def health_check(self) -> str:
        """Check that the server is up."""
        response = self.session.get(f"{self.api_url}/")
        response.raise_for_status()
        return response.text

    # ----------------------------------------------------------------
    # Quote Stream
    # ----------------------------------------------------------------

    def stream_quotes(self, max_events: Optional[int] = None) -> Iterator[QuoteEvent]:
        """
        Yield quotes from the event stream.

        The connection is closed when the generator is exhausted or
        discarded, which ends the session on the server.

        Args:
            max_events: Stop after this many events (unbounded when None)
        """
        response = self.session.get(
            f"{self.api_url}/quotes",
            stream=True,
            headers={"Accept": "text/event-stream"},
        )
        response.raise_for_status()

        received = 0
        try:
            for line in response.iter_lines(decode_unicode=True):
                event = parse_sse_line(line)
                if event is None:
                    continue
                yield event
                received += 1
                if max_events is not None and received >= max_events:
                    break
        finally:
            response.close()


# ----------------------------------------------------------------
# Example Usage
# ----------------------------------------------------------------

if __name__ == "__main__":
    client = QuoteStreamClient("http://localhost:7000")

    print("=" * 60)
    print("Quote Stream API - Client Example")
    print("=" * 60)

    print("\n1. Health Check")
    print(f"   {client.health_check()}")

    print("\n2. Three quotes from the stream")
    for i, event in enumerate(client.stream_quotes(max_events=3), 1):
        print(f"   {i}. [{event.timestamp}] {event.quote}")

    print("\n" + "=" * 60)
    print("Done.")
    print("=" * 60)
