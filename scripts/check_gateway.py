"""Quick check that the SQL gateway is reachable and answers a trivial query."""

import asyncio
import logging
import sys

from sqlgate import Connection, GatewayError, Query, decode, get_one
from sqlgate.config import get_gateway_url, get_log_level


async def _check() -> int:
    conn = Connection.from_env()
    try:
        value = await get_one(conn, Query("SELECT 1 AS ok", [], decode.integer("ok")))
    finally:
        await conn.transport.close()
    return value


def main() -> None:
    """Run ``SELECT 1`` against the configured gateway."""
    logging.basicConfig(
        level=getattr(logging, get_log_level()),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    url = get_gateway_url()
    print(f"Checking gateway at {url}...")

    try:
        ok = asyncio.run(_check())
    except GatewayError as e:
        print(f"  Gateway error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"  Error: {e}")
        sys.exit(1)

    if ok != 1:
        print(f"  Unexpected answer: {ok}")
        sys.exit(1)
    print("  Gateway is answering queries")


if __name__ == "__main__":
    main()
