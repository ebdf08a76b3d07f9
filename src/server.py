"""Protean Engine runner for the storefront domain.

Only needed when ``event_processing`` is set to ``async``:
the Engine delivers committed events to the order notification handler off
the request path. With ``sync`` processing, handlers run inline after each
commit and no Engine is required.

Usage:
    python src/server.py
"""

import asyncio

from protean.server.engine import Engine


async def run():
    from storefront.domain import storefront

    storefront.init()
    await Engine(storefront).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
