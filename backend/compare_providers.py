"""
Manual provider check against the live APIs.
Run with: python compare_providers.py [SYMBOL]
"""

import asyncio
import logging
import os
import sys

# Set working directory
backend_dir = os.path.dirname(os.path.abspath(__file__))
os.chdir(backend_dir)
sys.path.insert(0, backend_dir)

from dotenv import load_dotenv
load_dotenv(os.path.join(backend_dir, ".env"))


async def compare(symbol: str):
    """Check both providers' connectivity, then compare their quotes."""
    print("\n" + "=" * 60)
    print(f"STOCK PROVIDER GATEWAY - PROVIDER CHECK ({symbol})")
    print("=" * 60)

    from app.core.config import get_settings
    from app.services.aggregation import compare_quotes, fetch_aggregate
    from app.services.providers import MarketstackClient, PolygonClient

    settings = get_settings()
    polygon = PolygonClient.from_settings(settings)
    marketstack = MarketstackClient.from_settings(settings)

    try:
        # Test 1: Connectivity
        print("\n[1] Testing Provider Connections...")
        print("-" * 40)
        for client in (marketstack, polygon):
            if not client.is_configured:
                print(f"{client.name}: SKIPPED - API key not configured")
                continue
            connected = await client.test_connection()
            print(f"{client.name}: {'OK' if connected else 'FAILED'}")

        # Test 2: Side-by-side quote
        print("\n[2] Comparing Quotes...")
        print("-" * 40)
        aggregate = await fetch_aggregate(symbol, polygon, marketstack)
        comparison = compare_quotes(aggregate)

        for provider, error in comparison.errors.items():
            print(f"{provider} error: {error}")

        if comparison.comparable:
            print(f"Marketstack Close: ${comparison.marketstack_close}")
            print(f"Polygon.io Close:  ${comparison.polygon_close}")
            print(f"Price Difference:  ${comparison.price_difference:.2f}")
            print(f"Marketstack Date:  {comparison.marketstack_date}")
            print(f"Polygon.io Date:   {comparison.polygon_date}")
        else:
            print("Cannot compare - missing data from one or both providers")
    finally:
        await polygon.close()
        await marketstack.close()

    print("\n" + "=" * 60)
    print("PROVIDER CHECK COMPLETE")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    asyncio.run(compare(sys.argv[1].upper() if len(sys.argv) > 1 else "AMZN"))
