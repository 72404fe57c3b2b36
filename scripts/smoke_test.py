"""
Live smoke test — runs every configured profile against the real site and
prints a short summary of each feed. Hits the network; not part of pytest.

Usage:
    python scripts/smoke_test.py
    python scripts/smoke_test.py abc-mediawatch
"""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from loguru import logger
from config.settings import PROFILES_PATH
from pagefeed.collectors.page_state import PageStateCollector
from pagefeed.exceptions import PageFeedError
from pagefeed.formatter.rss import render_rss
from pagefeed.profiles import load_profiles


async def main(names: list[str]) -> int:
    profiles = load_profiles(PROFILES_PATH)
    selected = [p for n, p in profiles.items() if not names or n in names]

    logger.info("=" * 60)
    logger.info(f"PageFeed smoke test — {len(selected)} profiles")
    logger.info("=" * 60)

    failed = 0
    for profile in selected:
        logger.info(f"\n[{profile.name}] {profile.url}")
        try:
            channel = await PageStateCollector(profile).collect()
        except PageFeedError as exc:
            logger.error(f"    FAILED: {exc}")
            failed += 1
            continue

        body = render_rss(channel)
        logger.info(f"    channel: {channel.title!r} ({channel.link})")
        logger.info(f"    {len(channel.items)} items, {channel.skipped} skipped, {len(body)} bytes")
        for item in channel.items[:3]:
            logger.info(f"    - {item.pub_date or '(no date)'} | {item.title[:70]}")

    logger.info("\n" + "=" * 60)
    logger.info(f"Smoke test complete — {failed} failed.")
    logger.info("=" * 60)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
