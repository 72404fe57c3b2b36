"""
Entry point — builds RSS feeds for one or more source profiles.

Each profile is an independent run: fetch the page, extract its page-state
JSON, write the feed. A failing profile is logged (and alerted, if a Discord
webhook is configured) and does not stop the others; the exit status is 1
if any run failed.

Usage:
    python -m pagefeed.main abc-kohler-report              # feed to stdout
    python -m pagefeed.main --all                          # OUTPUT_DIR/<name>.xml
    python -m pagefeed.main --all --output feeds/          # feeds/<name>.xml
    python -m pagefeed.main --list
"""
import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger

from config.settings import LOG_LEVEL, LOGS_DIR, OUTPUT_DIR, PROFILES_PATH
from pagefeed.collectors.page_state import PageStateCollector
from pagefeed.exceptions import PageFeedError
from pagefeed.formatter.rss import render_rss
from pagefeed.monitoring.alerts import alert_run_failure
from pagefeed.profiles import SourceProfile, get_profile, load_profiles


# ── Logging ────────────────────────────────────────────────────────────────────

def setup_logging(level: str = LOG_LEVEL, logs_dir: Path | None = LOGS_DIR) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)
    if logs_dir is None:
        return
    logs_dir.mkdir(parents=True, exist_ok=True)
    logger.add(
        logs_dir / "pagefeed_{time:YYYY-MM-DD}.log",
        rotation="00:00",
        retention="14 days",
        level=level,
        encoding="utf-8",
    )


# ── Runs ───────────────────────────────────────────────────────────────────────

async def run_profile(
    profile: SourceProfile,
    output_dir: Path | None = None,
    collector: PageStateCollector | None = None,
) -> bool:
    """Build and write one feed. Returns False if the run failed."""
    collector = collector or PageStateCollector(profile)
    try:
        channel = await collector.collect()
    except PageFeedError as exc:
        logger.error(f"[Run] {profile.name} failed: {exc}")
        await alert_run_failure(profile.name, str(exc))
        return False

    body = render_rss(channel)
    if output_dir is None:
        sys.stdout.buffer.write(body)
        sys.stdout.buffer.flush()
        return True

    path = output_dir / f"{profile.name}.xml"
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        path.write_bytes(body)
    except OSError as exc:
        logger.error(f"[Run] {profile.name} could not write {path}: {exc}")
        await alert_run_failure(profile.name, f"write failed: {exc}")
        return False
    logger.info(f"[Run] {profile.name} → {path}")
    return True


async def run(profiles: list[SourceProfile], output_dir: Path | None = None) -> int:
    failures = 0
    for profile in profiles:
        if not await run_profile(profile, output_dir):
            failures += 1
    if failures:
        logger.warning(f"[Run] {failures}/{len(profiles)} profiles failed")
    return 1 if failures else 0


# ── CLI ────────────────────────────────────────────────────────────────────────

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagefeed",
        description="Build RSS feeds from pages that embed their state as JSON.",
    )
    parser.add_argument("profiles", nargs="*", help="Profile names from the sources file")
    parser.add_argument("--all", action="store_true", help="Run every configured profile")
    parser.add_argument("--list", action="store_true", help="List configured profiles and exit")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Directory for <profile>.xml files (default: stdout for one profile, OUTPUT_DIR for several)",
    )
    parser.add_argument(
        "--sources",
        type=Path,
        default=PROFILES_PATH,
        help="YAML file with source profiles",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging()

    try:
        profiles = load_profiles(args.sources)
        if args.list:
            for name, profile in profiles.items():
                print(f"{name}\t{profile.url}")
            return 0

        if args.all:
            selected = list(profiles.values())
        elif args.profiles:
            selected = [get_profile(profiles, name) for name in args.profiles]
        else:
            parser.error("name at least one profile, or pass --all")
    except PageFeedError as exc:
        logger.error(str(exc))
        return 2

    output_dir = args.output
    if output_dir is None and len(selected) > 1:
        output_dir = OUTPUT_DIR

    return asyncio.run(run(selected, output_dir))


if __name__ == "__main__":
    sys.exit(main())
