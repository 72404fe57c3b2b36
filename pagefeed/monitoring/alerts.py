"""
Discord webhook alerts — fires when a profile run fails (fetch error,
no page-state script, unparseable payload).

Set DISCORD_WEBHOOK_URL in .env to enable. If unset, all calls are no-ops.
"""
from datetime import datetime, timezone

import httpx
from loguru import logger

from config.settings import DISCORD_WEBHOOK_URL

# Discord embed colour (red)
_COLOUR = 0xE74C3C


async def send_alert(
    message: str,
    webhook_url: str | None = DISCORD_WEBHOOK_URL,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Send a plain-text alert to Discord."""
    if not webhook_url:
        return

    payload = {
        "embeds": [{
            "description": message,
            "color":       _COLOUR,
            "footer":      {"text": f"PageFeed • {_utcnow()}"},
        }]
    }
    await _post(webhook_url, payload, transport)


async def alert_run_failure(profile_name: str, error: str, **kwargs) -> None:
    await send_alert(
        f"**Feed run failed** `{profile_name}`\n```{error[:500]}```",
        **kwargs,
    )


# ── Internal ──────────────────────────────────────────────────────────────────

async def _post(url: str, payload: dict, transport: httpx.AsyncBaseTransport | None) -> None:
    try:
        async with httpx.AsyncClient(timeout=10, transport=transport) as client:
            resp = await client.post(url, json=payload)
            resp.raise_for_status()
    except httpx.HTTPError as exc:
        # an alert failure must never turn into a run failure
        logger.warning(f"[Alerts] Discord webhook failed: {exc}")


def _utcnow() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
