"""
Background Scheduler
====================
Runs two recurring jobs:

  refresh_all_live    — every LIVE_REFRESH_MINUTES (default 1)
      • calls build_entity_live_data on every enabled park connector
      • stores the statuses in the "live" snapshot

  refresh_all_static  — every STATIC_REFRESH_HOURS (default 24)
      • builds destination / park / attraction / show / restaurant entities
      • extracts the operating calendar
      • stores them in the "entities" and "schedule" snapshots

Nothing is persisted; snapshots live in memory (app/services/snapshots.py).
"""

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
import logging
import os
from datetime import datetime, timezone

from app.parks import ParkConfigError, enabled_parks, get_park
from app.services.snapshots import save_snapshot
from app.services.transport import HttpTransport

logger = logging.getLogger(__name__)

LIVE_REFRESH_MINUTES = int(os.getenv("LIVE_REFRESH_MINUTES", "1"))
STATIC_REFRESH_HOURS = int(os.getenv("STATIC_REFRESH_HOURS", "24"))

scheduler = AsyncIOScheduler(timezone="UTC")
transport = HttpTransport()


def start_scheduler():
    scheduler.add_job(
        refresh_all_live,
        trigger=IntervalTrigger(minutes=LIVE_REFRESH_MINUTES),
        id="refresh_live",
        name=f"Refresh live statuses (every {LIVE_REFRESH_MINUTES} min)",
        replace_existing=True,
        next_run_time=datetime.now(timezone.utc),  # run immediately on startup
    )
    scheduler.add_job(
        refresh_all_static,
        trigger=IntervalTrigger(hours=STATIC_REFRESH_HOURS),
        id="refresh_static",
        name=f"Refresh entities & schedules (every {STATIC_REFRESH_HOURS}h)",
        replace_existing=True,
        next_run_time=datetime.now(timezone.utc),  # run immediately on startup
    )
    scheduler.start()
    logger.info(
        f"Scheduler started — live: every {LIVE_REFRESH_MINUTES} min | "
        f"static: every {STATIC_REFRESH_HOURS}h"
    )


def stop_scheduler():
    scheduler.shutdown(wait=False)
    logger.info("Scheduler stopped.")


def _connectors():
    for park_id in enabled_parks():
        try:
            yield park_id, get_park(park_id, transport=transport)
        except ParkConfigError as e:
            logger.error(f"[{park_id}] Not configured: {e}")


# ──────────────────────────────────────────────
# Job: live statuses
# ──────────────────────────────────────────────

async def refresh_all_live():
    logger.info("─── refresh_all_live started ───")
    for park_id, connector in _connectors():
        try:
            statuses = await connector.build_entity_live_data()
            save_snapshot(park_id, "live", {
                "live": [s.to_document() for s in statuses],
            })
        except Exception as e:
            logger.error(f"[{park_id}] Unhandled error in refresh_all_live: {e}", exc_info=True)
    logger.info("─── refresh_all_live done ───")


# ──────────────────────────────────────────────
# Job: entities & schedules
# ──────────────────────────────────────────────

async def refresh_all_static():
    logger.info("─── refresh_all_static started ───")
    for park_id, connector in _connectors():
        try:
            await _refresh_park_static(park_id, connector)
        except Exception as e:
            logger.error(f"[{park_id}] Unhandled error in refresh_all_static: {e}", exc_info=True)
    logger.info("─── refresh_all_static done ───")


async def _refresh_park_static(park_id: str, connector):
    destination = await connector.build_destination_entity()
    parks       = await connector.build_park_entities()
    attractions = await connector.build_attraction_entities()
    shows       = await connector.build_show_entities()
    restaurants = await connector.build_restaurant_entities()
    schedules   = await connector.build_entity_schedule_data()

    save_snapshot(park_id, "entities", {
        "park_name":   connector.park_name,
        "destination": destination.to_document(),
        "parks":       [p.to_document() for p in parks],
        "attractions": [a.to_document() for a in attractions],
        "shows":       [s.to_document() for s in shows],
        "restaurants": [r.to_document() for r in restaurants],
    })
    save_snapshot(park_id, "schedule", {
        "schedule": [s.to_document() for s in schedules],
    })
    logger.info(
        f"[{park_id}] Snapshots saved — "
        f"{len(attractions)} attractions, {len(restaurants)} restaurants, "
        f"{sum(len(s.schedule) for s in schedules)} schedule days."
    )
