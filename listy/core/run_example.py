from __future__ import annotations

import asyncio
import os
from pathlib import Path
from dotenv import load_dotenv

from listy.core.config import settings
from listy.core.geolocation import LocationAcquirer, ReportedPositionCapability
from listy.core.logging import configure_logging
from listy.core.orchestrator import DiscoverySession
from listy.projections.memory import MemoryListProjection, MemoryMapProjection
from listy.providers.overpass import OverpassProvider


async def main():
    repo_root = Path(__file__).resolve().parents[2]
    load_dotenv(repo_root / ".env", override=False)
    configure_logging(os.getenv("LISTY_LOG_LEVEL", settings.log_level))

    # Zócalo, Mexico City unless overridden
    lat = float(os.getenv("LISTY_EXAMPLE_LAT", "19.4326"))
    lng = float(os.getenv("LISTY_EXAMPLE_LNG", "-99.1332"))

    map_view = MemoryMapProjection()
    list_view = MemoryListProjection()
    async with OverpassProvider() as provider:
        session = DiscoverySession(
            LocationAcquirer(ReportedPositionCapability(position=(lat, lng))),
            provider,
            map_view,
            list_view,
        )
        map_view.on_marker_click = session.select
        list_view.on_row_click = session.select

        ctx = await session.start()
        if ctx.geo_error is not None:
            print(ctx.geo_error.message)
        print(ctx.list_status.label, ctx.list_status.message)
        for p in ctx.place_store.all()[:10]:
            print(f"  {p.id:>12}  {p.name}  [{p.category}]  {p.address}")

        if list_view.rows:
            list_view.click_row(list_view.rows[0])
            print(f"selected {session.sync.selected_id}; map centered on {map_view.center} z{map_view.zoom}")
        session.close()

if __name__ == "__main__":
    asyncio.run(main())
