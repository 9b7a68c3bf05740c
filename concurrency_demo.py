"""Concurrency demo: fire several trip creations at one vehicle at the same time.
This runs in-process against the ASGI app and doesn't require the server to be started separately.
Every creation is checked and written independently, so nothing beyond the
per-operation transaction stops two of them booking the same vehicle.
Run: python concurrency_demo.py
"""
import asyncio
import httpx
from main import app
from sample_data import seed


async def run():
    data = await asyncio.to_thread(seed)
    vehicle = data["vehicles"][0]
    customers = data["customers"]
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver") as client:
        tasks = [
            client.post("/trips/create", json={
                "customer_id": c.id,
                "vehicle_id": vehicle.id,
                "start_date": "2026-11-01",
                "end_date": "2026-11-02",
                "location": "Airport",
                "distance_km": 25,
                "passengers": 1,
            })
            for c in customers[:5]
        ]
        res = await asyncio.gather(*tasks)
        for r in res:
            print(r.status_code, r.json())
        ok = sum(1 for r in res if r.status_code == 201)
        print(f"{ok} trip(s) booked on vehicle {vehicle.id}")


if __name__ == "__main__":
    asyncio.run(run())
