import asyncio

import httpx
import pytest

import main
from parkroute.config import Settings
from parkroute.errors import InvalidInputError

DOG_URL = "https://data.example.org/dog-runs.geojson"
SKATE_URL = "https://data.example.org/skate-parks.geojson"

ROUTE = {
    "type": "FeatureCollection",
    "features": [{
        "type": "Feature",
        "geometry": {"type": "LineString", "coordinates": [[-73.9229, 40.7794], [-73.9237, 40.7790]]},
        "properties": {
            "summary": {"distance": 95.3, "duration": 68.6},
            "segments": [{"steps": [{"instruction": "Head <b>west</b>", "distance": 95.3}]}],
        },
    }],
}


@pytest.fixture
def offline(monkeypatch, dog_runs, skate_parks):
    """Point the CLI at canned upstream responses."""
    requests = []

    def handler(request):
        requests.append(request)
        url = str(request.url)
        if url == DOG_URL:
            return httpx.Response(200, json=dog_runs)
        if url == SKATE_URL:
            return httpx.Response(200, json=skate_parks)
        return httpx.Response(200, json=ROUTE)

    real_client = httpx.AsyncClient
    monkeypatch.setattr(
        httpx, "AsyncClient",
        lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
    )
    monkeypatch.setattr(
        "parkroute.config.get_settings",
        lambda: Settings(dog_runs_url=DOG_URL, skate_parks_url=SKATE_URL, ors_api_key="key"),
    )
    return requests


def test_locations_lists_matching_places(offline, capsys):
    asyncio.run(main.list_locations("astoria"))

    out = capsys.readouterr().out
    assert "2 Dog Runs, 2 Skate Parks" in out
    assert "[Dog Run   ] Astoria Park Dog Run  (40.77940, -73.92290)" in out
    assert "Astoria Skate Park" in out
    assert "Central Park" not in out


def test_route_prints_summary_and_steps(offline, capsys):
    asyncio.run(main.show_route("astoria park dog run", "Astoria Skate Park"))

    out = capsys.readouterr().out
    assert "From: Astoria Park Dog Run (Dog Run)" in out
    assert "To:   Astoria Skate Park (Skate Park)" in out
    assert "1 min, 95m, 2 route points" in out
    assert " 1. Head west (95m)" in out


def test_route_rejects_unknown_and_unplaceable_names(offline):
    with pytest.raises(InvalidInputError):
        asyncio.run(main.show_route("Nowhere", "Astoria Skate Park"))
    with pytest.raises(InvalidInputError):
        asyncio.run(main.show_route("brooklyn bridge skate", "Astoria Skate Park"))


def test_route_rejects_same_place_twice(offline):
    with pytest.raises(InvalidInputError):
        asyncio.run(main.show_route("Astoria Skate Park", "astoria skate park"))
