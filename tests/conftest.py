import pytest


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def point_feature(lng, lat, **properties):
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lng, lat]},
        "properties": properties,
    }


def polygon_feature(ring, **properties):
    return {
        "type": "Feature",
        "geometry": {"type": "Polygon", "coordinates": [ring]},
        "properties": properties,
    }


def collection(*features):
    return {"type": "FeatureCollection", "features": list(features)}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def dog_runs():
    return collection(
        point_feature(-73.9229, 40.7794, name="Astoria Park Dog Run"),
        polygon_feature(
            [[-73.9654, 40.7829], [-73.9650, 40.7830], [-73.9651, 40.7825], [-73.9654, 40.7829]],
            dog_run_name="Central Park Dog Area",
        ),
    )


@pytest.fixture
def skate_parks():
    return collection(
        point_feature(-73.9237, 40.7790, skate_park_name="Astoria Skate Park"),
        {"type": "Feature", "geometry": None, "properties": {"name": "brooklyn bridge skate"}},
    )
