# fleetseed/services/geometry.py
"""
Geometric sampling for spatial demo data.

Points are (latitude, longitude) pairs treated as planar coordinates; the
regions involved are a few kilometres across so the flat approximation holds.
Every sampler takes the random source explicitly so results are reproducible.
"""

import json
import math
import random
from typing import List, NamedTuple, Sequence, Tuple

METERS_PER_DEGREE = 111_320.0
NEARBY_SPREAD = 0.002              # max jitter per axis, degrees (~200m)
MAX_POLYGON_ATTEMPTS = 100


class Point(NamedTuple):
    latitude: float
    longitude: float

    def as_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}


def meters_to_degrees(meters: float) -> float:
    return meters / METERS_PER_DEGREE


def random_point_in_disk(radius: float, center: Sequence[float], rng: random.Random) -> Point:
    """
    Uniform-by-area sample inside a disk.
    The distance is radius * sqrt(u); a linear draw would cluster points near the center.
    """
    distance = radius * math.sqrt(rng.random())
    angle = rng.uniform(0.0, 2.0 * math.pi)
    return Point(
        latitude=center[0] + distance * math.cos(angle),
        longitude=center[1] + distance * math.sin(angle),
    )


def nearby_point(center: Sequence[float], rng: random.Random, spread: float = NEARBY_SPREAD) -> Point:
    """Jitter a point by at most `spread` on each axis."""
    return Point(
        latitude=center[0] + rng.uniform(-spread, spread),
        longitude=center[1] + rng.uniform(-spread, spread),
    )


def midpoint(points: Sequence[Sequence[float]]) -> Point:
    if not points:
        raise ValueError("midpoint of an empty point sequence")
    count = len(points)
    return Point(
        latitude=sum(p[0] for p in points) / count,
        longitude=sum(p[1] for p in points) / count,
    )


def close_ring(vertices: Sequence[Point]) -> List[Point]:
    """Repeat the first vertex at the end so the ring is closed."""
    ring = list(vertices)
    if ring:
        ring.append(ring[0])
    return ring


def points_to_json(points: Sequence[Point]) -> str:
    return json.dumps([p.as_dict() for p in points])


def points_from_json(raw: str) -> List[Point]:
    return [Point(float(p["latitude"]), float(p["longitude"])) for p in json.loads(raw)]


def point_in_polygon(point: Sequence[float], ring: Sequence[Sequence[float]]) -> bool:
    """
    Even-odd ray casting over a simple ring. The ring may be open or closed;
    a closing vertex only adds a zero-length edge.
    """
    x, y = point[0], point[1]
    inside = False
    count = len(ring)
    j = count - 1
    for i in range(count):
        xi, yi = ring[i][0], ring[i][1]
        xj, yj = ring[j][0], ring[j][1]
        if (yi > y) != (yj > y):
            x_cross = xi + (y - yi) * (xj - xi) / (yj - yi)
            if x < x_cross:
                inside = not inside
        j = i
    return inside


def bounding_box(ring: Sequence[Sequence[float]]) -> Tuple[float, float, float, float]:
    xs = [p[0] for p in ring]
    ys = [p[1] for p in ring]
    return min(xs), min(ys), max(xs), max(ys)


def sample_inside_polygon(
    ring: Sequence[Sequence[float]],
    rng: random.Random,
    max_attempts: int = MAX_POLYGON_ATTEMPTS,
) -> Tuple[Point, bool]:
    """
    Rejection-sample the ring's bounding box.
    Returns (point, True) on success, or the last sample with False after max_attempts.
    """
    min_x, min_y, max_x, max_y = bounding_box(ring)
    candidate = Point(min_x, min_y)
    for _ in range(max_attempts):
        candidate = Point(rng.uniform(min_x, max_x), rng.uniform(min_y, max_y))
        if point_in_polygon(candidate, ring):
            return candidate, True
    return candidate, False
