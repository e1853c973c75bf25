"""Great-circle distance helpers."""

from math import atan2, cos, pi, radians, sin, sqrt

from foodshare.domain.models import Coordinate

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE_LATITUDE = EARTH_RADIUS_KM * pi / 180


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the Haversine distance between two points in kilometers."""
    d_lat = radians(lat2 - lat1)
    d_lon = radians(lon2 - lon1)
    a = (
        sin(d_lat / 2) ** 2
        + cos(radians(lat1)) * cos(radians(lat2)) * sin(d_lon / 2) ** 2
    )
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(a: Coordinate, b: Coordinate) -> float:
    """Return the distance between two coordinates in kilometers."""
    return distance_km(a.latitude, a.longitude, b.latitude, b.longitude)


def latitude_band(center: Coordinate, radius_km: float) -> tuple[float, float]:
    """Return a latitude range that contains every point within the radius."""
    # Slightly wider than exact so rounding never drops a boundary point.
    delta = max(radius_km, 0.0) / KM_PER_DEGREE_LATITUDE + 1e-6
    return max(center.latitude - delta, -90.0), min(center.latitude + delta, 90.0)
