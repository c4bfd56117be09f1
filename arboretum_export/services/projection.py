"""Lambert Conformal Conic conversion for the RGF93 CC44 zone (EPSG:3944).

RGF93 is realised on the GRS80 ellipsoid and is treated as coincident with
WGS84, so converting projected metres to EPSG:4326 reduces to the inverse
of the conic projection.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from math import atan, atan2, copysign, cos, degrees, hypot, log, pi, radians, sin, sqrt, tan

from ..core import GeoPoint, ProjectionError

HALF_PI = pi / 2
MAX_ITERATIONS = 15
TOLERANCE = 1e-10


@dataclass(frozen=True)
class Ellipsoid:
    semi_major_axis: float
    inverse_flattening: float

    @property
    def eccentricity(self) -> float:
        flattening = 1 / self.inverse_flattening
        return sqrt(flattening * (2 - flattening))


GRS80 = Ellipsoid(semi_major_axis=6_378_137.0, inverse_flattening=298.257222101)


@dataclass(frozen=True)
class LambertConformalConic:
    """Two standard parallel Lambert Conformal Conic projection.

    Angles are expressed in degrees, false easting/northing in metres.
    """

    latitude_of_origin: float
    central_meridian: float
    standard_parallel_1: float
    standard_parallel_2: float
    false_easting: float
    false_northing: float
    ellipsoid: Ellipsoid = GRS80

    def _m(self, phi: float) -> float:
        e = self.ellipsoid.eccentricity
        return cos(phi) / sqrt(1 - (e * sin(phi)) ** 2)

    def _t(self, phi: float) -> float:
        e = self.ellipsoid.eccentricity
        esin = e * sin(phi)
        return tan(pi / 4 - phi / 2) / ((1 - esin) / (1 + esin)) ** (e / 2)

    @cached_property
    def _constants(self) -> tuple[float, float, float]:
        phi1 = radians(self.standard_parallel_1)
        phi2 = radians(self.standard_parallel_2)
        phi0 = radians(self.latitude_of_origin)
        m1, m2 = self._m(phi1), self._m(phi2)
        t1, t2 = self._t(phi1), self._t(phi2)

        if abs(phi1 - phi2) < TOLERANCE:
            n = sin(phi1)
        else:
            n = (log(m1) - log(m2)) / (log(t1) - log(t2))
        scaled_f = self.ellipsoid.semi_major_axis * m1 / (n * t1**n)
        rho0 = scaled_f * self._t(phi0) ** n
        return n, scaled_f, rho0

    def inverse(self, easting: float, northing: float) -> GeoPoint:
        """Convert projected metres to geographic degrees."""

        n, scaled_f, rho0 = self._constants
        dx = easting - self.false_easting
        dy = rho0 - (northing - self.false_northing)

        rho = copysign(hypot(dx, dy), n)
        if rho == 0:
            return GeoPoint(lat=copysign(90.0, n), lng=self.central_meridian)
        if n < 0:
            dx, dy = -dx, -dy

        theta = atan2(dx, dy)
        t = (rho / scaled_f) ** (1 / n)
        phi = self._latitude_from_t(t)
        lam = theta / n + radians(self.central_meridian)
        return GeoPoint(lat=degrees(phi), lng=degrees(lam))

    def forward(self, lat: float, lng: float) -> tuple[float, float]:
        """Convert geographic degrees to projected ``(easting, northing)``."""

        n, scaled_f, rho0 = self._constants
        phi = radians(lat)
        if abs(abs(phi) - HALF_PI) < TOLERANCE:
            rho = 0.0
        else:
            rho = scaled_f * self._t(phi) ** n
        theta = n * (radians(lng) - radians(self.central_meridian))
        easting = self.false_easting + rho * sin(theta)
        northing = self.false_northing + rho0 - rho * cos(theta)
        return easting, northing

    def _latitude_from_t(self, t: float) -> float:
        e = self.ellipsoid.eccentricity
        phi = HALF_PI - 2 * atan(t)
        for _ in range(MAX_ITERATIONS):
            esin = e * sin(phi)
            updated = HALF_PI - 2 * atan(t * ((1 - esin) / (1 + esin)) ** (e / 2))
            delta = updated - phi
            phi = updated
            if abs(delta) <= TOLERANCE:
                break
        return phi


# EPSG:3944, RGF93 v1 / CC44
CC44 = LambertConformalConic(
    latitude_of_origin=44.0,
    central_meridian=3.0,
    standard_parallel_1=43.25,
    standard_parallel_2=44.75,
    false_easting=1_700_000.0,
    false_northing=3_200_000.0,
)


def _as_float(value: object, field_name: str) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ProjectionError(
            f"Field '{field_name}' must contain a numeric value",
            details={"field": field_name, "value": repr(value)},
        ) from exc


def project(easting: object, northing: object, *, projection: LambertConformalConic = CC44) -> GeoPoint:
    """Convert an EPSG:3944 coordinate pair to an EPSG:4326 :class:`GeoPoint`."""

    return projection.inverse(_as_float(easting, "easting"), _as_float(northing, "northing"))
