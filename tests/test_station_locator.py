from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from borne_api.core.errors import InvalidArgumentError
from borne_api.models.reservation import Reservation, ReservationStatus
from borne_api.models.station import Station, StationStatus
from borne_api.services.station_locator import GeoPoint, StationLocator

PARIS = GeoPoint(Decimal("48.8566"), Decimal("2.3522"))
NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


class FakeStationLister:
    def __init__(self, stations=None, error=None):
        self.stations = stations or []
        self.error = error
        self.calls = 0

    async def list_all_stations(self):
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.stations)


class FakeReservationLister:
    def __init__(self, reservations=None, error=None):
        self.reservations = reservations or []
        self.error = error
        self.calls = 0

    async def list_all_reservations(self):
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.reservations)


def make_station(station_id, latitude="48.8566", longitude="2.3522", name=None):
    return Station(
        id=station_id,
        name=name or f"Borne {station_id}",
        latitude=Decimal(latitude),
        longitude=Decimal(longitude),
        power_kw=Decimal("50.0"),
        instructions="Instructions de test",
        standing=True,
        status=StationStatus.ACTIVE,
        occupied=False,
    )


def make_reservation(reservation_id, station_id, start_at, end_at, status=ReservationStatus.ACCEPTED):
    return Reservation(
        id=reservation_id,
        station_id=station_id,
        start_at=start_at,
        end_at=end_at,
        status=status,
    )


def make_locator(stations=(), reservations=()):
    station_lister = FakeStationLister(list(stations))
    reservation_lister = FakeReservationLister(list(reservations))
    return StationLocator(station_lister, reservation_lister), station_lister, reservation_lister


# ---------------------------------------------------------------------
# find_nearby
# ---------------------------------------------------------------------


@pytest.mark.asyncio
async def test_find_nearby_returns_station_at_center():
    locator, stations, _ = make_locator([make_station(1)])

    result = await locator.find_nearby(PARIS, 5.0)

    assert [s.id for s in result] == [1]
    assert result[0].name == "Borne 1"
    assert result[0].latitude == pytest.approx(48.8566)
    assert stations.calls == 1


@pytest.mark.asyncio
async def test_find_nearby_excludes_distant_stations_and_keeps_order():
    locator, _, _ = make_locator(
        [
            make_station(3, "48.8600", "2.3500"),
            make_station(1, "45.7578", "4.8320"),  # Lyon
            make_station(2, "48.8500", "2.3600"),
        ]
    )

    result = await locator.find_nearby(PARIS, 5.0)

    assert [s.id for s in result] == [3, 2]


@pytest.mark.asyncio
async def test_find_nearby_includes_station_exactly_on_radius():
    station = make_station(1, "48.8566", "2.4522")
    radius = StationLocator.distance_km(PARIS.latitude, PARIS.longitude, station.latitude, station.longitude)
    locator, _, _ = make_locator([station])

    assert [s.id for s in await locator.find_nearby(PARIS, radius)] == [1]
    assert await locator.find_nearby(PARIS, radius - 1e-9) == []


@pytest.mark.asyncio
async def test_find_nearby_returns_views_not_entities():
    locator, _, _ = make_locator([make_station(1)])

    result = await locator.find_nearby(PARIS, 5.0)

    assert not isinstance(result[0], Station)
    assert result[0].model_dump()["status"] == StationStatus.ACTIVE


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "center",
    [
        GeoPoint(Decimal("100.0"), Decimal("200.0")),
        GeoPoint(Decimal("48.0"), Decimal("200.0")),
        GeoPoint(Decimal("100.0"), Decimal("2.0")),
        GeoPoint(None, Decimal("2.0")),
        GeoPoint(Decimal("48.0"), None),
    ],
)
async def test_find_nearby_rejects_invalid_center_without_fetching(center):
    locator, stations, reservations = make_locator([make_station(1)])

    with pytest.raises(InvalidArgumentError):
        await locator.find_nearby(center, 5.0)

    assert stations.calls == 0
    assert reservations.calls == 0


@pytest.mark.asyncio
async def test_find_nearby_propagates_lister_errors():
    locator = StationLocator(FakeStationLister(error=RuntimeError("db down")), FakeReservationLister())

    with pytest.raises(RuntimeError, match="db down"):
        await locator.find_nearby(PARIS, 5.0)


@pytest.mark.asyncio
async def test_find_free_propagates_reservation_lister_errors():
    stations = FakeStationLister([make_station(1)])
    reservations = FakeReservationLister(error=ConnectionError("reservations unavailable"))
    locator = StationLocator(stations, reservations)

    with pytest.raises(ConnectionError, match="reservations unavailable"):
        await locator.find_free(NOW)

    with pytest.raises(ConnectionError, match="reservations unavailable"):
        await locator.find_free_nearby(PARIS, 5.0, NOW)

    assert reservations.calls == 2


# ---------------------------------------------------------------------
# find_free
# ---------------------------------------------------------------------


@pytest.mark.asyncio
async def test_find_free_without_reservations():
    locator, stations, reservations = make_locator([make_station(1)])

    result = await locator.find_free(NOW)

    assert [s.id for s in result] == [1]
    assert stations.calls == 1
    assert reservations.calls == 1


@pytest.mark.asyncio
async def test_find_free_excludes_station_with_accepted_reservation_covering_instant():
    reservation = make_reservation(2, 1, NOW + timedelta(days=1), NOW + timedelta(days=2))
    locator, _, _ = make_locator([make_station(1)], [reservation])

    result = await locator.find_free(NOW + timedelta(days=1, hours=12))

    assert result == []


@pytest.mark.asyncio
async def test_find_free_ignores_reservations_outside_instant():
    past = make_reservation(1, 1, NOW - timedelta(days=2), NOW - timedelta(days=1))
    future = make_reservation(2, 1, NOW + timedelta(days=1), NOW + timedelta(days=2))
    locator, _, _ = make_locator([make_station(1)], [past, future])

    assert [s.id for s in await locator.find_free(NOW)] == [1]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status",
    [
        ReservationStatus.PENDING,
        ReservationStatus.REFUSED,
        ReservationStatus.CANCELLED,
        ReservationStatus.COMPLETED,
    ],
)
async def test_find_free_ignores_non_accepted_reservations(status):
    reservation = make_reservation(1, 1, NOW - timedelta(hours=1), NOW + timedelta(hours=1), status=status)
    locator, _, _ = make_locator([make_station(1)], [reservation])

    assert [s.id for s in await locator.find_free(NOW)] == [1]


@pytest.mark.asyncio
async def test_find_free_boundary_instants_are_free():
    reservation = make_reservation(1, 1, NOW, NOW + timedelta(hours=2))
    locator, _, _ = make_locator([make_station(1)], [reservation])

    assert [s.id for s in await locator.find_free(NOW)] == [1]
    assert [s.id for s in await locator.find_free(NOW + timedelta(hours=2))] == [1]
    assert await locator.find_free(NOW + timedelta(seconds=1)) == []


@pytest.mark.asyncio
async def test_find_free_only_excludes_reserved_station_and_keeps_order():
    reservation = make_reservation(1, 2, NOW - timedelta(hours=1), NOW + timedelta(hours=1))
    locator, _, _ = make_locator([make_station(3), make_station(2), make_station(1)], [reservation])

    assert [s.id for s in await locator.find_free(NOW)] == [3, 1]


@pytest.mark.asyncio
async def test_find_free_treats_naive_timestamps_as_utc():
    reservation = make_reservation(
        1,
        1,
        datetime(2026, 3, 2, 11, 0),
        datetime(2026, 3, 2, 13, 0),
    )
    locator, _, _ = make_locator([make_station(1)], [reservation])

    assert await locator.find_free(NOW) == []
    assert await locator.find_free(datetime(2026, 3, 2, 12, 0)) == []


@pytest.mark.asyncio
async def test_find_free_rejects_missing_instant():
    locator, stations, reservations = make_locator([make_station(1)])

    with pytest.raises(InvalidArgumentError):
        await locator.find_free(None)

    assert stations.calls == 0
    assert reservations.calls == 0


# ---------------------------------------------------------------------
# find_free_nearby
# ---------------------------------------------------------------------


@pytest.mark.asyncio
async def test_find_free_nearby_with_valid_parameters():
    locator, stations, reservations = make_locator([make_station(1)])

    result = await locator.find_free_nearby(PARIS, 5.0, NOW)

    assert [s.id for s in result] == [1]
    assert stations.calls == 2
    assert reservations.calls == 1


@pytest.mark.asyncio
async def test_find_free_nearby_is_intersection_of_free_and_nearby():
    stations = [
        make_station(1, "48.8600", "2.3500"),  # near, free
        make_station(2, "48.8500", "2.3600"),  # near, occupied
        make_station(3, "45.7578", "4.8320"),  # far, free
        make_station(4, "48.8566", "2.3522"),  # near, free
    ]
    reservations = [
        make_reservation(1, 2, NOW - timedelta(hours=1), NOW + timedelta(hours=1)),
        make_reservation(2, 4, NOW - timedelta(hours=1), NOW + timedelta(hours=1), ReservationStatus.PENDING),
    ]
    locator, _, _ = make_locator(stations, reservations)

    combined = await locator.find_free_nearby(PARIS, 5.0, NOW)
    free_ids = {s.id for s in await locator.find_free(NOW)}
    nearby_ids = [s.id for s in await locator.find_nearby(PARIS, 5.0)]

    assert [s.id for s in combined] == [i for i in nearby_ids if i in free_ids]
    assert [s.id for s in combined] == [1, 4]


@pytest.mark.asyncio
async def test_find_free_nearby_rejects_missing_instant():
    locator, stations, reservations = make_locator([make_station(1)])

    with pytest.raises(InvalidArgumentError):
        await locator.find_free_nearby(PARIS, 5.0, None)

    assert stations.calls == 0
    assert reservations.calls == 0


@pytest.mark.asyncio
async def test_find_free_nearby_rejects_invalid_coordinates():
    locator, stations, reservations = make_locator([make_station(1)])

    with pytest.raises(InvalidArgumentError):
        await locator.find_free_nearby(GeoPoint(Decimal("100.0"), Decimal("200.0")), 5.0, NOW)

    assert stations.calls == 0
    assert reservations.calls == 0


@pytest.mark.asyncio
async def test_find_free_nearby_rejects_when_both_arguments_are_invalid():
    locator, _, _ = make_locator([make_station(1)])

    with pytest.raises(InvalidArgumentError):
        await locator.find_free_nearby(GeoPoint(None, None), 5.0, None)
