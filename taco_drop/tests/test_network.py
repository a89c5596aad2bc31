"""
Tests for the places service client and the background lookup thread.
No real network access: requests goes through a stub session.
"""
import pytest
import requests
from taco_drop.network import (
    FixedLocationProvider, LocationError, LocationService, NominatimPlacesProvider
)
from taco_drop.gameplay.geo import Coordinate, DEFAULT_LOCATION, distance_meters
from taco_drop.gameplay.search import (
    Place, SearchError, NoPlacesFound, StaticPlacesProvider
)


HOME = Coordinate(34.0522, -118.2437)


class FakeResponse:
    def __init__(self, data=None, status_code=200, bad_json=False):
        self.data = data
        self.status_code = status_code
        self.bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self.bad_json:
            raise ValueError("not json")
        return self.data


class FakeSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error:
            raise self.error
        return self.response


class RecordingPlaces:
    """Remembers where it was asked to search."""

    def __init__(self):
        self.centers = []

    def search(self, query, center, radius_meters):
        self.centers.append(center)
        return [Place(query, center)]


def make_provider(session: FakeSession) -> NominatimPlacesProvider:
    return NominatimPlacesProvider(
        "https://example.test/search", "taco-drop-tests", timeout=3.0, session=session
    )


class TestNominatimPlacesProvider:
    """Tests for NominatimPlacesProvider."""

    def test_parses_places(self):
        """Entries become places with float coordinates."""
        session = FakeSession(FakeResponse([
            {"lat": "34.06", "lon": "-118.25", "name": "Taco Bell"},
            {"lat": "34.07", "lon": "-118.24", "display_name": "Taco Bell, Main St"},
        ]))
        places = make_provider(session).search("Taco Bell", HOME, 10000)

        assert places == [
            Place("Taco Bell", Coordinate(34.06, -118.25)),
            Place("Taco Bell, Main St", Coordinate(34.07, -118.24)),
        ]

    def test_request_parameters(self):
        """Query is bounded to a box around the player."""
        session = FakeSession(FakeResponse([]))
        make_provider(session).search("Taco Bell", HOME, 10000)

        url, params, timeout = session.calls[0]
        assert url == "https://example.test/search"
        assert timeout == 3.0
        assert params["q"] == "Taco Bell"
        assert params["bounded"] == 1
        west, north, east, south = (float(v) for v in params["viewbox"].split(","))
        assert west < HOME.longitude < east
        assert south < HOME.latitude < north
        assert session.headers["User-Agent"] == "taco-drop-tests"

    def test_skips_malformed_entries(self):
        """Entries without usable coordinates are ignored."""
        session = FakeSession(FakeResponse([
            {"name": "no coords"},
            {"lat": "abc", "lon": "1"},
            {"lat": "34.0", "lon": "-118.0", "name": "Taco Bell"},
        ]))
        places = make_provider(session).search("Taco Bell", HOME, 10000)
        assert [p.name for p in places] == ["Taco Bell"]

    def test_connection_error(self):
        """Transport errors become SearchError."""
        session = FakeSession(error=requests.ConnectionError("offline"))
        with pytest.raises(SearchError):
            make_provider(session).search("Taco Bell", HOME, 10000)

    def test_http_error(self):
        """HTTP error statuses become SearchError."""
        session = FakeSession(FakeResponse(status_code=503))
        with pytest.raises(SearchError):
            make_provider(session).search("Taco Bell", HOME, 10000)

    def test_bad_json(self):
        """Undecodable bodies become SearchError."""
        session = FakeSession(FakeResponse(bad_json=True))
        with pytest.raises(SearchError):
            make_provider(session).search("Taco Bell", HOME, 10000)

    def test_unexpected_shape(self):
        """A non-list body is rejected."""
        session = FakeSession(FakeResponse({"error": "nope"}))
        with pytest.raises(SearchError):
            make_provider(session).search("Taco Bell", HOME, 10000)


class TestFixedLocationProvider:
    """Tests for FixedLocationProvider."""

    def test_returns_coordinate(self):
        assert FixedLocationProvider(HOME).current_location() == HOME

    def test_unset_raises(self):
        with pytest.raises(LocationError):
            FixedLocationProvider().current_location()


class TestLocationService:
    """Tests for LocationService."""

    def test_lookup(self):
        """Synchronous lookup measures to the nearest place."""
        place = Place("Taco Bell", Coordinate(HOME.latitude + 0.01, HOME.longitude))
        service = LocationService(StaticPlacesProvider([place]), FixedLocationProvider(HOME))

        result = service.lookup()
        assert result.ok
        assert result.place == place
        assert result.distance_miles == pytest.approx(
            distance_meters(HOME, place.coordinate) / 1609.34
        )

    def test_missing_location_uses_default(self):
        """Without a location fix the default location is searched."""
        places = RecordingPlaces()
        service = LocationService(places, FixedLocationProvider())

        result = service.lookup()
        assert result.ok
        assert places.centers == [DEFAULT_LOCATION]

    def test_lookup_error_is_a_result(self):
        """Search failures come back as results."""
        service = LocationService(StaticPlacesProvider([]), FixedLocationProvider(HOME))
        result = service.lookup()
        assert isinstance(result.error, NoPlacesFound)

    def test_poll_empty(self):
        """Nothing requested, nothing returned."""
        service = LocationService(StaticPlacesProvider([]), FixedLocationProvider(HOME))
        assert service.poll() == []

    def test_background_thread(self):
        """Requested lookups arrive on the results queue."""
        place = Place("Taco Bell", HOME)
        service = LocationService(StaticPlacesProvider([place]), FixedLocationProvider(HOME))
        service.start()
        try:
            service.request()
            result = service.results.get(timeout=5.0)
        finally:
            service.stop()

        assert result.ok
        assert result.distance_miles == pytest.approx(0.0)

    def test_unexpected_failure_becomes_error(self):
        """A crash inside the lookup is reported, not lost."""
        class Broken:
            def search(self, query, center, radius_meters):
                raise RuntimeError("kaboom")

        service = LocationService(Broken(), FixedLocationProvider(HOME))
        service.start()
        try:
            service.request()
            result = service.results.get(timeout=5.0)
        finally:
            service.stop()

        assert not result.ok
        assert "kaboom" in str(result.error)


class TestOfflinePlaces:
    """Tests for the --offline fake place."""

    def test_distance_matches(self):
        """The fake place sits at the requested distance."""
        from taco_drop.main import offline_places
        from taco_drop.gameplay.search import find_nearest

        result = find_nearest(offline_places("Taco Bell", HOME, 2.5), "Taco Bell", HOME)
        assert result.distance_miles == pytest.approx(2.5, rel=1e-6)


class TestCommandLine:
    """Tests for the location status option."""

    def make_args(self, *argv):
        from types import SimpleNamespace
        from taco_drop.main import build_parser

        settings = SimpleNamespace(latitude=None, longitude=None, search_query="Taco Bell")
        return build_parser(settings).parse_args(list(argv))

    def test_default_status_is_granted(self):
        """Without the option the game may measure."""
        from taco_drop.gameplay.permissions import LocationPermission, permission_from_status

        args = self.make_args()
        assert permission_from_status(args.location_status) == LocationPermission.GRANTED

    @pytest.mark.parametrize("status,expected", [
        ("denied", "DENIED"),
        ("restricted", "DENIED"),
        ("notDetermined", "NOT_DETERMINED"),
        ("authorizedAlways", "GRANTED"),
    ])
    def test_status_option(self, status, expected):
        """Status names go through the platform mapping."""
        from taco_drop.gameplay.permissions import permission_from_status

        args = self.make_args("--location-status", status)
        assert permission_from_status(args.location_status).name == expected
