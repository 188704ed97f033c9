"""Tests for the geopeaks Python API.

Tests cover the five operations exposed at the package level. The store
is a GeoStore wrapped around a mocked redis client, so every assertion
is about which commands are sent and how replies are shaped.
"""

import logging
from unittest.mock import patch

import pandas as pd
import pytest

from geopeaks.api import (
    ExportError,
    GeoPeaksError,
    LocationNotFoundError,
    SearchError,
    export,
    find_nearby,
    flush,
    load_locations,
    lookup,
    resolve_search,
    seed,
)
from geopeaks.core.exceptions import ConfigError
from geopeaks.core.locations import (
    CITIES,
    PEAKS,
    GeoSetDefinition,
    GeoSetRegistry,
    Location,
)
from geopeaks.core.store import NearbyResult


class TestSeed:
    """Test loading the built-in records."""

    def test_seed_adds_both_sets(self, store, redis_client):
        redis_client.geoadd.side_effect = [6, 6]

        assert seed(store=store) == {"cities": 6, "peaks": 6}

        calls = redis_client.geoadd.call_args_list
        assert [c.args[0] for c in calls] == ["cities", "peaks"]
        assert len(calls[0].args[1]) == 3 * len(CITIES)
        assert len(calls[1].args[1]) == 3 * len(PEAKS)

    def test_seed_again_reports_nothing_new(self, store, redis_client):
        redis_client.geoadd.return_value = 0

        assert seed(store=store) == {"cities": 0, "peaks": 0}

    def test_seed_sends_longitude_before_latitude(self, store, redis_client):
        redis_client.geoadd.return_value = 6
        seed(store=store)

        peak_values = redis_client.geoadd.call_args_list[1].args[1]
        idx = peak_values.index("Grossglockner")
        assert peak_values[idx - 2 : idx] == [12.6946761, 47.0741846]

    def test_seed_uses_default_store(self, store, redis_client):
        redis_client.geoadd.return_value = 6
        with patch("geopeaks.api.get_store", return_value=store) as mock_get:
            seed()
        mock_get.assert_called_once_with()


class TestLookup:
    """Test coordinate lookups in the cities geo-set."""

    def test_lookup_returns_location(self, store, redis_client):
        redis_client.geopos.return_value = [(9.037650, 45.462889)]

        loc = lookup("Milan", store=store)

        assert loc == Location("Milan", 45.462889, 9.037650)
        redis_client.geopos.assert_called_once_with("cities", "Milan")

    def test_lookup_unknown_raises(self, store, redis_client):
        redis_client.geopos.return_value = [None]

        with pytest.raises(LocationNotFoundError) as exc_info:
            lookup("Atlantis", store=store)

        assert exc_info.value.set_name == "cities"
        assert exc_info.value.name == "Atlantis"
        assert isinstance(exc_info.value, GeoPeaksError)

    def test_lookup_does_not_search_peaks(self, store, redis_client):
        redis_client.geopos.return_value = [None]

        with pytest.raises(LocationNotFoundError):
            lookup("Matterhorn", store=store)

        redis_client.geopos.assert_called_once_with("cities", "Matterhorn")


class TestFindNearby:
    """Test radius queries around a city."""

    def test_returns_results_in_store_order(self, store, redis_client):
        redis_client.geopos.return_value = [(9.037650, 45.462889)]
        redis_client.geosearch.return_value = [
            ["Monte Rosa", 97.1],
            ["Matterhorn", 107.3],
        ]

        results = find_nearby("Milan", store=store)

        assert results == [
            NearbyResult("Monte Rosa", 97.1),
            NearbyResult("Matterhorn", 107.3),
        ]

    def test_defaults_to_200_km(self, store, redis_client):
        redis_client.geopos.return_value = [(9.0, 45.0)]
        redis_client.geosearch.return_value = []

        find_nearby("Milan", store=store)

        kwargs = redis_client.geosearch.call_args.kwargs
        assert kwargs["radius"] == 200.0
        assert kwargs["unit"] == "km"
        assert kwargs["sort"] == "ASC"
        assert kwargs["withdist"] is True

    def test_env_defaults_apply(self, store, redis_client, monkeypatch):
        monkeypatch.setenv("GEOPEAKS_RADIUS", "75")
        monkeypatch.setenv("GEOPEAKS_UNIT", "mi")
        redis_client.geopos.return_value = [(9.0, 45.0)]
        redis_client.geosearch.return_value = []

        find_nearby("Milan", store=store)

        kwargs = redis_client.geosearch.call_args.kwargs
        assert kwargs["radius"] == 75.0
        assert kwargs["unit"] == "mi"

    @pytest.mark.parametrize("radius", [0, -10])
    def test_non_positive_radius_rejected(self, store, redis_client, radius):
        with pytest.raises(SearchError, match="Radius must be positive"):
            find_nearby("Milan", radius=radius, store=store)
        redis_client.geopos.assert_not_called()

    def test_unknown_unit_rejected(self, store):
        with pytest.raises(ValueError, match="Unknown unit"):
            find_nearby("Milan", unit="furlong", store=store)

    def test_unknown_city_raises(self, store, redis_client):
        redis_client.geopos.return_value = [None]

        with pytest.raises(LocationNotFoundError):
            find_nearby("Atlantis", store=store)
        redis_client.geosearch.assert_not_called()

    def test_explicit_arguments_ignore_bad_env(self, store, redis_client, monkeypatch):
        monkeypatch.setenv("GEOPEAKS_RADIUS", "far")
        monkeypatch.setenv("GEOPEAKS_UNIT", "league")
        redis_client.geopos.return_value = [(8.466676, 47.37755)]
        redis_client.geosearch.return_value = []

        find_nearby("Zurich", radius=50, unit="km", store=store)

        kwargs = redis_client.geosearch.call_args.kwargs
        assert kwargs["radius"] == 50
        assert kwargs["unit"] == "km"

    def test_bad_env_used_for_missing_argument_raises(self, store, monkeypatch):
        monkeypatch.setenv("GEOPEAKS_RADIUS", "far")

        with pytest.raises(ConfigError, match="GEOPEAKS_RADIUS"):
            find_nearby("Zurich", unit="km", store=store)


class TestResolveSearch:
    def test_defaults(self):
        assert resolve_search() == (200.0, "km")

    def test_unit_is_lowercased(self):
        assert resolve_search(5, "FT") == (5, "ft")

    def test_only_missing_unit_read_from_env(self, monkeypatch):
        monkeypatch.setenv("GEOPEAKS_RADIUS", "far")
        monkeypatch.setenv("GEOPEAKS_UNIT", "mi")

        assert resolve_search(radius=30) == (30, "mi")


class TestExport:
    """Test reading geo-sets back and writing CSV."""

    @pytest.fixture
    def populated(self, redis_client):
        members = {"cities": ["Geneva", "Nice"], "peaks": ["Mont Blanc"]}
        positions = {
            "Geneva": (6.109069, 46.205084),
            "Nice": (7.182778, 43.703293),
            "Mont Blanc": (6.847665, 45.83265),
        }
        redis_client.zrange.side_effect = lambda key, start, end: members[key]
        redis_client.geopos.side_effect = lambda key, name: [positions.get(name)]
        return members

    def test_load_locations_returns_dataframe(self, store, populated):
        df = load_locations("cities", store=store)

        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["name", "lat", "lon"]
        assert df["name"].tolist() == ["Geneva", "Nice"]
        assert df.loc[0, "lat"] == pytest.approx(46.205084)
        assert df.loc[0, "lon"] == pytest.approx(6.109069)

    def test_load_locations_skips_vanished_member(
        self, store, redis_client, caplog, monkeypatch
    ):
        # the package logger does not propagate by default; caplog listens on root
        monkeypatch.setattr(logging.getLogger("geopeaks"), "propagate", True)
        redis_client.zrange.return_value = ["Zurich", "Ghost"]
        redis_client.geopos.side_effect = lambda key, name: (
            [(8.466676, 47.37755)] if name == "Zurich" else [None]
        )

        with caplog.at_level(logging.WARNING, logger="geopeaks.api"):
            df = load_locations("cities", store=store)

        assert df["name"].tolist() == ["Zurich"]
        assert "'Ghost' vanished from 'cities'" in caplog.text

    def test_export_writes_cities_then_peaks(self, store, populated, tmp_path):
        target = tmp_path / "out.csv"

        rows = export(target, store=store)

        assert rows == 3
        assert target.read_text().splitlines() == [
            "name,lat,lon,marker-color",
            "Geneva,46.205084,6.109069,#CD0000",
            "Nice,43.703293,7.182778,#CD0000",
            "Mont Blanc,45.832650,6.847665,#0000CD",
        ]

    def test_export_empty_database_writes_header(self, store, redis_client, tmp_path):
        redis_client.zrange.return_value = []
        target = tmp_path / "empty.csv"

        assert export(target, store=store) == 0
        assert target.read_text().splitlines() == ["name,lat,lon,marker-color"]

    def test_export_includes_registered_sets(self, store, redis_client, tmp_path):
        GeoSetRegistry.register(GeoSetDefinition("huts", "#00CD00"))
        redis_client.zrange.side_effect = lambda key, start, end: (
            ["Hoernlihuette"] if key == "huts" else []
        )
        redis_client.geopos.return_value = [(7.6797, 45.9823)]
        target = tmp_path / "huts.csv"

        export(target, store=store)

        assert target.read_text().splitlines()[1] == (
            "Hoernlihuette,45.982300,7.679700,#00CD00"
        )

    def test_export_unwritable_path_raises(self, store, populated, tmp_path):
        target = tmp_path / "missing" / "out.csv"

        with pytest.raises(ExportError) as exc_info:
            export(target, store=store)

        assert exc_info.value.path == str(target)


class TestFlush:
    def test_flush_calls_flushdb(self, store, redis_client):
        flush(store=store)
        redis_client.flushdb.assert_called_once_with()
