import threading

import pytest

from teryt.autocomplete import AutocompleteService
from teryt.models import MunicipalityCode

from conftest import CITY_HEADER, STREET_HEADER, write_dataset


def test_search_streets_empty_query_returns_nothing(service):
    assert service.search_streets("", 10) == []
    assert service.search_streets("", 1000) == []


def test_search_streets_non_positive_limit(service):
    assert service.search_streets("chop", 0) == []
    assert service.search_streets("chop", -5) == []


def test_search_streets_deduplicates_by_full_name(service):
    """
    Tests that two ULIC rows sharing the display name "ul. Chopina" yield one result.
    """
    results = service.search_streets("chop", 10)
    full_names = [street.full_name for street in results]

    assert full_names.count("ul. Chopina") == 1
    assert "al. Chopina" in full_names
    assert "ul. Fryderyka Chopina" in full_names
    assert results[full_names.index("ul. Chopina")].street_id == 200


def test_search_streets_prefix_matches_first(service):
    results = service.search_streets("chop", 10)

    assert [street.full_name for street in results] == [
        "ul. Chopina",
        "al. Chopina",
        "ul. Fryderyka Chopina",
    ]


def test_search_streets_is_case_insensitive_and_trims(service):
    results = service.search_streets("  SPORT ", 10)
    # Both Sportowa rows share the display name "ul. Sportowa"
    assert [street.full_name for street in results] == ["ul. Sportowa"]


def test_search_streets_matches_main_name_only(service):
    assert service.search_streets("piłsud", 10) == []
    assert [s.full_name for s in service.search_streets("józef", 10)] == ["ul. Józefa Piłsudskiego"]


def test_search_streets_stops_at_limit(service):
    results = service.search_streets("a", 2)
    assert len(results) == 2
    # The scan stops after the first two distinct matches in file order
    assert {street.full_name for street in results} == {"ul. Chopina", "ul. Fryderyka Chopina"}


def test_search_cities_with_query_ranks_prefix_first(service):
    results = service.search_cities("krak", limit=10)
    assert [city.name for city in results] == ["Kraków", "Krakówek", "Podkrakowie"]


def test_search_cities_deduplicates_by_name_and_location(service):
    results = service.search_cities("kraków", limit=10)
    assert [city.name for city in results].count("Kraków") == 1


def test_search_cities_woj_filter(service):
    """
    Tests that a woj filter excludes records from other voivodeships.
    """
    results = service.search_cities("krak", 12, 0, 0, 5)
    assert results
    assert all(city.woj == 12 for city in results)
    assert "Krakówek" not in [city.name for city in results]


def test_search_cities_conjunctive_filters(service):
    results = service.search_cities("", 12, 6, 3, 10)
    assert [city.name for city in results] == ["Bolechowice", "Podkrakowie"]


def test_search_cities_empty_query_matches_all_sorted_by_name(service):
    results = service.search_cities("", 0, 0, 0, 10)
    names = [city.name for city in results]

    assert names == sorted(names)
    assert names == ["Bolechowice", "Kraków", "Krakówek", "Podkrakowie", "Warszawa"]


def test_search_cities_empty_query_with_woj_filter(service):
    results = service.search_cities("", 14, 0, 0, 10)
    assert [city.name for city in results] == ["Warszawa"]


def test_search_cities_non_positive_limit(service):
    assert service.search_cities("", limit=0) == []


def test_gmi_for_street_exact_match(service):
    assert service.gmi_for_street("Chopina") == [
        MunicipalityCode(2, 64, 1),
        MunicipalityCode(12, 34, 56),
    ]


def test_gmi_for_street_is_case_insensitive_and_sorted(service):
    codes = service.gmi_for_street("  sportowa ")
    assert codes == [MunicipalityCode(12, 61, 1), MunicipalityCode(14, 65, 1)]
    assert service.gmi_for_street("SPORTOWA") == codes


def test_gmi_for_street_does_not_match_partial_names(service):
    assert service.gmi_for_street("Chop") == []
    assert MunicipalityCode(14, 65, 1) not in service.gmi_for_street("Chopina")


def test_gmi_for_street_empty_name(service):
    assert service.gmi_for_street("") == []
    assert service.gmi_for_street("   ") == []


def test_concrete_chopina_scenario(tmp_path):
    path = write_dataset(tmp_path / "ULIC.csv", STREET_HEADER, [
        "12;34;56;1;100;200;ul.;Chopina;;x",
        "12;34;56;1;101;201;ul.;Chopina;;x",
        "12;34;56;1;101;202;ul.;Chopinowska;x",
    ])
    service = AutocompleteService()
    result = service.load_streets(path)

    assert len(result.records) == 2
    assert result.skipped == 1
    assert result.records[0].full_name == result.records[1].full_name == "ul. Chopina"
    assert [s.full_name for s in service.search_streets("chop", 10)] == ["ul. Chopina"]
    assert service.gmi_for_street("Chopina") == [MunicipalityCode(12, 34, 56)]


def test_queries_before_load_return_empty():
    service = AutocompleteService()
    assert service.loaded is False
    assert service.search_streets("chop", 10) == []
    assert service.search_cities("", limit=10) == []
    assert service.gmi_for_street("Chopina") == []


def test_load_failure_keeps_previous_data(service, tmp_path):
    with pytest.raises(FileNotFoundError):
        service.load_streets(tmp_path / "missing.csv")

    assert len(service.search_streets("chop", 10)) == 3
    # The lock must have been released by the failed load
    assert service.search_cities("krak", limit=1)


def test_reload_replaces_dataset(service, tmp_path):
    path = write_dataset(tmp_path / "SIMC_new.csv", CITY_HEADER, [
        "2;1;1;1;96;1;Wrocław;0986283;0986283;x",
    ])
    service.load_cities(path)

    assert [city.name for city in service.search_cities("", limit=10)] == ["Wrocław"]


def test_get_stats(service, street_file, city_file):
    stats = service.get_stats()

    assert stats["loaded"] is True
    assert stats["total_streets"] == 7
    assert stats["total_cities"] == 6
    assert stats["streets_file"] == str(street_file)
    assert stats["cities_file"] == str(city_file)
    assert stats["streets_load_time_seconds"] >= 0


def test_get_stats_before_load():
    stats = AutocompleteService().get_stats()
    assert stats["loaded"] is False
    assert stats["total_streets"] == 0
    assert stats["streets_file"] is None


def test_concurrent_searches(service):
    errors = []

    def worker():
        try:
            for _ in range(50):
                assert len(service.search_streets("chop", 10)) == 3
                assert service.gmi_for_street("Sportowa")
        except AssertionError as e:
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
