import pytest

from teryt.autocomplete import AutocompleteService

STREET_HEADER = "WOJ;POW;GMI;RODZ_GMI;SYM;SYM_UL;CECHA;NAZWA_1;NAZWA_2;STAN_NA"
CITY_HEADER = "WOJ;POW;GMI;RODZ_GMI;RM;MZ;NAZWA;SYM;SYMPOD;STAN_NA"


def write_dataset(path, header, lines):
    path.write_text("\n".join([header] + lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def street_file(tmp_path):
    return write_dataset(tmp_path / "ULIC.csv", STREET_HEADER, [
        "12;34;56;1;100;200;ul.;Chopina;;2025-12-01",
        "12;34;56;1;101;201;ul.;Chopina;;2025-12-01",
        "14;65;1;1;300;400;ul.;Fryderyka Chopina;;2025-12-01",
        "02;64;1;1;500;600;al.;Chopina;;2025-12-01",
        "14;65;1;1;301;401;ul.;Sportowa;;2025-12-01",
        "12;61;1;1;302;402;ul.;Sportowa;;2025-12-01",
        "14;65;1;1;303;403;ul.;Józefa;Piłsudskiego;2025-12-01",
    ])


@pytest.fixture
def city_file(tmp_path):
    return write_dataset(tmp_path / "SIMC.csv", CITY_HEADER, [
        "12;61;1;1;96;1;Kraków;0950463;0950463;2025-12-01",
        "12;61;1;1;96;1;Kraków;0950463;0950463;2025-12-01",
        "30;1;2;2;01;1;Krakówek;0123456;0123456;2025-12-01",
        "12;6;3;2;01;1;Podkrakowie;0222222;0222222;2025-12-01",
        "14;65;1;1;96;1;Warszawa;0918123;0918123;2025-12-01",
        "12;6;3;2;01;1;Bolechowice;0333333;0333333;2025-12-01",
    ])


@pytest.fixture
def service(street_file, city_file):
    svc = AutocompleteService()
    svc.load_streets(street_file)
    svc.load_cities(city_file)
    return svc
