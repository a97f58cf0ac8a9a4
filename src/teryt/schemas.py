"""
Response schemas for the HTTP API.

Field names follow the registry's column names (NAZWA_1 -> nazwa_1 and so
on), which is what existing clients of the service read.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict

from .models import CityRecord, MunicipalityCode, StreetRecord


class StreetOut(BaseModel):
    model_config = ConfigDict(frozen=True)

    woj: int
    pow: int
    gmi: int
    rodz_gmi: int
    sym: int
    sym_ul: int
    cecha: str
    nazwa_1: str
    nazwa_2: str
    full_name: str

    @classmethod
    def from_record(cls, street: StreetRecord) -> "StreetOut":
        return cls(
            woj=street.woj,
            pow=street.pow,
            gmi=street.gmi,
            rodz_gmi=street.gmi_kind,
            sym=street.locality_id,
            sym_ul=street.street_id,
            cecha=street.street_type,
            nazwa_1=street.name,
            nazwa_2=street.secondary_name,
            full_name=street.full_name,
        )


class CityOut(BaseModel):
    model_config = ConfigDict(frozen=True)

    woj: int
    pow: int
    gmi: int
    rodz_gmi: int
    rm: int
    mz: int
    nazwa: str
    sym: int
    sympod: int

    @classmethod
    def from_record(cls, city: CityRecord) -> "CityOut":
        return cls(
            woj=city.woj,
            pow=city.pow,
            gmi=city.gmi,
            rodz_gmi=city.gmi_kind,
            rm=city.locality_type,
            mz=city.locality_part,
            nazwa=city.name,
            sym=city.sym,
            sympod=city.sym_parent,
        )


class MunicipalityOut(BaseModel):
    woj: int
    pow: int
    gmi: int

    @classmethod
    def from_code(cls, code: MunicipalityCode) -> "MunicipalityOut":
        return cls(woj=code.woj, pow=code.pow, gmi=code.gmi)


class StreetSearchResponse(BaseModel):
    query: str
    results: List[StreetOut]
    count: int
    time: str


class CitySearchResponse(BaseModel):
    query: str
    filters: Dict[str, int] = {}
    results: List[CityOut]
    count: int
    time: str


class StreetGmiResponse(BaseModel):
    street_name: str
    results: List[MunicipalityOut]
    count: int
    time: str


class HealthResponse(BaseModel):
    status: str
    streets: int
    cities: int
