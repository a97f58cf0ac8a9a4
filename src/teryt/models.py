"""
Typed records for the TERYT street (ULIC) and locality (SIMC) registries.
"""

from dataclasses import dataclass, field


def build_full_name(street_type: str, name: str, secondary_name: str = "") -> str:
    """Joins the street type marker and name parts into the display name."""
    if secondary_name:
        return f"{street_type} {name} {secondary_name}"
    return f"{street_type} {name}"


@dataclass(frozen=True, slots=True)
class StreetRecord:
    """
    One registered street segment from the ULIC file.

    The same street name usually appears once per locality it runs
    through, so many records can share one full_name.
    """

    woj: int
    pow: int
    gmi: int
    gmi_kind: int
    locality_id: int
    street_id: int
    street_type: str
    name: str
    secondary_name: str = ""
    full_name: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(
            self, "full_name", build_full_name(self.street_type, self.name, self.secondary_name)
        )

    def __repr__(self):
        return f"<StreetRecord(full_name='{self.full_name}', woj={self.woj}, pow={self.pow}, gmi={self.gmi})>"


@dataclass(frozen=True, slots=True)
class CityRecord:
    """One locality from the SIMC file."""

    woj: int
    pow: int
    gmi: int
    gmi_kind: int
    locality_type: int
    locality_part: int
    name: str
    sym: int
    sym_parent: int

    def __repr__(self):
        return f"<CityRecord(name='{self.name}', woj={self.woj}, pow={self.pow}, gmi={self.gmi})>"


@dataclass(frozen=True, order=True, slots=True)
class MunicipalityCode:
    """A (woj, pow, gmi) triple identifying one municipality."""

    woj: int
    pow: int
    gmi: int
