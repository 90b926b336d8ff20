from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from src.catalog.partners import Partner
from src.catalog.programs import Program
from src.errors import UnknownPartnerError, UnknownProgramError


@dataclass(frozen=True, slots=True)
class Catalog:
    """Read-only program catalog and partner directory.

    Programs and partners keep the order they were authored in; accessors never
    re-sort them.
    """

    programs: tuple[Program, ...]
    partners: tuple[Partner, ...]
    _programs_by_code: Mapping[str, Program] = field(init=False, repr=False, compare=False)
    _partners_by_id: Mapping[str, Partner] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        programs = tuple(self.programs)
        partners = tuple(self.partners)
        object.__setattr__(self, "programs", programs)
        object.__setattr__(self, "partners", partners)

        programs_by_code: dict[str, Program] = {}
        for program in programs:
            if program.code in programs_by_code:
                raise ValueError(f"Duplicate program code '{program.code}'.")
            programs_by_code[program.code] = program

        partners_by_id: dict[str, Partner] = {}
        for partner in partners:
            if partner.id in partners_by_id:
                raise ValueError(f"Duplicate partner id '{partner.id}'.")
            for program_code, table in partner.cohort_pricing.items():
                program = programs_by_code.get(program_code)
                if program is None:
                    raise ValueError(
                        f"Partner '{partner.id}' has cohort pricing for unknown program '{program_code}'."
                    )
                table.validate_for(program)
            partners_by_id[partner.id] = partner

        object.__setattr__(self, "_programs_by_code", MappingProxyType(programs_by_code))
        object.__setattr__(self, "_partners_by_id", MappingProxyType(partners_by_id))

    def get_program(self, code: str) -> Program:
        try:
            return self._programs_by_code[code]
        except KeyError:
            raise UnknownProgramError(code) from None

    def get_partner(self, partner_id: str) -> Partner:
        try:
            return self._partners_by_id[partner_id]
        except KeyError:
            raise UnknownPartnerError(partner_id) from None

    def list_programs(self) -> list[Program]:
        return list(self.programs)

    def list_partners(self) -> list[Partner]:
        return list(self.partners)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> Catalog:
        programs = [Program.from_mapping(item) for item in payload.get("programs") or []]
        programs_by_code = {program.code: program for program in programs}
        partners = [
            Partner.from_mapping(item, programs_by_code) for item in payload.get("partners") or []
        ]
        return cls(programs=tuple(programs), partners=tuple(partners))
