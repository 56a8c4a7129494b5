from __future__ import annotations

import strawberry
from strawberry.types import Info

from .models import LegislatorRecord as LegislatorRecordModel
from .models import Party as PartyModel
from .service import RosterService, count_by_party

# ── Enums ─────────────────────────────────────────────────────────────────────

Party = strawberry.enum(PartyModel, name="Party", description="Party affiliation category.")


# ── Types ─────────────────────────────────────────────────────────────────────


@strawberry.type
class SenatorType:
    name: str
    state: str
    party: Party
    assumed_office: str = strawberry.field(description="ISO date the senator took office.")

    @classmethod
    def from_model(cls, r: LegislatorRecordModel) -> SenatorType:
        return cls(
            name=r.name,
            state=r.state,
            party=r.party,
            assumed_office=r.office_start_date,
        )


@strawberry.type
class PartyBreakdownType:
    total: int
    democrat: int
    republican: int
    independent: int
    unknown: int

    @classmethod
    def from_counts(cls, counts: dict[str, int]) -> PartyBreakdownType:
        return cls(
            total=sum(counts.values()),
            democrat=counts[PartyModel.DEMOCRAT.value],
            republican=counts[PartyModel.REPUBLICAN.value],
            independent=counts[PartyModel.INDEPENDENT.value],
            unknown=counts[PartyModel.UNKNOWN.value],
        )


def _service(info: Info) -> RosterService:
    return info.context["service"]


@strawberry.type
class Query:
    @strawberry.field(description="Current senators, in source table order.")
    async def senators(self, info: Info, party: Party | None = None) -> list[SenatorType]:
        roster = await _service(info).get_roster()
        if party is not None:
            roster = [r for r in roster if r.party == party]
        return [SenatorType.from_model(r) for r in roster]

    @strawberry.field(
        description="Senators who took office strictly before a YYYY-MM-DD date.",
    )
    async def senators_before(self, info: Info, date: str) -> list[SenatorType]:
        roster = await _service(info).filter_by_tenure_before(date)
        return [SenatorType.from_model(r) for r in roster]

    @strawberry.field(description="Senator counts per party.")
    async def party_breakdown(self, info: Info) -> PartyBreakdownType:
        roster = await _service(info).get_roster()
        return PartyBreakdownType.from_counts(count_by_party(roster))


schema = strawberry.Schema(query=Query)
