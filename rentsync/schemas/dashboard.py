"""Schemi Dashboard / Dashboard schemas."""

from typing import Literal

from pydantic import BaseModel

Period = Literal["30d", "90d", "year"]


class CarPerformance(BaseModel):
    car_id: str
    label: str
    contracts: int


class AgentPerformance(BaseModel):
    agent_id: str
    name: str
    contracts: int
    revenue: float


class DashboardStats(BaseModel):
    period: Period
    period_label: str
    revenue: float
    signed_contracts: int
    active_rentals: int
    fleet_size: int
    occupancy_rate: int  # %
    top_cars: list[CarPerformance]
    unused_cars: list[str]
    top_agents: list[AgentPerformance]


class StrategicReportRequest(BaseModel):
    period: Period = "30d"


class StrategicReport(BaseModel):
    period_label: str
    report: str
