"""
Indicatori della dashboard / Dashboard metrics.
"""

from collections import Counter, defaultdict
from datetime import datetime, timedelta, timezone

from rentsync.models.car import CarStatus

PERIOD_DAYS = {"30d": 30, "90d": 90, "year": 365}
PERIOD_LABELS = {"30d": "Ultimi 30 Giorni", "90d": "Ultimo Trimestre", "year": "Ultimo Anno"}


def _parse_signed(value: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


class KpiService:
    """Calcolo degli indicatori di periodo / Period metrics calculation."""

    @staticmethod
    def contracts_in_period(contracts: list, period: str, now: datetime | None = None) -> list:
        """Contratti firmati nel periodo / Contracts signed within the period."""
        now = now or datetime.now(timezone.utc)
        since = now - timedelta(days=PERIOD_DAYS[period])
        result = []
        for contract in contracts:
            signed = _parse_signed(contract.signed_date)
            if signed is not None and since <= signed <= now:
                result.append(contract)
        return result

    @staticmethod
    def occupancy_rate(fleet: list) -> int:
        """Quota di auto noleggiate (%) / Share of rented cars (%)."""
        if not fleet:
            return 0
        rented = sum(1 for car in fleet if car.status == CarStatus.RENTED)
        return round(rented / len(fleet) * 100)

    @staticmethod
    def dashboard(fleet: list, contracts: list, agents: list, period: str, now: datetime | None = None) -> dict:
        filtered = KpiService.contracts_in_period(contracts, period, now)
        cars_by_id = {car.id: car for car in fleet}
        agents_by_id = {agent.id: agent for agent in agents}

        car_counts = Counter(c.car_id for c in filtered)
        top_cars = [
            {"car_id": car_id, "label": f"{cars_by_id[car_id].brand} {cars_by_id[car_id].model}", "contracts": count}
            for car_id, count in car_counts.most_common()
            if car_id in cars_by_id
        ]
        unused_cars = [f"{car.brand} {car.model}" for car in fleet if car.id not in car_counts]

        agent_stats: dict[str, dict] = defaultdict(lambda: {"contracts": 0, "revenue": 0.0})
        for c in filtered:
            agent_stats[c.agent_id]["contracts"] += 1
            agent_stats[c.agent_id]["revenue"] += c.total_amount
        top_agents = sorted(
            (
                {"agent_id": agent_id, "name": agents_by_id[agent_id].name, **data}
                for agent_id, data in agent_stats.items()
                if agent_id in agents_by_id
            ),
            key=lambda item: item["revenue"],
            reverse=True,
        )

        return {
            "period": period,
            "period_label": PERIOD_LABELS[period],
            "revenue": round(sum(c.total_amount for c in filtered), 2),
            "signed_contracts": len(filtered),
            "active_rentals": sum(1 for car in fleet if car.status == CarStatus.RENTED),
            "fleet_size": len(fleet),
            "occupancy_rate": KpiService.occupancy_rate(fleet),
            "top_cars": top_cars,
            "unused_cars": unused_cars,
            "top_agents": top_agents,
        }

    @staticmethod
    def strategic_stats(dashboard: dict) -> dict:
        """Metriche compatte per il report AI / Compact metrics for the AI report."""
        return {
            "period": dashboard["period_label"],
            "revenue": dashboard["revenue"],
            "top_cars": [f"{item['label']} ({item['contracts']} noleggi)" for item in dashboard["top_cars"][:3]],
            "unused_cars": dashboard["unused_cars"],
            "top_agents": [f"{item['name']} (€{item['revenue']:.0f})" for item in dashboard["top_agents"][:3]],
        }
