"""Finance snapshots (daily metrics, summaries, forecasts) per property."""
from datetime import date

from innkeep.models.finance import Finance
from innkeep.services.base import BaseService


class FinanceService(BaseService[Finance]):
    model = Finance
    filter_fields = ("property_id", "date")

    def get_for_period(self, property_id: int, start: date, end: date) -> list[Finance]:
        try:
            return (
                self._query()
                .filter(Finance.property_id == property_id, Finance.date >= start, Finance.date <= end)
                .order_by(Finance.date)
                .all()
            )
        except Exception as e:
            self._handle_error(e)
