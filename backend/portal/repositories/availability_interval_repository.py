from datetime import date

from sqlalchemy.orm import Session

from portal.models.availability_interval import AvailabilityInterval


class AvailabilityIntervalRepository:
    """Interval rows of the vacation calendar.

    Mutating methods commit by default; pass ``commit=False`` to only flush
    and let the caller commit several statements together.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_by_scope(
        self, scope_id: str, available: bool | None = None
    ) -> list[AvailabilityInterval]:
        query = self.db.query(AvailabilityInterval).filter(
            AvailabilityInterval.scope_id == scope_id
        )
        if available is not None:
            query = query.filter(AvailabilityInterval.available == available)
        return query.order_by(
            AvailabilityInterval.start_date.asc(), AvailabilityInterval.end_date.asc()
        ).all()

    def get_blocked_overlapping(
        self, scope_id: str, start: date, end: date
    ) -> list[AvailabilityInterval]:
        """Blocked intervals sharing at least one day with ``[start, end]``."""
        return (
            self.db.query(AvailabilityInterval)
            .filter(
                AvailabilityInterval.scope_id == scope_id,
                AvailabilityInterval.available == False,  # noqa: E712
                AvailabilityInterval.start_date <= end,
                AvailabilityInterval.end_date >= start,
            )
            .order_by(AvailabilityInterval.start_date.asc())
            .all()
        )

    def create(
        self,
        *,
        scope_id: str,
        start_date: date,
        end_date: date,
        available: bool = False,
        commit: bool = True,
    ) -> AvailabilityInterval:
        interval = AvailabilityInterval(
            scope_id=scope_id,
            start_date=start_date,
            end_date=end_date,
            available=available,
        )
        self.db.add(interval)
        if commit:
            self.db.commit()
            self.db.refresh(interval)
        else:
            self.db.flush()
        return interval

    def delete(self, interval: AvailabilityInterval, commit: bool = True) -> None:
        self.db.delete(interval)
        if commit:
            self.db.commit()
        else:
            self.db.flush()
