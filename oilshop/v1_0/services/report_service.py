from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from oilshop.core.logger import logger
from oilshop.utils.local_time import (
    MYANMAR_OFFSET,
    MYANMAR_TZ_NAME,
    MYANMAR_UTC_OFFSET_MINUTES,
    LocalRange,
    day_bounds,
    local_today,
    month_bounds,
    parse_local_date,
    utc_iso,
)
from oilshop.utils.tx import maybe_begin
from oilshop.v1_0.entities import (
    DailyPeriodDTO, DailyTotalsDTO, TopOilDTO, DailyReportDTO,
    MonthlyPeriodDTO, CurrencyDTO, QuantityDefinitionDTO, MonthlyTotalsDTO,
    OilBreakdownDTO, MonthlyReportDTO,
)
from oilshop.v1_0.repositories import (
    OilRepository,
    SaleRepository,
    SaleItemRepository,
)

DAILY_TOP_LIMIT = 3


class ReportService:
    """
    Revenue reports bucketed by Myanmar local day or month.

    Totals come from sale headers, breakdowns from sale items; both read the
    client-computed amounts as stored. Each report runs its queries inside one
    read transaction so totals and breakdown see the same rows.
    """

    def __init__(
        self,
        sale_repository: SaleRepository,
        sale_item_repository: SaleItemRepository,
        oil_repository: OilRepository,
    ) -> None:
        self.sale_repository = sale_repository
        self.sale_item_repository = sale_item_repository
        self.oil_repository = oil_repository

    async def _aggregate(
        self,
        db: AsyncSession,
        rng: LocalRange,
        *,
        limit: Optional[int] = None,
        with_units: bool = False,
    ) -> tuple[float, int, List[Dict[str, Any]]]:
        async with maybe_begin(db):
            total, transactions = await self.sale_repository.totals_between(
                db, rng.start_utc, rng.end_utc_exclusive
            )
            groups = await self.sale_item_repository.breakdown_between(
                db, rng.start_utc, rng.end_utc_exclusive, limit=limit
            )
            oil_ids = [g["oil_id"] for g in groups]
            names = await self.sale_item_repository.latest_snapshots_between(
                db, rng.start_utc, rng.end_utc_exclusive, oil_ids
            )
            units = await self.oil_repository.units_by_ids(oil_ids, db) if with_units else {}

        for g in groups:
            g["name"] = names.get(g["oil_id"])
            g["unit"] = units.get(g["oil_id"])
        return total, transactions, groups

    async def daily_summary(
        self,
        db: AsyncSession,
        date_text: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> DailyReportDTO:
        """
        Totals and the top three oils by revenue for one local day.

        Args:
            db: Active async database session.
            date_text: Local day as ``YYYY-MM-DD``; today in Myanmar when omitted.
            now: Reference instant used to resolve "today".

        Raises:
            HTTPException: 400 when ``date_text`` is malformed, not a real date,
                or too close to the calendar limits.
        """
        if date_text:
            try:
                day = parse_local_date(date_text)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
        else:
            day = local_today(now, MYANMAR_OFFSET)

        try:
            rng = day_bounds(day, MYANMAR_OFFSET)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        logger.debug("[ReportService] daily %s -> [%s, %s)", day, rng.start_utc, rng.end_utc_exclusive)

        total, transactions, groups = await self._aggregate(db, rng, limit=DAILY_TOP_LIMIT)

        return DailyReportDTO(
            period=DailyPeriodDTO(
                timezone=MYANMAR_TZ_NAME,
                utc_offset_minutes=MYANMAR_UTC_OFFSET_MINUTES,
                date_local=day.isoformat(),
                start_local=rng.start_local,
                end_local_exclusive=rng.end_local_exclusive,
                start_utc=utc_iso(rng.start_utc),
                end_utc_exclusive=utc_iso(rng.end_utc_exclusive),
            ),
            totals=DailyTotalsDTO(total_sales_amount=total, transactions_count=transactions),
            top_oils_by_revenue=[
                TopOilDTO(
                    oil_id=g["oil_id"],
                    oil_name_snapshot=g["name"],
                    revenue=g["revenue"],
                    quantity_sold=g["quantity"],
                )
                for g in groups
            ],
            generated_at=datetime.now(timezone.utc),
        )

    async def monthly_details(self, db: AsyncSession, year: int, month: int) -> MonthlyReportDTO:
        """
        Totals and the full per-oil breakdown for one local calendar month.

        Raises:
            HTTPException: 400 when month is outside 1-12 or the year is unusable.
        """
        try:
            rng = month_bounds(year, month, MYANMAR_OFFSET)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        total, transactions, groups = await self._aggregate(db, rng, with_units=True)

        return MonthlyReportDTO(
            period=MonthlyPeriodDTO(
                year=year,
                month=month,
                timezone=MYANMAR_TZ_NAME,
                utc_offset_minutes=MYANMAR_UTC_OFFSET_MINUTES,
                start_local=rng.start_local,
                end_local_exclusive=rng.end_local_exclusive,
                start_utc=utc_iso(rng.start_utc),
                end_utc_exclusive=utc_iso(rng.end_utc_exclusive),
                label=f"{year:04d}-{month:02d}",
            ),
            currency=CurrencyDTO(),
            quantity_definition=QuantityDefinitionDTO(),
            totals=MonthlyTotalsDTO(total_sales_amount=total, transactions=transactions),
            by_oil=[
                OilBreakdownDTO(
                    oil_id=g["oil_id"],
                    oil_name_snapshot=g["name"],
                    unit=g["unit"],
                    quantity_sold=g["quantity"],
                    revenue=g["revenue"],
                    line_count=g["line_count"],
                )
                for g in groups
            ],
            generated_at=datetime.now(timezone.utc),
        )
