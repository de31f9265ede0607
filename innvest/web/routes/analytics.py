"""Analytics API routes.

One GET endpoint per report. Query parameters map onto the report's
parameter record; ``format`` selects a JSON body (default) or a CSV / XLSX
download of the same rows.
"""

from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse, Response, StreamingResponse
from fastapi.encoders import jsonable_encoder
from sqlalchemy.ext.asyncio import AsyncSession

from innvest.analytics import (
    PerformanceAnalyticsEngine,
    ReportExecutionError,
    ReportInputError,
    get_report,
)
from innvest.config import get_config
from innvest.db.connection import get_db
from innvest.reporting.export import (
    CSV_MEDIA_TYPE,
    EXCEL_MEDIA_TYPE,
    export_csv,
    export_excel,
    rows_to_dicts,
)


router = APIRouter(prefix="/api/analytics", tags=["analytics"])

ExportFormat = Literal["json", "csv", "xlsx"]


async def _run_report(
    db: AsyncSession, name: str, format: ExportFormat, **params: Any
) -> Response:
    # Unset optional filters are dropped so the report sees them as unset
    params = {k: v for k, v in params.items() if v is not None}
    engine = PerformanceAnalyticsEngine(
        db, slow_report_ms=get_config().analytics.slow_report_ms
    )

    try:
        rows = await engine.run(name, **params)
    except ReportInputError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None
    except ReportExecutionError:
        return JSONResponse(
            status_code=503, content={"error": f"Failed to retrieve {name} analysis"}
        )

    if format == "json":
        return JSONResponse(content=jsonable_encoder(rows_to_dicts(rows)))

    row_type = get_report(name).row_type
    if format == "csv":
        return Response(
            content=export_csv(rows, row_type),
            media_type=CSV_MEDIA_TYPE,
            headers={"Content-Disposition": f"attachment; filename={name}.csv"},
        )
    return StreamingResponse(
        export_excel(rows, row_type, sheet_name=name),
        media_type=EXCEL_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={name}.xlsx"},
    )


@router.get("/revenue")
async def revenue(
    year: int,
    format: ExportFormat = "json",
    db: AsyncSession = Depends(get_db),
):
    """Monthly revenue by property."""
    return await _run_report(db, "revenue", format, year=year)


@router.get("/regional-performance")
async def regional_performance(
    year: int,
    hotel_type: str | None = None,
    format: ExportFormat = "json",
    db: AsyncSession = Depends(get_db),
):
    """Regional performance, optionally for one hotel type."""
    return await _run_report(
        db, "regional-performance", format, year=year, hotel_type=hotel_type
    )


@router.get("/department-expenses")
async def department_expenses(
    year: int,
    property_name: str | None = None,
    format: ExportFormat = "json",
    db: AsyncSession = Depends(get_db),
):
    return await _run_report(
        db, "department-expenses", format, year=year, property_name=property_name
    )


@router.get("/quarterly-performance")
async def quarterly_performance(
    year: int,
    quarter: int | None = Query(default=None, ge=1, le=4),
    format: ExportFormat = "json",
    db: AsyncSession = Depends(get_db),
):
    return await _run_report(db, "quarterly-performance", format, year=year, quarter=quarter)


@router.get("/brand-performance")
async def brand_performance(
    year: int,
    format: ExportFormat = "json",
    db: AsyncSession = Depends(get_db),
):
    return await _run_report(db, "brand-performance", format, year=year)


@router.get("/occupancy")
async def occupancy(
    year: int,
    property_name: str | None = None,
    format: ExportFormat = "json",
    db: AsyncSession = Depends(get_db),
):
    """Monthly occupancy index per property."""
    return await _run_report(db, "occupancy", format, year=year, property_name=property_name)


@router.get("/market-trends")
async def market_trends(
    start_year: int,
    end_year: int,
    market: str | None = None,
    format: ExportFormat = "json",
    db: AsyncSession = Depends(get_db),
):
    """Yearly market trends; omit ``market`` to average across all markets."""
    return await _run_report(
        db,
        "market-trends",
        format,
        start_year=start_year,
        end_year=end_year,
        market_name=market,
    )


@router.get("/market-comparison")
async def market_comparison(
    year: int,
    top_n: int | None = None,
    format: ExportFormat = "json",
    db: AsyncSession = Depends(get_db),
):
    """Markets ranked by average RevPAR."""
    if top_n is None:
        top_n = get_config().analytics.default_top_n
    return await _run_report(db, "market-comparison", format, year=year, top_n=top_n)


@router.get("/market-dashboard")
async def market_dashboard(
    year: int,
    top_n: int | None = None,
    format: ExportFormat = "json",
    db: AsyncSession = Depends(get_db),
):
    """Industry averages followed by the top markets (five unless ``top_n`` is given)."""
    return await _run_report(db, "market-dashboard", format, year=year, top_n=top_n)


@router.get("/budget-vs-actual")
async def budget_vs_actual(
    year: int,
    property_name: str | None = None,
    format: ExportFormat = "json",
    db: AsyncSession = Depends(get_db),
):
    return await _run_report(
        db, "budget-vs-actual", format, year=year, property_name=property_name
    )
