from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from oil_tracker.database import get_db
from oil_tracker.schemas import YearlySummaryResponse, SeasonalBreakdownResponse
from oil_tracker.services.data_service import DataService
from oil_tracker.services.report_service import ReportService

router = APIRouter()


def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    data = DataService(db)
    return ReportService(data, fuel_type=data.get_settings().fuel_type, base_temp=data.get_hdd_base())


@router.get("/years", response_model=List[int])
async def get_available_years(reports: ReportService = Depends(get_report_service)):
    """Years that have at least one delivery, newest first."""
    return reports.get_available_years()


@router.get("/yearly", response_model=List[YearlySummaryResponse])
async def get_all_yearly_summaries(reports: ReportService = Depends(get_report_service)):
    """Cost, usage and CO2 summary for every year with deliveries."""
    return [YearlySummaryResponse.model_validate(s) for s in reports.get_all_yearly_summaries()]


@router.get("/yearly/{year}", response_model=YearlySummaryResponse)
async def get_yearly_summary(year: int, reports: ReportService = Depends(get_report_service)):
    return YearlySummaryResponse.model_validate(reports.get_yearly_summary(year))


@router.get("/seasonal/{year}", response_model=SeasonalBreakdownResponse)
async def get_seasonal_breakdown(year: int, reports: ReportService = Depends(get_report_service)):
    """Heating season (Oct-Mar) vs off season (Apr-Sep) for one calendar year."""
    return SeasonalBreakdownResponse.model_validate(reports.get_seasonal_breakdown(year))
