"""
FastAPI REST API for the business day calculator.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from business_day_calculator import __version__
from business_day_calculator.config.manager import ConfigManager
from business_day_calculator.core.calculator import BusinessDayCalculator, create_calculator
from business_day_calculator.core.exceptions import ValidationError
from business_day_calculator.core.request_adapter import MissingFieldsError, extract_inputs

logger = logging.getLogger(__name__)

SERVICE_NAME = "Business Day Calculator API"


def create_app(calculator: Optional[BusinessDayCalculator] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        calculator: Calculator to serve. Built from the loaded configuration if not given.

    Returns:
        Configured FastAPI app.
    """
    if calculator is None:
        calculator = create_calculator(ConfigManager().load_config())

    app = FastAPI(
        title=SERVICE_NAME,
        description="Add business days to a date, skipping weekends and national holidays",
        version=__version__,
    )
    app.state.calculator = calculator

    async def _calculate(request: Request, legacy: bool) -> JSONResponse:
        try:
            payload = await request.json()
        except ValueError:
            return JSONResponse(
                status_code=400,
                content={"error": "Bad Request", "message": "Invalid JSON in request body"},
            )

        try:
            start_date, business_days = extract_inputs(payload, legacy=legacy)
        except MissingFieldsError:
            return JSONResponse(
                status_code=400,
                content={
                    "error": "Missing required fields",
                    "message": "Both startDate and businessDays are required",
                    "requiredFields": ["startDate", "businessDays"],
                },
            )

        try:
            calc_request = calculator.build_request(start_date, business_days)
            result = await run_in_threadpool(calculator.calculate, calc_request)
        except ValidationError as e:
            logger.info(f"Rejected calculation request: {e}")
            return JSONResponse(
                status_code=400,
                content={"error": "Validation Error", "message": str(e)},
            )
        except Exception:
            logger.exception("Business day calculation error")
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal Server Error",
                    "message": "An error occurred while calculating business days",
                },
            )

        return JSONResponse(
            content={"success": True, "data": result.to_payload(), "warnings": result.warnings}
        )

    @app.get("/")
    async def root():
        """API root endpoint with basic info."""
        return {
            "name": SERVICE_NAME,
            "version": __version__,
            "endpoints": {
                "GET /health": "Health check",
                "POST /calculate": "Add business days to a start date",
                "POST /calcular": "Legacy alias of /calculate (dataInicial, diasUteis)",
                "GET /holidays/{year}": "Holidays known for a year",
            },
        }

    @app.post("/calculate")
    async def calculate_business_days(request: Request):
        """
        Add business days to a start date.

        Body: ``{"startDate": "YYYY-MM-DD", "businessDays": <int>}``
        """
        return await _calculate(request, legacy=False)

    @app.post("/calcular")
    async def calculate_business_days_legacy(request: Request):
        """
        Legacy endpoint using the Portuguese field names.

        Body: ``{"dataInicial": "YYYY-MM-DD", "diasUteis": <int>}``
        """
        return await _calculate(request, legacy=True)

    @app.get("/holidays/{year}")
    async def get_holidays(year: int):
        """
        Get the holidays known for a year.

        Args:
            year: Year (e.g., 2025)
        """
        if year < 1900 or year > 2100:
            return JSONResponse(
                status_code=400,
                content={"error": "Validation Error", "message": "Year must be between 1900 and 2100"},
            )

        lookup = await run_in_threadpool(calculator.holiday_provider.lookup_years, [year])
        return {
            "year": year,
            "count": len(lookup.dates),
            "holidays": [d.isoformat() for d in sorted(lookup.dates)],
            "degraded": lookup.is_degraded,
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "OK",
            "timestamp": datetime.now().isoformat(),
            "service": SERVICE_NAME,
        }

    return app
