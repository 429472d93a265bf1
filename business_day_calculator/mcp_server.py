"""
MCP Server for the Business Day Calculator.

Exposes the business day calculation to MCP clients.

Supports two transport modes:
- stdio: For local desktop integration
- sse: For HTTP-based integration (Docker, remote servers)
"""

import argparse
import logging
import os
from typing import Optional

from mcp.server.fastmcp import FastMCP

from business_day_calculator.config.manager import ConfigManager
from business_day_calculator.core.calculator import BusinessDayCalculator, create_calculator
from business_day_calculator.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def create_mcp_server(
    calculator: Optional[BusinessDayCalculator] = None,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> FastMCP:
    """Create and configure the MCP server with tools."""
    if calculator is None:
        calculator = create_calculator(ConfigManager().load_config())

    mcp = FastMCP("Business Day Calculator", host=host, port=port)

    @mcp.tool()
    def calculate_end_date(start_date: str, business_days: int) -> dict:
        """
        Add business days to a start date, skipping weekends and national holidays.

        The start date counts as the first business day when it is one, so
        adding 1 business day to a Monday returns that Monday.

        Args:
            start_date: Start date in format YYYY-MM-DD (e.g., "2025-11-17")
            business_days: Positive number of business days to add

        Returns:
            Dictionary with:
            - startDate: The start date
            - businessDays: The number of business days added
            - endDate: The resulting date (YYYY-MM-DD)
            - warnings: Holiday data problems that may affect the result

        Examples:
            >>> calculate_end_date("2025-11-21", 2)
            {"startDate": "2025-11-21", "businessDays": 2, "endDate": "2025-11-24", ...}
        """
        try:
            request = calculator.build_request(start_date, business_days)
            result = calculator.calculate(request)
        except ValidationError as e:
            return {"error": str(e)}
        except Exception as e:
            logger.error(f"Calculation failed: {e}")
            return {"error": f"Calculation error: {str(e)}"}

        payload = result.to_payload()
        payload["holidaysSkipped"] = [d.isoformat() for d in result.holidays_skipped]
        payload["warnings"] = result.warnings
        return payload

    @mcp.tool()
    def get_holidays(year: int) -> dict:
        """
        Get the national holidays for a year.

        Args:
            year: Year to get holidays for (e.g., 2025)

        Returns:
            Dictionary with:
            - year: The requested year
            - holiday_count: Number of holidays
            - holidays: Holiday dates (YYYY-MM-DD)
            - degraded: True if the holiday source could not be reached
        """
        if year < 1900 or year > 2100:
            return {"error": "Year must be between 1900 and 2100"}

        lookup = calculator.holiday_provider.lookup_years([year])
        return {
            "year": year,
            "holiday_count": len(lookup.dates),
            "holidays": [d.isoformat() for d in sorted(lookup.dates)],
            "degraded": lookup.is_degraded,
        }

    return mcp


def main():
    """Run the MCP server with configurable transport.

    Transport can be set via:
    - Command line: --transport sse --port 8080
    - Environment: MCP_TRANSPORT=sse MCP_PORT=8080 MCP_HOST=0.0.0.0
    """
    parser = argparse.ArgumentParser(description="Business Day Calculator MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=os.environ.get("MCP_TRANSPORT", "stdio"),
        help="Transport mode: stdio (default) or sse for HTTP",
    )
    parser.add_argument(
        "--host",
        default=os.environ.get("MCP_HOST", os.environ.get("FASTMCP_HOST", "0.0.0.0")),
        help="Host to bind to (SSE mode only, default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("MCP_PORT", os.environ.get("FASTMCP_PORT", "8080"))),
        help="Port to listen on (SSE mode only, default: 8080)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config file (optional)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    calculator = create_calculator(ConfigManager(args.config).load_config())
    mcp = create_mcp_server(calculator, host=args.host, port=args.port)

    logger.info(f"Starting MCP server with {args.transport} transport")
    mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()
