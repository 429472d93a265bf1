"""
CLI interface for the business day calculator.
"""

import json
import logging
import sys
from datetime import date

import click

from business_day_calculator import __version__
from business_day_calculator.config.manager import ConfigManager
from business_day_calculator.core.calculator import create_calculator
from business_day_calculator.output.formatter import ConsoleFormatter

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="business-days")
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging")
def main(debug):
    """Business Day Calculator - add business days to a date, skipping weekends and holidays."""
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)


@main.command()
@click.option(
    "--start", "-s",
    required=True,
    help="Start date (YYYY-MM-DD)",
)
@click.option(
    "--days", "-d",
    required=True,
    type=int,
    help="Number of business days to add (positive integer)",
)
@click.option(
    "--format", "-f",
    type=click.Choice(["console", "json"]),
    default="console",
    help="Output format (default: console)",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
def calculate(start, days, format, config):
    """Add business days to a start date."""
    formatter = ConsoleFormatter()
    calculator = None

    try:
        cfg = ConfigManager(config).load_config()
        calculator = create_calculator(cfg)

        request = calculator.build_request(start, days)
        result = calculator.calculate(request)

        if format == "json":
            payload = result.to_payload()
            payload["warnings"] = result.warnings
            click.echo(json.dumps(payload, indent=2))
        else:
            formatter.print_result(result)

    except ValueError as e:
        formatter.print_error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.exception("Detailed error:")
        formatter.print_error(f"Unexpected error: {e}")
        sys.exit(1)
    finally:
        if calculator is not None:
            calculator.holiday_provider.close()


@main.command()
@click.option(
    "--year", "-y",
    type=int,
    default=None,
    help="Year to show holidays for (default: current year)",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
def holidays(year, config):
    """List the holidays known for a year."""
    formatter = ConsoleFormatter()
    calculator = None

    try:
        if year is None:
            year = date.today().year

        cfg = ConfigManager(config).load_config()
        calculator = create_calculator(cfg)
        lookup = calculator.holiday_provider.lookup_years([year])

        formatter.print_holidays_for_year(year, lookup.dates)
        for failed_year, reason in lookup.failed_years.items():
            formatter.print_warning(f"Holidays for {failed_year} could not be fetched: {reason}")

    except Exception as e:
        formatter.print_error(f"Error: {e}")
        sys.exit(1)
    finally:
        if calculator is not None:
            calculator.holiday_provider.close()


@main.command("init-config")
@click.option(
    "--output", "-o",
    type=click.Path(),
    default="settings.yaml",
    help="Where to write the settings file (default: settings.yaml)",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file to start from (optional)",
)
def init_config(output, config):
    """Write the effective configuration to a YAML file.

    Environment overrides are applied, so the file captures the settings
    the other commands would use.

    Example:
        business-days init-config -o my_settings.yaml
    """
    formatter = ConsoleFormatter()

    try:
        manager = ConfigManager(config)
        manager.save_config(manager.load_config(), output)
        formatter.print_success(f"Configuration saved to {output}")

    except Exception as e:
        formatter.print_error(f"Error: {e}")
        sys.exit(1)


@main.command()
@click.option(
    "--host", "-h",
    default=None,
    help="Host to bind to (default: from config or 0.0.0.0)",
)
@click.option(
    "--port", "-p",
    type=int,
    default=None,
    help="Port to bind to (default: from config or 3001)",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
def serve(host, port, config):
    """Start the FastAPI server."""
    formatter = ConsoleFormatter()

    try:
        import uvicorn

        from business_day_calculator.api import create_app

        cfg = ConfigManager(config).load_config()

        api_host = host or cfg.api_host
        api_port = port or cfg.api_port

        formatter.console.print(f"Starting API server at http://{api_host}:{api_port}")
        formatter.console.print(f"Health check: http://{api_host}:{api_port}/health")
        formatter.console.print("Press Ctrl+C to stop")
        formatter.console.print()

        uvicorn.run(
            create_app(create_calculator(cfg)),
            host=api_host,
            port=api_port,
        )

    except ImportError:
        formatter.print_error("uvicorn is required for the API server. Install it with: pip install uvicorn")
        sys.exit(1)
    except Exception as e:
        formatter.print_error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
