"""Main CLI entry point for Tianwan Config.

Generates the Tianwan platform configuration from a generator config file
and the camera inventory it points to.
"""

from pathlib import Path

import typer

from ..core.config import get_settings, load_generator_config
from ..core.exceptions import TianwanConfigError
from ..core.logging import get_logger, log_context, setup_logging
from ..services.generator import ConfigGenerator, write_datastore
from .utils import (
    console,
    create_summary_table,
    print_error,
    print_success,
    print_warning,
)

logger = get_logger(__name__)

app = typer.Typer(
    name="tianwan-config",
    help="Generate the Tianwan inference configuration from a camera inventory.",
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
    add_completion=False,
)


@app.command()
def generate(
    config_path: Path = typer.Option(
        Path("config.yaml"),
        "--config",
        "-c",
        help="Path to configuration file",
        dir_okay=False,
    ),
    output_path: Path = typer.Option(
        Path("tianwan_config.json"),
        "--output",
        "-o",
        help="Path of the generated JSON configuration",
        dir_okay=False,
    ),
) -> None:
    """Generate cameras, inference servers and bindings as one JSON document."""
    setup_logging(get_settings())

    with log_context(config_path=str(config_path)):
        logger.info("Loading config", path=str(config_path))
        try:
            config = load_generator_config(config_path)
            result = ConfigGenerator(config).generate()
            write_datastore(result.datastore, output_path)
        except TianwanConfigError as e:
            logger.error(
                "Configuration generation failed",
                error_code=e.code,
                error=e.message,
                details=e.details,
            )
            print_error(str(e))
            return

    console.print(create_summary_table(result.summary))
    if result.summary.skipped_bindings:
        print_warning(
            f"{len(result.summary.skipped_bindings)} capabilities could not be bound"
        )
    print_success(f"Configuration written to {output_path}")


if __name__ == "__main__":
    app()
