import click
import importlib.metadata
from ..cli_logger import logger

@click.command()
def version():
    """Print the version of variantbuilder."""
    try:
        ver = importlib.metadata.version("variantbuilder")
        logger.info(f"variantbuilder version {ver}")
    except importlib.metadata.PackageNotFoundError:
        logger.error("Error: Could not determine the version of variantbuilder. Is it installed correctly?")
