"""
cidrexpand command-line entry point.
"""

import click

from cidrexpand import __version__
from cidrexpand.config import get_config
from cidrexpand.ip.cli import ip
from cidrexpand.logging_config import configure_logging


@click.group()
@click.version_option(__version__, prog_name="cidrexpand")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also write logs to this file")
def main(debug: bool, log_file: str | None):
    """IPv4 CIDR range expansion and address conversion."""
    config = get_config()
    configure_logging(debug=debug, log_file=log_file, level=config.log_level)


main.add_command(ip)


if __name__ == "__main__":
    main()
