"""jqagate CLI - jqagate command."""

import click

from jqagate.cli.issues import issues_command
from jqagate.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="jqagate")
@click.option("-v", "--verbose", is_flag=True, help="Log everything to the console")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """jqagate - turn rule analysis reports into located quality-gate issues."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    # Until a command has loaded the project config
    configure_logging(verbose=verbose)


cli.add_command(issues_command, name="issues")


if __name__ == "__main__":
    cli()
