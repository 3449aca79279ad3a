# ref_indexer/cli/__main__.py

"""
Ref Finance Indexer CLI

Usage: python -m ref_indexer.cli [command] [options]
"""

import click

from ref_indexer.cli.context import CLIContext


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--config', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='YAML or JSON config file (defaults to REF_INDEXER_* environment variables)')
@click.option('--log-receipts', is_flag=True, help='Log the full content of every processed receipt')
@click.pass_context
def cli(ctx, verbose, config_file, log_receipts):
    """Ref Finance Indexer - NEAR receipt processing tool

    Feeds NEAR receipt-with-outcome records through the action dispatcher
    and inspects the resulting state.
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose

    cli_context = CLIContext(config_file=config_file, verbose=verbose, log_receipts=log_receipts)
    ctx.obj['cli_context'] = cli_context
    ctx.call_on_close(cli_context.shutdown)


from ref_indexer.cli.commands.db import init_db, deployments
from ref_indexer.cli.commands.process import process, methods

cli.add_command(init_db)
cli.add_command(deployments)
cli.add_command(process)
cli.add_command(methods)


def main():
    cli()


if __name__ == '__main__':
    main()
