# ref_indexer/cli/commands/db.py

"""
Database CLI Commands
"""

import click

from ...types import bytes_to_b58


@click.command('init-db')
@click.pass_context
def init_db(ctx):
    """Create the indexer tables if they do not exist"""
    cli_context = ctx.obj['cli_context']

    try:
        cli_context.db_manager.create_tables()
    except Exception as e:
        raise click.ClickException(f"Failed to create tables: {e}")

    click.echo("✅ Database tables ready")


@click.command('deployments')
@click.option('--account', help='Only show deployments to this account')
@click.option('--limit', type=int, default=100, show_default=True, help='Maximum rows to show')
@click.pass_context
def deployments(ctx, account, limit):
    """List recorded contract deployments

    Examples:
        # Most recent deployments
        deployments

        # Deployments to one account
        deployments --account v2.ref-finance.near
    """
    cli_context = ctx.obj['cli_context']
    store = cli_context.store

    try:
        with store.reader() as session:
            if account:
                rows = store.deployments.get_by_account(session, account)[:limit]
            else:
                rows = store.deployments.get_recent(session, limit)

            if not rows:
                click.echo("No deployments found")
                return

            click.echo(f"📋 Deployments ({len(rows)})")
            for row in rows:
                click.echo(f"   #{row.block_number} {row.account_id} "
                           f"receipt={row.receipt_id} code_hash={bytes_to_b58(row.code_hash)}")

    except Exception as e:
        raise click.ClickException(f"Failed to list deployments: {e}")
