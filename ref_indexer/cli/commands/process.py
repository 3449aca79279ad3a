# ref_indexer/cli/commands/process.py

"""
Receipt Processing CLI Commands
"""

from collections import Counter

import click
import msgspec

from ...core.errors import ReceiptProcessingError
from ...decode.record_decoder import RecordDecoder
from ...dispatch.registry import build_ref_finance_registry
from ...exchange import ProtocolHandlers


@click.command('process')
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--account', 'accounts', multiple=True,
              help='Only process receipts sent to this account (repeatable, defaults to configured accounts)')
@click.option('--all-accounts', is_flag=True, help='Process receipts for every receiver')
@click.option('--stop-on-error/--continue-on-error', default=True, show_default=True,
              help='Stop at the first failing record or skip it and carry on')
@click.pass_context
def process(ctx, file, accounts, all_accounts, stop_on_error):
    """Feed a JSON-lines file of receipt records through the pipeline

    Each line holds one {receipt, outcome, block} record. Every receipt is
    processed in its own transaction.

    Examples:
        # Receipts for the configured accounts
        process receipts.jsonl

        # Everything in the file, skipping bad records
        process receipts.jsonl --all-accounts --continue-on-error
    """
    cli_context = ctx.obj['cli_context']

    if all_accounts:
        allowed = None
    else:
        allowed = set(accounts or cli_context.config.accounts)

    cli_context.db_manager.create_tables()
    pipeline = cli_context.pipeline
    decoder = RecordDecoder()

    processed = 0
    skipped = 0
    failed = 0
    kinds = Counter()

    for line_number, line in decoder.iter_lines(file):
        try:
            record = decoder.decode(line)
        except (msgspec.DecodeError, msgspec.ValidationError) as e:
            if stop_on_error:
                raise click.ClickException(f"Line {line_number}: invalid record: {e}")
            click.echo(f"⚠️  Line {line_number}: invalid record: {e}", err=True)
            failed += 1
            continue

        if allowed is not None and record.receipt.receiver_id not in allowed:
            skipped += 1
            continue

        try:
            summary = pipeline.process(record)
        except ReceiptProcessingError as e:
            if stop_on_error:
                raise click.ClickException(f"Line {line_number}: {e}")
            click.echo(f"⚠️  Line {line_number}: {e}", err=True)
            failed += 1
            continue

        processed += 1
        kinds.update(summary.kinds)

    click.echo("✅ Processing complete")
    click.echo(f"   Processed: {processed}")
    click.echo(f"   Skipped: {skipped}")
    click.echo(f"   Failed: {failed}")
    for kind, count in sorted(kinds.items()):
        click.echo(f"   {kind}: {count}")


@click.command('methods')
def methods():
    """List the supported Ref Finance methods"""

    # Handlers are only enumerated, never invoked, so no store is needed
    registry = build_ref_finance_registry(ProtocolHandlers(store=None))

    click.echo(f"📋 Supported methods ({len(registry)})")
    for method_name, handler in registry.methods.items():
        click.echo(f"   {method_name:<34} {handler.__self__.category}.{handler.__name__}")
