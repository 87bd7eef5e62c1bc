"""
Main entry point for the ethnobotanical reference system.

Provides a CLI to serve the API contexts and to manage the MongoDB indexes.
"""

import asyncio
import logging

import click
import uvicorn

from clients.mongo.MongoClient import MongoClient
from clients.mongo.errors import ReferenceStoreError
from models.configurators.Settings import Settings
from pipelines.main import CONTEXT_ROUTERS, create_app

logger = logging.getLogger(__name__)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """Etnodb - ethnobotanical reference submission, curation and search"""
    settings = Settings.from_env()
    level = logging.DEBUG if verbose or settings.debug else settings.log_level
    logging.basicConfig(level=level)
    ctx.obj = settings


@cli.command()
@click.option('--context', 'context', type=click.Choice(['all'] + list(CONTEXT_ROUTERS)), default='all',
              help='Context to serve; "all" serves every router in one process')
@click.option('--host', default=None, help='API host (default: API_HOST)')
@click.option('--port', default=None, type=int, help='API port (default: the context port)')
@click.pass_obj
def serve(settings: Settings, context: str, host: str, port: int):
    """Start the API server."""
    contexts = list(CONTEXT_ROUTERS) if context == 'all' else [context]
    if port is None:
        port = settings.port_for('acquisition' if context == 'all' else context)

    app = create_app(contexts, settings)
    uvicorn.run(
        app,
        host=host or settings.api_host,
        port=port,
        log_level=settings.log_level.lower(),
    )


async def _manage_indexes(settings: Settings, drop: bool):
    client = MongoClient(settings.mongodb)
    if not await client.connect():
        raise click.ClickException("Could not connect to MongoDB")
    try:
        if drop:
            await client.drop_indexes()
            return []
        return await client.create_indexes()
    finally:
        await client.close()


@cli.command('create-indexes')
@click.pass_obj
def create_indexes(settings: Settings):
    """Create the indexes used by curation and search."""
    try:
        names = asyncio.run(_manage_indexes(settings, drop=False))
    except ReferenceStoreError as e:
        raise click.ClickException(str(e))

    click.echo(f"Indexes on '{settings.mongodb.collection}': {len(names)}")
    for name in names:
        click.echo(f"  - {name}")


@cli.command('drop-indexes')
@click.confirmation_option(prompt='Drop all custom indexes?')
@click.pass_obj
def drop_indexes(settings: Settings):
    """Drop every custom index (the _id index is kept)."""
    try:
        asyncio.run(_manage_indexes(settings, drop=True))
    except ReferenceStoreError as e:
        raise click.ClickException(str(e))
    click.echo("All custom indexes dropped")


def main():
    cli()


if __name__ == "__main__":
    main()
