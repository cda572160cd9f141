#!/usr/bin/env python3
import json
import logging

import click
from pydantic import ValidationError

from . import Settings
from .convert import (
    COLLECTION_FILE, SwaggerToPostman, environment_file_name, save_to_file,
)
from .exceptions import SwaggermanError
from .postman_api import PostmanClient


def echo_document(document):
    click.echo(json.dumps(document.to_payload(), indent=2))


def generate(settings: Settings, fake=None, echo=True) -> list:
    """Load the spec, then write (and optionally publish) every document."""
    converter = SwaggerToPostman.from_settings(settings, fake=fake)
    client = None
    if settings.publish_enabled:
        client = PostmanClient.from_settings(settings)
    written = []
    for environment in converter.environments():
        if echo:
            echo_document(environment)
        if client:
            client.publish(
                'environments', environment.name, environment.to_payload(),
            )
        written.append(save_to_file(
            settings.output_dir, environment_file_name(environment),
            environment,
        ))
    collection = converter.to_postman_collection()
    if echo:
        echo_document(collection)
    if client:
        client.publish(
            'collections', collection.info.name, collection.to_payload(),
        )
    written.append(
        save_to_file(settings.output_dir, COLLECTION_FILE, collection),
    )
    click.echo("Environments and Collection created/updated successfully.")
    return written


@click.group()
@click.option('--verbose', is_flag=True, help='Log debug output.')
def cli(verbose):
    """OpenAPI/Swagger to Postman Environment and Collection conversion."""
    logging.basicConfig(level='DEBUG' if verbose else 'INFO')


@cli.command()
@click.option('-i', '--in', 'in_file', type=click.Path(),
              help='Path to the OpenAPI Schema to convert (JSON or YAML)')
@click.option('-o', '--out-dir', 'out_dir', type=click.Path(file_okay=False),
              help='Directory to write the generated files to.')
@click.option('--seed', type=int,
              help='Seed for reproducible placeholder data.')
@click.option('--publish', is_flag=True,
              help='Create or update the documents through the Postman API.')
@click.option('--api-key', 'api_key', help='Postman API key.')
@click.option('--quiet', is_flag=True,
              help="Don't print the generated documents.")
def run(in_file, out_dir, seed, publish, api_key, quiet):
    """Generate Postman Environments and a Postman Collection."""
    overrides = {
        'input_path': in_file,
        'output_dir': out_dir,
        'fake_data_seed': seed,
        'api_key': api_key,
        'publish_enabled': publish or None,
    }
    try:
        settings = Settings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as e:
        raise click.UsageError(str(e))
    try:
        generate(settings, echo=not quiet)
    except SwaggermanError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.argument('server_url')
def environment(server_url):
    """Print the Postman Environment for a single server URL."""
    try:
        echo_document(SwaggerToPostman.to_postman_environment(server_url))
    except SwaggermanError as e:
        raise click.ClickException(str(e))


if __name__ == "__main__":
    cli()
