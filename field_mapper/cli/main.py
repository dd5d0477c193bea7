"""Command line interface for the field mapper."""
import json
import logging
from pathlib import Path

import click
from colorama import Fore, Style, init

from field_mapper import __version__
from field_mapper.api.character_service import CharacterService
from field_mapper.api.rickandmorty_client import RickAndMortyClient
from field_mapper.config import app_config
from field_mapper.errors import FieldMapperError
from field_mapper.exporter.json_exporter import JsonExporter
from field_mapper.mapper.dynamic import DynamicFieldMapper
from field_mapper.schema.models import ENTITY_TYPES
from field_mapper.validator.profile_validator import ProfileValidator

init(autoreset=True)


def print_header(title: str):
    """Print a section header."""
    click.echo(f"\n{Fore.CYAN}{'━' * 45}")
    click.echo(f"{Fore.CYAN}{title}")
    click.echo(f"{Fore.CYAN}{'━' * 45}{Style.RESET_ALL}\n")


def fail(message: str):
    """Print an error and stop with exit code 1."""
    click.echo(f"{Fore.RED}Error: {message}", err=True)
    raise SystemExit(1)


def load_mapper(ctx: click.Context) -> DynamicFieldMapper:
    """Load the mapping configuration once per invocation."""
    if "mapper" not in ctx.obj:
        try:
            ctx.obj["mapper"] = DynamicFieldMapper.from_config(ctx.obj["config_path"])
        except FieldMapperError as e:
            fail(str(e))
    return ctx.obj["mapper"]


def build_service(ctx: click.Context) -> CharacterService:
    client = RickAndMortyClient(app_config.api)
    return CharacterService(client, load_mapper(ctx))


def emit(entity):
    """Print mapped entities as JSON."""
    click.echo(JsonExporter().dumps(entity))


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Mapping configuration JSON (default: FIELD_MAPPER_CONFIG or bundled sample)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log mapping diagnostics")
@click.pass_context
def cli(ctx, config_path, verbose):
    """Configuration-driven entity mapper."""
    level = logging.DEBUG if verbose else getattr(logging, app_config.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path or app_config.mapping_file


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Dump the full profile definitions")
@click.pass_context
def profiles(ctx, as_json):
    """List loaded mapping profiles."""
    field_mapper = load_mapper(ctx)

    if as_json:
        click.echo(json.dumps(field_mapper.profiles.to_dict(), indent=2))
        return

    print_header("Mapping Profiles")
    for name in field_mapper.profiles.names():
        profile = field_mapper.profiles.get(name)
        click.echo(
            f"{Fore.GREEN}{name:30s}{Style.RESET_ALL} → {profile.target_type:12s} "
            f"{len(profile.fields):3d} fields, {len(profile.computed_fields):2d} computed"
        )


@cli.command()
@click.pass_context
def validate(ctx):
    """Check profiles against entity types and registered rules."""
    field_mapper = load_mapper(ctx)
    validator = ProfileValidator(field_mapper.transformations, field_mapper.computations)

    errors = validator.validate(field_mapper.profiles, ENTITY_TYPES)
    if errors:
        for error in errors:
            click.echo(f"{Fore.RED}❌ {error}")
        raise SystemExit(1)

    click.echo(f"{Fore.GREEN}✅ {len(field_mapper.profiles)} profiles valid")


@cli.command("map")
@click.argument("record_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-p", "--profile", "profile_name", required=True, help="Mapping profile name")
@click.option("-t", "--target", "target_name", default=None, help="Entity type (default: profile targetType)")
@click.option(
    "--save",
    is_flag=True,
    help="Write results to <output dir>/<profile>.json instead of stdout",
)
@click.pass_context
def map_record(ctx, record_file, profile_name, target_name, save):
    """Map a JSON record (or array of records) through a profile."""
    field_mapper = load_mapper(ctx)

    try:
        profile = field_mapper.mapper.get_profile(profile_name)
    except FieldMapperError as e:
        fail(str(e))

    target_name = target_name or profile.target_type
    target_type = ENTITY_TYPES.get(target_name)
    if target_type is None:
        fail(f"Unknown target type '{target_name}'. Available: {', '.join(sorted(ENTITY_TYPES))}")

    try:
        with open(record_file, "r", encoding="utf-8") as f:
            source = json.load(f)
    except (OSError, ValueError) as e:
        fail(f"Cannot read {record_file}: {e}")

    records = source if isinstance(source, list) else [source]
    entities = []
    failures = []
    for record in records:
        result = field_mapper.map_entity_with_report(target_type, record, profile_name)
        for failure in result.failures:
            click.echo(f"{Fore.YELLOW}⚠ {failure}", err=True)
            failures.append(str(failure))
        entities.append(result.entity)

    if save:
        output_file = Path(app_config.output_dir) / f"{profile_name}.json"
        JsonExporter().export(output_file, entities, profile_name, failures)
        click.echo(f"{Fore.GREEN}✅ {len(entities)} records written to {output_file}")
    else:
        emit(entities if isinstance(source, list) else entities[0])


@cli.command()
@click.argument("person_id", type=int)
@click.pass_context
def person(ctx, person_id):
    """Fetch a character and map it to a Person."""
    result = build_service(ctx).get_person(person_id)
    if result is None:
        fail(f"Character {person_id} not found")
    emit(result)


@cli.command()
@click.option("--name", default=None, help="Filter by character name")
@click.pass_context
def persons(ctx, name):
    """Search characters and map them to Persons."""
    emit(build_service(ctx).get_persons(name))


@cli.command()
@click.argument("world_id", type=int)
@click.pass_context
def world(ctx, world_id):
    """Fetch a location and map it to a World."""
    result = build_service(ctx).get_world(world_id)
    if result is None:
        fail(f"Location {world_id} not found")
    emit(result)


@cli.command()
@click.option("--title", default=None, help="Filter by episode name")
@click.pass_context
def episodes(ctx, title):
    """Search episodes and map them to StoryArcs."""
    emit(build_service(ctx).get_story_arcs(title))


if __name__ == "__main__":
    cli()
