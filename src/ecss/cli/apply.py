"""CLI command: ecss apply -- style a JSON scene and print the result."""

from __future__ import annotations

import dataclasses
import json
import sys
from enum import Enum
from pathlib import Path
from typing import Any

import click

from ecss.config import EcssConfig, configure_logging
from ecss.engine.pipeline import StylePipeline
from ecss.errors import StyleSheetLoaderError
from ecss.host.world import AssetHandle, World
from ecss.property.facets import FACET_TYPES, Text, TextSection
from ecss.property.types import Color, Val
from ecss.stylesheet.loader import StyleSheetLoader


def build_world(scene: dict[str, Any]) -> World:
    """Build a :class:`World` from a scene description.

    ``{"entities": [{"name": "root", "classes": ["title"], "facets": ["Style", "Text"], "text": "Hi"}]}``
    """
    world = World()
    for entry in scene.get("entities", []):
        facets = []
        for facet_name in entry.get("facets", []):
            facet_type = FACET_TYPES.get(facet_name)
            if facet_type is None:
                raise click.BadParameter(f"Unknown facet type: {facet_name}")
            facets.append(facet_type())
        if "text" in entry:
            facets = [f for f in facets if not isinstance(f, Text)]
            facets.append(Text(sections=[TextSection(value=str(entry["text"]))]))
        world.spawn(*facets, name=entry.get("name"), classes=entry.get("classes", ()))
    return world


def to_json(value: Any) -> Any:
    """Convert facets and typed values into JSON-compatible data."""
    if isinstance(value, Val):
        return str(value)
    if isinstance(value, Color):
        return value.to_hex()
    if isinstance(value, AssetHandle):
        return value.path
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value


def snapshot(world: World) -> list[dict[str, Any]]:
    result = []
    for entity in sorted(world.entities()):
        result.append(
            {
                "id": entity,
                "name": world.name_of(entity),
                "classes": sorted(world.classes_of(entity)),
                "facets": {type(f).__name__: to_json(f) for f in world.facets(entity)},
            }
        )
    return result


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@click.argument("scenefile", type=click.Path(exists=True, dir_okay=False))
@click.option("--cycles", default=1, show_default=True, type=click.IntRange(min=1), help="Cycles to run")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON file with pipeline configuration",
)
def apply(cssfile: str, scenefile: str, cycles: int, config_file: str | None) -> None:
    """Apply a style sheet to a JSON scene and print the styled facets as JSON."""
    # Step 1: Configuration
    config = EcssConfig()
    if config_file:
        try:
            config = EcssConfig.from_mapping(json.loads(Path(config_file).read_text(encoding="utf-8")))
        except (json.JSONDecodeError, TypeError) as exc:
            click.echo(f"Invalid config: {exc}", err=True)
            sys.exit(1)
        configure_logging(config)

    # Step 2: Load the style sheet
    try:
        document = StyleSheetLoader(config).load(cssfile)
    except StyleSheetLoaderError as exc:
        click.echo(f"Load error: {exc}", err=True)
        sys.exit(1)

    # Step 3: Build the scene
    try:
        scene = json.loads(Path(scenefile).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        click.echo(f"Invalid scene: {exc}", err=True)
        sys.exit(1)
    world = build_world(scene)

    # Step 4: Run the pipeline
    pipeline = StylePipeline(world, config=config)
    pipeline.add_document(document)
    for _ in range(cycles):
        pipeline.run_cycle()

    for diag in pipeline.diagnostics:
        click.echo(str(diag), err=True)
    click.echo(json.dumps(snapshot(world), indent=2))
