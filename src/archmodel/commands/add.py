"""Command group: add elements to the model."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archmodel.commands._base import ArchGroup
from archmodel.domain.types import Location
from archmodel.services.model import ModelService

if TYPE_CHECKING:
    from archmodel.commands._context import AppContext

_LOCATIONS = {loc.value.lower(): loc for loc in Location}

_ADD_EXAMPLES = """\
  archmodel add person "Customer" -d "A customer of the bank" --location external
  archmodel add system "Internet Banking" -d "Online banking"
  archmodel add container 2 "API" -t "Java/Spring"
  archmodel add component 3 "Accounts Controller" --type controller
  archmodel add node "AWS" -e Live --property region=eu-west-1
  archmodel add instance 5 3"""

_location_option = click.option(
    "--location",
    type=click.Choice(sorted(_LOCATIONS), case_sensitive=False),
    default="unspecified",
    help="Inside or outside the enterprise.",
)


def _parse_properties(values: tuple[str, ...]) -> dict[str, str]:
    properties: dict[str, str] = {}
    for raw in values:
        key, sep, value = raw.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {raw!r}", param_hint="--property")
        properties[key.strip()] = value.strip()
    return properties


@click.group(cls=ArchGroup, examples=_ADD_EXAMPLES)
@click.pass_obj
def add(app: AppContext) -> None:
    """Add people, systems, containers, components and deployment elements."""


@add.command(
    examples="""\
  archmodel add person "Customer"
  archmodel add person "Back Office Staff" --location internal"""
)
@click.argument("name")
@click.option("-d", "--description", default="", help="What the person does.")
@_location_option
@click.pass_obj
def person(app: AppContext, name: str, description: str, location: str) -> None:
    """Add a person (a warning, not an error, if the name is taken)."""
    app.emit(
        ModelService(app.workspace).add_person(
            name, description, location=_LOCATIONS[location.lower()]
        )
    )


@add.command(
    examples="""\
  archmodel add system "Internet Banking"
  archmodel add system "Mainframe" --location internal"""
)
@click.argument("name")
@click.option("-d", "--description", default="", help="What the system does.")
@_location_option
@click.pass_obj
def system(app: AppContext, name: str, description: str, location: str) -> None:
    """Add a software system (a warning, not an error, if the name is taken)."""
    app.emit(
        ModelService(app.workspace).add_software_system(
            name, description, location=_LOCATIONS[location.lower()]
        )
    )


@add.command(
    examples="""\
  archmodel add container 2 "Web Application" -t "Java and Spring MVC"
  archmodel --json add container 2 "Database" -t Oracle"""
)
@click.argument("system_id")
@click.argument("name")
@click.option("-d", "--description", default="", help="What the container does.")
@click.option("-t", "--technology", default="", help="Implementation technology.")
@click.pass_obj
def container(
    app: AppContext, system_id: str, name: str, description: str, technology: str
) -> None:
    """Add a container to a software system."""
    app.emit(ModelService(app.workspace).add_container(system_id, name, description, technology))


@add.command(
    examples="""\
  archmodel add component 3 "Sign In Controller" --type controller
  archmodel add component 3 "Security" --source-path src/security.py"""
)
@click.argument("container_id")
@click.argument("name")
@click.option("-d", "--description", default="", help="What the component does.")
@click.option("-t", "--technology", default="", help="Implementation technology.")
@click.option("--type", "component_type", default=None, help="Implementation type.")
@click.option("--source-path", default=None, help="Where the component's source lives.")
@click.pass_obj
def component(
    app: AppContext,
    container_id: str,
    name: str,
    description: str,
    technology: str,
    component_type: str | None,
    source_path: str | None,
) -> None:
    """Add a component to a container."""
    app.emit(
        ModelService(app.workspace).add_component(
            container_id,
            name,
            description,
            technology,
            type=component_type,
            source_path=source_path,
        )
    )


@add.command(
    examples="""\
  archmodel add node "Amazon Web Services" -e Live
  archmodel add node "EC2" --parent 7 --instances 3 --property size=t3.large"""
)
@click.argument("name")
@click.option("-d", "--description", default="", help="What the node is.")
@click.option("-t", "--technology", default="", help="Infrastructure technology.")
@click.option(
    "-e",
    "--environment",
    default=None,
    help="Deployment environment (defaults to [deployment] default_environment).",
)
@click.option("--parent", "parent_id", default=None, help="Nest under this deployment node.")
@click.option("--instances", default=1, type=click.IntRange(min=1), help="Replica count.")
@click.option("--property", "properties", multiple=True, help="KEY=VALUE (repeatable).")
@click.pass_obj
def node(
    app: AppContext,
    name: str,
    description: str,
    technology: str,
    environment: str | None,
    parent_id: str | None,
    instances: int,
    properties: tuple[str, ...],
) -> None:
    """Add a deployment node, top-level or nested."""
    app.emit(
        ModelService(app.workspace).add_deployment_node(
            name,
            description,
            technology,
            environment=environment or app.settings.deployment.default_environment,
            parent_id=parent_id,
            instances=instances,
            properties=_parse_properties(properties),
        )
    )


@add.command(
    examples="""\
  archmodel add instance 7 3
  archmodel --json add instance 7 3"""
)
@click.argument("node_id")
@click.argument("container_id")
@click.pass_obj
def instance(app: AppContext, node_id: str, container_id: str) -> None:
    """Deploy a container onto a node, replicating its relationships."""
    app.emit(ModelService(app.workspace).add_container_instance(node_id, container_id))
