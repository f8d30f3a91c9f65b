"""Command-line interface for osm-client."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from osm_client.factory import create_client
from osm_client.logging_config import configure_logging
from osm_client.models.map_data import Node, Relation, Way
from osm_client.models.result import Success
from osm_client.models.tag import BoundingBox, Tag
from osm_client.protocols import ApiClientProtocol

app = typer.Typer(help="OpenStreetMap API client: log in, inspect and create changesets.")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    base_url: Annotated[
        str | None,
        typer.Option("--base-url", envvar="OSM_API_URL", help="API base URL"),
    ] = None,
    credentials_file: Annotated[
        Path | None,
        typer.Option("--credentials-file", "-c", help="Where credentials are stored"),
    ] = None,
) -> None:
    configure_logging(verbose=verbose)
    ctx.obj = {"base_url": base_url, "credentials_file": credentials_file}


def _client(ctx: typer.Context, **overrides: str | None) -> ApiClientProtocol:
    return create_client(**ctx.obj, **overrides)


def _fail(error: Exception) -> typer.Exit:
    logger.error("{}", error)
    return typer.Exit(1)


def _parse_tags(values: list[str] | None) -> list[Tag]:
    tags: list[Tag] = []
    for value in values or []:
        key, sep, tag_value = value.partition("=")
        if not sep or not key:
            msg = f"Tags must look like key=value, got {value!r}"
            raise typer.BadParameter(msg, param_hint="--tag")
        tags.append(Tag(key=key, value=tag_value))
    return tags


def _prompt_for_code(url: str) -> str:
    typer.echo("Open this URL in a browser and authorize osm-client:\n")
    typer.echo(f"  {url}\n")
    typer.launch(url)
    return typer.prompt("Authorization code")


@app.command()
def login(
    ctx: typer.Context,
    client_id: Annotated[
        str | None,
        typer.Option("--client-id", envvar="OSM_CLIENT_ID", help="OAuth 2.0 client id"),
    ] = None,
    client_secret: Annotated[
        str | None,
        typer.Option("--client-secret", envvar="OSM_CLIENT_SECRET", help="OAuth 2.0 client secret"),
    ] = None,
) -> None:
    """Authorize this client and store the credentials."""
    if not client_id:
        logger.error("An OAuth client id is required (--client-id or OSM_CLIENT_ID).")
        raise typer.Exit(1)

    client = _client(ctx, client_id=client_id, client_secret=client_secret)
    error = asyncio.run(client.add_account_using_oauth(_prompt_for_code))
    if error is not None:
        raise _fail(error)
    typer.echo("Logged in.")


@app.command()
def logout(ctx: typer.Context) -> None:
    """Remove the stored credentials."""
    _client(ctx).logout()
    typer.echo("Logged out.")


@app.command()
def status(ctx: typer.Context) -> None:
    """Show whether credentials are stored."""
    if _client(ctx).is_authenticated:
        typer.echo("Authenticated.")
    else:
        typer.echo("Not authenticated.")


@app.command()
def whoami(ctx: typer.Context) -> None:
    """Show the user the stored credentials belong to."""
    user, error = asyncio.run(_client(ctx).authenticated_user())
    if error is not None:
        raise _fail(error)
    if user is None:
        typer.echo("Could not read user details.")
        raise typer.Exit(1)
    typer.echo(f"{user.display_name} (id={user.id})")


@app.command()
def permissions(ctx: typer.Context) -> None:
    """List the permissions granted to this client."""
    granted, error = asyncio.run(_client(ctx).permissions())
    if error is not None:
        raise _fail(error)
    for permission in granted:
        typer.echo(permission.value)


@app.command()
def changesets(
    ctx: typer.Context,
    user_id: int = typer.Argument(..., help="Numeric user id"),
) -> None:
    """List open changesets of a user."""
    found, error = asyncio.run(_client(ctx).open_changesets(user_id))
    if error is not None:
        raise _fail(error)
    typer.echo(f"{len(found)} open changesets:\n")
    for changeset in found:
        comment = next((t.value or "" for t in changeset.tags if t.key == "comment"), "")
        typer.echo(f"  #{changeset.id}  {changeset.created_timestamp}  {comment}")
        if changeset.bounding_box is not None:
            typer.echo(f"    bbox={changeset.bounding_box.query_string}")


@app.command(name="map")
def map_cmd(
    ctx: typer.Context,
    bbox: str = typer.Argument(..., help="left,bottom,right,top in degrees"),
) -> None:
    """Download the map data inside a bounding box and summarize it."""
    try:
        bounding_box = BoundingBox.from_query_string(bbox)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="BBOX") from e

    elements, error = asyncio.run(_client(ctx).map_data(bounding_box))
    if error is not None:
        raise _fail(error)
    nodes = sum(isinstance(e, Node) for e in elements)
    ways = sum(isinstance(e, Way) for e in elements)
    relations = sum(isinstance(e, Relation) for e in elements)
    typer.echo(f"{nodes} nodes, {ways} ways, {relations} relations")


@app.command(name="create-changeset")
def create_changeset(
    ctx: typer.Context,
    tag: Annotated[
        list[str] | None,
        typer.Option("--tag", "-t", help="Changeset tag as key=value (repeatable)"),
    ] = None,
) -> None:
    """Open a new changeset and print its id."""
    changeset_id, error = asyncio.run(_client(ctx).create_changeset(_parse_tags(tag)))
    if error is not None:
        raise _fail(error)
    if changeset_id is None:
        typer.echo("Server response did not contain a changeset id.")
        raise typer.Exit(1)
    typer.echo(str(changeset_id))


@app.command(name="create-node")
def create_node(
    ctx: typer.Context,
    lat: float = typer.Argument(..., help="Latitude"),
    lon: float = typer.Argument(..., help="Longitude"),
    changeset: int = typer.Option(..., "--changeset", "-C", help="Open changeset id"),
    tag: Annotated[
        list[str] | None,
        typer.Option("--tag", "-t", help="Node tag as key=value (repeatable)"),
    ] = None,
) -> None:
    """Create a node in an open changeset and print its id."""
    node = Node(latitude=lat, longitude=lon, tags=tuple(_parse_tags(tag)))
    result = asyncio.run(_client(ctx).create_node(node, changeset))
    if isinstance(result, Success):
        typer.echo(str(result.value))
        return
    if result.error is not None:
        raise _fail(result.error)
    typer.echo("Server response did not contain a node id.")
    raise typer.Exit(1)
