import logging
import sys
from enum import Enum
from typing import Annotated as Ann
from typing import List, Optional

import typer
from rich.console import Console
from typer import Argument as Arg
from typer import Option as Opt

from libraryclient.exceptions import LibraryError

from .cli_utils import StructuredFormat, StructuredFormatOption, make_formatter
from .config import cli as config_cli

app = typer.Typer(
    help='Query and update a container library.',
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
)
app.add_typer(config_cli.app)

errc = Console(stderr=True, soft_wrap=True)


class ResourceKind(str, Enum):
    ENTITY = 'entity'
    COLLECTION = 'collection'
    CONTAINER = 'container'
    IMAGE = 'image'

    def __str__(self):
        return self.value


class LogLevel(str, Enum):
    DEBUG = 'debug'
    INFO = 'info'
    WARNING = 'warning'
    ERROR = 'error'


@app.callback()
def configure(
    log_level: Ann[Optional[LogLevel], Opt('--log-level', help='Emit JSON logs at this level.')] = None,
):
    if log_level is not None:
        from libraryclient.library_logging import configure_logging  # pylint: disable=import-outside-toplevel

        configure_logging(getattr(logging, log_level.value.upper()))


def _fail(e: LibraryError):
    errc.print(f'Error: {e}', markup=False)
    sys.exit(1)


@app.command()
def version():
    '''Print version information and exit.'''
    import libraryclient  # pylint: disable=import-outside-toplevel

    print(libraryclient.version())


@app.command()
def get(
    kind: Ann[ResourceKind, Arg(help='Kind of resource to fetch')],
    ref: Ann[str, Arg(help='Reference or id of the resource')],
    output: StructuredFormatOption = StructuredFormat.YAML,
):
    """Get the entity, collection, container or image named REF."""
    from libraryclient.client import LibraryClient  # pylint: disable=import-outside-toplevel

    try:
        with LibraryClient() as client:
            resource = getattr(client, f'get_{kind.value}')(ref)
    except LibraryError as e:
        _fail(e)
    if resource is None:
        print(f'{kind.value.capitalize()} {ref} not found')
    else:
        print(make_formatter(output)(resource))


@app.command()
def search(value: str, output: StructuredFormatOption = StructuredFormat.YAML):
    """Search the library for entities, collections, containers and images matching VALUE."""
    from libraryclient.client import LibraryClient  # pylint: disable=import-outside-toplevel

    try:
        with LibraryClient() as client:
            results = client.search(value)
    except LibraryError as e:
        _fail(e)
    print(make_formatter(output)(results))


@app.command()
def tags(container_id: str, output: StructuredFormatOption = StructuredFormat.YAML):
    """List the tags of the container with id CONTAINER_ID."""
    from libraryclient.client import LibraryClient  # pylint: disable=import-outside-toplevel

    try:
        with LibraryClient() as client:
            tag_map = client.get_tags(container_id)
    except LibraryError as e:
        _fail(e)
    print(make_formatter(output)(tag_map))


@app.command()
def tag(
    container_id: str,
    image_id: str,
    tag_names: Ann[List[str], Arg(metavar='TAG...', help='Tags to point at IMAGE_ID')],
):
    """Point each TAG of the container CONTAINER_ID at the image IMAGE_ID."""
    from libraryclient.client import LibraryClient  # pylint: disable=import-outside-toplevel

    try:
        with LibraryClient() as client:
            client.set_tags(container_id, image_id, tag_names)
    except LibraryError as e:
        _fail(e)
    print(f'Tagged image {image_id} as {", ".join(tag_names)}')


def main():
    app()


if __name__ == '__main__':
    main()
