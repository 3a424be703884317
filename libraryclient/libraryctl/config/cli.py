import re
import sys
from typing import Annotated as Ann
from typing import Callable, Dict, NamedTuple, Optional

import typer
from rich.console import Console
from typer import Argument as Arg

from libraryclient.config import ConfigVariable, config_file, load_config, save_config

app = typer.Typer(
    name='config',
    no_args_is_help=True,
    help='Manage libraryclient configuration.',
    pretty_exceptions_show_locals=False,
)

outc = Console(soft_wrap=True, highlight=False)
errc = Console(stderr=True, soft_wrap=True)


class Setting(NamedTuple):
    help_msg: str
    is_valid: Callable[[str], bool]
    requirement: str


def _is_positive_number(x: str) -> bool:
    try:
        return float(x) > 0
    except ValueError:
        return False


SETTINGS: Dict[ConfigVariable, Setting] = {
    ConfigVariable.REMOTE_URL: Setting(
        'Base URL of the library service',
        lambda x: re.fullmatch(r'https?://[^\s/]+(/[^\s]*)?', x) is not None,
        'an http(s) URL',
    ),
    ConfigVariable.REMOTE_TOKEN: Setting(
        'Bearer token sent with every request',
        lambda x: re.fullmatch(r'\S+', x) is not None,
        'a token without whitespace',
    ),
    ConfigVariable.HTTP_TIMEOUT_IN_SECONDS: Setting(
        'Total timeout of a single HTTP request, in seconds',
        _is_positive_number,
        'a positive number of seconds',
    ),
}


def complete_variable(incomplete: str):
    for variable, setting in SETTINGS.items():
        if variable.value.startswith(incomplete):
            yield (variable.value, setting.help_msg)


VariableArg = Ann[ConfigVariable, Arg(help='Configuration variable, e.g. remote/url', autocompletion=complete_variable)]


@app.command()
def set(variable: VariableArg, value: str):
    """Set a libraryclient configuration variable."""
    setting = SETTINGS[variable]
    if not setting.is_valid(value):
        errc.print(f'Error: bad value {value!r} for {variable.value}: expected {setting.requirement}', markup=False)
        sys.exit(1)

    config = load_config()
    if variable.section not in config:
        config[variable.section] = {}
    config[variable.section][variable.option] = value
    save_config(config)


@app.command()
def unset(variable: VariableArg):
    """Unset a libraryclient configuration variable, restoring its default."""
    config = load_config()
    if config.has_option(variable.section, variable.option):
        config.remove_option(variable.section, variable.option)
        save_config(config)
    else:
        errc.print(f'WARNING: {variable.value} is not set', markup=False)


@app.command()
def get(variable: VariableArg):
    """Print the configured value of a variable."""
    value = load_config().get(variable.section, variable.option, fallback=None)
    if value is not None:
        outc.print(value, markup=False)


@app.command(name='config-location')
def config_location():
    """Print the location of the config file."""
    outc.print(f'Default settings: {config_file()}', markup=False)


@app.command(name='list')
def list_config(section: Ann[Optional[str], Arg(show_default='all sections')] = None):
    """List the configured variables, optionally only those of SECTION."""
    config = load_config()
    lines = [
        f'{section_name}/{option}={value}'
        for section_name in config.sections()
        if section is None or section_name == section
        for option, value in config[section_name].items()
    ]
    if lines:
        outc.print(f'Config settings from {config_file()}:', markup=False)
        outc.print('\n'.join(lines), markup=False)
