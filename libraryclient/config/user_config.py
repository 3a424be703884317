from typing import Optional, TypeVar, Union
import configparser
import os
from pathlib import Path

from .variables import ConfigVariable

T = TypeVar('T')


def config_dir() -> Path:
    xdg_config_home = os.environ.get('XDG_CONFIG_HOME') or Path(Path.home(), '.config')
    return Path(xdg_config_home, 'libraryclient')


def config_file() -> Path:
    return Path(config_dir(), 'config.ini')


def load_config() -> configparser.ConfigParser:
    config = configparser.ConfigParser()
    config.read(config_file())
    return config


def save_config(config: configparser.ConfigParser) -> None:
    path = config_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        config.write(f)


def configuration_of(variable: ConfigVariable, explicit_argument: Optional[T], fallback: T) -> Union[str, T]:
    """Resolve a setting: explicit argument, then environment, then config file, then fallback."""
    if explicit_argument is not None:
        return explicit_argument

    from_env = os.environ.get(variable.envvar)
    if from_env is not None:
        return from_env

    return load_config().get(variable.section, variable.option, fallback=fallback)
