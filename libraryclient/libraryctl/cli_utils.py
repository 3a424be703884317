from enum import Enum
from typing import Any, Callable

import orjson
import yaml
from typer import Option as Opt

from typing_extensions import Annotated as Ann


class StructuredFormat(str, Enum):
    YAML = 'yaml'
    JSON = 'json'

    def __str__(self):
        return self.value


StructuredFormatOption = Ann[StructuredFormat, Opt('--output', '-o')]


def make_formatter(name: StructuredFormat) -> Callable[[Any], str]:
    if name == StructuredFormat.JSON:
        return lambda data: orjson.dumps(data, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS).decode('utf-8')
    assert name == StructuredFormat.YAML, f'unknown format: {name}'
    return lambda data: yaml.safe_dump(data, default_flow_style=False)
