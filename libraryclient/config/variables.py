from enum import Enum


class ConfigVariable(str, Enum):
    REMOTE_URL = 'remote/url'
    REMOTE_TOKEN = 'remote/token'
    HTTP_TIMEOUT_IN_SECONDS = 'http/timeout_in_seconds'

    @property
    def section(self) -> str:
        return self.value.split('/')[0]

    @property
    def option(self) -> str:
        return self.value.split('/')[1]

    @property
    def envvar(self) -> str:
        return f'LIBRARYCLIENT_{self.section.upper()}_{self.option.upper()}'
