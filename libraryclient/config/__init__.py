from .user_config import config_dir, config_file, configuration_of, load_config, save_config
from .variables import ConfigVariable

DEFAULT_REMOTE_URL = 'https://library.sylabs.io'

__all__ = [
    'DEFAULT_REMOTE_URL',
    'ConfigVariable',
    'config_dir',
    'config_file',
    'configuration_of',
    'load_config',
    'save_config',
]
