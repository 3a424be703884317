__version__ = '0.3.0'
__pip_version__ = '0.3.0'
