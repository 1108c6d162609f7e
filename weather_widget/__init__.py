"""Weather Widget App"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("weather-widget")
except PackageNotFoundError:
    __version__ = "dev"
