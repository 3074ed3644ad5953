"""easypost-cli — interactive terminal client for the EasyPost shipping API.

Browse shipments and addresses, create shipments, and buy postage from
a menu-driven session.
"""

from easypost_cli.version import __version__

__all__: list[str] = ["__version__"]
