"""swiftbuild-cli: command line front-end for swiftbuild-core."""

from __future__ import annotations

__version__ = "0.1.0"
