"""keyshare — publish a signed, verifiable copy of your public key.

Wraps GnuPG and scp with an interactive preamble builder and a strict
layered architecture.
"""

from keyshare.version import __version__

__all__: list[str] = ["__version__"]
