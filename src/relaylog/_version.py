"""
Version of the relaylog distribution.

Kept in one place so the package metadata and ``relaylog.__version__`` agree.
"""

__version__ = "0.1.0"
