"""PostgreSQL COPY binary and text encoding, binary decoding, type mapping and version parsing."""

__version__ = "0.1.0"