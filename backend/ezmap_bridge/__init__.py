"""
EzMap shared-file bridge.

Relays files shared with or opened in the EzMap app into the
application layer over a method channel and an event stream.
"""

__version__ = "0.1.0"
