"""
cidrexpand - IPv4 CIDR Range Utilities

Expands CIDR networks into the addresses they contain and converts
addresses to and from binary digit strings.
"""

__version__ = "0.1.0"
