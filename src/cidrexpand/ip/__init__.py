"""
IP/CIDR Range Module

Expands CIDR blocks into address lists and converts addresses to and
from binary digit strings.
"""

from cidrexpand.ip.core import (
    AddressRangeError,
    InvalidAddressError,
    InvalidPrefixLengthError,
    InvalidBinaryStringError,
    CidrNetwork,
    ExpansionResult,
    NetworkInfo,
    AddressConverter,
    RangeExpander,
    NetworkCalculator,
    parse_cidr,
    is_valid_cidr,
    to_binary_string,
    to_ip_address,
    expand_cidr,
    expand_cidrs_detailed,
    iter_cidr,
    count_addresses,
    subnet_mask,
    wildcard_mask,
    describe_network,
)

__all__ = [
    "AddressRangeError",
    "InvalidAddressError",
    "InvalidPrefixLengthError",
    "InvalidBinaryStringError",
    "CidrNetwork",
    "ExpansionResult",
    "NetworkInfo",
    "AddressConverter",
    "RangeExpander",
    "NetworkCalculator",
    "parse_cidr",
    "is_valid_cidr",
    "to_binary_string",
    "to_ip_address",
    "expand_cidr",
    "expand_cidrs_detailed",
    "iter_cidr",
    "count_addresses",
    "subnet_mask",
    "wildcard_mask",
    "describe_network",
]
