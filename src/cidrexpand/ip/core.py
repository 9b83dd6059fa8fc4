"""
Core CIDR expansion and address/binary conversion.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from netaddr import IPAddress, IPNetwork, AddrFormatError, INET_PTON

from cidrexpand.logging_config import track_error

logger = logging.getLogger(__name__)


ADDRESS_BITS = 32
MAX_IPV4 = (1 << ADDRESS_BITS) - 1

# Decimal without leading zeros, like each octet under INET_PTON
_PREFIX_RE = re.compile(r"0|[1-9][0-9]*")
_BINARY_RE = re.compile(r"[01]+")


class AddressRangeError(ValueError):
    """Base class for address range validation failures."""

    def __init__(self, message: str, value: str | None = None):
        super().__init__(message)
        self.value = value


class InvalidAddressError(AddressRangeError):
    """Raised when text is not a four-octet IPv4 address."""


class InvalidPrefixLengthError(AddressRangeError):
    """Raised when a prefix length is non-numeric or outside [0, 32]."""


class InvalidBinaryStringError(AddressRangeError):
    """Raised when a binary digit string is empty, non-binary or wider than 32 bits."""


def _address_to_int(address: str) -> int:
    if not isinstance(address, str):
        raise InvalidAddressError(f"Invalid IPv4 address: {address!r}", value=address)
    try:
        return int(IPAddress(address, version=4, flags=INET_PTON))
    except (AddrFormatError, ValueError, TypeError):
        raise InvalidAddressError(f"Invalid IPv4 address: {address!r}", value=address) from None


def _parse_prefix(prefix: str | int) -> int:
    if isinstance(prefix, bool):
        raise InvalidPrefixLengthError(f"Invalid prefix length: {prefix!r}", value=str(prefix))
    if isinstance(prefix, int):
        value = prefix
    elif isinstance(prefix, str) and _PREFIX_RE.fullmatch(prefix):
        value = int(prefix)
    else:
        raise InvalidPrefixLengthError(f"Invalid prefix length: {prefix!r}", value=str(prefix))

    if not 0 <= value <= ADDRESS_BITS:
        raise InvalidPrefixLengthError(
            f"Prefix length /{value} is outside 0-{ADDRESS_BITS}", value=str(prefix)
        )
    return value


@dataclass(frozen=True)
class CidrNetwork:
    """An IPv4 network in CIDR notation.

    The address is kept exactly as given, host bits included; the block
    boundaries are derived by applying the prefix.
    """
    address: str
    prefix_length: int

    @property
    def wildcard_bits(self) -> int:
        return ADDRESS_BITS - self.prefix_length

    @property
    def network_bits(self) -> str:
        """Network boundary as a 32-character binary string."""
        fixed = AddressConverter.to_binary_string(self.address, pad=True)[:self.prefix_length]
        return fixed + "0" * self.wildcard_bits

    @property
    def broadcast_bits(self) -> str:
        """Broadcast boundary as a 32-character binary string."""
        fixed = AddressConverter.to_binary_string(self.address, pad=True)[:self.prefix_length]
        return fixed + "1" * self.wildcard_bits

    @property
    def network_address(self) -> str:
        return AddressConverter.to_ip_address(self.network_bits)

    @property
    def broadcast_address(self) -> str:
        return AddressConverter.to_ip_address(self.broadcast_bits)

    @property
    def has_host_bits(self) -> bool:
        return self.address != self.network_address

    def __str__(self) -> str:
        return f"{self.address}/{self.prefix_length}"


@dataclass
class ExpansionResult:
    """Outcome of expanding one CIDR from a batch."""
    cidr: str
    addresses: list[str] = field(default_factory=list)
    error: AddressRangeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class NetworkInfo:
    """Summary of a CIDR block."""
    cidr: str
    address: str
    network: str
    broadcast: str
    netmask: str
    wildcard_mask: str
    prefix_length: int
    wildcard_bits: int
    num_addresses: int
    num_hosts: int
    first_host: str | None
    last_host: str | None
    has_host_bits: bool


class AddressConverter:
    """Conversions between dotted-decimal addresses and binary digit strings.

    Dotted-decimal text lists the most significant octet first while the
    binary digits are read as a single big-endian integer. Both directions
    go through the 32-bit integer value so that octet order is handled in
    exactly one place.
    """

    @staticmethod
    def to_binary_string(address: str, pad: bool = False) -> str:
        """Convert an address to its base-2 digits.

        Without ``pad`` leading zero bits are dropped, so the result is only
        32 characters long when the first octet is 128 or greater.
        """
        value = _address_to_int(address)
        if pad:
            return format(value, f"0{ADDRESS_BITS}b")
        return format(value, "b")

    @staticmethod
    def to_ip_address(bits: str) -> str:
        """Convert base-2 digits back into a dotted-decimal address."""
        if not isinstance(bits, str) or not _BINARY_RE.fullmatch(bits):
            raise InvalidBinaryStringError(f"Invalid binary string: {bits!r}", value=bits)

        value = int(bits, 2)
        if value > MAX_IPV4:
            raise InvalidBinaryStringError(
                f"Binary string exceeds {ADDRESS_BITS} bits: {bits!r}", value=bits
            )
        return str(IPAddress(value, version=4))


class RangeExpander:
    """Expands CIDR blocks into the addresses they contain.

    By default the network and broadcast addresses of blocks with four or
    more addresses are left out. /31 blocks yield both addresses and /32
    blocks yield the single address as given.
    """

    def __init__(self, include_boundaries: bool = False):
        self.include_boundaries = include_boundaries

    @staticmethod
    def parse(spec: str) -> CidrNetwork:
        """Parse ``address/prefix`` text into a CidrNetwork."""
        if not isinstance(spec, str):
            raise InvalidAddressError(f"Invalid CIDR: {spec!r}", value=spec)

        text = spec.strip()
        if text.count("/") != 1:
            raise InvalidAddressError(f"Invalid CIDR (expected address/prefix): {spec!r}", value=spec)

        address, prefix = text.split("/")
        _address_to_int(address)
        prefix_length = _parse_prefix(prefix)
        return CidrNetwork(address=address, prefix_length=prefix_length)

    def count(self, network: CidrNetwork) -> int:
        """Number of addresses an expansion of ``network`` yields."""
        size = 1 << network.wildcard_bits
        if self.include_boundaries or network.wildcard_bits <= 1:
            return size
        return size - 2

    def iter_network(self, network: CidrNetwork) -> Iterator[str]:
        """Yield the addresses of one parsed network in ascending order."""
        if network.prefix_length == ADDRESS_BITS:
            yield network.address
            return

        first = int(network.network_bits, 2)
        last = int(network.broadcast_bits, 2)
        if not self.include_boundaries and network.wildcard_bits > 1:
            first += 1
            last -= 1

        logger.debug(f"Expanding {network}: {last - first + 1} addresses")
        for value in range(first, last + 1):
            yield AddressConverter.to_ip_address(format(value, "b"))

    def iter_cidr(self, spec: str) -> Iterator[str]:
        return self.iter_network(self.parse(spec))

    @classmethod
    def parse_all(
        cls,
        specs: Iterable[str],
        strict: bool = True,
    ) -> tuple[list[CidrNetwork], list[ExpansionResult]]:
        """Parse every spec before anything is enumerated.

        In strict mode the first malformed spec raises. Otherwise malformed
        specs are logged, counted and returned as failed results.
        """
        if isinstance(specs, str):
            specs = [specs]

        networks: list[CidrNetwork] = []
        skipped: list[ExpansionResult] = []
        for spec in specs:
            try:
                networks.append(cls.parse(spec))
            except AddressRangeError as e:
                if strict:
                    raise
                track_error(
                    "invalid_cidr",
                    f"Skipping {spec!r}: {e}",
                    context={"cidr": spec},
                    level=logging.WARNING,
                )
                skipped.append(ExpansionResult(cidr=spec, error=e))
        return networks, skipped

    def expand(self, specs: Iterable[str], strict: bool = True) -> list[str]:
        """Expand several CIDRs, concatenating the results in input order."""
        networks, _ = self.parse_all(specs, strict=strict)

        addresses: list[str] = []
        for network in networks:
            addresses.extend(self.iter_network(network))
        return addresses

    def expand_detailed(self, specs: Iterable[str]) -> list[ExpansionResult]:
        """Expand each CIDR independently, collecting one result per spec."""
        if isinstance(specs, str):
            specs = [specs]

        results = []
        for spec in specs:
            try:
                network = self.parse(spec)
            except AddressRangeError as e:
                logger.debug(f"Rejected {spec!r}: {e}")
                results.append(ExpansionResult(cidr=spec, error=e))
                continue
            results.append(ExpansionResult(cidr=spec, addresses=list(self.iter_network(network))))
        return results


class NetworkCalculator:
    """Mask and block summary calculations."""

    @staticmethod
    def subnet_mask(prefix: str | int) -> str:
        return str(IPNetwork(f"0.0.0.0/{_parse_prefix(prefix)}").netmask)

    @staticmethod
    def wildcard_mask(prefix: str | int) -> str:
        return str(IPNetwork(f"0.0.0.0/{_parse_prefix(prefix)}").hostmask)

    @staticmethod
    def describe(spec: str) -> NetworkInfo:
        network = RangeExpander.parse(spec)
        net = IPNetwork(str(network))
        num_hosts = RangeExpander().count(network)

        if network.wildcard_bits > 1:
            first_host = str(IPAddress(net.first + 1, version=4))
            last_host = str(IPAddress(net.last - 1, version=4))
        else:
            first_host = None
            last_host = None

        return NetworkInfo(
            cidr=str(network),
            address=network.address,
            network=str(IPAddress(net.first, version=4)),
            broadcast=str(IPAddress(net.last, version=4)),
            netmask=str(net.netmask),
            wildcard_mask=str(net.hostmask),
            prefix_length=network.prefix_length,
            wildcard_bits=network.wildcard_bits,
            num_addresses=net.size,
            num_hosts=num_hosts,
            first_host=first_host,
            last_host=last_host,
            has_host_bits=network.has_host_bits,
        )


def parse_cidr(spec: str) -> CidrNetwork:
    """Parse CIDR text into a CidrNetwork."""
    return RangeExpander.parse(spec)


def is_valid_cidr(spec: str) -> bool:
    """Check whether text is a valid IPv4 CIDR."""
    try:
        RangeExpander.parse(spec)
    except AddressRangeError:
        return False
    return True


def to_binary_string(address: str, pad: bool = False) -> str:
    """Convert a dotted-decimal address to binary digits."""
    return AddressConverter.to_binary_string(address, pad=pad)


def to_ip_address(bits: str) -> str:
    """Convert binary digits to a dotted-decimal address."""
    return AddressConverter.to_ip_address(bits)


def expand_cidr(
    networks: Iterable[str],
    include_boundaries: bool = False,
    strict: bool = True,
) -> list[str]:
    """Expand one or more CIDRs into their addresses."""
    return RangeExpander(include_boundaries=include_boundaries).expand(networks, strict=strict)


def expand_cidrs_detailed(
    networks: Iterable[str],
    include_boundaries: bool = False,
) -> list[ExpansionResult]:
    """Expand CIDRs, returning a success or error result for each."""
    return RangeExpander(include_boundaries=include_boundaries).expand_detailed(networks)


def iter_cidr(spec: str, include_boundaries: bool = False) -> Iterator[str]:
    """Lazily expand a single CIDR."""
    return RangeExpander(include_boundaries=include_boundaries).iter_cidr(spec)


def count_addresses(spec: str, include_boundaries: bool = False) -> int:
    """Count the addresses a CIDR expands to without enumerating them."""
    return RangeExpander(include_boundaries=include_boundaries).count(RangeExpander.parse(spec))


def subnet_mask(prefix: str | int) -> str:
    return NetworkCalculator.subnet_mask(prefix)


def wildcard_mask(prefix: str | int) -> str:
    return NetworkCalculator.wildcard_mask(prefix)


def describe_network(spec: str) -> NetworkInfo:
    """Summarize a CIDR block."""
    return NetworkCalculator.describe(spec)
