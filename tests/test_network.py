import pytest

from cidrexpand.ip import (
    InvalidAddressError,
    InvalidPrefixLengthError,
    describe_network,
    subnet_mask,
    wildcard_mask,
)


@pytest.mark.parametrize("prefix, netmask, wildcard", [
    (0, "0.0.0.0", "255.255.255.255"),
    (8, "255.0.0.0", "0.255.255.255"),
    (22, "255.255.252.0", "0.0.3.255"),
    (30, "255.255.255.252", "0.0.0.3"),
    (32, "255.255.255.255", "0.0.0.0"),
])
def test_masks(prefix, netmask, wildcard):
    assert subnet_mask(prefix) == netmask
    assert wildcard_mask(prefix) == wildcard
    assert subnet_mask(str(prefix)) == netmask


def test_masks_reject_bad_prefix():
    with pytest.raises(InvalidPrefixLengthError):
        subnet_mask(33)
    with pytest.raises(InvalidPrefixLengthError):
        wildcard_mask("x")


def test_describe_network():
    info = describe_network("192.168.2.0/30")
    assert info.network == "192.168.2.0"
    assert info.broadcast == "192.168.2.3"
    assert info.netmask == "255.255.255.252"
    assert info.wildcard_mask == "0.0.0.3"
    assert info.prefix_length == 30
    assert info.wildcard_bits == 2
    assert info.num_addresses == 4
    assert info.num_hosts == 2
    assert info.first_host == "192.168.2.1"
    assert info.last_host == "192.168.2.2"
    assert not info.has_host_bits


def test_describe_network_with_host_bits():
    info = describe_network("10.1.2.3/8")
    assert info.address == "10.1.2.3"
    assert info.network == "10.0.0.0"
    assert info.broadcast == "10.255.255.255"
    assert info.num_hosts == 2 ** 24 - 2
    assert info.has_host_bits


@pytest.mark.parametrize("spec, num_hosts", [("10.0.0.0/31", 2), ("10.0.0.7/32", 1)])
def test_describe_small_networks_have_no_host_range(spec, num_hosts):
    info = describe_network(spec)
    assert info.num_hosts == num_hosts
    assert info.first_host is None
    assert info.last_host is None


def test_describe_network_invalid():
    with pytest.raises(InvalidAddressError):
        describe_network("10.0.0.0")
