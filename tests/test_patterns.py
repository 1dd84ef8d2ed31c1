"""Tests for the matchers — detection, canonical forms, exclusions."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from bundle_redactor import ConfigurationError
from bundle_redactor.patterns import (
    DomainMatcher,
    IPv4Matcher,
    IPv6Matcher,
    KeywordMatcher,
    MacMatcher,
    scan,
)


# ── IPv4 ─────────────────────────────────────────────────────────────

def test_ipv4_offsets_and_canonical():
    text = "node 10.0.187.218 up"
    [m] = IPv4Matcher().find(text)
    assert m.category == "ipv4"
    assert (m.start, m.end) == (5, 17)
    assert text[m.start:m.end] == m.text == m.canonical == "10.0.187.218"


def test_ipv4_dash_form_canonicalizes_to_dots():
    [m] = IPv4Matcher().find("etcd-ip-10-0-187-218.ec2.internal")
    assert m.text == "10-0-187-218"
    assert m.canonical == "10.0.187.218"


def test_ipv4_mixed_separators_do_not_match():
    assert IPv4Matcher().find("10.0-187.218") == []


def test_ipv4_dots_only():
    matcher = IPv4Matcher(".")
    assert matcher.find("ip-10-0-187-218") == []
    assert [m.text for m in matcher.find("10.0.187.218")] == ["10.0.187.218"]


def test_ipv4_needs_a_separator():
    with pytest.raises(ConfigurationError):
        IPv4Matcher("")


@pytest.mark.parametrize("text", [
    "0.0.0.0",
    "0-0-0-0",
    "4.8.12",
    "4.8.0-0.nightly-2021-07-31-065602",
    "333.125.22.640",
    "192.168.1.1000",
    "1.2.3",
    "01.02.03.04",
])
def test_ipv4_not_matched(text):
    assert IPv4Matcher().find(text) == []


def test_ipv4_leading_digit_false_positive():
    [m] = IPv4Matcher().find("910.218.98.1")
    assert m.text == "10.218.98.1"
    assert m.start == 1


def test_ipv4_multiple_in_order():
    found = IPv4Matcher().find("a 1.1.1.1 b 2.2.2.2 c 3-3-3-3")
    assert [m.canonical for m in found] == ["1.1.1.1", "2.2.2.2", "3.3.3.3"]
    assert [m.start for m in found] == sorted(m.start for m in found)


# ── IPv6 ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("address", [
    "2001:db8::ff00:42:8329",
    "::2fa:bf9",
    "fe80::1",
    "2001:0db8:85a3:0000:0000:8a2e:0370:7334",
    "::ffff:192.168.1.1",
    "2001:db8::",
])
def test_ipv6_detected(address):
    [m] = IPv6Matcher().find(f"peer {address} connected")
    assert m.text == m.canonical == address


@pytest.mark.parametrize("text, address", [
    ("peer 2001:db8::1: connection refused", "2001:db8::1"),
    ("from fe80::1: timeout", "fe80::1"),
    ("listen 2001:db8:::", "2001:db8::"),
    ("reached 2001:db8::1.", "2001:db8::1"),
    ("via fe80::aa:1, then", "fe80::aa:1"),
])
def test_ipv6_followed_by_punctuation(text, address):
    [m] = IPv6Matcher().find(text)
    assert m.text == address
    assert text[m.start:m.end] == address


def test_ipv6_trailing_colon_on_loopback_still_bracket_checked():
    assert [m.text for m in IPv6Matcher().find("ping ::1: ok")] == ["::1"]
    assert IPv6Matcher().find("x ::: y") == []


def test_ipv6_canonical_is_literal():
    found = IPv6Matcher().find("2001:db8::1 and 2001:0db8:0:0:0:0:0:1")
    assert [m.canonical for m in found] == ["2001:db8::1", "2001:0db8:0:0:0:0:0:1"]


def test_ipv6_bracketed_loopback_excluded():
    assert IPv6Matcher().find("Listening on [::1]:8080") == []


def test_ipv6_bracketed_address_matched():
    [m] = IPv6Matcher().find("Listening on [2001:db8::1]:8080")
    assert m.text == "2001:db8::1"


def test_ipv6_bare_loopback_matched():
    [m] = IPv6Matcher().find("ping ::1 ok")
    assert m.text == "::1"


@pytest.mark.parametrize("text", [
    "time 12:30:45",
    "std::vector<int>",
    "listen on :: port 80",
    "mac 00:1a:2b:3c:4d:5e",
    "key: value",
])
def test_ipv6_not_matched(text):
    assert IPv6Matcher().find(text) == []


# ── MAC ──────────────────────────────────────────────────────────────

def test_mac_colon_and_dash_share_canonical():
    found = MacMatcher().find("eth0 00:1a:2b:3c:4d:5e eth1 00-1A-2B-3C-4D-5E")
    assert [m.text for m in found] == ["00:1a:2b:3c:4d:5e", "00-1A-2B-3C-4D-5E"]
    assert {m.canonical for m in found} == {"00:1A:2B:3C:4D:5E"}


def test_mac_mixed_separators_do_not_match():
    assert MacMatcher().find("00:1a-2b:3c:4d:5e") == []


# ── Domain ───────────────────────────────────────────────────────────

def test_domain_and_subdomains():
    matcher = DomainMatcher(["example.com"])
    found = matcher.find("api.Example.com calls example.com, not example.community")
    assert [m.text for m in found] == ["api.Example.com", "example.com"]
    assert [m.canonical for m in found] == ["api.example.com", "example.com"]


def test_domain_in_path():
    [m] = DomainMatcher(["example.com"]).find("hosts/node1.example.com.yaml")
    assert m.text == "node1.example.com"


def test_domain_requires_names():
    with pytest.raises(ConfigurationError):
        DomainMatcher(["", "."])


# ── Keyword ──────────────────────────────────────────────────────────

def test_keyword_longest_first():
    found = KeywordMatcher(["prod", "prod-cluster"]).find("prod-cluster and prod")
    assert [m.text for m in found] == ["prod-cluster", "prod"]


def test_keyword_requires_words():
    with pytest.raises(ConfigurationError):
        KeywordMatcher([])


# ── Overlap resolution ───────────────────────────────────────────────

def test_scan_prefers_longer_overlapping_match():
    found = scan("mapped ::ffff:192.168.1.1 here", [IPv4Matcher(), IPv6Matcher()])
    assert [(m.category, m.text) for m in found] == [("ipv6", "::ffff:192.168.1.1")]


def test_scan_orders_left_to_right():
    found = scan("fe80::1 then 10.0.0.1 then ::2", [IPv4Matcher(), IPv6Matcher()])
    assert [m.text for m in found] == ["fe80::1", "10.0.0.1", "::2"]


def test_scan_is_restartable():
    matchers = [IPv4Matcher(), IPv6Matcher()]
    text = "10.0.0.1 fe80::1"
    assert scan(text, matchers) == scan(text, matchers)


def test_scan_many_overlapping_matches():
    text = " ".join(f"::ffff:10.0.{i // 256}.{i % 256}" for i in range(5000))
    found = scan(text, [IPv4Matcher(), IPv6Matcher()])
    assert len(found) == 5000
    assert {m.category for m in found} == {"ipv6"}
    assert all(a.end <= b.start for a, b in zip(found, found[1:]))


def test_scan_overlap_keeps_longest_across_neighbours():
    # the keyword spans two addresses; both shorter spans lose to it
    text = "a 10.0.0.1 b 10.0.0.2 c"
    keyword = KeywordMatcher(["10.0.0.1 b 10.0.0.2"])
    found = scan(text, [IPv4Matcher(), keyword])
    assert [(m.category, m.text) for m in found] == [("keyword", "10.0.0.1 b 10.0.0.2")]
