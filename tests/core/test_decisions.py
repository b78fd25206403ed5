"""Decisions — construction, protocol coercion and identity semantics.

Tests cover:
    - Protocol strings coerced to DownloadProtocol (case-insensitive)
    - Unknown protocol / empty guid raise InvalidDecisionError
    - Decision compares by identity
    - unit_ids is a frozenset view of content_unit_ids
"""

import pytest

from release_dispatch.core.decisions import (
    Decision, Release, RemoteContent, parse_protocol,
)
from release_dispatch.core.domain_types import DownloadProtocol
from release_dispatch.core.errors import InvalidDecisionError


def test_release_coerces_protocol_string():
    release = Release(guid="g1", title="Show.S01E01", protocol="Usenet")
    assert release.protocol is DownloadProtocol.USENET


def test_parse_protocol_rejects_unknown_value():
    with pytest.raises(InvalidDecisionError) as exc:
        parse_protocol("carrier-pigeon")
    assert exc.value.field == "protocol"
    assert exc.value.code == "INVALID_DECISION"


def test_release_requires_guid():
    with pytest.raises(InvalidDecisionError):
        Release(guid="", title="x", protocol=DownloadProtocol.TORRENT)


def test_remote_content_unit_ids_is_frozenset():
    release = Release(guid="g1", title="t", protocol=DownloadProtocol.TORRENT)
    rc = RemoteContent(release, [3, 1, 3])
    assert rc.content_unit_ids == (3, 1, 3)
    assert rc.unit_ids == frozenset({1, 3})
    assert str(rc) == "t"


def test_decision_equality_is_identity(make_decision):
    a = make_decision("A", [1])
    b = Decision(a.remote_content, approved=True)
    assert a != b
    assert a == a


def test_decision_exposes_release_and_protocol(make_decision):
    d = make_decision("A", [1, 2], protocol="usenet")
    assert d.protocol is DownloadProtocol.USENET
    assert d.release.guid == "A"
    assert d.unit_ids == {1, 2}
    assert "Release A" in repr(d)
