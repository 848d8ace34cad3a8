from __future__ import annotations

import pytest

from tplsync.errors import ResolutionError
from tplsync.remote import OrgTemplate, TemplatePath
from tplsync.sync import resolve_revision

from fakes import FakeClient


def test_pinned_reference_needs_no_network() -> None:
    client = FakeClient()
    for ref in (
        TemplatePath(org="org", name="tpl", revision=2),
        OrgTemplate(org="org", name="tpl", revision=0),
    ):
        assert resolve_revision(ref, client) is ref
    assert client.calls == []


def test_list_resolution_picks_last_entry() -> None:
    client = FakeClient(
        revisions=[
            {"TemplateId": "/org/T:0"},
            {"TemplateId": "/org/T:1"},
            {"TemplateId": "/org/T:2"},
        ]
    )
    resolved = resolve_revision(TemplatePath(org="org", name="T"), client)
    assert resolved == TemplatePath(org="org", name="T", revision=2)
    assert client.calls == [("list", "/org/T")]


@pytest.mark.parametrize(
    "revisions",
    [
        [],
        [{"TemplateId": None}],
        [{"TemplateId": ""}],
        [{"TemplateId": "null"}],
        [{}],
        [{"TemplateId": "/org/T"}],
    ],
)
def test_list_resolution_failures(revisions) -> None:
    client = FakeClient(revisions=revisions)
    with pytest.raises(ResolutionError):
        resolve_revision(TemplatePath(org="org", name="T"), client)


def test_summary_resolution_uses_next_revision_minus_one() -> None:
    client = FakeClient(next_revision=5)
    resolved = resolve_revision(OrgTemplate(org="org", name="T"), client)
    assert resolved == OrgTemplate(org="org", name="T", revision=4)
    assert client.calls == [("summary", "org/T")]


def test_summary_resolution_without_revisions_fails() -> None:
    client = FakeClient(next_revision=0)
    with pytest.raises(ResolutionError):
        resolve_revision(OrgTemplate(org="org", name="T"), client)
