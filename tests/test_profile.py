"""Tests for profile normalization."""

import json
from collections.abc import Callable
import pytest
from snapchat_auth.profile import (
    BitmojiData,
    SnapchatProfile,
    parse_profile,
    profile_from_me,
)


FixtureLoader = Callable[[str], str]

AVATAR_URL = (
    "https://render.bitstrips.com/v2/cpanel/sticker-circle-bitmoji-id.png"
    "?transparent=1&palette=1"
)


def _assert_no_generic_attributes(profile: SnapchatProfile) -> None:
    for attribute in ("name", "username", "emails", "photos"):
        assert not hasattr(profile, attribute)


def test_profile_with_display_name_scope_only(load_fixture: FixtureLoader) -> None:
    profile = parse_profile(load_fixture("me_only_display_name_scope.json"))

    assert profile.provider == "snapchat"
    assert profile.id == "my-external-id"
    assert profile.display_name == "Ghostface Chillah"
    assert profile.bitmoji == BitmojiData()
    _assert_no_generic_attributes(profile)


def test_profile_with_display_name_and_bitmoji_scopes(
    load_fixture: FixtureLoader,
) -> None:
    profile = parse_profile(json.loads(load_fixture("me.json")))

    assert profile == SnapchatProfile(
        id="my-external-id",
        display_name="Ghostface Chillah",
        bitmoji=BitmojiData(avatar_id="my-bitmoji-id", avatar_url=AVATAR_URL),
    )
    assert profile.raw is None
    assert profile.json is None
    _assert_no_generic_attributes(profile)


def test_profile_with_no_scopes(load_fixture: FixtureLoader) -> None:
    profile = parse_profile(load_fixture("me_no_scopes.json"))

    assert profile.provider == "snapchat"
    assert profile.id is None
    assert profile.display_name is None
    assert profile.bitmoji.avatar_id is None
    assert profile.bitmoji.avatar_url is None


@pytest.mark.parametrize(
    "document",
    [{}, {"data": {}}, {"data": None}, {"data": {"me": None}}, [], None],
)
def test_absent_levels_yield_empty_profile(document: object) -> None:
    profile = parse_profile(document)  # type: ignore[arg-type]

    assert profile == SnapchatProfile()
    assert isinstance(profile.bitmoji, BitmojiData)


def test_profile_from_me_reads_inner_object() -> None:
    profile = profile_from_me({"externalId": "X", "bitmoji": {"avatar": "U"}})

    assert profile.id == "X"
    assert profile.bitmoji == BitmojiData(avatar_url="U")


def test_with_source_attaches_response() -> None:
    document = {"data": {"me": {"externalId": "X"}}}
    profile = parse_profile(document).with_source("raw-text", document)

    assert profile.raw == "raw-text"
    assert profile.json == document
    assert profile.id == "X"
