"""Tests for the Region value object."""

import dataclasses

import pytest

from s3_provider_registry.region import Region


def test_create_sanitizes() -> None:
    region = Region.create(" North America ", "US <East>", "us-east-1")
    assert region.continent == "northamerica"
    assert region.label == "US &lt;East&gt;"
    assert region.code == "us-east-1"


def test_display_label() -> None:
    region = Region.create("europe", "EU (Ireland)", "eu-west-1")
    assert region.display_label == "EU (Ireland) (eu-west-1)"


@pytest.mark.parametrize("code,expected", [("auto", True), ("AUTO", True), ("us-east-1", False), ("", False)])
def test_is_automatic(code: str, expected: bool) -> None:
    assert Region.create("global", "Automatic", code).is_automatic() is expected


def test_to_dict_unescapes() -> None:
    region = Region.create("europe", "Zürich & Geneva", "ch-1")
    assert region.to_dict() == {"label": "Zürich & Geneva", "region": "ch-1"}


def test_immutable() -> None:
    region = Region.create("europe", "EU (Ireland)", "eu-west-1")
    with pytest.raises(dataclasses.FrozenInstanceError):
        region.code = "eu-west-2"  # type: ignore[misc]


def test_equality() -> None:
    assert Region.create("europe", "Paris", "fr-par-1") == Region("europe", "Paris", "fr-par-1")
