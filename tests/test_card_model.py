"""Tests for card display resolution and legacy field fallbacks."""

from cardbinder.models.card import (
    Card,
    CardFields,
    next_image_index,
    prev_image_index,
    resolve_badge,
    resolve_images,
    resolve_subtitle,
    resolve_title,
)


def _card(**kwargs) -> Card:
    return Card(id="c1", user_id="u1", **kwargs)


class TestResolveTitle:
    def test_year_and_player(self) -> None:
        assert resolve_title(_card(player_name="Mike Trout", year=2011)) == "2011 Mike Trout"

    def test_player_without_year(self) -> None:
        assert resolve_title(_card(player_name="Mike Trout")) == "Mike Trout"

    def test_legacy_name_when_no_player(self) -> None:
        card = _card(name="2011 Topps Update Mike Trout")
        assert resolve_title(card) == "2011 Topps Update Mike Trout"

    def test_player_wins_over_legacy_name(self) -> None:
        card = _card(player_name="Mike Trout", year=2011, name="old name")
        assert resolve_title(card) == "2011 Mike Trout"

    def test_nothing_set(self) -> None:
        assert resolve_title(_card()) == ""


class TestResolveSubtitle:
    def test_card_set(self) -> None:
        assert resolve_subtitle(_card(card_set="Topps", set_name="Old")) == "Topps"

    def test_legacy_set_name(self) -> None:
        assert resolve_subtitle(_card(set_name="Fleer")) == "Fleer"

    def test_empty(self) -> None:
        assert resolve_subtitle(_card()) == ""


class TestResolveImages:
    def test_image_urls_preferred(self) -> None:
        card = _card(image_urls=["a.jpg", "b.jpg"], image_url="legacy.jpg")
        assert resolve_images(card) == ["a.jpg", "b.jpg"]

    def test_legacy_single_image(self) -> None:
        assert resolve_images(_card(image_url="legacy.jpg")) == ["legacy.jpg"]

    def test_no_images(self) -> None:
        assert resolve_images(_card()) == []

    def test_returns_copy(self) -> None:
        card = _card(image_urls=["a.jpg"])
        images = resolve_images(card)
        images.append("b.jpg")
        assert card.image_urls == ["a.jpg"]


class TestResolveBadge:
    def test_graded_card(self) -> None:
        card = _card(grading_company="PSA", grade_value="10", condition="Mint")
        assert resolve_badge(card) == "PSA 10"

    def test_raw_card_shows_condition(self) -> None:
        card = _card(grading_company="Raw", grade_value="", condition="Near Mint")
        assert resolve_badge(card) == "Near Mint"

    def test_no_company_shows_condition(self) -> None:
        assert resolve_badge(_card(condition="Good")) == "Good"


class TestGalleryNavigation:
    def test_next_wraps_to_first(self) -> None:
        assert next_image_index(0, 3) == 1
        assert next_image_index(2, 3) == 0

    def test_prev_wraps_to_last(self) -> None:
        assert prev_image_index(1, 3) == 0
        assert prev_image_index(0, 3) == 2

    def test_empty_gallery(self) -> None:
        assert next_image_index(0, 0) == 0
        assert prev_image_index(0, 0) == 0


class TestCardFieldsLegacySync:
    def test_legacy_name(self) -> None:
        fields = CardFields(player_name="Mike Trout", card_set="Topps", year=2011)
        assert fields.legacy_name() == "2011 Topps Mike Trout"

    def test_legacy_name_without_year(self) -> None:
        fields = CardFields(player_name="Mike Trout", card_set="Topps")
        assert fields.legacy_name() == "Topps Mike Trout"

    def test_legacy_image_url(self) -> None:
        assert CardFields(image_urls=["a.jpg", "b.jpg"]).legacy_image_url() == "a.jpg"
        assert CardFields().legacy_image_url() is None
