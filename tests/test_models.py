"""
Unit tests for the data models.
"""
import pytest
from datetime import date, datetime

from hostdesk.utils.models import (
    Channel, ChannelStyle, Reservation, UserProfile, UserRoom, Page, parse_iso_date
)


def _reservation(**overrides):
    fields = dict(
        id="r1",
        guest_name="Alice Martin",
        property_name="Studio Vieux Port",
        check_in_date="2025-04-07",
        check_out_date="2025-04-10",
        status="confirmed",
        amount="450.50",
        channel=Channel.AIRBNB,
    )
    fields.update(overrides)
    return Reservation(**fields)


class TestParseIsoDate:
    """Test cases for ISO date parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("2025-04-07", date(2025, 4, 7)),
        ("2025-04-07T15:00:00", date(2025, 4, 7)),
        ("2025-04-07T15:00:00Z", date(2025, 4, 7)),
        (date(2025, 4, 7), date(2025, 4, 7)),
        (datetime(2025, 4, 7, 9, 30), date(2025, 4, 7)),
    ])
    def test_valid_values(self, value, expected):
        assert parse_iso_date(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   ", "07/04/2025", "2025-13-01", "soon", 20250407])
    def test_invalid_values(self, value):
        assert parse_iso_date(value) is None


class TestChannel:
    """Test cases for booking channels."""

    @pytest.mark.parametrize("code,expected", [
        ("AIRBNB", Channel.AIRBNB),
        ("airbnb", Channel.AIRBNB),
        (" Booking ", Channel.BOOKING),
        ("abritel", Channel.ABRITEL),
        ("DIRECT", Channel.DIRECT),
        ("HelloKeys", Channel.HELLOKEYS),
        ("EXPEDIA", Channel.UNKNOWN),
        ("", Channel.UNKNOWN),
        (None, Channel.UNKNOWN),
    ])
    def test_from_code(self, code, expected):
        assert Channel.from_code(code) is expected

    def test_every_channel_has_a_style(self):
        for channel in Channel:
            style = channel.style
            assert isinstance(style, ChannelStyle)
            assert style.bg_color.startswith("bg-")

    def test_styles(self):
        assert Channel.AIRBNB.style == ChannelStyle("Airbnb", "bg-red-600")
        assert Channel.BOOKING.style.name == "Booking.com"
        assert Channel.UNKNOWN.style.name == "Autre"


class TestReservation:
    """Test cases for Reservation."""

    def test_nights(self):
        assert _reservation().nights == 3

    def test_single_night_is_valid(self):
        res = _reservation(check_out_date="2025-04-08")
        assert res.nights == 1
        assert res.is_valid is True

    @pytest.mark.parametrize("check_out", ["2025-04-07", "2025-04-01"])
    def test_zero_or_negative_nights_are_invalid(self, check_out):
        res = _reservation(check_out_date=check_out)
        assert res.nights <= 0
        assert res.is_valid is False

    def test_unparseable_date_has_no_nights(self):
        res = _reservation(check_in_date="not-a-date")
        assert res.nights is None
        assert res.is_valid is False

    @pytest.mark.parametrize("amount,expected", [
        ("450.50", 450.5),
        ("450,50", 450.5),
        ("120 €", 120.0),
        ("", 0.0),
        ("n/a", 0.0),
    ])
    def test_amount_value(self, amount, expected):
        assert _reservation(amount=amount).amount_value == expected

    def test_belongs_to_room_by_name_or_id(self):
        by_name = UserRoom("1", "u1", "101", "Studio Vieux Port")
        by_id = UserRoom("2", "u1", "Studio Vieux Port", "Other name")
        other = UserRoom("3", "u1", "102", "Loft")
        res = _reservation()

        assert res.belongs_to(by_name)
        assert res.belongs_to(by_id)
        assert not res.belongs_to(other)

    def test_to_dict(self):
        data = _reservation().to_dict()

        assert data["id"] == "r1"
        assert data["channel"] == "AIRBNB"
        assert data["channel_name"] == "Airbnb"
        assert data["nights"] == 3

    def test_is_immutable(self):
        res = _reservation()
        with pytest.raises(AttributeError):
            res.guest_name = "Bob"


class TestUserProfile:
    """Test cases for UserProfile."""

    def test_from_dict_ignores_unknown_columns(self):
        profile = UserProfile.from_dict({
            "id": "user-1",
            "first_name": "Ana",
            "role": "admin",
            "objective_amount": 25000,
            "created_at": "2025-01-01",
        })

        assert profile.id == "user-1"
        assert profile.first_name == "Ana"
        assert profile.objective_amount == 25000
        assert profile.is_admin is True

    def test_non_admin(self):
        assert UserProfile(id="user-1", role="user").is_admin is False
        assert UserProfile(id="user-1").is_admin is False


def test_page_from_dict_defaults():
    page = Page.from_dict({"id": 7, "slug": "welcome", "title": "Welcome"})

    assert page.id == "7"
    assert page.content == ""
    assert page.is_published is False
    assert page.to_dict()["slug"] == "welcome"


def test_user_room_round_trip():
    row = {"id": "a1", "user_id": "u1", "room_id": "101", "room_name": "Studio"}
    assert UserRoom.from_dict(row).to_dict() == row
