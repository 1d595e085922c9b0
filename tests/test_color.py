"""Tests for colour token parsing."""

from __future__ import annotations

import pytest

from lifx_tile_effects.color import NAMED_COLORS, OFF, Color, parse_color, parse_colors

EXPECTED = {
    "W": (0.0, 0.0, 1.0, 4000),
    "F": (0.0, 0.0, 1.0, 9000),
    "R": (0.0, 1.0, 1.0, 9000),
    "K": (22 / 360, 1.0, 1.0, 9000),
    "O": (31.2 / 360, 1.0, 1.0, 9000),
    "Y": (60.235 / 360, 1.0, 1.0, 9000),
    "L": (67.059 / 360, 1.0, 1.0, 9000),
    "G": (106.632 / 360, 1.0, 1.0, 9000),
    "S": (140 / 360, 1.0, 1.0, 9000),
    "C": (180 / 360, 1.0, 1.0, 9000),
    "B": (247.294 / 360, 1.0, 1.0, 9000),
    "M": (298.588 / 360, 1.0, 1.0, 9000),
    "P": (336.048 / 360, 1.0, 1.0, 9000),
}


class TestParseColor:
    """Tests for parse_color()."""

    @pytest.mark.parametrize("token", sorted(EXPECTED))
    def test_known_tokens(self, token: str) -> None:
        """Test each token maps to its fixed quadruple."""
        hue, saturation, brightness, kelvin = EXPECTED[token]
        assert parse_color(token) == Color(hue, saturation, brightness, kelvin)

    @pytest.mark.parametrize("token", sorted(EXPECTED))
    def test_lowercase_tokens(self, token: str) -> None:
        """Test tokens are case-insensitive."""
        assert parse_color(token.lower()) == parse_color(token)

    def test_table_has_thirteen_colors(self) -> None:
        """Test the table holds exactly the documented tokens."""
        assert set(NAMED_COLORS) == set(EXPECTED)

    def test_only_first_character_counts(self) -> None:
        """Test longer strings use their first character."""
        assert parse_color("cyan") == parse_color("C")
        assert parse_color("Xavier") == OFF

    @pytest.mark.parametrize("token", ["", "X", "z", "1", " ", None, 7, 1.5, ["R"], {"R": 1}])
    def test_unrecognized_gives_off(self, token: object) -> None:
        """Test unrecognized, empty and non-string input gives OFF."""
        assert parse_color(token) == OFF

    def test_off_color(self) -> None:
        """Test the reserved OFF colour."""
        assert OFF == Color(hue=0.0, saturation=1.0, brightness=0.0, kelvin=2500)

    def test_override_replaces_present_fields(self) -> None:
        """Test override wins field by field and leaves others unchanged."""
        result = parse_color("B", {"brightness": 0.25, "kelvin": 3500})

        base = parse_color("B")
        assert result.brightness == 0.25
        assert result.kelvin == 3500
        assert result.hue == base.hue
        assert result.saturation == base.saturation

    def test_override_applies_to_off(self) -> None:
        """Test override also applies to the fallback colour."""
        assert parse_color(None, {"brightness": 1.0}) == Color(0.0, 1.0, 1.0, 2500)

    def test_empty_override_is_ignored(self) -> None:
        """Test an empty override returns the base colour."""
        assert parse_color("G", {}) == parse_color("G")

    def test_override_does_not_mutate_table(self) -> None:
        """Test overriding leaves the shared table untouched."""
        parse_color("R", {"hue": 0.5})
        assert NAMED_COLORS["R"].hue == 0.0

    def test_unknown_override_field(self) -> None:
        """Test an override with an unknown field is rejected."""
        with pytest.raises(TypeError):
            parse_color("R", {"sparkle": 1})


class TestParseColors:
    """Tests for parse_colors()."""

    def test_preserves_length_and_order(self) -> None:
        """Test element-wise mapping in input order."""
        tokens = ["R", "nope", "g", None, "B"]
        result = parse_colors(tokens)

        assert len(result) == len(tokens)
        assert result == [parse_color(token) for token in tokens]

    def test_string_is_iterated_per_character(self) -> None:
        """Test a string of tokens parses each character."""
        assert parse_colors("RGB") == [
            NAMED_COLORS["R"],
            NAMED_COLORS["G"],
            NAMED_COLORS["B"],
        ]

    def test_empty(self) -> None:
        """Test an empty sequence gives an empty list."""
        assert parse_colors([]) == []

    def test_override_applies_to_every_element(self) -> None:
        """Test override is applied to each parsed colour."""
        result = parse_colors(["R", "X"], {"kelvin": 5000})
        assert [color.kelvin for color in result] == [5000, 5000]


class TestColor:
    """Tests for the Color dataclass."""

    def test_frozen(self) -> None:
        """Test Color is immutable."""
        color = parse_color("R")
        with pytest.raises(AttributeError):
            color.hue = 0.5  # type: ignore[misc]

    def test_as_hsbk_scales_hue(self) -> None:
        """Test conversion to lifx-async HSBK uses degrees."""
        hsbk = parse_color("C").as_hsbk()

        assert hsbk.hue == pytest.approx(180, abs=1)
        assert hsbk.saturation == pytest.approx(1.0)
        assert hsbk.brightness == pytest.approx(1.0)
        assert hsbk.kelvin == 9000

    def test_as_dict(self) -> None:
        """Test dictionary form."""
        assert OFF.as_dict() == {
            "hue": 0.0,
            "saturation": 1.0,
            "brightness": 0.0,
            "kelvin": 2500,
        }
