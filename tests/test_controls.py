"""Tests for control descriptors and row layout."""

import pytest

from chat_paginator.constants import ButtonStyle, PlatformLimits
from chat_paginator.core.controls import (
    ActionRow,
    Button,
    ControlKind,
    PageView,
    SelectMenu,
    SelectOption,
    build_action_rows,
    disable_rows,
    iter_controls,
)
from chat_paginator.errors import ValidationError


def make_buttons(count):
    return [Button(custom_id=f"b{i}", kind=ControlKind.NEXT, label=str(i)) for i in range(count)]


class TestButton:
    """Tests for Button."""

    def test_display_text_icon_first(self):
        """By default the icon leads the label."""
        button = Button("prev", ControlKind.PREVIOUS, label="Previous", emoji="⬅️")
        assert button.display_text() == "⬅️ Previous"

    def test_display_text_icon_after(self):
        """emoji_after puts the icon after the label."""
        button = Button("next", ControlKind.NEXT, label="Next", emoji="➡️", emoji_after=True)
        assert button.display_text() == "Next ➡️"

    def test_display_text_label_only(self):
        """Without an icon only the label shows."""
        assert Button("c", ControlKind.COUNTER, label="1 / 3").display_text() == "1 / 3"

    def test_defaults(self):
        """Buttons default to primary and enabled."""
        button = Button("x", ControlKind.STOP)
        assert button.style is ButtonStyle.PRIMARY
        assert button.disabled is False


class TestSelectMenu:
    """Tests for SelectMenu."""

    def test_selected(self):
        """selected returns the default option."""
        menu = SelectMenu(
            "menu",
            (SelectOption("Page 1", "0"), SelectOption("Page 2", "1", default=True)),
        )
        assert menu.selected().value == "1"

    def test_selected_none(self):
        """selected is None without a default option."""
        assert SelectMenu("menu", (SelectOption("Page 1", "0"),)).selected() is None

    @pytest.mark.parametrize("min_values, max_values", [(0, 1), (2, 1), (1, 26)])
    def test_invalid_value_counts(self, min_values, max_values):
        """Selection counts must satisfy 1 <= min <= max <= 25."""
        with pytest.raises(ValidationError):
            SelectMenu("menu", (SelectOption("Page 1", "0"),), min_values=min_values, max_values=max_values)


class TestBuildActionRows:
    """Tests for build_action_rows."""

    def test_five_buttons_share_a_row(self):
        """Up to five buttons share a row."""
        rows = build_action_rows(make_buttons(5), PlatformLimits())
        assert len(rows) == 1
        assert len(rows[0]) == 5

    def test_sixth_button_starts_new_row(self):
        """A sixth button starts a new row."""
        rows = build_action_rows(make_buttons(6), PlatformLimits())
        assert [len(row) for row in rows] == [5, 1]

    def test_select_takes_own_row(self):
        """A select menu sits alone in its row."""
        menu = SelectMenu("menu", (SelectOption("Page 1", "0"),))
        controls = make_buttons(2) + [menu] + make_buttons(1)
        rows = build_action_rows(controls, PlatformLimits())
        assert [len(row) for row in rows] == [2, 1, 1]
        assert rows[1].components[0] is menu

    def test_rows_capped(self, caplog):
        """More rows than the platform allows are dropped with a warning."""
        rows = build_action_rows(make_buttons(30), PlatformLimits())
        assert len(rows) == 5
        assert "extra rows dropped" in caplog.text

    def test_empty(self):
        """No controls give no rows."""
        assert build_action_rows([], PlatformLimits()) == []


class TestDisableRows:
    """Tests for disable_rows."""

    def test_disables_every_control(self):
        """Every control is disabled in a copy."""
        menu = SelectMenu("menu", (SelectOption("Page 1", "0"),))
        rows = [ActionRow(tuple(make_buttons(2))), ActionRow((menu,))]

        disabled = disable_rows(rows)

        assert all(control.disabled for control in iter_controls(disabled))
        # Originals untouched
        assert not any(control.disabled for control in iter_controls(rows))


class TestPageView:
    """Tests for PageView."""

    def test_edges(self):
        """at_start and at_end follow the current page."""
        assert PageView(0, 3).at_start
        assert not PageView(0, 3).at_end
        assert PageView(2, 3).at_end

    def test_single_page_is_both_edges(self):
        """A single page is both first and last."""
        view = PageView(0, 1)
        assert view.at_start and view.at_end
