"""Tests for the selector control surface."""

import logging

import pytest

from chat_paginator.config import PaginatorConfig
from chat_paginator.constants import LabelStyle
from chat_paginator.core.controls import ActionKind, ComponentType, PageView
from chat_paginator.core.select_renderer import (
    OptionLabel,
    SelectOptions,
    SelectRenderer,
    describe_item,
    truncate,
)
from chat_paginator.errors import ComponentError, RenderError, ValidationError
from chat_paginator.interfaces import ControlEvent


def view_of(items, current=0):
    return PageView(current, len(items), tuple(items))


def selection(values, custom_id="pager_select"):
    return ControlEvent("user-1", custom_id, ComponentType.SELECT, tuple(values))


class TestHelpers:
    """Tests for truncate and describe_item."""

    def test_truncate_short_text_unchanged(self):
        """Text within the limit is returned unchanged."""
        assert truncate("short", 10) == "short"

    def test_truncate_marks_cut(self):
        """Cut text ends with an ellipsis inside the limit."""
        assert truncate("abcdefghij", 8) == "abcde..."

    def test_describe_string(self):
        """A string describes itself."""
        assert describe_item("hello") == "hello"

    def test_describe_mapping_field_order(self):
        """description wins over title, title over name."""
        assert describe_item({"title": "T", "description": "D"}) == "D"
        assert describe_item({"name": "N", "title": "T"}) == "T"

    def test_describe_mapping_without_fields(self):
        """A mapping without known fields reports its size."""
        assert describe_item({"id": 1, "tags": []}) == "Object with 2 properties"

    def test_describe_object_attribute(self):
        """Object attributes are used when present."""
        class Item:
            name = "Widget"

        assert describe_item(Item()) == "Widget"

    def test_describe_none(self):
        """None has no description."""
        assert describe_item(None) is None


class TestLabelStyle:
    """Tests for labeling strategy resolution."""

    def test_default_page_numbers(self):
        """Without options the labels are page numbers."""
        info = SelectRenderer().labeling_info()
        assert info.style is LabelStyle.PAGE_NUMBERS
        assert info.is_custom_renderer is False

    def test_prefix_selects_custom_numbers(self):
        """A prefix switches to custom numbering."""
        info = SelectRenderer(SelectOptions(label_prefix="Chapter")).labeling_info()
        assert info.style is LabelStyle.CUSTOM_NUMBERS
        assert info.prefix == "Chapter"

    def test_renderer_takes_precedence_over_prefix(self, caplog):
        """A custom renderer beats custom numbering, with a warning."""
        renderer = SelectRenderer(
            SelectOptions(label_prefix="Chapter", label_renderer=lambda item, index: f"Item {index}")
        )

        assert renderer.label_style is LabelStyle.CUSTOM_LABELS
        assert "custom label renderer takes precedence" in caplog.text
        menu = renderer.build_menu(view_of(["a", "b"]))
        assert [o.label for o in menu.options] == ["Item 0", "Item 1"]

    def test_custom_numbers_requires_affix(self):
        """Custom numbering needs a prefix or suffix."""
        with pytest.raises(ValidationError) as exc:
            SelectRenderer(SelectOptions(label_style=LabelStyle.CUSTOM_NUMBERS))
        assert exc.value.field == "label_prefix"

    def test_custom_labels_requires_renderer(self):
        """Custom labels need a label renderer."""
        with pytest.raises(ValidationError) as exc:
            SelectRenderer(SelectOptions(label_style="custom-labels"))
        assert exc.value.field == "label_renderer"

    def test_invalid_max_options(self):
        """More than 25 options is rejected."""
        with pytest.raises(ValidationError):
            SelectRenderer(SelectOptions(max_options=26))

    def test_invalid_custom_id(self):
        """A custom id with spaces is rejected."""
        with pytest.raises(ValidationError):
            SelectRenderer(SelectOptions(custom_id="bad id"))


class TestBuildMenu:
    """Tests for option generation."""

    def test_page_number_labels(self, pages):
        """Default options are numbered pages with the current one selected."""
        menu = SelectRenderer().build_menu(view_of(pages, current=2))

        assert [o.label for o in menu.options] == ["Page 1", "Page 2", "Page 3", "Page 4", "Page 5"]
        assert [o.value for o in menu.options] == ["0", "1", "2", "3", "4"]
        assert menu.selected().value == "2"
        assert menu.placeholder == "Select a page..."
        assert menu.custom_id == "pager_select"

    def test_prefix_and_suffix(self):
        """Prefix and suffix wrap the page number."""
        renderer = SelectRenderer(SelectOptions(label_prefix="Chapter", label_suffix="!"))
        menu = renderer.build_menu(view_of(["a", "b"]))
        assert [o.label for o in menu.options] == ["Chapter 1!", "Chapter 2!"]

    def test_suffix_only(self):
        """A suffix alone follows the page number."""
        renderer = SelectRenderer(SelectOptions(label_suffix="page"))
        menu = renderer.build_menu(view_of(["a"]))
        assert menu.options[0].label == "1 page"

    def test_descriptions_from_items(self, articles):
        """Descriptions are derived from the items."""
        menu = SelectRenderer().build_menu(view_of(articles))
        assert [o.description for o in menu.options] == [
            "Install and configure the bot",
            "Every slash command explained",
            "FAQ",
            "Object with 2 properties",
        ]

    def test_description_truncated(self):
        """Long descriptions are truncated."""
        renderer = SelectRenderer(SelectOptions(description_max_length=10))
        menu = renderer.build_menu(view_of(["A rather long page of text"]))
        assert menu.options[0].description == "A rathe..."

    def test_descriptions_disabled(self, articles):
        """Descriptions can be turned off."""
        renderer = SelectRenderer(SelectOptions(show_descriptions=False))
        menu = renderer.build_menu(view_of(articles))
        assert all(o.description is None for o in menu.options)

    def test_custom_renderer_with_description(self, articles):
        """A renderer can supply label and description."""
        def label(item, index):
            return OptionLabel(label=f"#{index + 1}", description="from renderer")

        menu = SelectRenderer(SelectOptions(label_renderer=label)).build_menu(view_of(articles))
        assert menu.options[0].label == "#1"
        assert menu.options[0].description == "from renderer"

    def test_custom_renderer_mapping_result(self):
        """A renderer may return a mapping."""
        renderer = SelectRenderer(SelectOptions(label_renderer=lambda item, index: {"label": item.upper()}))
        menu = renderer.build_menu(view_of(["intro"]))
        assert menu.options[0].label == "INTRO"
        assert menu.options[0].description is None

    def test_description_renderer_overrides(self):
        """The description renderer wins over the label renderer."""
        renderer = SelectRenderer(
            SelectOptions(
                label_renderer=lambda item, index: OptionLabel(item, "ignored"),
                description_renderer=lambda item, index: f"about {item}",
            )
        )
        menu = renderer.build_menu(view_of(["cats"]))
        assert menu.options[0].description == "about cats"

    def test_empty_custom_label_is_render_error(self):
        """A blank custom label raises RenderError."""
        renderer = SelectRenderer(SelectOptions(label_renderer=lambda item, index: "   "))
        with pytest.raises(RenderError) as exc:
            renderer.build_menu(view_of(["a", "b"]))
        assert exc.value.page_index == 0

    def test_long_custom_label_is_validation_error(self):
        """An over-long custom label raises ValidationError."""
        renderer = SelectRenderer(
            SelectOptions(label_renderer=lambda item, index: "x" * 101 if index == 1 else "ok")
        )
        with pytest.raises(ValidationError) as exc:
            renderer.build_menu(view_of(["a", "b"]))
        assert exc.value.field == "options[1].label"

    def test_failing_renderer_uses_fallback(self, caplog):
        """Unexpected renderer errors degrade to the plain page label."""

        def label(item, index):
            if index == 1:
                raise KeyError("missing")
            return f"Item {index}"

        renderer = SelectRenderer(SelectOptions(label_renderer=label))
        menu = renderer.build_menu(view_of(["a", "b", "c"]))

        assert [o.label for o in menu.options] == ["Item 0", "Page 2", "Item 2"]
        assert renderer.fallback_pages == (1,)
        assert "using fallback" in caplog.text


class TestOptionCap:
    """Tests for more pages than the selector can list."""

    def test_only_first_pages_listed(self):
        """Only the first max_options pages are listed."""
        renderer = SelectRenderer(SelectOptions(max_options=3))
        items = [f"p{i}" for i in range(6)]

        menu = renderer.build_menu(view_of(items))

        assert len(menu.options) == 3
        assert renderer.accessible_page_count(6) == 3
        assert renderer.are_all_pages_accessible(6) is False
        assert renderer.is_page_accessible(2, 6)
        assert not renderer.is_page_accessible(3, 6)

    def test_config_cap_used_by_default(self):
        """The config cap applies when no option is given."""
        renderer = SelectRenderer(config=PaginatorConfig(max_options_per_menu=4))
        assert renderer.accessible_page_count(10) == 4

    def test_warning_logged_once_per_total(self, caplog):
        """The overflow warning is logged once per page total."""
        renderer = SelectRenderer(SelectOptions(max_options=3))
        items = [f"p{i}" for i in range(6)]

        with caplog.at_level(logging.WARNING):
            renderer.build_menu(view_of(items))
            renderer.build_menu(view_of(items, current=1))

        warnings = [r for r in caplog.records if "exceed the selector limit" in r.getMessage()]
        assert len(warnings) == 1

    def test_no_warning_within_cap(self, caplog, pages):
        """No warning when every page fits."""
        SelectRenderer().build_menu(view_of(pages))
        assert "exceed the selector limit" not in caplog.text


class TestResolve:
    """Tests for mapping selections to actions."""

    def test_goto(self, pages):
        """Selecting a page gives a GOTO action."""
        action = SelectRenderer().resolve(selection(["3"]), view_of(pages))
        assert action.kind is ActionKind.GOTO
        assert action.page == 3

    def test_current_page_is_no_action(self, pages):
        """Selecting the current page does nothing."""
        action = SelectRenderer().resolve(selection(["2"]), view_of(pages, current=2))
        assert action.kind is ActionKind.NONE

    def test_no_values_is_no_action(self, pages):
        """An empty selection does nothing."""
        assert SelectRenderer().resolve(selection([]), view_of(pages)).kind is ActionKind.NONE

    @pytest.mark.parametrize("value", ["abc", "-1", "5"])
    def test_bad_value(self, value, pages):
        """Invalid values raise ComponentError."""
        with pytest.raises(ComponentError) as exc:
            SelectRenderer().resolve(selection([value]), view_of(pages))
        assert exc.value.component == "Select"

    def test_value_beyond_cap(self):
        """Pages beyond the cap cannot be selected."""
        renderer = SelectRenderer(SelectOptions(max_options=3))
        with pytest.raises(ComponentError):
            renderer.resolve(selection(["4"]), view_of(list("abcdef")))

    def test_foreign_id(self, pages):
        """Events for another custom id are rejected."""
        with pytest.raises(ComponentError):
            SelectRenderer().resolve(selection(["1"], custom_id="other"), view_of(pages))

    def test_button_event(self, pages):
        """Button events are rejected."""
        event = ControlEvent("user-1", "pager_select", ComponentType.BUTTON)
        with pytest.raises(ComponentError):
            SelectRenderer().resolve(event, view_of(pages))
