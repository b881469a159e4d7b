"""Tests for configuration resolution and the compiled name patterns."""

from __future__ import annotations

import pytest

from handler_lint.config import (
    build_handler_name_pattern,
    build_prop_name_pattern,
    resolve_configuration,
)
from handler_lint.options import HandlerNamesOptions, OptionsError


def test_defaults():
    config = resolve_configuration()
    assert config.event_handler_prefix == "handle"
    assert config.event_handler_prop_prefix == "on"
    assert config.check_local_variables is False
    assert config.check_inline_function is False
    assert config.handler_name_pattern is not None
    assert config.prop_name_pattern is not None


def test_empty_prefix_falls_back_to_default():
    config = resolve_configuration({"eventHandlerPrefix": "", "eventHandlerPropPrefix": ""})
    assert config.event_handler_prefix == "handle"
    assert config.event_handler_prop_prefix == "on"


def test_disabled_handler_prefix():
    config = resolve_configuration({"eventHandlerPrefix": False})
    assert config.event_handler_prefix is None
    assert config.handler_name_pattern is None
    assert config.prop_name_pattern is not None


def test_disabled_prop_prefix():
    config = resolve_configuration({"eventHandlerPropPrefix": False})
    assert config.event_handler_prop_prefix is None
    assert config.prop_name_pattern is None
    # props.<X> is still accepted, with an empty prop prefix
    assert config.handler_name_pattern.match("props.Click")
    assert not config.handler_name_pattern.match("props.onClick")


def test_accepts_options_model():
    config = resolve_configuration(HandlerNamesOptions(check_local_variables=True))
    assert config.check_local_variables is True


def test_invalid_options_raise():
    with pytest.raises(OptionsError):
        resolve_configuration({"eventHandlerPrefix": False, "eventHandlerPropPrefix": False})


def test_configuration_is_frozen():
    config = resolve_configuration()
    with pytest.raises(AttributeError):
        config.event_handler_prefix = "on"


class TestHandlerNamePattern:
    @pytest.mark.parametrize("name", [
        "handleClick",
        "handleX",
        "a.handleClick",
        "handlers.form.handleSubmit",
        "props.onClick",
        "handleClick.bind(this)",
    ])
    def test_matches(self, name):
        assert build_handler_name_pattern("handle", "on").match(name)

    @pytest.mark.parametrize("name", [
        "handle",
        "handleclick",
        "click",
        "onClick",
        "props.handlers",
        "doHandleClick",
    ])
    def test_rejects(self, name):
        assert not build_handler_name_pattern("handle", "on").match(name)

    def test_disabled(self):
        assert build_handler_name_pattern(None, "on") is None

    def test_prefix_is_literal(self):
        pattern = build_handler_name_pattern("$do", "on")
        assert pattern.match("$doClick")
        assert not pattern.match("doClick")


class TestPropNamePattern:
    @pytest.mark.parametrize("name", ["onClick", "onX", "ref"])
    def test_matches(self, name):
        assert build_prop_name_pattern("on").match(name)

    @pytest.mark.parametrize("name", ["on", "onclick", "refs", "myRef", "clickHandler"])
    def test_rejects(self, name):
        assert not build_prop_name_pattern("on").match(name)

    def test_ref_accepted_with_custom_prefix(self):
        pattern = build_prop_name_pattern("handle")
        assert pattern.match("ref")
        assert pattern.match("handleClick")
        assert not pattern.match("onClick")

    def test_disabled(self):
        assert build_prop_name_pattern(None) is None
