"""Tests for crumbs.hooks — CookieHooks and SetCookieCollector."""

import pytest

from crumbs.hooks import CookieHooks, SetCookieCollector


class TestCookieHooks:
    def test_defaults(self) -> None:
        hooks = CookieHooks()
        assert hooks.on_set is None
        assert hooks.on_remove is None

    def test_frozen(self) -> None:
        hooks = CookieHooks()

        with pytest.raises(AttributeError):
            hooks.on_set = print  # type: ignore[misc]


class TestSetCookieCollector:
    def test_collects_in_order(self) -> None:
        collector = SetCookieCollector()
        collector.on_set("a", "a=1; Path=/")
        collector.on_remove("b", "b=; Max-Age=0; Path=/")

        assert collector.headers == [
            ("set-cookie", "a=1; Path=/"),
            ("set-cookie", "b=; Max-Age=0; Path=/"),
        ]
        assert collector.values() == ["a=1; Path=/", "b=; Max-Age=0; Path=/"]

    def test_same_name_twice_gives_two_headers(self) -> None:
        collector = SetCookieCollector()
        collector.on_set("a", "a=1")
        collector.on_set("a", "a=2")
        assert len(collector.headers) == 2

    def test_instances_do_not_share_headers(self) -> None:
        first = SetCookieCollector()
        first.on_set("a", "a=1")
        assert SetCookieCollector().headers == []
