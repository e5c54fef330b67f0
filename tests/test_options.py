"""Tests for crumbs.options — CookieOptions, ReadOptions and option coercion."""

from dataclasses import fields, replace
from datetime import UTC, datetime

import pytest

from crumbs.errors import InvalidOptionError
from crumbs.options import (
    EPOCH,
    UNSET,
    CookieOptions,
    Priority,
    ReadOptions,
    SameSite,
    coerce_expires,
    coerce_max_age,
    coerce_priority,
    coerce_same_site,
)


class TestCookieOptions:
    def test_defaults_are_unset(self) -> None:
        opts = CookieOptions()

        for f in fields(opts):
            assert getattr(opts, f.name) is UNSET

    def test_resolved_defaults(self) -> None:
        opts = CookieOptions().resolved()

        assert opts.path == "/"
        assert opts.domain is None
        assert opts.expires is None
        assert opts.max_age is None
        assert opts.secure is False
        assert opts.http_only is False
        assert opts.same_site is None
        assert opts.partitioned is False
        assert opts.priority is None

    def test_resolved_keeps_explicit_values(self) -> None:
        opts = CookieOptions(path=None, secure=True).resolved()
        assert opts.path is None
        assert opts.secure is True
        assert opts.domain is None

    def test_unset_repr(self) -> None:
        assert repr(UNSET) == "UNSET"

    def test_frozen(self) -> None:
        opts = CookieOptions()

        with pytest.raises(AttributeError):
            opts.secure = True  # type: ignore[misc]

    def test_replace(self) -> None:
        opts = replace(CookieOptions(), secure=True)
        assert opts.secure is True
        assert opts.resolved().path == "/"

    def test_merge_overlays_set_fields(self) -> None:
        base = CookieOptions(path="/app", secure=True)
        merged = base.merge(CookieOptions(max_age=10))

        assert merged.path == "/app"
        assert merged.secure is True
        assert merged.max_age == 10

    def test_merge_overrides_path(self) -> None:
        merged = CookieOptions(path="/app").merge(CookieOptions(path="/other"))
        assert merged.path == "/other"

    def test_merge_explicit_fallback_values_override(self) -> None:
        base = CookieOptions(path="/app", domain="example.com", secure=True, same_site=SameSite.LAX)
        merged = base.merge(CookieOptions(path="/", domain=None, secure=False, same_site=None))

        assert merged.path == "/"
        assert merged.domain is None
        assert merged.secure is False
        assert merged.same_site is None

    def test_merge_none_is_identity(self) -> None:
        base = CookieOptions(domain="example.com")
        assert base.merge(None) is base

    def test_merge_default_options_is_noop(self) -> None:
        base = CookieOptions(path="/app", same_site=SameSite.LAX)
        assert base.merge(CookieOptions()) == base

    def test_for_removal(self) -> None:
        opts = CookieOptions(path="/app", domain="example.com", max_age=3600).for_removal()

        assert opts.max_age == 0
        assert opts.expires == EPOCH
        assert opts.path == "/app"
        assert opts.domain == "example.com"


class TestReadOptions:
    def test_defaults(self) -> None:
        assert ReadOptions().parse_json is False


class TestCoercion:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("strict", SameSite.STRICT),
            ("Lax", SameSite.LAX),
            ("NONE", SameSite.NONE),
            (SameSite.LAX, SameSite.LAX),
            (None, None),
        ],
    )
    def test_same_site(self, value: SameSite | str | None, expected: SameSite | None) -> None:
        assert coerce_same_site(value) is expected

    def test_same_site_invalid(self) -> None:
        with pytest.raises(InvalidOptionError, match="Expected one of: Strict, Lax, None"):
            coerce_same_site("sometimes")

    def test_priority(self) -> None:
        assert coerce_priority("medium") is Priority.MEDIUM
        assert coerce_priority(None) is None

    def test_priority_invalid(self) -> None:
        with pytest.raises(InvalidOptionError):
            coerce_priority(3)  # type: ignore[arg-type]

    def test_max_age(self) -> None:
        assert coerce_max_age(10) == 10
        assert coerce_max_age(10.7) == 10
        assert coerce_max_age(0) == 0
        assert coerce_max_age(None) is None

    @pytest.mark.parametrize("value", [True, "10", float("inf"), float("nan")])
    def test_max_age_invalid(self, value: object) -> None:
        with pytest.raises(InvalidOptionError, match="max_age"):
            coerce_max_age(value)  # type: ignore[arg-type]

    def test_expires_naive_taken_as_utc(self) -> None:
        assert coerce_expires(datetime(2030, 1, 1)) == datetime(2030, 1, 1, tzinfo=UTC)

    def test_expires_invalid(self) -> None:
        with pytest.raises(InvalidOptionError, match="expires must be a datetime"):
            coerce_expires(1_700_000_000)  # type: ignore[arg-type]
