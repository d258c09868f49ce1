"""Tests for error builders.

Validates:
- The no-frills builder adds nothing
- Eager descriptions are frozen at builder creation, lazy ones are not
- The recorded call site is exactly the caller of errorf/wrap
- A substituted call-site source is honored
"""

from __future__ import annotations

import re
import sys

import pytest

from errchain.build import (
    BUILTIN_BUILDER,
    ArgsBuilder,
    ContextError,
    ErrorBuilder,
    LazyArgsBuilder,
    new_auto_builder,
    new_builder,
    new_lazy_builder,
)
from errchain.chain import WrappedError, as_, is_, new_error
from errchain.foundation import CallSite, clear_settings_cache
from errchain.render import Renderer

# Renders this module's functions as "~.test_..."
RENDERER = Renderer(home=__name__)


def fake_source(skip: int) -> CallSite:
    return CallSite(func_name="pkg.mod.fn", file="/src/pkg/mod.py", line=7)


class Unprintable:
    def __str__(self) -> str:
        raise RuntimeError("str boom")

    def __repr__(self) -> str:
        raise RuntimeError("repr boom")


# ═════════════════════════════════════════════════════════════════════════════
# No-frills Builder
# ═════════════════════════════════════════════════════════════════════════════


def test_builtin_builder_errorf() -> None:
    err = BUILTIN_BUILDER.errorf("a %d", 1)
    assert str(err) == "a 1"
    assert type(err) is Exception
    assert RENDERER.stack_string(err) == "a 1"


def test_builtin_builder_wrap() -> None:
    root = new_error("root")
    err = BUILTIN_BUILDER.wrap(root, "ctx")
    assert isinstance(err, WrappedError)
    assert err.unwrap() is root
    assert RENDERER.stack_string(err) == "ctx\nroot"


def test_builders_satisfy_protocol() -> None:
    for builder in (BUILTIN_BUILDER, new_builder(), new_lazy_builder(), new_auto_builder()):
        assert isinstance(builder, ErrorBuilder)


# ═════════════════════════════════════════════════════════════════════════════
# Eager Builder
# ═════════════════════════════════════════════════════════════════════════════


def test_new_builder() -> None:
    """Description is formatted at creation; later mutation does not show."""
    changing = {"first": "orig"}
    eb = new_builder("t, %r", changing)
    changing["second"] = "new"
    err = eb.errorf("a")

    assert str(err) == "a"
    assert isinstance(err, ContextError)
    assert err.arg_str == "t, {'first': 'orig'}"
    assert re.fullmatch(
        r"~\.test_new_builder\(t, \{'first': 'orig'\}\) test_builder\.py:[0-9]+ a",
        RENDERER.stack_string(err),
    )


def test_new_builder_wrap() -> None:
    """wrap() annotates the cause; the cause renders on its own line."""
    root = new_error("connection refused")
    err = new_builder("%r", "db1").wrap(root, "connect")

    assert str(err) == "connect"
    assert err.unwrap() is root
    assert is_(err, root)
    lines = RENDERER.stack_string(err).split("\n")
    assert re.fullmatch(r"~\.test_new_builder_wrap\('db1'\) test_builder\.py:[0-9]+ connect", lines[0])
    assert lines[1] == "connection refused"


def test_new_builder_without_description() -> None:
    err = new_builder().errorf("bad %s", "input")
    assert re.fullmatch(
        r"~\.test_new_builder_without_description\(\) test_builder\.py:[0-9]+ bad input",
        RENDERER.stack_string(err),
    )


def test_builder_site_is_taken_per_call_not_at_creation() -> None:
    eb = new_builder()
    first, first_line = eb.errorf("one"), sys._getframe().f_lineno
    second, second_line = eb.errorf("two"), sys._getframe().f_lineno

    assert first.call_site.line == first_line
    assert second.call_site.line == second_line
    assert first_line != second_line


def test_builder_wrap_yields_context_annotation() -> None:
    err = new_builder("x").wrap(new_error("root"), "ctx")
    note = as_(err, ContextError)
    assert note is err.wrapper()
    assert note.arg_str == "x"


# ═════════════════════════════════════════════════════════════════════════════
# Call-site Depth
# ═════════════════════════════════════════════════════════════════════════════


def test_errorf_records_exact_caller() -> None:
    """The site is the function that called errorf, file and line included."""
    eb = new_builder()
    err, line = eb.errorf("boom"), sys._getframe().f_lineno

    site = err.call_site
    assert site.func_name == f"{__name__}.test_errorf_records_exact_caller"
    assert site.basename == "test_builder.py"
    assert site.line == line


def test_wrap_records_exact_caller() -> None:
    eb = new_lazy_builder("%d", 1)
    err, line = eb.wrap(new_error("root"), "boom"), sys._getframe().f_lineno

    site = err.wrapper().call_site
    assert site.func_name == f"{__name__}.test_wrap_records_exact_caller"
    assert site.line == line


def test_site_names_helper_not_builder_owner() -> None:
    """A builder shared with a helper records the helper, which is where errorf ran."""
    eb = new_builder()

    def check(value: int) -> BaseException:
        return eb.errorf("bad value %d", value)

    site = check(3).call_site
    assert site.func_name == f"{__name__}.test_site_names_helper_not_builder_owner.<locals>.check"


def test_method_site() -> None:
    class Store:
        def load(self, key: str) -> WrappedError:
            return new_builder("%r", key).wrap(KeyError(key), "load")

    site = Store().load("k").wrapper().call_site
    assert site.func_name.endswith("test_method_site.<locals>.Store.load")


# ═════════════════════════════════════════════════════════════════════════════
# Lazy Builder
# ═════════════════════════════════════════════════════════════════════════════


def test_new_lazy_builder() -> None:
    """Description is formatted at error time and marked lazy."""
    changing = {"first": "orig"}
    eb = new_lazy_builder("t, %r", changing)
    changing["second"] = "new"
    err = eb.errorf("a")

    assert str(err) == "a"
    assert err.arg_str == "<lazy> t, {'first': 'orig', 'second': 'new'}"
    assert re.fullmatch(
        r"~\.test_new_lazy_builder\(<lazy> t, \{'first': 'orig', 'second': 'new'\}\) "
        r"test_builder\.py:[0-9]+ a",
        RENDERER.stack_string(err),
    )


def test_lazy_builder_without_args_has_no_marker() -> None:
    err = new_lazy_builder().errorf("a")
    assert err.arg_str == ""


def test_lazy_builder_keeps_raw_args() -> None:
    eb = new_lazy_builder("%s", [1])
    assert isinstance(eb, LazyArgsBuilder)
    assert eb.template == "%s"
    assert eb.args == ([1],)


def test_lazy_marker_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRCHAIN_LAZY_MARKER", "(late)")
    clear_settings_cache()
    assert new_lazy_builder("%d", 5).errorf("x").arg_str == "(late) 5"


def test_lazy_builder_bad_template_degrades() -> None:
    err = new_lazy_builder("%d", "five").errorf("x")
    assert err.arg_str == "<lazy> %d %!(BADFORMAT 'five')"


def test_lazy_builder_unprintable_arg_keeps_cause() -> None:
    """An arg whose repr raises at failure time must not replace the real error."""
    root = new_error("root")
    err = new_lazy_builder("%r", Unprintable()).wrap(root, "ctx")

    assert str(err) == "ctx"
    assert err.unwrap() is root
    assert err.wrapper().arg_str == "<lazy> %r %!(BADFORMAT <Unprintable repr failed>)"


def test_eager_builder_unprintable_arg() -> None:
    eb = new_builder("%s", Unprintable())
    assert eb.arg_str == "%s %!(BADFORMAT <Unprintable repr failed>)"
    assert str(eb.errorf("bad %s", Unprintable())) == "bad %s %!(BADFORMAT <Unprintable repr failed>)"


# ═════════════════════════════════════════════════════════════════════════════
# Auto Builder
# ═════════════════════════════════════════════════════════════════════════════


def test_new_auto_builder() -> None:
    """Describes the calling function's own parameters, frozen at creation."""

    def resize(image: str, width: int, height: int = 0) -> BaseException:
        eb = new_auto_builder()
        width = 9999
        return eb.errorf("too wide: %d", width)

    err = resize("cat.png", 640)
    assert str(err) == "too wide: 9999"
    assert err.arg_str == "image='cat.png', width=640, height=0"
    assert re.fullmatch(
        r"~\.test_new_auto_builder\.<locals>\.resize\(image='cat\.png', width=640, height=0\) "
        r"test_builder\.py:[0-9]+ too wide: 9999",
        RENDERER.stack_string(err),
    )


def test_new_auto_builder_is_eager() -> None:
    assert isinstance(new_auto_builder(), ArgsBuilder)


# ═════════════════════════════════════════════════════════════════════════════
# Substituted Call-site Source
# ═════════════════════════════════════════════════════════════════════════════


def test_fake_source() -> None:
    """A substituted source replaces stack introspection entirely."""
    err = new_builder("%d", 1, source=fake_source).wrap(new_error("root"), "ctx")
    assert Renderer(home="pkg").stack_string(err) == "~.mod.fn(1) mod.py:7 ctx\nroot"


def test_source_receives_fixed_skip() -> None:
    skips: list[int] = []

    def recording(skip: int) -> CallSite:
        skips.append(skip)
        return fake_source(skip)

    eb = new_builder(source=recording)
    eb.errorf("a")
    eb.wrap(None, "b")
    assert len(set(skips)) == 1


def test_source_without_site_renders_plain() -> None:
    """No call site available means no enrichment, not an error."""
    err = new_builder("%d", 1, source=lambda skip: None).errorf("plain")
    assert err.call_site is None
    assert RENDERER.stack_string(err) == "plain"
