import pytest

from shipwright.cfg import (
    CfgAll,
    CfgAny,
    CfgNot,
    Compiler,
    ManifestCfgParseError,
    Os,
    parse_cfg,
)
from shipwright.errors import Error


def test_parse_os_option():
    assert parse_cfg('cfg(os = "linux")') is Os.LINUX


def test_parse_compiler_option():
    assert parse_cfg('cfg(compiler="apple_clang")') is Compiler.APPLE_CLANG


def test_parse_nested_predicates():
    parsed = parse_cfg('cfg(all(os="linux", not(compiler="gcc")))')
    assert parsed == CfgAll((Os.LINUX, CfgNot(Compiler.GCC)))


def test_parse_any_with_whitespace():
    parsed = parse_cfg(' cfg ( any ( os = "macos" ,\n compiler = "clang" ) ) ')
    assert parsed == CfgAny([Os.MACOS, Compiler.CLANG])


def test_all_and_any_are_distinct():
    assert parse_cfg('cfg(all(os="windows"))') != parse_cfg('cfg(any(os="windows"))')


def test_trailing_text_is_ignored():
    assert parse_cfg('cfg(os="linux") trailing') is Os.LINUX


def test_missing_cfg_keyword():
    with pytest.raises(ManifestCfgParseError) as info:
        parse_cfg("foo")
    assert info.value.expect == "cfg"
    assert info.value.rest == "foo"
    assert str(info.value) == "expect cfg, next is foo"


def test_unknown_predicate():
    with pytest.raises(ManifestCfgParseError) as info:
        parse_cfg("cfg(bar)")
    assert info.value.expect == "<CfgPredicate>"
    assert info.value.rest == "bar)"


def test_unknown_os():
    with pytest.raises(ManifestCfgParseError) as info:
        parse_cfg('cfg(os="freebsd")')
    assert info.value.expect == "<os>"
    assert info.value.rest == 'freebsd")'


def test_empty_list_rejected():
    with pytest.raises(ManifestCfgParseError) as info:
        parse_cfg("cfg(all())")
    assert "CfgPredicateList" in info.value.expect


def test_trailing_comma_rejected():
    with pytest.raises(ManifestCfgParseError) as info:
        parse_cfg('cfg(any(os="linux",))')
    assert info.value.rest.startswith(",")


def test_parse_error_is_error():
    with pytest.raises(Error):
        parse_cfg("")