import pytest
from renamatic import utils


@pytest.mark.parametrize("text", [
    "std",
    "std.Foo",
    "std.Foo()",
    "std.PrevRealm().Addr",
    "std.PrevRealm().Addr()",
    "std.GetOrigCaller().Addr().String",
])
def test_rooted_in_std(text):
    assert utils.is_qualified(utils.create_expression(text))


@pytest.mark.parametrize("text", [
    "custom",
    "custom.Addr",
    "Addr()",
    "foo(std)",
    "foo(std).Addr",
    "std[0].Addr",
    "(std).Addr",
    "stdlib.Addr",
    "\"std\"",
])
def test_not_rooted_in_std(text):
    assert not utils.is_qualified(utils.create_expression(text))


def test_none_is_not_qualified():
    assert not utils.is_qualified(None)


def test_other_qualifier():
    assert utils.is_qualified(utils.create_expression("chain.Foo().Bar"), "chain")
    assert not utils.is_qualified(utils.create_expression("std.Foo"), "chain")
