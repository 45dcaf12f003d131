import string

import pytest

from streamlit_cookie_jar import ScrambleRegistry, UnknownScrambleAlgorithm, scramblers


def test_builtins_registered(registry):
    assert list(registry) == ["rot13", "rot13n"]
    assert len(registry) == 2
    assert registry.default_algorithm == "rot13n"


@pytest.mark.parametrize("name", ["rot13", "rot13n"])
def test_builtins_round_trip(registry, name):
    algorithm = registry[name]
    assert algorithm.decode(algorithm.encode(string.printable)) == string.printable


def test_rot13n_scrambles_letters_and_digits(registry):
    assert registry["rot13n"].encode("Secret123") == "Frperg678"
    assert registry["rot13"].encode("Secret123") == "Frperg123"


@pytest.mark.parametrize("name", [True, None, False, "", "nope"])
def test_resolve_falls_back_to_default(registry, name):
    assert registry.resolve_name(name) == "rot13n"
    assert registry.resolve(name) is registry["rot13n"]


def test_resolve_known_name(registry):
    assert registry.resolve_name("rot13") == "rot13"


def test_strict_lookup_raises(registry):
    with pytest.raises(UnknownScrambleAlgorithm) as excinfo:
        registry["nope"]
    assert excinfo.value.name == "nope"
    assert isinstance(excinfo.value, KeyError)
    assert str(excinfo.value) == "Cannot unscramble cookie with prefix 'nope'."


def test_register_and_overwrite(registry):
    registry.register("rev", lambda s: s[::-1], lambda s: s[::-1])
    assert "rev" in registry
    assert registry["rev"].encode("abc") == "cba"

    registry.register("rev", str.upper, str.lower)
    assert registry["rev"].encode("abc") == "ABC"


@pytest.mark.parametrize("name", ["a]b", "[x", "my-alg", ""])
def test_register_warns_about_suspicious_names(registry, name):
    with pytest.warns(UserWarning, match="alphanumeric"):
        registry.register(name, str, str)
    assert name in registry


def test_default_algorithm_must_be_registered(registry):
    with pytest.raises(UnknownScrambleAlgorithm):
        registry.default_algorithm = "nope"
    assert registry.default_algorithm == "rot13n"

    registry.default_algorithm = "rot13"
    assert registry.resolve_name(True) == "rot13"


def test_constructor_default():
    assert ScrambleRegistry(default_algorithm="rot13").default_algorithm == "rot13"
    with pytest.raises(UnknownScrambleAlgorithm):
        ScrambleRegistry(default_algorithm="nope")


def test_register_scrambler_uses_process_registry(monkeypatch):
    fresh = ScrambleRegistry()
    monkeypatch.setattr(scramblers, "registry", fresh)
    scramblers.register_scrambler("up", str.upper, str.lower)
    assert "up" in fresh
