"""
Name matching for allergens and drugs.

The reference matcher is a bidirectional substring test after stripping
everything but [a-z0-9]. It over-matches short tokens ("sod" matches both
"sodium" and "soda"), and an input that normalizes to "" matches anything.
That behavior is kept as is; stricter matchers plug in through BaseMatcher.
"""
import re

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")
_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")


def normalize(value: str) -> str:
    """Lower-case and drop every non-alphanumeric character."""
    return _NON_ALPHANUMERIC.sub("", value.lower())


class BaseMatcher:
    """Decides whether two names refer to the same substance."""

    name = "base"

    def matches(self, a: str, b: str) -> bool:
        raise NotImplementedError


class SubstringMatcher(BaseMatcher):
    """Match when either normalized name contains the other."""

    name = "substring"

    def matches(self, a: str, b: str) -> bool:
        na = normalize(a)
        nb = normalize(b)
        return na in nb or nb in na


class TokenMatcher(BaseMatcher):
    """
    Match when every word of the shorter name is a word of the longer one.

    "iv contrast" matches "contrast" but "sod" no longer matches "sodium".
    """

    name = "token"

    def matches(self, a: str, b: str) -> bool:
        ta = set(t for t in _TOKEN_SPLIT.split(a.lower()) if t)
        tb = set(t for t in _TOKEN_SPLIT.split(b.lower()) if t)
        if not ta or not tb:
            return False
        return ta <= tb or tb <= ta


MATCHERS = {
    SubstringMatcher.name: SubstringMatcher,
    TokenMatcher.name: TokenMatcher,
}


def get_matcher(name: str) -> BaseMatcher:
    """Instantiate a matcher by name ('substring' or 'token')."""
    try:
        return MATCHERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown allergy matcher '{name}'. Choose from: {', '.join(sorted(MATCHERS))}"
        ) from None
