"""Template helper registry.

Every function here is pure: it only inspects its arguments and returns a
value.  The renderer installs the whole registry on its Jinja2 environment
before any template is compiled, so templates can call ``eq(a, b)``,
``includes(packages, "api")``, ``project_name|kebabCase`` and so on.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from jinja2 import Undefined


HelperFunc = Callable[..., Any]


# ---------------------------------------------------------------------------
# Comparison semantics
# ---------------------------------------------------------------------------

COMPARISON_OPERATORS: tuple[str, ...] = ("==", "===", "!=", "!==", "<", "<=", ">", ">=")

# Decimal literals as accepted by JavaScript's ``Number()``; no digit
# separators, no hex/octal/binary prefixes.
_NUMERIC_STRING = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_missing(value: Any) -> Any:
    """Map a Jinja undefined reference to ``None``."""
    if isinstance(value, Undefined):
        return None
    return value


def _string_to_number(text: str) -> float | None:
    """Numeric value of *text*, or ``None`` when it is not a number."""
    stripped = text.strip()
    if not stripped:
        return 0.0
    if _NUMERIC_STRING.fullmatch(stripped):
        return float(stripped.replace("Infinity", "inf"))
    return None


def _strict_equals(a: Any, b: Any) -> bool:
    """Equality that never treats ``True`` as ``1`` or ``"1"`` as ``1``."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a is b
    if _is_number(a) and _is_number(b):
        return a == b
    if type(a) is not type(b):
        return False
    return a == b


def _loose_equals(a: Any, b: Any) -> bool:
    """Equality with JavaScript ``==`` coercions for primitive values.

    Missing values (``None`` and undefined references) equal each other and
    nothing else.  Booleans compare as ``0``/``1`` and numeric strings by
    value.  Strings are parsed as decimal literals only, so ``"0x10" == 16``
    is false, unlike in JavaScript.  Containers compare with Python's ``==``.
    """
    a, b = _as_missing(a), _as_missing(b)
    if a is None or b is None:
        return a is None and b is None
    if isinstance(a, bool):
        a = int(a)
    if isinstance(b, bool):
        b = int(b)
    if _strict_equals(a, b):
        return True
    if _is_number(a) and isinstance(b, str):
        return a == _string_to_number(b)
    if _is_number(b) and isinstance(a, str):
        return b == _string_to_number(a)
    return a == b


def compare(v1: Any, operator: str, v2: Any) -> bool:
    """Evaluate ``v1 <operator> v2``.

    Unknown operators evaluate to ``False``, as do ordering comparisons
    involving a missing value or between values Python refuses to order
    (``None < 3``).
    """
    if operator == "==":
        return _loose_equals(v1, v2)
    if operator == "===":
        return _strict_equals(v1, v2)
    if operator == "!=":
        return not _loose_equals(v1, v2)
    if operator == "!==":
        return not _strict_equals(v1, v2)

    v1, v2 = _as_missing(v1), _as_missing(v2)
    try:
        if operator == "<":
            return bool(v1 < v2)
        if operator == "<=":
            return bool(v1 <= v2)
        if operator == ">":
            return bool(v1 > v2)
        if operator == ">=":
            return bool(v1 >= v2)
    except TypeError:
        return False
    return False


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _resolve_branch(branch: Any) -> Any:
    # Callables are invoked lazily; plain values pass through.
    if isinstance(branch, Undefined):
        return ""
    if callable(branch):
        return branch()
    return branch


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def eq(a: Any, b: Any) -> bool:
    return _strict_equals(a, b)


def ne(a: Any, b: Any) -> bool:
    return not _strict_equals(a, b)


def or_(a: Any, b: Any) -> Any:
    return a or b


def and_(a: Any, b: Any) -> Any:
    return a and b


def includes(container: Any, item: Any) -> bool:
    """Return ``True`` when *container* is non-empty and holds *item*."""
    if not container:
        return False
    try:
        return any(_strict_equals(element, item) for element in container)
    except TypeError:
        return False


def capitalize(value: Any) -> str:
    """Uppercase the first character, leaving the rest untouched.

    Unlike ``str.capitalize`` the remainder is not lowercased::

        capitalize("robotArm") -> "RobotArm"
    """
    text = _text(value)
    return text[:1].upper() + text[1:]


_WHITESPACE_RUN = re.compile(r"\s+")
_SEPARATOR_RUN = re.compile(r"[-_\s]+(.)?")


def kebab_case(value: Any) -> str:
    """``"Foo Bar"`` -> ``"foo-bar"``."""
    return _WHITESPACE_RUN.sub("-", _text(value)).lower()


def camel_case(value: Any) -> str:
    """``"foo-bar_baz qux"`` -> ``"fooBarBazQux"``."""
    return _SEPARATOR_RUN.sub(
        lambda match: match.group(1).upper() if match.group(1) else "",
        _text(value),
    )


def if_cond(
    v1: Any,
    operator: str,
    v2: Any,
    then: Any = "",
    otherwise: Any = "",
    caller: Callable[[], Any] | None = None,
) -> Any:
    """Pick *then* or *otherwise* depending on ``compare(v1, operator, v2)``.

    Branches may be callables, in which case the chosen one is invoked.
    Called from ``{% call ifCond(a, "<", b) %}body{% endcall %}`` the body
    is the *then* branch.  Inside templates the block form
    ``{% ifCond a, "<", b %}...{% else %}...{% endifCond %}`` is usually
    more convenient.
    """
    if caller is not None and then == "":
        then = caller
    if compare(v1, operator, v2):
        return _resolve_branch(then)
    return _resolve_branch(otherwise)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

HELPERS: dict[str, HelperFunc] = {}

# Names Jinja reserves as operators; they are additionally exposed with a
# trailing underscore so templates can call them.
KEYWORD_ALIASES: dict[str, str] = {"or": "or_", "and": "and_"}

# One-argument string transforms, also usable as filters.
FILTER_HELPERS: tuple[str, ...] = ("capitalize", "kebabCase", "camelCase")


def register_helper(name: str, func: HelperFunc) -> None:
    """Register *func* under *name*, replacing any previous helper."""
    HELPERS[name] = func


def get_helper(name: str) -> HelperFunc:
    """Look up a helper, raising ``KeyError`` with the known names."""
    try:
        return HELPERS[name]
    except KeyError:
        known = ", ".join(sorted(HELPERS))
        raise KeyError(f"unknown helper '{name}' (known: {known})") from None


def call_helper(name: str, *args: Any) -> Any:
    """Dispatch a helper call by registry name."""
    return get_helper(name)(*args)


def register_default_helpers() -> None:
    register_helper("eq", eq)
    register_helper("ne", ne)
    register_helper("or", or_)
    register_helper("and", and_)
    register_helper("includes", includes)
    register_helper("capitalize", capitalize)
    register_helper("kebabCase", kebab_case)
    register_helper("camelCase", camel_case)
    register_helper("ifCond", if_cond)


register_default_helpers()
