"""Path pattern compilation.

Placeholder syntax::

    /person/:name        required, one path segment
    /page/?num           optional, the slash before it is optional too
    /static/*path        greedy, the rest of the path
    /file/{:name}.txt    braces delimit a placeholder inside a segment

A pre-built ``re.Pattern`` is used as is; its named groups become the
named placeholders.
"""

import re
from dataclasses import dataclass

from peep.errors import ConfigurationError

_TOKEN = re.compile(r"\{([:?*])(\w+)\}|([:?*])(\w+)")

_SEGMENT = r"[^/]+"
_GREEDY = r".+"


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A path pattern compiled to an anchored regex."""

    source: str
    regex: re.Pattern[str]
    names: tuple[str, ...]

    def match(self, path: str) -> dict[str, str] | None:
        """Return the named placeholders if *path* matches, else ``None``.

        Optional placeholders that did not match are left out.
        """
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return {k: v for k, v in m.groupdict().items() if v is not None}


def compile_pattern(path: str | re.Pattern[str]) -> CompiledPattern:
    """Compile a route path into a ``CompiledPattern``.

    Raises ``ConfigurationError`` for duplicate placeholder names or
    stray braces.
    """
    if isinstance(path, re.Pattern):
        return CompiledPattern(
            source=path.pattern,
            regex=path,
            names=tuple(path.groupindex),
        )

    parts: list[str] = []
    names: list[str] = []
    pos = 0
    for m in _TOKEN.finditer(path):
        literal = path[pos : m.start()]
        sigil = m.group(1) or m.group(3)
        name = m.group(2) or m.group(4)
        if name in names:
            msg = f"Duplicate placeholder {name!r} in route path {path!r}"
            raise ConfigurationError(msg)
        names.append(name)

        if sigil == "?" and literal.endswith("/"):
            parts.append(_literal(literal[:-1], path))
            parts.append(f"(?:/(?P<{name}>{_SEGMENT}))?")
        else:
            parts.append(_literal(literal, path))
            if sigil == ":":
                parts.append(f"(?P<{name}>{_SEGMENT})")
            elif sigil == "?":
                parts.append(f"(?P<{name}>{_SEGMENT})?")
            else:
                parts.append(f"(?P<{name}>{_GREEDY})")
        pos = m.end()
    parts.append(_literal(path[pos:], path))

    return CompiledPattern(
        source=path,
        regex=re.compile("".join(parts)),
        names=tuple(names),
    )


def _literal(text: str, path: str) -> str:
    if "{" in text or "}" in text:
        msg = (
            f"Route path {path!r} has braces that are not a placeholder. "
            "Use {:name}, {?name} or {*name} to delimit a placeholder."
        )
        raise ConfigurationError(msg)
    return re.escape(text)
