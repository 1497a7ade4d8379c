"""Path template compilation.

Turns a route template such as ``/users/{id}/posts/{post_id}`` into an
anchored regex whose groups capture one path segment each. Captured
values are positional: placeholder names are kept for introspection only.
"""

import re
from dataclasses import dataclass

from waypost.errors import ConfigurationError

# Characters allowed in a placeholder name and in a captured value
_NAME_RE = re.compile(r"[A-Za-z0-9_]+")
PARAM_PATTERN = r"([A-Za-z0-9_]+)"

_SLASH_RUN_RE = re.compile(r"/{2,}")


@dataclass(frozen=True, slots=True)
class PathPattern:
    """A compiled path template.

    ``regex`` always matches the whole path, never a prefix.
    ``param_names`` lists placeholders in template order.
    """

    template: str
    regex: re.Pattern[str]
    param_names: tuple[str, ...] = ()

    @property
    def is_literal(self) -> bool:
        """True if the template has no placeholders."""
        return not self.param_names

    def match(self, path: str) -> tuple[str, ...] | None:
        """Return captured values in placeholder order, or None."""
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return m.groups()


def compile_pattern(template: str) -> PathPattern:
    """Compile a path template into a ``PathPattern``.

    Examples::

        compile_pattern("/users")            -> matches "/users" only
        compile_pattern("/users/{id}")       -> "/users/42" captures ("42",)
        compile_pattern("/a/{x}-{y}")        -> "/a/1-2" captures ("1", "2")

    Literal braces cannot be escaped. A stray ``{`` or ``}``, an empty
    name, or a name outside ``[A-Za-z0-9_]`` raises ``ConfigurationError``.
    """
    parts: list[str] = []
    names: list[str] = []
    pos = 0
    length = len(template)

    while pos < length:
        char = template[pos]
        if char == "{":
            end = template.find("}", pos + 1)
            if end == -1:
                msg = f"Unclosed '{{' at position {pos} in route path {template!r}"
                raise ConfigurationError(msg)
            name = template[pos + 1 : end]
            if not name:
                msg = f"Empty placeholder '{{}}' in route path {template!r}"
                raise ConfigurationError(msg)
            if _NAME_RE.fullmatch(name) is None:
                msg = (
                    f"Invalid placeholder {{{name}}} in route path {template!r}. "
                    "Placeholder names may only contain letters, digits, and '_'."
                )
                raise ConfigurationError(msg)
            names.append(name)
            parts.append(PARAM_PATTERN)
            pos = end + 1
        elif char == "}":
            msg = f"Unmatched '}}' at position {pos} in route path {template!r}"
            raise ConfigurationError(msg)
        else:
            parts.append(re.escape(char))
            pos += 1

    return PathPattern(
        template=template,
        regex=re.compile("".join(parts)),
        param_names=tuple(names),
    )


def normalize_path(path: str) -> str:
    """Collapse duplicate slashes and trim the trailing one.

    The result always starts with ``/``; the empty path becomes ``/``.
    """
    path = _SLASH_RUN_RE.sub("/", path)
    return "/" + path.strip("/")


def join_path(prefix: str, path: str) -> str:
    """Join a group prefix and a route path into a normalized path.

    ``join_path("/api/", "/widgets/")`` -> ``"/api/widgets"``
    """
    return normalize_path(prefix + "/" + path.strip("/"))
