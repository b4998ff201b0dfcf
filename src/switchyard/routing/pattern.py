"""Route patterns: compilation and matching.

A pattern is a ``/``-separated path template:

    "/users"              literal   -> matches "/users" only, no params
    "/users/:id"          named     -> "/users/42" gives {"id": "42"}
    "/static/*"           wildcard  -> "/static/css/site.css" gives {"*": "css/site.css"}

Leading and trailing slashes are ignored on both the pattern and the path,
so ``/users/42`` and ``/users/42/`` are the same request.

Wildcard patterns only compare segment counts: the path needs at least one
segment beyond the pattern's, and the tail from the wildcard's position on
is captured. Literal segments before the ``*`` are not compared.
"""

from dataclasses import dataclass
from functools import lru_cache

from switchyard.errors import ConfigurationError

WILDCARD = "*"
PARAM_PREFIX = ":"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal:   ``users``  (is_param=False, is_wildcard=False)
    Named:     ``:id``    (is_param=True, param_name="id")
    Wildcard:  ``*``      (is_wildcard=True)
    """

    value: str
    is_param: bool = False
    is_wildcard: bool = False

    @property
    def param_name(self) -> str | None:
        return self.value[1:] if self.is_param else None


def slice_path(path: str) -> list[str]:
    """Split a path into segments, ignoring leading/trailing slashes.

    ``slice_path("/")`` is ``[""]``: the root is one empty segment.
    """
    return path.strip("/").split("/")


def join_path(base: str, path: str) -> str:
    """Join a router base path and a local pattern without doubling ``/``.

    Examples::

        join_path("/", "/users")      -> "/users"
        join_path("/admin", "/")      -> "/admin/"
        join_path("/admin", ":id")    -> "/admin/:id"
    """
    if not path.startswith("/"):
        path = "/" + path
    if base in ("", "/"):
        return path
    return base.rstrip("/") + path


@dataclass(frozen=True, slots=True)
class Pattern:
    """A compiled route pattern. Use ``compile_pattern()`` to build one."""

    raw: str
    segments: tuple[PathSegment, ...]

    @property
    def wildcard_index(self) -> int | None:
        """Position of the ``*`` segment, or ``None``."""
        for i, seg in enumerate(self.segments):
            if seg.is_wildcard:
                return i
        return None

    @property
    def is_literal(self) -> bool:
        return not any(seg.is_param or seg.is_wildcard for seg in self.segments)

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(seg.value[1:] for seg in self.segments if seg.is_param)

    def match(self, path: str) -> dict[str, str] | None:
        """Match a concrete request path.

        Returns the captured params (``{}`` for literal patterns) or
        ``None`` when the path does not match.
        """
        if self.is_literal:
            if self.raw.strip("/") == path.strip("/"):
                return {}
            return None

        parts = slice_path(path)

        wildcard_at = self.wildcard_index
        if wildcard_at is not None:
            if len(parts) < len(self.segments):
                return None
            return {WILDCARD: "/".join(parts[wildcard_at:])}

        if len(parts) != len(self.segments):
            return None

        captured: dict[str, str] = {}
        for seg, part in zip(self.segments, parts, strict=True):
            if seg.is_param:
                if not part:
                    return None
                captured[seg.value[1:]] = part
            elif seg.value != part:
                return None
        return captured


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> Pattern:
    """Parse *pattern* into a ``Pattern``. Results are cached.

    Raises:
        ConfigurationError: If a ``:`` segment has no name, or a named
            parameter appears twice.
    """
    segments: list[PathSegment] = []
    seen: set[str] = set()
    for part in slice_path(pattern):
        if part == WILDCARD:
            segments.append(PathSegment(part, is_wildcard=True))
        elif part.startswith(PARAM_PREFIX):
            name = part[1:]
            if not name:
                msg = f"Route pattern {pattern!r} has a ':' segment without a parameter name."
                raise ConfigurationError(msg)
            if name in seen:
                msg = f"Route pattern {pattern!r} captures {name!r} more than once."
                raise ConfigurationError(msg)
            seen.add(name)
            segments.append(PathSegment(part, is_param=True))
        else:
            segments.append(PathSegment(part))
    return Pattern(raw=pattern, segments=tuple(segments))


def match_path(pattern: str, path: str) -> dict[str, str] | None:
    """Match *path* against *pattern*; ``None`` means no match.

    Usage::

        match_path("/users/:name", "/users/123")        # {"name": "123"}
        match_path("/users/:name", "/users/123/extra")  # None
        match_path("/users/*", "/users/a/b")            # {"*": "a/b"}
        match_path("/users/*", "/users")                # None
    """
    return compile_pattern(pattern).match(path)
