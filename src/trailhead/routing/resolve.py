"""Relative path resolution for links and redirects.

Resolution only looks at the path part. A ``?query`` or ``#hash``
attached to the target is carried through verbatim::

    resolve("../settings?tab=2", "/users/42/profile")
    # -> "/users/42/settings?tab=2"
"""

from trailhead.routing.segments import split_path


def _split_suffix(uri: str) -> tuple[str, str]:
    """Split *uri* into its path and its ``?query#hash`` suffix."""
    cut = len(uri)
    for marker in ("?", "#"):
        pos = uri.find(marker)
        if pos != -1:
            cut = min(cut, pos)
    return uri[:cut], uri[cut:]


def normalize(path: str) -> str:
    """Collapse duplicate slashes and strip the trailing slash (except for ``/``)."""
    return "/" + "/".join(split_path(path))


def resolve(to: str, base: str) -> str:
    """Resolve *to* against *base*, returning an absolute path.

    - An absolute *to* ignores *base* and is only normalized.
    - ``..`` pops one segment off the base; popping past the root is a no-op.
    - ``.`` is consumed with no effect.
    - An empty relative path resolves to the base itself.

    Examples::

        >>> resolve("..", "/a/b")
        '/a'
        >>> resolve("../../..", "/a/b")
        '/'
        >>> resolve("c", "/a/b")
        '/a/b/c'
        >>> resolve("//x//y/", "/ignored")
        '/x/y'
    """
    to_path, suffix = _split_suffix(to)
    if to_path.startswith("/"):
        return normalize(to_path) + suffix

    base_path, _ = _split_suffix(base)
    segments = split_path(base_path)

    for segment in split_path(to_path):
        if segment == "..":
            if segments:
                segments.pop()
        elif segment != ".":
            segments.append(segment)

    return "/" + "/".join(segments) + suffix


def starts_with(pathname: str, prefix: str) -> bool:
    """Return whether *pathname* lies at or below *prefix*, segment-wise.

    ``/users/42`` starts with ``/users`` but ``/users-old`` does not.
    Every path starts with ``/``.
    """
    path_tokens = split_path(pathname)
    prefix_tokens = split_path(prefix)
    return path_tokens[: len(prefix_tokens)] == prefix_tokens
