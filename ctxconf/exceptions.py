"""
ctxconf.exceptions
------------------

Errors raised by the property path engine.

None of these are retriable: they mean either the path string is malformed
or it does not fit the shape of the document. An absent map key is never
an error.
"""


class PathError(Exception):
    """
    Base class for every path parsing and navigation error.
    """

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class EmptySegment(PathError):
    """
    Raised for an empty path or a leading, trailing or doubled separator.
    """

    def __init__(self, path):
        super().__init__(f"Empty segment in property path {path!r}", path)


class UnknownProperty(PathError):
    """
    Raised when a segment does not name a known property of its record.
    """

    def __init__(self, name, options, path=None):
        known = ", ".join(sorted(options))
        super().__init__(
            f"Unknown property {name!r} in path {path!r} (expected one of: {known})", path
        )
        self.name = name
        self.options = sorted(options)


class PathTooDeep(PathError):
    """
    Raised when a path continues past a scalar leaf.
    """

    def __init__(self, name, path=None):
        super().__init__(f"Property path {path!r} continues past scalar {name!r}", path)
        self.name = name


class TypeMismatch(PathError):
    """
    Raised when a value does not fit the declared type of its target.
    """

    def __init__(self, expected, value, path=None):
        super().__init__(
            f"Cannot assign {type(value).__name__} value {value!r} to {expected} property {path!r}",
            path,
        )
        self.expected = expected
        self.value = value
