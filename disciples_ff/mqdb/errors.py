"""Error definitions for MQDB parsing."""


class FormatError(ValueError):
    """Raised when an MQDB archive violates its binary layout.

    Covers bad header signature or version, duplicate table of contents ids,
    a missing name list record, record header signature mismatches and
    truncated structures met while the archive is being parsed.
    """


__all__ = ["FormatError"]
