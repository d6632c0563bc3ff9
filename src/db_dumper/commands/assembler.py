"""String helpers that turn command fragments into one shell command line."""

import re
import shlex

# Single-quoted runs are kept verbatim; whitespace elsewhere collapses.
_WHITESPACE = re.compile(r"('[^']*')|\s+")


def remove_extra_spaces(command: str) -> str:
    """Collapse every run of whitespace to a single space and trim the ends.

    Applied once to a fully assembled command; empty fragments leave gaps
    that this removes. Whitespace inside single-quoted arguments is left
    alone, so a quoted path keeps its exact spelling.

    Example:
        >>> remove_extra_spaces("  mysqldump   --quick  shop ")
        'mysqldump --quick shop'
    """
    return _WHITESPACE.sub(lambda match: match.group(1) or " ", command).strip()


def join_fragments(*fragments: str) -> str:
    """Join the non-empty fragments with single spaces."""
    return " ".join(fragment for fragment in fragments if fragment)


def quote_arg(value: str) -> str:
    """Shell-quote a single argument; ``""`` stays empty so the fragment drops out.

    Plain names (letters, digits, ``@%+=:,./-``) come back unchanged.

    Example:
        >>> quote_arg("shop")
        'shop'
        >>> quote_arg("pa$word")
        "'pa$word'"
    """
    return shlex.quote(value) if value else ""


def quote_path(path: str) -> str:
    """Shell-quote a file path for use after a shell redirect."""
    return shlex.quote(path)
