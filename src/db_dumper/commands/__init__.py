"""Command construction: per-engine fragments and their assembly.

Usage:
    from db_dumper.commands import remove_extra_spaces
    from db_dumper.commands.fragments import prepare_include_tables
"""

from db_dumper.commands.assembler import (
    join_fragments,
    quote_arg,
    quote_path,
    remove_extra_spaces,
)

__all__ = ["remove_extra_spaces", "join_fragments", "quote_arg", "quote_path"]
