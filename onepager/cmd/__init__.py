"""Command implementations for the onepager CLI."""

from onepager.cmd.resume import cmd_export, cmd_fit, cmd_template
from onepager.cmd.assist import cmd_suggest

__all__ = [
    "cmd_template",
    "cmd_fit",
    "cmd_export",
    "cmd_suggest",
]
