"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

CLI context for Apifetch.

Provides shared context object and decorators for CLI commands.
"""

from typing import Optional

import click

from apifetch.config.settings import ApifetchConfig
from apifetch.transport.base import BaseTransport


class CLIContext:
    """Context object for CLI commands."""

    def __init__(self, transport: Optional[BaseTransport] = None):
        self.config: Optional[ApifetchConfig] = None
        self.config_path: Optional[str] = None
        self.transport = transport


pass_context = click.make_pass_decorator(CLIContext, ensure=True)
