"""The object every archmodel command receives through ``@click.pass_obj``."""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from archmodel.config.logging import bind_workspace, configure_logging
from archmodel.output.formatters import OutputSettings, format_result
from archmodel.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from archmodel.config.settings import ArchSettings
    from archmodel.infrastructure.workspace import Workspace
    from archmodel.services.result import ServiceResult


class AppContext:
    """Settings, the workspace and result printing for one CLI invocation.

    Logging is configured on construction. The workspace is opened on
    first use, so ``--help`` and ``--examples`` never read the model file.
    """

    def __init__(self, settings: ArchSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @cached_property
    def workspace(self) -> Workspace:
        from archmodel.infrastructure.workspace import Workspace

        path = self.settings.resolved_workspace_path
        bind_workspace(str(path))
        return Workspace(
            path,
            indent=self.settings.workspace.indent,
            derive_on_save=self.settings.derive.on_save,
        )

    @property
    def output(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and set the exit status.

        Successes go to stdout, with human-mode warnings on stderr (JSON
        output already carries them). Failures go to stderr and exit 1.
        """
        output = self.output
        text = format_result(result, settings=output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)
        click.echo(text)
        if not output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
