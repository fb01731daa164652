"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Provides the lazily built vocabulary and lint
service, and centralized result emission (stdout/stderr routing and
exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from erclint.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from erclint.config.settings import ErclintSettings
    from erclint.domain.vocabulary import Vocabulary
    from erclint.services.lint import LintService
    from erclint.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The vocabulary is built on first use so ``--help`` and ``--version``
    never touch the grammar tables.
    """

    def __init__(self, settings: ErclintSettings) -> None:
        self.settings = settings
        self._vocabulary: Vocabulary | None = None

        from erclint.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def vocabulary(self) -> Vocabulary:
        """Built-in vocabulary extended by the ``[grammar]`` config section."""
        if self._vocabulary is None:
            from erclint.services._helpers import vocabulary_from_config

            self._vocabulary = vocabulary_from_config(self.settings.grammar)
        return self._vocabulary

    def lint_service(self) -> LintService:
        from erclint.services.lint import LintService

        return LintService(
            self.vocabulary,
            require_domain=self.settings.grammar.require_domain,
            fail_on_warning=self.settings.lint.fail_on_warning,
            extensions=self.settings.lint.extensions,
        )

    def emit(self, result: ServiceResult, *, fail: bool = False) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout. Warnings go to stderr
          so they don't pollute piped output. With *fail* set (a lint run
          that found violations) the report still goes to stdout, then
          the process exits with code 1.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
            if fail:
                raise SystemExit(1)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
