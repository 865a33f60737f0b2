"""The export pipeline shared by every command.

Stages run strictly in order, each one fully finished before the next
starts::

    INIT -> OPTIONS_VALIDATED -> ACQUIRED -> PARSED -> SCHEMA_VALIDATED
         -> FORMATTED -> DELIVERED

Any :class:`~specout.exceptions.ExportError` raised on the way stops the
pipeline and yields a :class:`~specout.models.Failure` naming the stage that
was not reached. Nothing is retried or skipped, and the sink only runs once
formatting has succeeded, so a failed run produces no output. Exceptions that
are not ``ExportError`` are bugs and propagate unchanged.

Deciding what the user sees is left to :mod:`specout.commands`.
"""

from __future__ import annotations

from typing import Optional

from specout.document import check_document, format_document, parse_document
from specout.exceptions import ExportError
from specout.models import CommandOptions, Failure, PipelineOutcome, Stage, Success
from specout.options import OptionsValidator, validator_for
from specout.output import debug
from specout.sink import DocumentSink, create_sink
from specout.sources import DocumentSource


class CommandPipeline:
    """Run one export from *source* according to *options*.

    Args:
        options: The invocation's options record.
        source: Where the document comes from.
        validator: Options validator; defaults to the one matching the
            options type.
        sink: Output destination; defaults to the one selected by
            ``options.out``, created after the options were validated.
    """

    def __init__(
        self,
        options: CommandOptions,
        source: DocumentSource,
        validator: Optional[OptionsValidator] = None,
        sink: Optional[DocumentSink] = None,
    ) -> None:
        self._options = options
        self._source = source
        self._validator = validator or validator_for(options)
        self._sink = sink
        self._stage = Stage.INIT

    @property
    def stage(self) -> Stage:
        """The last stage reached."""
        return self._stage

    @property
    def source(self) -> DocumentSource:
        return self._source

    async def run(self) -> PipelineOutcome:
        """Execute all stages and return the outcome."""
        options = self._options
        target = Stage.OPTIONS_VALIDATED
        try:
            self._validator.validate(options)
            self._reach(target)

            target = Stage.ACQUIRED
            raw = await self._source.acquire()
            self._reach(target)

            target = Stage.PARSED
            document = parse_document(raw)
            self._reach(target)

            target = Stage.SCHEMA_VALIDATED
            document = check_document(document)
            self._reach(target)

            target = Stage.FORMATTED
            text = format_document(document, options.format, options.level)
            self._reach(target)

            target = Stage.DELIVERED
            sink = self._sink or create_sink(options.out, force=options.force)
            await sink.deliver(text)
            self._reach(target)
        except ExportError as exc:
            debug(f"Failed while moving to {target.value}: {exc.kind}")
            return Failure(stage=target, error=exc)

        return Success(text=text)

    def _reach(self, stage: Stage) -> None:
        self._stage = stage
        debug(f"Pipeline reached {stage.value}")
