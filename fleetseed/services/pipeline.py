# fleetseed/services/pipeline.py
"""
Stage orchestrator.

Runs an ordered list of stages one at a time, threading a SeedContext from
each stage into the next. The first failing stage stops the run; teardown
always runs, whatever happened.
"""

import inspect
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Sequence, Union

from sqlalchemy.exc import SQLAlchemyError

from fleetseed.context import SeedContext
from fleetseed.errors import FatalStageError
from fleetseed.utils.logger import get_logger

logger = get_logger(__name__)

StageResult = Union[SeedContext, None, Awaitable[Optional[SeedContext]]]


@dataclass
class Stage:
    name: str
    run: Callable[[SeedContext], StageResult]


@dataclass
class PipelineResult:
    success: bool
    context: SeedContext
    failed_stage: Optional[str] = None
    error: Optional[BaseException] = None


async def _maybe_await(value):
    if inspect.isawaitable(value):
        return await value
    return value


async def run_pipeline(
    stages: Sequence[Stage],
    context: Optional[SeedContext] = None,
    teardown: Optional[Callable[[], object]] = None,
) -> PipelineResult:
    """
    Execute stages sequentially. A stage returning None leaves the context unchanged.
    The first stage to raise aborts the remaining stages; its error is logged and
    reported in the result rather than raised.
    """
    context = context if context is not None else SeedContext()
    try:
        for index, stage in enumerate(stages, start=1):
            logger.info(f"[{index}/{len(stages)}] {stage.name}")
            try:
                produced = await _maybe_await(stage.run(context))
            except (FatalStageError, SQLAlchemyError) as e:
                logger.error(f"Stage '{stage.name}' failed: {e}")
                return PipelineResult(success=False, context=context, failed_stage=stage.name, error=e)
            except Exception as e:
                logger.error(f"Stage '{stage.name}' failed unexpectedly: {e!r}", exc_info=True)
                return PipelineResult(success=False, context=context, failed_stage=stage.name, error=e)
            if produced is not None:
                context = produced
        return PipelineResult(success=True, context=context)
    finally:
        if teardown is not None:
            try:
                await _maybe_await(teardown())
            except Exception as e:
                logger.error(f"Teardown failed: {e}", exc_info=True)
