# fleetseed/cli.py
"""
Seeder entry point.

Usage:
  fleetseed schema            # drop + recreate both databases and all tables
  fleetseed demo [--seed 42]  # the above, then populate demo data
"""

import argparse
import asyncio
import random
import sys
import time
from typing import Optional, Sequence

from fleetseed.config import Settings, settings as default_settings
from fleetseed.database import SqlStorage
from fleetseed.fixtures import load_fixtures
from fleetseed.services.mapbox_client import MapboxClient
from fleetseed.services.pipeline import PipelineResult, run_pipeline
from fleetseed.services.stages import data_stages, schema_stages
from fleetseed.utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA = "schema"
DEMO = "demo"


async def seed(mode: str, settings: Settings, seed_value: Optional[int] = None) -> PipelineResult:
    if settings.REFERENCE_TIME is None:
        # One clock reading per run; every generated date counts back from it
        settings = settings.model_copy(update={"REFERENCE_TIME": int(time.time())})

    storage = SqlStorage(settings)
    enrichment = None

    async def teardown():
        try:
            storage.close()
        finally:
            if enrichment is not None:
                await enrichment.aclose()

    try:
        stages = schema_stages(storage)
        if mode == DEMO:
            if not settings.MAPBOX_TOKEN:
                logger.warning("MAPBOX_TOKEN is not set; every trip enrichment will fail and no trips will be saved")
            rng = random.Random(seed_value if seed_value is not None else settings.RANDOM_SEED)
            enrichment = MapboxClient(settings)
            stages += data_stages(storage, load_fixtures(), rng, settings, enrichment)
    except Exception:
        await teardown()
        raise

    result = await run_pipeline(stages, teardown=teardown)
    with_data = "with demo data" if mode == DEMO else "without demo data"
    if result.success:
        logger.info(f"Setting up databases {with_data} succeeded: {result.context.summary()}")
    else:
        logger.error(f"Setting up databases {with_data} failed at '{result.failed_stage}': {result.error}")
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fleetseed", description="Bootstrap the fleet platform databases")
    parser.add_argument("mode", choices=[SCHEMA, DEMO],
                        help="'schema' creates databases and tables only; 'demo' also populates demo data")
    parser.add_argument("--seed", type=int, default=None, help="random seed for a reproducible dataset")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    result = asyncio.run(seed(args.mode, default_settings, args.seed))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
