from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from config import PROJECT_ROOT, config
from db.db import init_db
from db.repositories import GroupRepository
from importers.seed_groups import load_seed_groups
from services.group_service import GroupService
from utils.settlement_summary import render_group_summary

logger = logging.getLogger(__name__)


def run(seed_json: Path, db_file: Path) -> None:
    settings = config()

    logger.info("Initializing DB at %s", db_file)
    session = init_db(db_file, reset=True)
    repository = GroupRepository(session)
    service = GroupService(repository, epsilon=settings.settlement_epsilon)

    logger.info("Loading seed groups from %s", seed_json)
    for group in load_seed_groups(seed_json):
        repository.create(group)

    groups = repository.list()
    print(f"Loaded {len(groups)} groups from {seed_json}")
    for group in groups:
        summary = service.summary(group.id)
        if summary is not None:
            print()
            render_group_summary(summary)


def main(argv: Sequence[str] | None = None) -> None:
    settings = config()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    parser = argparse.ArgumentParser(description="Compute balances and settlements for seeded expense groups.")
    parser.add_argument("--seed-json", type=Path, default=PROJECT_ROOT / "data" / "seed_groups.json")
    parser.add_argument("--db-file", type=Path, default=settings.db_file)
    args = parser.parse_args(argv)
    run(args.seed_json, args.db_file)


if __name__ == "__main__":
    main()
