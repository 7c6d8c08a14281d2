"""
Run ranking aggregation from CLI.

Exit codes: 0 success, 1 source document missing, 2 aggregation failure.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging

from app.config import get_ranking_settings
from app.logging_utils import configure_logging
from app.services.ranking_service import run_ranking_aggregation
from db.client import create_document_store
from ranking.errors import RankingError, SourceDocumentNotFoundError

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Aggregate sharded votes into a new ranking.")
    parser.add_argument(
        "--sort-direction",
        dest="sort_direction",
        choices=("asc", "desc"),
        default=None,
        help="Override RANKING_SORT_DIRECTION.",
    )
    parser.add_argument(
        "--count-source",
        dest="count_source",
        choices=("fixed", "live"),
        default=None,
        help="Override RANKING_COUNT_SOURCE.",
    )
    parser.add_argument(
        "--entity-count",
        dest="entity_count",
        type=int,
        default=None,
        help="Override RANKING_FIXED_ENTITY_COUNT (implies --count-source fixed).",
    )
    args = parser.parse_args(argv)

    configure_logging()

    overrides: dict[str, object] = {}
    if args.sort_direction:
        overrides["sort_direction"] = args.sort_direction
    if args.count_source:
        overrides["count_source"] = args.count_source
    if args.entity_count is not None:
        if args.entity_count < 0:
            parser.error("--entity-count must be non-negative")
        overrides["fixed_entity_count"] = args.entity_count
        overrides["count_source"] = "fixed"
    settings = dataclasses.replace(get_ranking_settings(), **overrides)

    try:
        store = create_document_store()
        result = run_ranking_aggregation(store, settings)
    except SourceDocumentNotFoundError as exc:
        logger.error("%s", exc)
        return 1
    except RankingError as exc:
        logger.error("Ranking aggregation failed: %s", exc)
        return 2
    except Exception:  # noqa: BLE001
        logger.exception("Ranking aggregation crashed.")
        return 2

    payload = {
        "ranking_id": result.ranking_id,
        "entity_count": result.entity_count,
        "sort_direction": result.sort_direction,
        "count_source": result.count_source,
        "computed_at": result.computed_at.isoformat(),
        "top": [entry.model_dump() for entry in result.ranking[:10]],
    }
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
