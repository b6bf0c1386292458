"""Scan the posts directory and write the static article metadata JSON."""
from __future__ import annotations

import argparse
from pathlib import Path

from loguru import logger

from portfolio.articles.metadata import build_metadata, dump_metadata
from portfolio.config import BaseConfig


def main(argv: list[str] | None = None) -> int:
    config = BaseConfig()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--posts-dir", type=Path, default=Path(config.POSTS_DIR))
    parser.add_argument("--output", type=Path, default=Path(config.METADATA_PATH))
    args = parser.parse_args(argv)

    entries = build_metadata(args.posts_dir)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(dump_metadata(entries), encoding="utf-8")
    logger.info(f"wrote {len(entries)} articles to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
