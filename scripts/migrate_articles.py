"""Move the markdown posts into the articles table (published, updated in place)."""
from __future__ import annotations

import argparse
from pathlib import Path

from loguru import logger

from portfolio import create_app
from portfolio.articles.migrate import migrate_posts
from portfolio.db.repositories.factory import article_repo


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--posts-dir", type=Path, default=None)
    args = parser.parse_args(argv)

    app = create_app()
    posts_dir = args.posts_dir or Path(app.config["POSTS_DIR"])
    with app.app_context():
        result = migrate_posts(posts_dir, article_repo(admin=True))

    for name, error in result.failed:
        logger.error(f"  - {name}: {error}")
    logger.info("the original .md files are kept as a backup")
    return 1 if result.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
