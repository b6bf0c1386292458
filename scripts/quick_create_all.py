"""Create all tables for a quick dev setup (NOT for production)."""
from __future__ import annotations

from loguru import logger

from portfolio import create_app
from portfolio.db.session import db


def main() -> None:
    app = create_app()
    with app.app_context():
        db.create_all()
        logger.info(f"tables created in {app.config['DATABASE_URL']}")


if __name__ == "__main__":
    main()
