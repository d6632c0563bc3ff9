"""Engine strategies: one command dialect per supported database.

Usage:
    from db_dumper.engines import get_strategy
    from db_dumper.config.models import Engine

    strategy = get_strategy(Engine.MYSQL)
"""

from db_dumper.config.models import Engine
from db_dumper.engines.base import EngineStrategy
from db_dumper.engines.mongodb import MongoStrategy
from db_dumper.engines.mysql import MySqlStrategy
from db_dumper.engines.postgres import PostgresStrategy
from db_dumper.exceptions import UnsupportedEngineError

_STRATEGIES: dict[Engine, EngineStrategy] = {
    Engine.MYSQL: MySqlStrategy(),
    Engine.POSTGRESQL: PostgresStrategy(),
    Engine.MONGODB: MongoStrategy(),
}


def get_strategy(engine: Engine) -> EngineStrategy:
    """Return the strategy for ``engine``.

    Raises:
        UnsupportedEngineError: If ``engine`` is not a supported ``Engine``.
    """
    try:
        return _STRATEGIES[engine]
    except (KeyError, TypeError):
        raise UnsupportedEngineError(engine) from None


__all__ = [
    "EngineStrategy",
    "MySqlStrategy",
    "PostgresStrategy",
    "MongoStrategy",
    "get_strategy",
]
