"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool


def create_pool(conninfo: str, min_size: int = 2, max_size: int = 10) -> AsyncConnectionPool:
    """Create async connection pool.

    Pool is created with open=False; PoolLifespanMiddleware opens it on ASGI
    startup. Connections are checked on checkout so a restarted database
    does not surface as errors on the first requests after it comes back.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max(min_size, max_size),
        open=False,
        name="smaccess",
        check=AsyncConnectionPool.check_connection,
    )
