"""Errores del ciclo de vida del pool (uso antes de init, doble init)."""


class DatabasePoolError(RuntimeError):
    """Base: el pool de Postgres no está en el estado esperado."""


class PoolAlreadyInitializedError(DatabasePoolError):
    pass


class PoolNotInitializedError(DatabasePoolError):
    pass
