class DungeonError(Exception):
    """Base for errors that fail a request. The API only ever shows str(exc)."""


class InvalidRepoRefError(DungeonError, ValueError):
    pass


class RemoteFetchError(DungeonError):
    pass


class TreeLimitError(DungeonError):
    pass
