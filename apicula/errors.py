"""Error type shared across the package."""


class NitroError(Exception):
    """An error with a plain human-readable message."""

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg

    def __str__(self) -> str:
        return self.msg